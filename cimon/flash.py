"""Short-lived status message."""

from __future__ import annotations

import time
from dataclasses import dataclass

VISIBLE_SECONDS = 3.0


@dataclass
class Flash:
    """A message that stays visible for a few seconds after it is shown.

    ``show_at`` is a ``time.monotonic()`` reading.
    """

    message: str = ""
    is_error: bool = False
    show_at: float = 0.0

    def show(self, message: str, is_error: bool) -> None:
        """Display ``message`` starting now."""
        self.message = message
        self.is_error = is_error
        self.show_at = time.monotonic()

    def visible(self) -> bool:
        """True while a message is set and has not expired."""
        if not self.message:
            return False
        return time.monotonic() - self.show_at < VISIBLE_SECONDS

    def clear(self) -> None:
        """Remove the message."""
        self.message = ""