"""Yes/no confirmation prompt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

Callback = Optional[Callable[[], Any]]


@dataclass
class ConfirmBar:
    """A y/n prompt that swallows every key while it is shown.

    The callbacks may return a command object, which ``handle_key`` passes back.
    """

    active: bool = False
    message: str = ""
    on_confirm: Callback = None
    on_cancel: Callback = None

    def show(self, message: str, on_confirm: Callback, on_cancel: Callback) -> None:
        """Activate the prompt with ``message`` and its callbacks."""
        self.active = True
        self.message = message
        self.on_confirm = on_confirm
        self.on_cancel = on_cancel

    def handle_key(self, key: str) -> tuple[bool, Any]:
        """Process a key; return whether it was consumed and any command produced."""
        if not self.active:
            return False, None
        if key == "y":
            self.active = False
            return True, self.on_confirm() if self.on_confirm else None
        if key in ("n", "esc"):
            self.active = False
            return True, self.on_cancel() if self.on_cancel else None
        return True, None

    def render(self, width: int) -> str:
        """The prompt line, or an empty string when inactive."""
        if not self.active:
            return ""
        return f" {self.message} [y/n/Esc]"