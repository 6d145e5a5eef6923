"""Views and state helpers for a terminal CI and pull request monitor."""

__version__ = "0.1.0"