"""Error types raised by gh-notify."""

from __future__ import annotations


class GhNotifyError(Exception):
    """Base class for every error raised by this package."""


class MissingInputError(GhNotifyError):
    """A required action input is empty or absent. Fatal for the run."""


class TelegramError(GhNotifyError):
    """The Bot API rejected a request or answered with ``ok: false``."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Telegram error: {status_code} {body}")
        self.status_code = status_code
        self.body = body
