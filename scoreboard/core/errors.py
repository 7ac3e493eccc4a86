"""Error taxonomy shared by services, stores and routers."""

from __future__ import annotations


class ScoreboardError(Exception):
    """Base class for errors raised by the scoreboard."""


class ValidationError(ScoreboardError):
    """Client sent a malformed submission. Maps to HTTP 400."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreError(ScoreboardError):
    """The score store failed (connectivity, permissions, quota). Maps to HTTP 500."""

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


__all__ = ["ScoreboardError", "StoreError", "ValidationError"]
