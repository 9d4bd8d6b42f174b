"""
Error kinds surfaced by the retro core.

``RetroError`` subclasses are expected outcomes: the caller turns them into a
structured ``{"ok": false, "error": ...}`` value. ``StorageError`` is a fault
and is left to propagate.
"""

from __future__ import annotations


class RetroError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 200
    default_message = "Request failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidError(RetroError):
    default_message = "Invalid request."


class NotFoundError(RetroError):
    status_code = 404
    default_message = "Not found."


class UnauthenticatedError(RetroError):
    status_code = 401
    default_message = "Not signed in."


class VoteLimitError(RetroError):
    default_message = "No votes remaining."


class StorageError(Exception):
    """The backing document could not be read or written."""
