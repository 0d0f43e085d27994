"""Errors raised by the client base.

Only argument errors are exceptions. Transport and body failures during a
call are returned as data inside the result envelope.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """A required argument is missing or malformed."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"Argument '{argument}' is required.")
