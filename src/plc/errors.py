"""Error types raised by the compiler and run-record helpers."""

from __future__ import annotations


class PLCError(Exception):
    """Base class for errors the CLI and API report to the caller."""


class InvalidInputError(PLCError, ValueError):
    """A required text input or run-record field is missing or blank."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"{field} is required")
        self.field = field
