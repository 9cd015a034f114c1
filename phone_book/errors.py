"""
Error types raised by the phone book.

Validation, lookup and import-record errors are recoverable and only produce
a feedback line. Persistence and closed-input errors end the session.

File: errors.py
Created: 2026-10-12
Last Modified: 2026-10-14
"""


class PhoneBookError(Exception):
    """Base class for all phone book errors."""

    fatal: bool = False


class ValidationError(PhoneBookError):
    """A required field is missing or an input value is malformed."""


class NotFoundError(PhoneBookError):
    """An index is out of bounds or a query matched nothing."""


class ImportRecordError(PhoneBookError):
    """A single row of a bulk import could not be turned into a contact."""

    def __init__(self, line: int, reason: str):
        super().__init__(f"line {line}: {reason}")
        self.line = line
        self.reason = reason


class PersistenceError(PhoneBookError):
    """The database could not be read or written."""

    fatal = True


class InputClosedError(PhoneBookError):
    """The input stream was closed or interrupted."""

    fatal = True


__all__ = [
    "PhoneBookError",
    "ValidationError",
    "NotFoundError",
    "ImportRecordError",
    "PersistenceError",
    "InputClosedError",
]
