"""
List ordering options.

File: models/ordering.py
Created: 2026-10-13
Last Modified: 2026-10-19
"""

from enum import Enum

from ..errors import ValidationError


class SortOrder(str, Enum):
    """Order of a contact listing, by first name."""

    NONE = "none"  # creation order
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: "str | SortOrder") -> "SortOrder":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid sort order: {value!r}") from None

    @property
    def label(self) -> str:
        """Human-readable name used in listing feedback."""
        return {
            SortOrder.NONE: "creation",
            SortOrder.ASC: "ascending",
            SortOrder.DESC: "descending",
        }[self]
