"""
Data models for the phone book.
"""

from .contact import Contact, normalize_phone
from .ordering import SortOrder

__all__ = [
    "Contact",
    "SortOrder",
    "normalize_phone",
]
