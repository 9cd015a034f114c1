"""
Phone book store and interactive command loop.

File: book/__init__.py
Created: 2026-10-13
Last Modified: 2026-10-13
"""

from .commands import Command
from .shell import PhoneBookShell, EXIT_OK, EXIT_FATAL
from .store import ImportReport, PhoneBook

__all__ = [
    "Command",
    "PhoneBookShell",
    "EXIT_OK",
    "EXIT_FATAL",
    "ImportReport",
    "PhoneBook",
]
