"""
Menu commands.

File: book/commands.py
Created: 2026-10-13
Last Modified: 2026-10-13
"""

from enum import Enum
from typing import List


class Command(Enum):
    """One-character menu commands, matched case-insensitively."""

    CREATE = ("C", "Create")
    QUERY = ("Q", "Fuzzy Query")
    UPLOAD = ("F", "Upload contacts from a CSV file")
    UPDATE = ("U", "Update")
    DELETE = ("D", "Delete")
    EXIT = ("E", "Exit")
    LIST = ("L", "List in original order based on creation time")
    LIST_ASC = ("A", "List in ascending order")
    LIST_DESC = ("Z", "List in descending order")
    HELP = ("?", "Show this help")
    UNKNOWN = ("", "Unrecognized input")

    def __init__(self, key: str, description: str):
        self.key = key
        self.description = description

    @classmethod
    def parse(cls, text: str) -> "Command":
        key = (text or "").strip().upper()
        if key:
            for command in cls:
                if command.key == key:
                    return command
        return cls.UNKNOWN

    @classmethod
    def menu(cls) -> List["Command"]:
        """Recognized commands in help order."""
        return [command for command in cls if command is not cls.UNKNOWN]
