"""Shared fixtures for phone book tests."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, List, Tuple

import pytest
from rich.console import Console

from phone_book.book import PhoneBook, PhoneBookShell
from phone_book.models import Contact


# =============================================================================
# Contacts
# =============================================================================

@pytest.fixture
def ada():
    return Contact.create("Ada", "Lovelace", "ada@example.com", "12 St James's Square", "5551234567")


@pytest.fixture
def sample_contacts() -> List[Contact]:
    """Three contacts whose creation order differs from alphabetical order."""
    return [
        Contact.create("Grace", "Hopper", "grace@navy.mil", "Arlington, VA", "555-000-1111"),
        Contact.create("Alan", "Turing", "alan@bletchley.uk", "Wilmslow", "+44 1625 000000"),
        Contact.create("Margaret", "Hamilton", "mh@mit.edu", "Cambridge, MA", "(617) 555 0199"),
    ]


@pytest.fixture
def memory_book(sample_contacts) -> PhoneBook:
    """An in-memory book holding the sample contacts in creation order."""
    book = PhoneBook()
    book._contacts.extend(sample_contacts)
    return book


# =============================================================================
# Files
# =============================================================================

@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "data" / "phone_book.db"


@pytest.fixture
def write_csv(tmp_path) -> Callable[[str, str], Path]:
    """Write CSV text to a temporary file and return its path."""
    def _write(text: str, name: str = "contacts.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# =============================================================================
# Shell
# =============================================================================

@pytest.fixture
def make_shell() -> Callable[..., Tuple[PhoneBookShell, io.StringIO]]:
    """Build a shell that reads the given lines and records its output."""
    def _make(book: PhoneBook, *lines: str) -> Tuple[PhoneBookShell, io.StringIO]:
        output = io.StringIO()
        console = Console(file=output, width=200, color_system=None)
        stream = io.StringIO("".join(line + "\n" for line in lines))
        return PhoneBookShell(book, console=console, stream=stream), output
    return _make
