"""
Bulk import of contacts from files.

File: importing/__init__.py
Created: 2026-10-13
Last Modified: 2026-10-13
"""

from .csv_reader import COLUMN_MAP, read_header, iter_rows, row_to_contact

__all__ = [
    "COLUMN_MAP",
    "read_header",
    "iter_rows",
    "row_to_contact",
]
