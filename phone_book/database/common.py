"""
Common database constants and utilities

File: database/common.py
Created: 2026-10-12
Last Modified: 2026-10-13
"""

from pathlib import Path

DATA_DIR = Path(__file__).parent.parent.parent / "data"
LOCAL_DB_PATH = DATA_DIR / "phone_book.db"

CONTACT_COLUMNS = (
    "uuid",
    "first_name",
    "last_name",
    "email",
    "address",
    "phone_number",
)

__all__ = [
    "DATA_DIR",
    "LOCAL_DB_PATH",
    "CONTACT_COLUMNS",
]
