"""
SQLite persistence for contacts.

File: database/__init__.py
Created: 2026-10-12
Last Modified: 2026-10-15
"""

from .common import LOCAL_DB_PATH
from .create_tables import init_local_database
from .contacts import (
    load_all,
    load_ordered,
    insert_contact,
    insert_contacts,
    update_contact,
    delete_contact,
)

__all__ = [
    "LOCAL_DB_PATH",
    "init_local_database",
    "load_all",
    "load_ordered",
    "insert_contact",
    "insert_contacts",
    "update_contact",
    "delete_contact",
]
