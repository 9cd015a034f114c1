"""
File: database/create_tables.py
Created: 2026-10-12
Last Modified: 2026-10-14
"""

import logging
from pathlib import Path

import aiosqlite

from ..errors import PersistenceError
from .common import LOCAL_DB_PATH

log = logging.getLogger(__name__)


async def init_local_database(db_path: Path = LOCAL_DB_PATH) -> None:
    """Initialize the local SQLite database with the contacts table."""
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiosqlite.connect(db_path) as conn:
            # id keeps creation order, uuid is the contact's public identifier
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS contacts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    uuid TEXT NOT NULL,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL DEFAULT '',
                    email TEXT NOT NULL DEFAULT '',
                    address TEXT NOT NULL DEFAULT '',
                    phone_number TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    UNIQUE(uuid)
                )
            """)

            await conn.execute("CREATE INDEX IF NOT EXISTS idx_contacts_first_name ON contacts(first_name)")

            await conn.commit()
    except (aiosqlite.Error, OSError) as e:
        raise PersistenceError(f"Could not initialize database at {db_path}: {e}") from e

    log.info(f"Local database initialized at {db_path}")
