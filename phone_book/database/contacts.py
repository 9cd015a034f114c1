"""
Contact persistence.

Each call opens its own connection and commits before returning, so a failed
call leaves nothing half-written.

File: database/contacts.py
Created: 2026-10-12
Last Modified: 2026-10-19
"""

import logging
from pathlib import Path
from typing import List

import aiosqlite
import pydantic

from ..errors import PersistenceError
from ..models import Contact, SortOrder
from .common import CONTACT_COLUMNS, LOCAL_DB_PATH

log = logging.getLogger(__name__)

_SELECT = f"SELECT {', '.join(CONTACT_COLUMNS)} FROM contacts"

# first_name uses SQLite's default BINARY collation (ordinal comparison);
# id breaks ties so equal names keep creation order
_ORDER_BY = {
    SortOrder.NONE: "ORDER BY id ASC",
    SortOrder.ASC: "ORDER BY first_name ASC, id ASC",
    SortOrder.DESC: "ORDER BY first_name DESC, id ASC",
}


async def _fetch_contacts(db_path: Path, query: str) -> List[Contact]:
    contacts = []
    try:
        async with aiosqlite.connect(db_path) as conn:
            async with conn.execute(query) as cursor:
                columns = [description[0] for description in cursor.description]
                async for row in cursor:
                    contacts.append(Contact.from_db_dict(dict(zip(columns, row))))
    except aiosqlite.Error as e:
        raise PersistenceError(f"Could not read contacts from {db_path}: {e}") from e
    except pydantic.ValidationError as e:
        # a row written outside the phone book that breaks the contact invariants
        raise PersistenceError(f"Invalid contact stored in {db_path}: {e}") from e
    return contacts


async def load_all(db_path: Path = LOCAL_DB_PATH) -> List[Contact]:
    """
    Load every stored contact in creation order.

    Returns:
        List of Contact objects, oldest first
    """
    contacts = await _fetch_contacts(db_path, f"{_SELECT} {_ORDER_BY[SortOrder.NONE]}")
    log.info(f"Loaded {len(contacts)} contacts from {db_path}")
    return contacts


async def load_ordered(
    direction: "SortOrder | str" = SortOrder.NONE,
    db_path: Path = LOCAL_DB_PATH,
) -> List[Contact]:
    """
    Load every stored contact in the requested order.

    Args:
        direction: SortOrder (or its string value) to order by first name
        db_path: SQLite database file

    Raises:
        ValidationError: if direction is not a known sort order
    """
    order = SortOrder.parse(direction)
    return await _fetch_contacts(db_path, f"{_SELECT} {_ORDER_BY[order]}")


async def insert_contact(contact: Contact, db_path: Path = LOCAL_DB_PATH) -> None:
    """Insert a new contact."""
    row = contact.to_db_dict()
    placeholders = ", ".join("?" * len(CONTACT_COLUMNS))
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute(
                f"INSERT INTO contacts ({', '.join(CONTACT_COLUMNS)}) VALUES ({placeholders})",
                tuple(row[column] for column in CONTACT_COLUMNS),
            )
            await conn.commit()
    except aiosqlite.Error as e:
        raise PersistenceError(f"Could not save contact {contact.id}: {e}") from e
    log.info(f"Inserted contact {contact.id}")


async def insert_contacts(contacts: List[Contact], db_path: Path = LOCAL_DB_PATH) -> int:
    """
    Insert several contacts in a single transaction.

    Returns:
        Number of contacts inserted
    """
    if not contacts:
        return 0

    placeholders = ", ".join("?" * len(CONTACT_COLUMNS))
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.executemany(
                f"INSERT INTO contacts ({', '.join(CONTACT_COLUMNS)}) VALUES ({placeholders})",
                [
                    tuple(contact.to_db_dict()[column] for column in CONTACT_COLUMNS)
                    for contact in contacts
                ],
            )
            await conn.commit()
    except aiosqlite.Error as e:
        raise PersistenceError(f"Could not save {len(contacts)} imported contacts: {e}") from e
    log.info(f"Inserted {len(contacts)} contacts")
    return len(contacts)


async def update_contact(contact: Contact, db_path: Path = LOCAL_DB_PATH) -> None:
    """Replace every field of the stored contact with the same id."""
    row = contact.to_db_dict()
    try:
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute(
                """
                UPDATE contacts
                SET first_name = ?, last_name = ?, email = ?, address = ?,
                    phone_number = ?, updated_at = CURRENT_TIMESTAMP
                WHERE uuid = ?
                """,
                (
                    row["first_name"],
                    row["last_name"],
                    row["email"],
                    row["address"],
                    row["phone_number"],
                    row["uuid"],
                ),
            )
            await conn.commit()
            updated = cursor.rowcount
    except aiosqlite.Error as e:
        raise PersistenceError(f"Could not update contact {contact.id}: {e}") from e

    if updated == 0:
        log.warning(f"Update matched no stored contact for {contact.id}")
    else:
        log.info(f"Updated contact {contact.id}")


async def delete_contact(contact_id: str, db_path: Path = LOCAL_DB_PATH) -> None:
    """Delete the stored contact with the given id."""
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("DELETE FROM contacts WHERE uuid = ?", (contact_id,))
            await conn.commit()
    except aiosqlite.Error as e:
        raise PersistenceError(f"Could not delete contact {contact_id}: {e}") from e
    log.info(f"Deleted contact {contact_id}")
