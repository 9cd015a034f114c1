"""
The phone book: an ordered collection of contacts for one session.

Stored order is creation order. When a database path is configured every
mutation is written there first and only applied in memory once the write
succeeded, so a failed write leaves the collection as it was.

File: book/store.py
Created: 2026-10-12
Last Modified: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .. import database
from ..errors import ImportRecordError, NotFoundError, ValidationError
from ..importing import row_to_contact
from ..models import Contact, SortOrder

log = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Outcome of a bulk import."""

    imported: List[Contact] = field(default_factory=list)
    skipped: List[ImportRecordError] = field(default_factory=list)

    @property
    def summary(self) -> str:
        noun = "contact" if len(self.imported) == 1 else "contacts"
        text = f"Imported {len(self.imported)} {noun}"
        if self.skipped:
            text += f", skipped {len(self.skipped)} malformed"
        return text + "."


class PhoneBook:
    """In-memory contact collection, optionally backed by SQLite."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path
        self.message = ""
        self._contacts: List[Contact] = []

    @property
    def persistent(self) -> bool:
        return self.db_path is not None

    def __len__(self) -> int:
        return len(self._contacts)

    @property
    def contacts(self) -> List[Contact]:
        """Read view of the collection in stored order."""
        return list(self._contacts)

    async def load(self) -> int:
        """
        Hydrate the collection from the database, replacing what is in memory.

        Returns:
            Number of contacts loaded (0 for an in-memory book)
        """
        if not self.persistent:
            return 0

        await database.init_local_database(self.db_path)
        self._contacts = await database.load_all(self.db_path)
        return len(self._contacts)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def sorted_view(self, order: Union[SortOrder, str] = SortOrder.NONE) -> List[Contact]:
        """
        Derived copy of the collection ordered by first name.

        Comparison is ordinal; equal first names keep their stored order in
        both directions.
        """
        order = SortOrder.parse(order)
        if order is SortOrder.NONE:
            return self.contacts
        return sorted(
            self._contacts,
            key=lambda contact: contact.first_name,
            reverse=order is SortOrder.DESC,
        )

    def search(self, query: str) -> List[Contact]:
        """
        Fuzzy query over all text fields.

        Raises:
            ValidationError: if the query is empty
            NotFoundError: if the book is empty or nothing matches
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query cannot be empty.")
        if not self._contacts:
            raise NotFoundError("No contacts found.")

        matches = [contact for contact in self._contacts if contact.matches(query)]
        if not matches:
            raise NotFoundError(f"No match found for '{query}'.")
        return matches

    def numbered(self, contacts: Iterable[Contact]) -> List[Tuple[int, Contact]]:
        """Pair contacts with their 1-based position in stored order."""
        positions: Dict[str, int] = {
            contact.id: i for i, contact in enumerate(self._contacts, 1)
        }
        return [(positions.get(contact.id, 0), contact) for contact in contacts]

    def position(self, index: Union[int, str]) -> int:
        """
        Validate a 1-based index and return the matching 0-based position.

        Raises:
            ValidationError: if the index is not an integer
            NotFoundError: if the index is outside 1..len
        """
        if isinstance(index, str):
            try:
                index = int(index.strip())
            except ValueError:
                raise ValidationError(f"Invalid contact index: '{index.strip()}'.") from None

        if not 1 <= index <= len(self._contacts):
            if self._contacts:
                raise NotFoundError(
                    f"Invalid contact index: {index} (expected 1-{len(self._contacts)})."
                )
            raise NotFoundError(f"Invalid contact index: {index} (no contacts found).")
        return index - 1

    def get(self, index: Union[int, str]) -> Contact:
        return self._contacts[self.position(index)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(self, contact: Contact) -> Contact:
        """Append a contact to the end of the collection."""
        if any(existing.id == contact.id for existing in self._contacts):
            raise ValidationError(f"Contact {contact.id} already exists.")

        if self.persistent:
            await database.insert_contact(contact, self.db_path)
        self._contacts.append(contact)
        log.info(f"Added contact {contact.id} at position {len(self._contacts)}")
        return contact

    async def replace(self, index: Union[int, str], contact: Contact) -> Contact:
        """
        Replace the whole record at a 1-based index.

        The stored contact keeps its id whatever id the replacement carries.
        """
        position = self.position(index)
        replacement = contact.model_copy(update={"id": self._contacts[position].id})

        if self.persistent:
            await database.update_contact(replacement, self.db_path)
        self._contacts[position] = replacement
        log.info(f"Replaced contact {replacement.id} at position {position + 1}")
        return replacement

    async def remove(self, index: Union[int, str]) -> Contact:
        """Delete the contact at a 1-based index and return it."""
        position = self.position(index)
        target = self._contacts[position]

        if self.persistent:
            await database.delete_contact(target.id, self.db_path)
        del self._contacts[position]
        log.info(f"Removed contact {target.id} from position {position + 1}")
        return target

    async def import_rows(self, rows: Iterable[Tuple[int, Dict[str, str]]]) -> ImportReport:
        """
        Bulk-add contacts from (line number, row) pairs.

        Malformed rows are logged and skipped; the rest are appended in file
        order with a single database write.
        """
        report = ImportReport()
        for line, row in rows:
            try:
                report.imported.append(row_to_contact(line, row))
            except ImportRecordError as e:
                log.warning(f"Skipping import record at {e}")
                report.skipped.append(e)

        if self.persistent:
            await database.insert_contacts(report.imported, self.db_path)
        self._contacts.extend(report.imported)

        log.info(
            f"Import finished: {len(report.imported)} added, {len(report.skipped)} skipped"
        )
        return report
