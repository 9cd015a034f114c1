"""Tests for the PhoneBook store.

This module tests:
- Appending and listing in creation order
- Ascending/descending views that never reorder the store
- Fuzzy query results and their distinct empty outcomes
- 1-based index validation, replacement and removal
- Bulk import of mapped rows
- Database-backed books and all-or-nothing writes
"""
from __future__ import annotations

import logging

import aiosqlite
import pytest

from phone_book import database
from phone_book.book import PhoneBook
from phone_book.errors import NotFoundError, PersistenceError, ValidationError
from phone_book.importing import iter_rows
from phone_book.models import Contact, SortOrder


def names(contacts):
    return [contact.first_name for contact in contacts]


# =============================================================================
# Reads
# =============================================================================

class TestListing:
    @pytest.mark.asyncio
    async def test_added_contact_is_last(self, memory_book, ada):
        await memory_book.add(ada)
        assert memory_book.contacts[-1] == ada
        assert len(memory_book) == 4

    def test_contacts_is_a_copy(self, memory_book):
        memory_book.contacts.clear()
        assert len(memory_book) == 3

    def test_ascending_and_descending(self, memory_book):
        assert names(memory_book.sorted_view(SortOrder.ASC)) == ["Alan", "Grace", "Margaret"]
        assert names(memory_book.sorted_view("desc")) == ["Margaret", "Grace", "Alan"]

    def test_views_are_reverses_and_do_not_reorder(self, memory_book):
        ascending = memory_book.sorted_view(SortOrder.ASC)
        descending = memory_book.sorted_view(SortOrder.DESC)

        assert ascending == list(reversed(descending))
        assert names(memory_book.sorted_view(SortOrder.NONE)) == ["Grace", "Alan", "Margaret"]

    def test_ordinal_comparison(self):
        book = PhoneBook()
        book._contacts.extend([
            Contact.create("bob", phone_number="1"),
            Contact.create("Zed", phone_number="2"),
            Contact.create("Amy", phone_number="3"),
        ])
        # uppercase sorts before lowercase
        assert names(book.sorted_view(SortOrder.ASC)) == ["Amy", "Zed", "bob"]

    def test_ties_keep_stored_order(self):
        first = Contact.create("Sam", "One", phone_number="1")
        second = Contact.create("Sam", "Two", phone_number="2")
        book = PhoneBook()
        book._contacts.extend([first, second])

        assert book.sorted_view(SortOrder.ASC) == [first, second]
        assert book.sorted_view(SortOrder.DESC) == [first, second]

    def test_invalid_order(self, memory_book):
        with pytest.raises(ValidationError):
            memory_book.sorted_view("sideways")


class TestSearch:
    def test_case_insensitive_across_fields(self, memory_book):
        assert names(memory_book.search("HOPPER")) == ["Grace"]
        assert names(memory_book.search("mit.edu")) == ["Margaret"]
        assert names(memory_book.search("wilmslow")) == ["Alan"]

    def test_matches_phone_field(self, memory_book):
        assert names(memory_book.search("(617)")) == ["Margaret"]
        assert names(memory_book.search("000-1111")) == ["Grace"]

    def test_matches_in_stored_order(self, memory_book):
        assert names(memory_book.search("a")) == ["Grace", "Alan", "Margaret"]

    def test_no_match(self, memory_book):
        with pytest.raises(NotFoundError, match="No match"):
            memory_book.search("babbage")

    def test_empty_book(self):
        with pytest.raises(NotFoundError, match="No contacts found"):
            PhoneBook().search("anyone")

    def test_empty_query(self, memory_book):
        with pytest.raises(ValidationError):
            memory_book.search("   ")


class TestPosition:
    @pytest.mark.parametrize("index, expected", [(1, 0), ("2", 1), (" 3 ", 2)])
    def test_valid(self, memory_book, index, expected):
        assert memory_book.position(index) == expected

    @pytest.mark.parametrize("index", [0, 4, -1, "0", "4"])
    def test_out_of_bounds(self, memory_book, index):
        with pytest.raises(NotFoundError, match="Invalid contact index"):
            memory_book.position(index)

    @pytest.mark.parametrize("index", ["", "one", "1.5"])
    def test_not_an_integer(self, memory_book, index):
        with pytest.raises(ValidationError, match="Invalid contact index"):
            memory_book.position(index)

    def test_numbered_uses_stored_positions(self, memory_book):
        view = memory_book.sorted_view(SortOrder.ASC)
        assert [i for i, _ in memory_book.numbered(view)] == [2, 1, 3]


# =============================================================================
# Mutations
# =============================================================================

class TestMutations:
    @pytest.mark.asyncio
    async def test_replace_keeps_position_and_id(self, memory_book):
        original = memory_book.get(2)
        replacement = Contact.create("Alonzo", "Church", "ac@princeton.edu", "Princeton", "6095550000")

        await memory_book.replace(2, replacement)

        stored = memory_book.get(2)
        assert stored.id == original.id
        assert stored.first_name == "Alonzo"
        assert stored.phone_number == "(609) 555-0000"
        assert names(memory_book.contacts) == ["Grace", "Alonzo", "Margaret"]

    @pytest.mark.asyncio
    async def test_replace_out_of_range(self, memory_book, ada):
        before = memory_book.contacts
        with pytest.raises(NotFoundError):
            await memory_book.replace(4, ada)
        assert memory_book.contacts == before

    @pytest.mark.asyncio
    async def test_remove(self, memory_book):
        removed = await memory_book.remove(1)
        assert removed.first_name == "Grace"
        assert names(memory_book.contacts) == ["Alan", "Margaret"]

    @pytest.mark.asyncio
    async def test_add_rejects_duplicate_id(self, memory_book, sample_contacts):
        with pytest.raises(ValidationError):
            await memory_book.add(sample_contacts[0])
        assert len(memory_book) == 3


class TestImportRows:
    @pytest.mark.asyncio
    async def test_skips_malformed_and_keeps_going(self):
        book = PhoneBook()
        rows = [
            (2, {"first_name": "Ada", "phone": "5551234567"}),
            (3, {"first_name": "", "phone": "5550000000"}),
            (4, {"first_name": "Grace", "phone": ""}),
            (5, {"first_name": "Alan", "phone": "12345"}),
        ]

        report = await book.import_rows(rows)

        assert names(book.contacts) == ["Ada", "Alan"]
        assert [e.line for e in report.skipped] == [3, 4]
        assert report.summary == "Imported 2 contacts, skipped 2 malformed."

    @pytest.mark.asyncio
    async def test_skipped_records_are_warnings(self, caplog):
        caplog.set_level(logging.INFO, logger="phone_book")

        await PhoneBook().import_rows([(7, {"first_name": "", "phone": "1"})])

        [skipped] = [r for r in caplog.records if "Skipping import record" in r.getMessage()]
        assert skipped.levelno == logging.WARNING
        assert "line 7" in skipped.getMessage()
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    @pytest.mark.asyncio
    async def test_unreadable_records_do_not_stop_the_file(self, tmp_path):
        path = tmp_path / "contacts.csv"
        path.write_bytes(
            b"first_name,phone,address\n"
            b"Ada,5551234567,\n"
            b"Bad\xff\xfe,5550000000,\n"
            b"Long,5550000001," + b"x" * 200000 + b"\n"
            b"Grace,5551112222,\n"
        )
        book = PhoneBook()

        report = await book.import_rows(iter_rows(path))

        assert names(book.contacts) == ["Ada", "Grace"]
        assert [e.line for e in report.skipped] == [3, 4]


# =============================================================================
# Database-backed book
# =============================================================================

class TestPersistentBook:
    @pytest.mark.asyncio
    async def test_mutations_survive_reload(self, db_path, sample_contacts):
        book = PhoneBook(db_path)
        assert await book.load() == 0

        for contact in sample_contacts:
            await book.add(contact)
        await book.replace(1, Contact.create("Grace", "Murray", "", "", "5551112222"))
        await book.remove(2)

        reloaded = PhoneBook(db_path)
        assert await reloaded.load() == 2
        assert names(reloaded.contacts) == ["Grace", "Margaret"]
        assert reloaded.get(1).last_name == "Murray"
        assert reloaded.get(1).id == sample_contacts[0].id

    @pytest.mark.asyncio
    async def test_import_is_persisted(self, db_path):
        book = PhoneBook(db_path)
        await book.load()
        await book.import_rows([(2, {"first_name": "Ada", "phone": "5551234567"})])

        assert names(await database.load_all(db_path)) == ["Ada"]

    @pytest.mark.asyncio
    async def test_failed_write_leaves_memory_unchanged(self, tmp_path, ada):
        # file exists but the contacts table was never created
        book = PhoneBook(tmp_path / "uninitialized.db")

        with pytest.raises(PersistenceError):
            await book.add(ada)
        assert len(book) == 0

    @pytest.mark.asyncio
    async def test_load_rejects_invalid_stored_row(self, db_path, ada):
        await database.init_local_database(db_path)
        await database.insert_contact(ada, db_path)
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("UPDATE contacts SET first_name = ''")
            await conn.commit()

        book = PhoneBook(db_path)
        with pytest.raises(PersistenceError):
            await book.load()
        assert len(book) == 0

    def test_in_memory_book_is_not_persistent(self):
        assert not PhoneBook().persistent
