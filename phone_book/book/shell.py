"""
Interactive command loop for the phone book.

Reads one command per iteration, runs it against the phone book and prints a
single feedback line (plus any table). Recoverable errors return to the
prompt; a closed input stream or a database failure ends the loop.

File: book/shell.py
Created: 2026-10-13
Last Modified: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from ..errors import InputClosedError, PhoneBookError
from ..importing import iter_rows
from ..models import Contact, SortOrder
from .commands import Command
from .render import commands_table, contacts_table, show_welcome
from .store import PhoneBook

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


class _StrictStream:
    """Line source that raises EOFError once the underlying stream is drained."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError("input stream closed")
        return line


class PhoneBookShell:
    """Maps menu commands onto PhoneBook operations."""

    def __init__(
        self,
        book: PhoneBook,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ):
        self.book = book
        self.console = console or Console()
        self.stream = _StrictStream(stream) if stream is not None else None

    # ------------------------------------------------------------------
    # I/O helpers
    # ------------------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        try:
            answer = Prompt.ask(prompt, console=self.console, stream=self.stream)
        except (EOFError, KeyboardInterrupt) as e:
            raise InputClosedError("Input stream closed.") from e
        return (answer or "").strip()

    def _confirm(self, prompt: str) -> bool:
        """Only an explicit 'y' confirms."""
        return self._ask(f"{prompt} [dim](y/n)[/]").lower() == "y"

    def _report(self, message: str, style: str = "green"):
        self.book.message = message
        self.console.print(f"[{style}]{escape(message)}[/]")

    def _show(self, contacts, title: Optional[str] = None):
        self.console.print(contacts_table(self.book.numbered(contacts), title=title))

    def _ask_fields(self) -> Optional[dict]:
        """
        Prompt for every contact field in menu order.

        Returns:
            Field values, or None if a required field was left empty
        """
        first_name = self._ask("First name")
        if not first_name:
            return None
        last_name = self._ask("Last name")
        phone_number = self._ask("Phone number")
        if not phone_number:
            return None
        email = self._ask("Email")
        address = self._ask("Address")
        return {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "address": address,
            "phone_number": phone_number,
        }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_contact(self):
        fields = self._ask_fields()
        if fields is None:
            self._report("Contact creation cancelled: first name and phone number are required.", "yellow")
            return

        contact = await self.book.add(Contact.create(**fields))
        self._show([contact])
        self._report(f"Contact {contact.full_name} created.")

    def list_contacts(self, order: SortOrder = SortOrder.NONE):
        contacts = self.book.sorted_view(order)
        if not contacts:
            self._report("No contacts found.", "yellow")
            return

        self._show(contacts)
        noun = "contact" if len(contacts) == 1 else "contacts"
        self._report(f"{len(contacts)} {noun} listed ({order.label} order).")

    def query_contacts(self):
        query = self._ask("Search for")
        matches = self.book.search(query)
        self._show(matches, title=f"Results for '{escape(query)}'")
        noun = "match" if len(matches) == 1 else "matches"
        self._report(f"{len(matches)} {noun} found.")

    async def update_contact(self):
        index = self._ask("Contact # to update")
        position = self.book.position(index)
        current = self.book.get(position + 1)
        self._show([current], title="Current record")

        fields = self._ask_fields()
        if fields is None:
            self._report("Update cancelled: first name and phone number are required.", "yellow")
            return

        updated = await self.book.replace(position + 1, current.replace_fields(**fields))
        self._show([updated])
        self._report(f"Contact #{position + 1} updated.")

    async def delete_contact(self):
        index = self._ask("Contact # to delete")
        position = self.book.position(index)
        self._show([self.book.get(position + 1)])

        if not self._confirm("Delete this contact?"):
            self._report("Deletion cancelled.", "yellow")
            return

        removed = await self.book.remove(position + 1)
        self._report(f"Contact {removed.full_name} deleted.")

    async def upload_contacts(self):
        raw_path = self._ask("Path to CSV file")
        if not raw_path:
            self._report("Upload cancelled: no file given.", "yellow")
            return

        path = Path(raw_path).expanduser()
        log.info(f"Importing contacts from {path}")

        report = await self.book.import_rows(iter_rows(path))
        self._report(report.summary, "yellow" if report.skipped else "green")

    def show_help(self):
        self.console.print(commands_table())
        self.book.message = "Help shown."

    def confirm_exit(self) -> bool:
        if self._confirm("Are you sure you want to exit?"):
            self.console.print("[dim]Exiting the phone book...[/]")
            return True
        self._report("Exit cancelled.", "yellow")
        return False

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def dispatch(self, command: Command, raw: str = "") -> bool:
        """
        Run one command.

        Returns:
            True when the loop should stop (confirmed exit)

        Raises:
            PhoneBookError: only fatal ones; the rest are reported
        """
        try:
            if command is Command.CREATE:
                await self.create_contact()
            elif command is Command.QUERY:
                self.query_contacts()
            elif command is Command.UPLOAD:
                await self.upload_contacts()
            elif command is Command.UPDATE:
                await self.update_contact()
            elif command is Command.DELETE:
                await self.delete_contact()
            elif command is Command.EXIT:
                return self.confirm_exit()
            elif command is Command.LIST:
                self.list_contacts(SortOrder.NONE)
            elif command is Command.LIST_ASC:
                self.list_contacts(SortOrder.ASC)
            elif command is Command.LIST_DESC:
                self.list_contacts(SortOrder.DESC)
            elif command is Command.HELP:
                self.show_help()
            else:
                self._report(f"Invalid operation: {raw.strip()}", "red")
        except PhoneBookError as e:
            if e.fatal:
                raise
            self._report(str(e), "red")
        return False

    async def run(self) -> int:
        """
        Run the command loop until a confirmed exit.

        Returns:
            Process exit code
        """
        show_welcome(self.console, len(self.book), self.book.persistent)
        self.show_help()

        while True:
            try:
                raw = self._ask("Enter an operation or ? for help")
                command = Command.parse(raw)
                log.debug(f"Command {command.name} from input {raw!r}")
                if await self.dispatch(command, raw):
                    return EXIT_OK
            except PhoneBookError as e:
                log.error(f"Fatal error: {e}")
                self.console.print(f"[bold red]Fatal:[/] {escape(str(e))}")
                return EXIT_FATAL
