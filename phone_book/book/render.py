"""
Rich output for the phone book shell.

File: book/render.py
Created: 2026-10-13
Last Modified: 2026-10-15
"""

from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import Contact
from .commands import Command


def contacts_table(rows: List[Tuple[int, Contact]], title: Optional[str] = None) -> Table:
    """
    Build a table of contacts.

    Args:
        rows: (1-based stored position, contact) pairs, in display order
        title: Optional table title
    """
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold", title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("First Name", style="cyan")
    table.add_column("Last Name", style="cyan")
    table.add_column("Email", style="white")
    table.add_column("Address", style="white")
    table.add_column("Phone Number", style="yellow")

    for index, contact in rows:
        table.add_row(
            str(index),
            escape(contact.first_name),
            escape(contact.last_name),
            escape(contact.email),
            escape(contact.address),
            escape(contact.phone_number),
        )
    return table


def commands_table() -> Table:
    """Static list of recognized commands."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Command", style="cyan", justify="center")
    table.add_column("Description", style="dim")

    for command in Command.menu():
        table.add_row(command.key, command.description)
    return table


def show_welcome(console: Console, count: int, persistent: bool):
    """Display the startup banner."""
    storage = "saved to disk" if persistent else "in memory only"
    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Welcome to the Phone Book![/]\n"
            f"[dim]{count} contact{'' if count == 1 else 's'} loaded, {storage}[/]",
            border_style="cyan",
        )
    )
    console.print()
