"""
Main entry point for the phone book.

Interactive CLI for creating, searching, updating, deleting and importing
contacts.

File: main.py
Created: 2026-10-12
Last Modified: 2026-10-19
"""

import asyncio
import logging
import sys
from datetime import datetime

from dotenv import load_dotenv
from rich.console import Console

from phone_book.book import EXIT_FATAL, PhoneBook, PhoneBookShell
from phone_book.config import PhoneBookConfig
from phone_book.errors import PersistenceError

console = Console()

load_dotenv()

log = logging.getLogger(__name__)


def setup_logging(config: PhoneBookConfig):
    """Log to a dated file; only errors reach the terminal."""
    config.log_dir.mkdir(parents=True, exist_ok=True)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.ERROR)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        handlers=[
            logging.FileHandler(config.log_dir / f"phone_book_{datetime.now().strftime('%Y-%m-%d')}.log"),
            stream_handler,
        ]
    )


async def main() -> int:
    """Main entry point with interactive menu."""
    config = PhoneBookConfig.from_env()
    setup_logging(config)

    book = PhoneBook(config.db_path)
    try:
        count = await book.load()
    except PersistenceError as e:
        log.error(f"Could not open phone book: {e}")
        console.print(f"[bold red]Fatal:[/] {e}")
        return EXIT_FATAL

    if config.persistent:
        log.info(f"Phone book opened with {count} contacts from {config.db_path}")
    else:
        log.info("Phone book running in memory only")

    return await PhoneBookShell(book, console=console).run()


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
