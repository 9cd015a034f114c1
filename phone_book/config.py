"""
Runtime configuration for the phone book.

File: config.py
Created: 2026-10-12
Last Modified: 2026-10-14
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .database.common import LOCAL_DB_PATH

IN_MEMORY = ":memory:"
SQLITE_PREFIXES = ("sqlite:///", "sqlite://")


def parse_database_url(url: Optional[str]) -> Optional[Path]:
    """
    Turn a DATABASE_URL value into a SQLite file path.

    Returns:
        Path to the database file, the default path when unset,
        or None for an in-memory session (":memory:" or empty)
    """
    if url is None:
        return LOCAL_DB_PATH

    url = url.strip()
    for prefix in SQLITE_PREFIXES:
        if url.startswith(prefix):
            url = url[len(prefix):]
            break

    if not url or url == IN_MEMORY:
        return None
    return Path(url).expanduser()


@dataclass
class PhoneBookConfig:
    """Settings read once at startup."""

    # Persistence (None keeps the session in memory only)
    db_path: Optional[Path] = field(default_factory=lambda: LOCAL_DB_PATH)

    # Logging
    log_dir: Path = field(default_factory=lambda: Path("logs"))
    log_level: str = "INFO"

    def __post_init__(self):
        if isinstance(self.db_path, str):
            self.db_path = Path(self.db_path)
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        self.log_level = self.log_level.upper()

    @property
    def persistent(self) -> bool:
        return self.db_path is not None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PhoneBookConfig":
        """Build the config from environment variables (after load_dotenv)."""
        env = os.environ if environ is None else environ
        return cls(
            db_path=parse_database_url(env.get("DATABASE_URL")),
            log_dir=Path(env.get("PHONE_BOOK_LOG_DIR", "logs")),
            log_level=env.get("PHONE_BOOK_LOG_LEVEL", "INFO"),
        )
