"""
Reads contacts from a CSV file for bulk import.

The first line is the header. Recognized columns are mapped onto contact
fields, anything else is ignored. Problems confined to one record (bad bytes,
an oversized field, too many values) only mark that record; the rest of the
file is still read.

File: importing/csv_reader.py
Created: 2026-10-13
Last Modified: 2026-10-19
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from ..errors import ImportRecordError, ValidationError
from ..models import Contact

log = logging.getLogger(__name__)

# CSV column -> Contact.create() argument
COLUMN_MAP = {
    "first_name": "first_name",
    "last_name": "last_name",
    "email": "email",
    "address": "address",
    "phone": "phone_number",
}

_EXTRA_VALUES = "__extra__"
_RECORD_ERROR = "__error__"


def _open(path: Path):
    # undecodable bytes survive as lone surrogates so they can be pinned to a record
    return open(path, "r", newline="", encoding="utf-8-sig", errors="surrogateescape")


def _is_undecodable(values: List[str]) -> bool:
    try:
        for value in values:
            value.encode("utf-8")
    except UnicodeEncodeError:
        return True
    return False


def read_header(path: Path) -> List[str]:
    """
    Read the header row of a CSV file.

    Raises:
        ValidationError: if the file cannot be opened, is empty or its header
            cannot be parsed
    """
    try:
        with _open(path) as f:
            header = next(csv.reader(f), None)
    except (OSError, csv.Error) as e:
        raise ValidationError(f"Could not read {path}: {e}") from e

    if not header:
        raise ValidationError(f"{path} has no header row")
    if _is_undecodable(header):
        raise ValidationError(f"Could not read {path}: header is not valid UTF-8")

    header = [column.strip() for column in header]
    ignored = [column for column in header if column.lower() not in COLUMN_MAP]
    if ignored:
        log.info(f"Ignoring unrecognized columns in {path}: {ignored}")
    return header


def iter_rows(path: Path) -> Iterator[Tuple[int, Dict[str, str]]]:
    """
    Lazily yield the data rows of a CSV file.

    Yields:
        (line number, {column: value}) for each non-blank row. Short rows have
        None for the missing columns; long rows carry their surplus values
        under an extra key. A record that could not be parsed or decoded is
        yielded with only an error key, which row_to_contact reports.

    Raises:
        ValidationError: if the file cannot be opened or has no usable header
    """
    header = read_header(path)
    try:
        with _open(path) as f:
            reader = csv.reader(f)
            next(reader, None)  # header
            while True:
                try:
                    values = next(reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    # the reader resets on the next call and resumes after this record
                    yield reader.line_num, {_RECORD_ERROR: str(e)}
                    continue

                if not any(value.strip() for value in values):
                    continue
                if _is_undecodable(values):
                    yield reader.line_num, {_RECORD_ERROR: "not valid UTF-8"}
                    continue

                row = dict(zip(header, values))
                for column in header[len(values):]:
                    row[column] = None
                if len(values) > len(header):
                    row[_EXTRA_VALUES] = values[len(header):]
                yield reader.line_num, row
    except OSError as e:
        raise ValidationError(f"Could not read {path}: {e}") from e


def row_to_contact(line: int, row: Dict[str, str]) -> Contact:
    """
    Map one CSV row onto a new contact.

    Mapped columns missing from the row become empty fields.

    Raises:
        ImportRecordError: if the record could not be read, has more values
            than the header or lacks a first name or phone number
    """
    if row.get(_RECORD_ERROR):
        raise ImportRecordError(line, row[_RECORD_ERROR])
    if row.get(_EXTRA_VALUES):
        raise ImportRecordError(line, "more values than header columns")

    fields = {argument: "" for argument in COLUMN_MAP.values()}
    for column, value in row.items():
        argument = COLUMN_MAP.get((column or "").strip().lower())
        if argument is not None:
            fields[argument] = (value or "").strip()

    try:
        return Contact.create(**fields)
    except ValidationError as e:
        raise ImportRecordError(line, str(e)) from e
