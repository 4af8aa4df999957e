"""loader.py

Bulk loaders for the two start-up data files:

- books:    title,author,ISBN,numPages
- students: firstName,lastName,studentID

One record per line, no header row, no quoting. Malformed lines are either
skipped with a warning or abort the load, depending on ``policy``.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .config import settings
from .errors import DuplicateKeyError, MalformedInputError
from .library import Library
from .utils.validators import TextValidator, parse_page_count

logger = logging.getLogger(__name__)

BOOK_FIELDS = 4
STUDENT_FIELDS = 3


@dataclass
class LoadResult:
    added: int = 0
    duplicates: int = 0
    skipped: int = 0


def _read_lines(path: str):
    # Bytes, so a bad byte only spoils its own line.
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, 1):
            yield line_number, raw


def _parse_line(raw: bytes, line_number: int, delimiter: str) -> List[str]:
    try:
        text = raw.decode("utf-8-sig" if line_number == 1 else "utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"line is not valid UTF-8 ({e.reason} at byte {e.start})") from e
    row = next(csv.reader([text], delimiter=delimiter, quoting=csv.QUOTE_NONE), [])
    return [field.strip() for field in row]


def _load(path: str, expected: int, add: Callable[[List[str]], None], delimiter: str, policy: str) -> LoadResult:
    result = LoadResult()
    for line_number, raw in _read_lines(path):
        try:
            fields = _parse_line(raw, line_number, delimiter)
            # Blank lines come through as [] or [''].
            if not fields or (len(fields) == 1 and not fields[0]):
                continue
            if len(fields) != expected:
                raise MalformedInputError(f"expected {expected} fields, found {len(fields)}")
            add(fields)
            result.added += 1
        except DuplicateKeyError as e:
            logger.warning("%s:%d: %s", path, line_number, e)
            result.duplicates += 1
        except MalformedInputError as e:
            if policy == "abort":
                raise MalformedInputError(str(e), source=path, line_number=line_number) from e
            logger.warning("%s:%d: skipping malformed line: %s", path, line_number, e)
            result.skipped += 1
    logger.info("Loaded %s: %d added, %d duplicates, %d skipped", path, result.added, result.duplicates, result.skipped)
    return result


def load_books(library: Library, path: str, delimiter: Optional[str] = None, policy: Optional[str] = None) -> LoadResult:
    """Load ``title,author,ISBN,numPages`` lines into the catalog."""

    def add(fields: List[str]) -> None:
        title, author, isbn, pages = fields
        if not TextValidator.validate_title(title):
            raise MalformedInputError("title is empty")
        if not TextValidator.validate_author(author):
            raise MalformedInputError(f"author {author!r} is empty or only digits")
        if not TextValidator.validate_identifier(isbn):
            raise MalformedInputError(f"ISBN {isbn!r} is empty or contains spaces")
        library.add_book(title, author, isbn, parse_page_count(pages))

    return _load(path, BOOK_FIELDS, add, delimiter or settings.delimiter, policy or settings.load_error_policy)


def load_students(library: Library, path: str, delimiter: Optional[str] = None, policy: Optional[str] = None) -> LoadResult:
    """Load ``firstName,lastName,studentID`` lines into the student list."""

    def add(fields: List[str]) -> None:
        first_name, last_name, student_id = fields
        if not (TextValidator.validate_name(first_name) and TextValidator.validate_name(last_name)):
            raise MalformedInputError("first and last name must contain letters")
        if not TextValidator.validate_identifier(student_id):
            raise MalformedInputError(f"student ID {student_id!r} is empty or contains spaces")
        library.add_student(first_name, last_name, student_id)

    return _load(path, STUDENT_FIELDS, add, delimiter or settings.delimiter, policy or settings.load_error_policy)
