import re
from typing import Optional

from ..errors import MalformedInputError


class TextValidator:
    """Basic checks for text typed at the console."""

    @staticmethod
    def _is_non_empty(text: Optional[str]) -> bool:
        return text is not None and bool(text.strip())

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return TextValidator._is_non_empty(title)

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        # must not be digits only
        if not TextValidator._is_non_empty(author):
            return False
        return not author.strip().isdigit()

    @staticmethod
    def validate_name(name: Optional[str]) -> bool:
        if not TextValidator._is_non_empty(name):
            return False
        return any(c.isalpha() for c in name)

    @staticmethod
    def validate_identifier(value: Optional[str]) -> bool:
        """ISBNs and student IDs: non-empty, no whitespace inside."""
        if not TextValidator._is_non_empty(value):
            return False
        return re.search(r"\s", value.strip()) is None


def parse_page_count(raw: Optional[str]) -> int:
    """Parse a page count typed by the user; must be a positive integer."""
    try:
        pages = int((raw or "").strip())
    except ValueError as e:
        raise MalformedInputError(f"Number of pages must be a whole number, got '{raw}'.") from e
    if pages < 1:
        raise MalformedInputError("Number of pages must be at least 1.")
    return pages


def parse_choice(raw: Optional[str], low: int, high: int) -> Optional[int]:
    """Return the integer in ``raw`` if it lies in [low, high], else None."""
    try:
        value = int((raw or "").strip())
    except ValueError:
        return None
    if low <= value <= high:
        return value
    return None
