from __future__ import annotations

import string
from typing import Tuple

from .errors import MalformedInputError

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def title_key(title: str) -> str:
    """Catalog key for a title: stripped and lowercased, ASCII letters only."""
    return title.strip().translate(_ASCII_LOWER)


class Book:
    """A single book held by the catalog."""

    def __init__(self, title: str, author: str, isbn: str, page_count: int, is_available: bool = True) -> None:
        self.title = title.strip()
        self.author = author.strip()
        self.isbn = isbn.strip()
        self.page_count = page_count
        self.is_available = is_available
        if not self.isbn:
            raise MalformedInputError("A book must have a non-empty ISBN.")

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        status = "Available" if self.is_available else "Unavailable"
        return f"{self.title} by {self.author} (ISBN: {self.isbn}, {self.page_count} pages, {status})"

    def __repr__(self) -> str:
        return f"Book({self.title!r}, {self.author!r}, {self.isbn!r}, {self.page_count!r}, is_available={self.is_available!r})"

    @property
    def key(self) -> str:
        return title_key(self.title)

    def with_availability(self, is_available: bool) -> "Book":
        return Book(self.title, self.author, self.isbn, self.page_count, is_available=is_available)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "page_count": self.page_count,
            "is_available": self.is_available,
        }


class Student:
    """A registered student; the ID is the identity."""

    def __init__(self, first_name: str, last_name: str, student_id: str) -> None:
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
        self.student_id = student_id.strip()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.full_name} (ID: {self.student_id})"

    def __repr__(self) -> str:
        return f"Student({self.first_name!r}, {self.last_name!r}, {self.student_id!r})"

    def to_dict(self) -> dict:
        return {"first_name": self.first_name, "last_name": self.last_name, "student_id": self.student_id}


class IssuedEntry:
    """A checked-out book paired with the student holding it."""

    def __init__(self, book: Book, student: Student) -> None:
        self.book = book
        self.student = student

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"'{self.book.title}' by {self.book.author} - issued to {self.student.full_name} (ID: {self.student.student_id})"

    def __repr__(self) -> str:
        return f"IssuedEntry({self.book!r}, {self.student!r})"

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.book.isbn, self.student.student_id)

    def to_dict(self) -> dict:
        return {"book": self.book.to_dict(), "student": self.student.to_dict()}


# ------------------------- Identity & ordering ------------------------- #
def same_entry(a: IssuedEntry, b: IssuedEntry) -> bool:
    return a.identity == b.identity


def book_sort_key(book: Book) -> str:
    return book.title


def entry_sort_key(entry: IssuedEntry) -> str:
    return entry.book.title


def student_sort_key(student: Student) -> str:
    return student.full_name
