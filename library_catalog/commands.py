"""Menu commands for the interactive catalog.

Each command takes the application state and an input source, does its work
against the Library, and hands back a Report. Nothing in here prints; the
caller decides how a Report is rendered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .book import Book
from .errors import CatalogError, InvalidStateError, MalformedInputError, NotFoundError
from .library import Library
from .utils.validators import TextValidator, parse_choice, parse_page_count

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    library: Library
    running: bool = True


@dataclass
class Report:
    ok: bool
    message: str
    title: Optional[str] = None
    rows: List[Any] = field(default_factory=list)
    detail: Optional[Book] = None


class InputSource:
    """Where commands read answers from. Subclasses implement ``ask``."""

    def ask(self, prompt: str) -> str:
        raise NotImplementedError

    def show_options(self, prompt: str, options: Sequence[str]) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def choose(self, prompt: str, options: Sequence[str]) -> int:
        """Show numbered options and return the 0-based index picked, re-asking until in range."""
        self.show_options(prompt, options)
        while True:
            value = parse_choice(self.ask(f"{prompt} (1-{len(options)})"), 1, len(options))
            if value is not None:
                return value - 1
            self.warn("Please enter a value within range!")


# ------------------------- Commands ------------------------- #
def search_books(state: AppState, source: InputSource) -> Report:
    books = state.library.all_books()
    if not books:
        raise InvalidStateError("No books in the library to show or search for.")
    title = source.ask("Enter a book title to view it (leave blank to list all)").strip()
    if not title:
        return Report(True, f"{len(books)} books in the library.", title="All Books", rows=books)
    book = state.library.get_book(title)
    if book is None:
        raise NotFoundError(f"Book titled '{title}' does not exist in this library.")
    return Report(True, "Book found.", title="Book Info", detail=book)


def issue_book(state: AppState, source: InputSource) -> Report:
    lib = state.library
    students = lib.all_students()
    if not students or lib.statistics()["total_books"] == 0:
        raise InvalidStateError("Can't issue books since there are either no books or no students in the library.")
    title = source.ask("Enter book title").strip()
    book = lib.get_book(title)
    if book is None:
        raise NotFoundError(f"Book with title '{title}' not found.")
    if not book.is_available:
        raise InvalidStateError(f"'{book.title}' is currently not available to be issued.")
    student = students[source.choose("Select the student", [str(s) for s in students])]
    entry = lib.issue_book(book, student)
    return Report(True, f"Issued '{entry.book.title}' to {student.full_name}.", detail=entry.book)


def return_book(state: AppState, source: InputSource) -> Report:
    entries = state.library.all_issued_entries()
    if not entries:
        raise InvalidStateError("No books have been issued yet.")
    entry = entries[source.choose("Select the issued entry", [str(e) for e in entries])]
    returned = state.library.return_book(entry.book, entry.student)
    return Report(True, f"Returned '{returned.title}' from {entry.student.full_name}.", detail=returned)


def add_book(state: AppState, source: InputSource) -> Report:
    title = source.ask("Enter book title")
    author = source.ask("Enter book author")
    isbn = source.ask("Enter book ISBN")
    pages = source.ask("Enter number of pages")
    if not TextValidator.validate_title(title):
        raise MalformedInputError("Title cannot be empty.")
    if not TextValidator.validate_author(author):
        raise MalformedInputError("Author must be a name, not empty or only digits.")
    if not TextValidator.validate_identifier(isbn):
        raise MalformedInputError("ISBN cannot be empty or contain spaces.")
    book = state.library.add_book(title, author, isbn, parse_page_count(pages))
    return Report(True, f"Added '{book.title}' to the library.", detail=book)


def delete_book(state: AppState, source: InputSource) -> Report:
    if state.library.statistics()["total_books"] == 0:
        raise InvalidStateError("No books stored in the library to delete.")
    title = source.ask("Enter book title").strip()
    book = state.library.delete_book(title)
    return Report(True, f"Removed '{book.title}' from the library.")


def add_student(state: AppState, source: InputSource) -> Report:
    first_name = source.ask("Enter student's first name")
    last_name = source.ask("Enter student's last name")
    student_id = source.ask("Enter student's ID number")
    if not (TextValidator.validate_name(first_name) and TextValidator.validate_name(last_name)):
        raise MalformedInputError("First and last name must contain letters.")
    if not TextValidator.validate_identifier(student_id):
        raise MalformedInputError("Student ID cannot be empty or contain spaces.")
    student = state.library.add_student(first_name, last_name, student_id)
    return Report(True, f"Added student {student}.")


def delete_student(state: AppState, source: InputSource) -> Report:
    students = state.library.all_students()
    if not students:
        raise InvalidStateError("There are no students registered with the library.")
    target = students[source.choose("Select the student", [str(s) for s in students])]
    student = state.library.delete_student(target.student_id)
    return Report(True, f"Deleted student {student} from the library.")


def quit_app(state: AppState, source: InputSource) -> Report:
    state.running = False
    return Report(True, "Goodbye!")


Command = Callable[[AppState, InputSource], Report]

MENU_ACTIONS: List[Tuple[str, str, Command]] = [
    ("1", "Search books", search_books),
    ("2", "Issue book", issue_book),
    ("3", "Return book", return_book),
    ("4", "Add book", add_book),
    ("5", "Delete book", delete_book),
    ("6", "Add student", add_student),
    ("7", "Delete student", delete_student),
    ("8", "Quit", quit_app),
]


def dispatch(state: AppState, choice: str, source: InputSource) -> Report:
    """Run the menu action for ``choice``; catalog errors become failed reports."""
    for key, label, command in MENU_ACTIONS:
        if key == choice.strip():
            try:
                return command(state, source)
            except CatalogError as e:
                logger.warning("%s failed: %s", label, e)
                return Report(False, str(e))
    return Report(False, f"Invalid choice '{choice}'. Please pick 1-{len(MENU_ACTIONS)}.")
