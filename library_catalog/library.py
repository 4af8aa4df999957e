import logging
from typing import Any, Dict, List, Optional, Tuple

from .book import (
    Book,
    IssuedEntry,
    Student,
    book_sort_key,
    entry_sort_key,
    same_entry,
    student_sort_key,
    title_key,
)
from .config import settings
from .errors import DuplicateKeyError, InvalidStateError, NotFoundError
from .hash_table import HashTable
from .sorting import merge_sort

logger = logging.getLogger(__name__)


class Library:
    """Manages the book catalog, registered students, and issued books.

    Books live in a HashTable keyed by lowercased title. Students and issued
    entries are plain lists. Nothing here is thread-safe; callers sharing one
    Library across threads must lock around it.
    """

    def __init__(self, bucket_count: Optional[int] = None) -> None:
        self._books: HashTable[Book] = HashTable(settings.bucket_count if bucket_count is None else bucket_count)
        self._issued: List[IssuedEntry] = []
        self._students: List[Student] = []

    # ------------------------- Books ------------------------- #
    def add_book(self, title: str, author: str, isbn: str, pages: int) -> Book:
        """Add a new, available book. Titles are unique regardless of case, ISBNs exactly."""
        book = Book(title, author, isbn, pages)
        if self._books.exists(book.key):
            logger.warning("Duplicate title rejected: %r", book.title)
            raise DuplicateKeyError(f"A book titled '{book.title}' already exists.")
        holder = self.find_book_by_isbn(book.isbn)
        if holder is not None:
            logger.warning("Duplicate ISBN %s rejected for %r", book.isbn, book.title)
            raise DuplicateKeyError(f"ISBN {book.isbn} already belongs to '{holder.title}'.")
        self._books.insert(book.key, book)
        logger.info("Added book %r (ISBN %s)", book.title, book.isbn)
        return book

    def delete_book(self, title: str) -> Book:
        book = self.get_book(title)
        if book is None:
            raise NotFoundError(f"No book titled '{title}' in the library.")
        if not book.is_available:
            raise InvalidStateError(f"'{book.title}' is currently issued and can't be deleted.")
        self._books.delete(book.key)
        logger.info("Deleted book %r", book.title)
        return book

    def get_book(self, title: str) -> Optional[Book]:
        return self._books.lookup(title_key(title))

    def find_book_by_isbn(self, isbn: str) -> Optional[Book]:
        for book in self._books.all_values():
            if book.isbn == isbn:
                return book
        return None

    def all_books(self, ascending: bool = True) -> List[Book]:
        return merge_sort(self._books.all_values(), key=book_sort_key, ascending=ascending)

    # ------------------------- Issuing ------------------------- #
    def issue_book(self, book: Book, student: Student) -> IssuedEntry:
        """Check a book out to a registered student."""
        stored = self.get_book(book.title)
        if stored is None:
            raise NotFoundError(f"No book titled '{book.title}' in the library.")
        if self.get_student(student.student_id) is None:
            raise NotFoundError(f"No student with ID '{student.student_id}' is registered.")
        if not book.is_available or not stored.is_available:
            raise InvalidStateError(f"Cannot issue '{stored.title}' by {stored.author} since it has already been issued.")

        issued = stored.with_availability(False)
        self._books.update(issued.key, issued)
        entry = IssuedEntry(issued, student)
        self._issued.append(entry)
        logger.info("Issued %r to student %s", issued.title, student.student_id)
        return entry

    def return_book(self, book: Book, student: Student) -> Book:
        """Close the issued entry for (book, student) and make the book available again."""
        wanted = IssuedEntry(book, student)
        for position, entry in enumerate(self._issued):
            if same_entry(entry, wanted):
                del self._issued[position]
                break
        else:
            raise InvalidStateError(f"'{book.title}' is not issued to {student.full_name}.")

        returned = entry.book.with_availability(True)
        self._books.update(returned.key, returned)
        logger.info("Returned %r from student %s", returned.title, student.student_id)
        return returned

    def all_issued_entries(self, ascending: bool = True) -> List[IssuedEntry]:
        return merge_sort(list(self._issued), key=entry_sort_key, ascending=ascending)

    # ------------------------- Students ------------------------- #
    def add_student(self, first_name: str, last_name: str, student_id: str) -> Student:
        student = Student(first_name, last_name, student_id)
        if self.get_student(student.student_id) is not None:
            raise DuplicateKeyError(f"Student with ID '{student.student_id}' already exists in the library.")
        self._students.append(student)
        logger.info("Added student %s", student.student_id)
        return student

    def delete_student(self, student_id: str) -> Student:
        for position, student in enumerate(self._students):
            if student.student_id == student_id:
                del self._students[position]
                logger.info("Deleted student %s", student_id)
                return student
        raise NotFoundError(f"No student with ID '{student_id}' is registered.")

    def get_student(self, student_id: str) -> Optional[Student]:
        for student in self._students:
            if student.student_id == student_id:
                return student
        return None

    def all_students(self, ascending: bool = True) -> List[Student]:
        return merge_sort(list(self._students), key=student_sort_key, ascending=ascending)

    # ------------------------- Housekeeping ------------------------- #
    def reset(self) -> None:
        """Empty the catalog, the issued record, and the student list."""
        self._books.clear()
        self._issued.clear()
        self._students.clear()
        logger.info("Library reset")

    def statistics(self) -> Dict[str, Any]:
        books = self._books.all_values()
        available = sum(1 for book in books if book.is_available)
        return {
            "total_books": len(books),
            "available_books": available,
            "issued_books": len(books) - available,
            "students": len(self._students),
        }

    def bucket_snapshot(self) -> List[List[Tuple[str, Book]]]:
        return self._books.buckets()
