import os
import json
from typing import List, Any, Dict, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from ..book import Book, IssuedEntry, Student

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def availability(book: Book) -> str:
    return "Available" if book.is_available else "Unavailable"


def book_table(books: List[Book], title: str = "📚 Books") -> Table:
    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("ISBN", style="magenta", no_wrap=True)
    table.add_column("Pages", justify="right")
    table.add_column("Status")
    for i, b in enumerate(books, 1):
        status = "[green]Available[/]" if b.is_available else "[red]Unavailable[/]"
        table.add_row(str(i), escape(b.title), escape(b.author), b.isbn, str(b.page_count), status)
    return table


def book_panel(book: Book, title: str = "🔍 Book Info") -> Panel:
    return Panel.fit(
        f"[bold]Title:[/] {escape(book.title)}\n"
        f"[bold]Author:[/] {escape(book.author)}\n"
        f"[bold]ISBN:[/] {book.isbn}\n"
        f"[bold]Pages:[/] {book.page_count}\n"
        f"[bold]Availability:[/] {availability(book)}",
        title=title,
        border_style="green" if book.is_available else "yellow",
    )


def print_list_result(books: List[Book]) -> None:
    """Print the book listing in the current output mode.
    - plain: 'Title by Author (ISBN) - Available' lines, or 'No books in library.'
    - json: JSON array of book dicts
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        _console.print(book_table(books))
    else:
        for b in books:
            print(f"{b.title} by {b.author} ({b.isbn}) - {availability(b)}")


def print_book_result(book: Optional[Book], title: str) -> None:
    mode = get_output_mode()

    if book is None:
        print(f"Book titled '{title}' not found.")
        return

    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        _console.print(book_panel(book))
    else:
        print("Book Found")
        print(f"Title: {book.title}")
        print(f"Author: {book.author}")
        print(f"ISBN: {book.isbn}")
        print(f"Pages: {book.page_count}")
        print(f"Availability: {availability(book)}")


def print_students_result(students: List[Student]) -> None:
    mode = get_output_mode()

    if not students:
        print("No students registered.")
        return

    if mode == "json":
        print(json.dumps([s.to_dict() for s in students], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="🎓 Students", show_lines=True, header_style="bold cyan")
        table.add_column("Name", style="white")
        table.add_column("Student ID", style="magenta", no_wrap=True)
        for s in students:
            table.add_row(escape(s.full_name), s.student_id)
        _console.print(table)
    else:
        for s in students:
            print(f"{s.full_name} - ID: {s.student_id}")


def print_stats_result(stats: Dict[str, Any]) -> None:
    mode = get_output_mode()

    total = stats.get("total_books", 0)
    available = stats.get("available_books", 0)
    issued = stats.get("issued_books", 0)
    students = stats.get("students", 0)

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {total}\n"
            f"[bold]Available:[/] {available}\n"
            f"[bold]Issued:[/] {issued}\n"
            f"[bold]Students:[/] {students}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Available: {available}")
        print(f"Issued: {issued}")
        print(f"Students: {students}")


def print_buckets_result(buckets: List[List[Any]]) -> None:
    """Dump every hash bucket with the titles chained in it."""
    mode = get_output_mode()

    if mode == "json":
        payload = [[key for key, _ in chain] for chain in buckets]
        print(json.dumps(payload, ensure_ascii=False))
        return

    for index, chain in enumerate(buckets):
        keys = ", ".join(key for key, _ in chain) or "-"
        if mode == "rich":
            marker = "[yellow]⚠[/] " if len(chain) > 1 else ""
            _console.print(f"[bold cyan]Bucket {index:>2}[/]: {marker}{escape(keys)}")
        else:
            print(f"Bucket {index}: {keys}")


def render_rows(rows: List[Any], title: str) -> Table:
    """Rich table for a report's rows, picked by record type."""
    if rows and isinstance(rows[0], Book):
        return book_table(rows, title=title)

    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    if rows and isinstance(rows[0], IssuedEntry):
        table.add_column("Book", style="white")
        table.add_column("Issued To", style="white")
        table.add_column("Student ID", style="magenta")
        for i, e in enumerate(rows, 1):
            table.add_row(str(i), escape(e.book.title), escape(e.student.full_name), e.student.student_id)
    else:
        table.add_column("Entry", style="white")
        for i, row in enumerate(rows, 1):
            table.add_row(str(i), escape(str(row)))
    return table
