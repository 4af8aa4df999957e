import logging
import os
from typing import Optional, Sequence

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .commands import MENU_ACTIONS, AppState, InputSource, Report, dispatch
from .config import settings
from .errors import MalformedInputError
from .library import Library
from .loader import load_books, load_students
from .utils.ui_helpers import (
    book_panel,
    print_book_result,
    print_buckets_result,
    print_list_result,
    print_stats_result,
    print_students_result,
    render_rows,
    set_output_mode,
)
from .utils.validators import parse_choice

logger = logging.getLogger(__name__)

console = Console()


class ConsoleInput(InputSource):
    """Reads answers from the terminal through rich prompts."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def ask(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console, default="", show_default=False)

    def show_options(self, prompt: str, options: Sequence[str]) -> None:
        for i, option in enumerate(options, 1):
            self.console.print(f"[bold cyan]{i:>3}.[/] {escape(option)}")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/]")


def build_library(book_file: str, student_file: str) -> Library:
    """Create a Library and bulk-load both data files into it."""
    lib = Library(settings.bucket_count)
    books = load_books(lib, book_file)
    students = load_students(lib, student_file)
    logger.info("Start-up load: %d books, %d students", books.added, students.added)
    return lib


# --- Typer CLI Application ---
app = typer.Typer(help="Library catalog CLI")


def _library(ctx: typer.Context) -> Library:
    """Load the catalog named by the global options, exiting cleanly on bad data files."""
    paths = ctx.obj or {}
    book_file = paths.get("books") or settings.book_file
    student_file = paths.get("students") or settings.student_file
    for path in (book_file, student_file):
        if not os.path.exists(path):
            print(f"Data file not found: {path}")
            raise typer.Exit(code=1)
    try:
        return build_library(book_file, student_file)
    except MalformedInputError as e:
        print(f"Could not load data: {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    books: Optional[str] = typer.Option(None, "--books", help="Book data file (title,author,ISBN,numPages)"),
    students: Optional[str] = typer.Option(None, "--students", help="Student data file (firstName,lastName,studentID)"),
):
    """Global options; with no command, start the interactive menu."""
    if output:
        set_output_mode(output)
    ctx.obj = {"books": books, "students": students}
    if ctx.invoked_subcommand is None:
        run_menu(AppState(_library(ctx)), ConsoleInput(console))


@app.command("list")
def cli_list(
    ctx: typer.Context,
    descending: bool = typer.Option(False, "--descending", "-d", help="Reverse title order"),
):
    """List all books, sorted by title."""
    lib = _library(ctx)
    print_list_result(lib.all_books(ascending=not descending))


@app.command("find")
def cli_find(ctx: typer.Context, title: str):
    """Find a book by title (case-insensitive) and show its details."""
    lib = _library(ctx)
    print_book_result(lib.get_book(title), title)


@app.command("students")
def cli_students(ctx: typer.Context):
    """List registered students, sorted by full name."""
    lib = _library(ctx)
    print_students_result(lib.all_students())


@app.command("stats")
def cli_stats(ctx: typer.Context):
    """Show catalog statistics."""
    lib = _library(ctx)
    print_stats_result(lib.statistics())


@app.command("buckets")
def cli_buckets(ctx: typer.Context):
    """Show how titles are spread across the hash buckets."""
    lib = _library(ctx)
    print_buckets_result(lib.bucket_snapshot())


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Start the interactive menu."""
    run_menu(AppState(_library(ctx)), ConsoleInput(console))


# --- Interactive menu ---
def render_menu(out: Console) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, label, _ in MENU_ACTIONS:
        table.add_row(f"[reverse]{key}[/]", label)

    out.print(Panel(
        table,
        title=settings.app_name,
        border_style="cyan",
        box=box.HEAVY,
        padding=(1, 2),
    ))


def render_report(report: Report, out: Console) -> None:
    if report.rows:
        out.print(render_rows(report.rows, report.title or ""))
    if report.detail is not None:
        out.print(book_panel(report.detail))
    if report.ok:
        out.print(f"[green]✅ {escape(report.message)}[/]")
    else:
        out.print(f"[bold yellow]⚠️ {escape(report.message)}[/]")


def read_menu_choice(source: InputSource) -> str:
    """Ask for a menu number until one in range is given."""
    while True:
        value = parse_choice(source.ask("Enter the number for your choice"), 1, len(MENU_ACTIONS))
        if value is not None:
            return str(value)
        source.warn("Please enter a value within range!")


def run_menu(state: AppState, source: InputSource, out: Optional[Console] = None) -> None:
    """Interactive menu loop; runs until the quit action clears ``state.running``."""
    out = out or console
    while state.running:
        render_menu(out)
        try:
            choice = read_menu_choice(source)
            report = dispatch(state, choice, source)
        except EOFError:
            # End of input (Ctrl-D) ends the session like the quit action.
            state.running = False
            report = Report(True, "Goodbye!")
        render_report(report, out)
        out.print()


def entrypoint() -> None:
    logging.basicConfig(level=settings.log_level)
    app()


if __name__ == "__main__":
    entrypoint()
