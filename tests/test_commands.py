import io

from rich.console import Console

from library_catalog.commands import AppState, dispatch
from library_catalog.main import run_menu


def _state(lib):
    lib.add_book("Dune", "Herbert", "111", 412)
    lib.add_book("Kindred", "Butler", "222", 264)
    lib.add_student("Amy", "Lee", "S1")
    lib.add_student("Ben", "Adams", "S2")
    return AppState(lib)


def test_search_lists_all_on_blank_title(lib, scripted):
    report = dispatch(_state(lib), "1", scripted([""]))
    assert report.ok
    assert [b.title for b in report.rows] == ["Dune", "Kindred"]


def test_search_single_book(lib, scripted):
    report = dispatch(_state(lib), "1", scripted(["KINDRED"]))
    assert report.ok
    assert report.detail.isbn == "222"


def test_search_missing_book_is_reported(lib, scripted):
    report = dispatch(_state(lib), "1", scripted(["Nope"]))
    assert not report.ok
    assert "does not exist" in report.message


def test_search_empty_library(lib, scripted):
    report = dispatch(AppState(lib), "1", scripted([]))
    assert not report.ok


def test_issue_then_return(lib, scripted):
    state = _state(lib)

    # Students are offered sorted by full name, so "Amy Lee" is option 1.
    report = dispatch(state, "2", scripted(["dune", "1"]))
    assert report.ok, report.message
    entries = lib.all_issued_entries()
    assert len(entries) == 1
    assert entries[0].student.student_id == "S1"
    assert lib.get_book("Dune").is_available is False

    report = dispatch(state, "3", scripted(["1"]))
    assert report.ok, report.message
    assert lib.all_issued_entries() == []
    assert lib.get_book("Dune").is_available is True


def test_issue_reprompts_out_of_range_student(lib, scripted):
    source = scripted(["Dune", "0", "abc", "7", "2"])
    report = dispatch(_state(lib), "2", source)
    assert report.ok
    assert len(source.warnings) == 3
    assert lib.all_issued_entries()[0].student.student_id == "S2"


def test_issue_unavailable_book_reported(lib, scripted):
    state = _state(lib)
    dispatch(state, "2", scripted(["Dune", "1"]))
    report = dispatch(state, "2", scripted(["Dune"]))
    assert not report.ok
    assert "not available" in report.message
    assert len(lib.all_issued_entries()) == 1


def test_return_with_nothing_issued(lib, scripted):
    report = dispatch(_state(lib), "3", scripted([]))
    assert not report.ok


def test_add_book_command(lib, scripted):
    state = AppState(lib)
    report = dispatch(state, "4", scripted(["Hyperion", "Dan Simmons", "9780553283686", "482"]))
    assert report.ok
    assert lib.get_book("hyperion").page_count == 482

    report = dispatch(state, "4", scripted(["HYPERION", "Someone", "1", "10"]))
    assert not report.ok
    assert "already exists" in report.message


def test_add_book_rejects_bad_fields(lib, scripted):
    state = AppState(lib)
    assert not dispatch(state, "4", scripted(["Title", "Author", "123", "many"])).ok
    assert not dispatch(state, "4", scripted(["Title", "12345", "123", "10"])).ok
    assert not dispatch(state, "4", scripted(["", "Author", "123", "10"])).ok
    assert not dispatch(state, "4", scripted(["Title", "Author", "", "10"])).ok
    assert lib.all_books() == []


def test_delete_book_command(lib, scripted):
    state = _state(lib)
    dispatch(state, "2", scripted(["Dune", "1"]))

    report = dispatch(state, "5", scripted(["dune"]))
    assert not report.ok
    assert "currently issued" in report.message

    report = dispatch(state, "5", scripted(["kindred"]))
    assert report.ok
    assert lib.get_book("Kindred") is None


def test_student_commands(lib, scripted):
    state = AppState(lib)
    assert dispatch(state, "6", scripted(["Amy", "Lee", "S1"])).ok
    report = dispatch(state, "6", scripted(["Amy", "Lee", "S1"]))
    assert not report.ok

    assert not dispatch(state, "6", scripted(["123", "Lee", "S2"])).ok

    assert dispatch(state, "7", scripted(["1"])).ok
    assert lib.all_students() == []
    assert not dispatch(state, "7", scripted([])).ok


def test_quit_and_invalid_choice(lib, scripted):
    state = AppState(lib)
    assert not dispatch(state, "42", scripted([])).ok
    assert state.running
    assert dispatch(state, "8", scripted([])).ok
    assert not state.running


def test_menu_loop_reprompts_and_quits(lib, scripted):
    state = AppState(lib)
    source = scripted(["9", "x", "4", "Dune", "Herbert", "111", "412", "8"])
    out = Console(file=io.StringIO(), width=100)

    run_menu(state, source, out=out)

    assert not state.running
    assert len(source.warnings) == 2
    assert lib.get_book("Dune") is not None
    assert "Added 'Dune'" in out.file.getvalue()


def test_menu_loop_ends_on_end_of_input(lib, scripted):
    class ClosedInput(scripted):
        def ask(self, prompt):
            if not self.answers:
                raise EOFError
            return super().ask(prompt)

    state = AppState(lib)
    out = Console(file=io.StringIO(), width=100)

    run_menu(state, ClosedInput(["4", "Dune"]), out=out)

    assert not state.running
    assert lib.get_book("Dune") is None
    assert "Goodbye!" in out.file.getvalue()


def test_add_book_with_taken_isbn_is_reported(lib, scripted):
    state = _state(lib)
    report = dispatch(state, "4", scripted(["Other", "Someone", "111", "10"]))
    assert not report.ok
    assert "ISBN 111" in report.message
    assert lib.get_book("Other") is None
