import pytest

from library_catalog.commands import InputSource
from library_catalog.library import Library


class ScriptedInput(InputSource):
    """Answers prompts from a fixed list; records prompts and warnings."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []
        self.warnings = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


@pytest.fixture
def lib():
    # Fresh catalog per test
    lib = Library(bucket_count=17)
    yield lib
    lib.reset()


@pytest.fixture
def scripted():
    return ScriptedInput


@pytest.fixture
def data_files(tmp_path):
    books = tmp_path / "books.txt"
    books.write_text(
        "Dune,Frank Herbert,111,412\n"
        "Neuromancer,William Gibson,222,271\n"
        "Kindred,Octavia E. Butler,333,264\n",
        encoding="utf-8",
    )
    students = tmp_path / "students.txt"
    students.write_text("Amy,Lee,S1\nBen,Adams,S2\n", encoding="utf-8")
    return str(books), str(students)
