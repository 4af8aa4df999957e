import pytest

from library_catalog.config import Settings


def test_defaults():
    s = Settings(book_file="b.txt", student_file="s.txt", delimiter=",", load_error_policy="skip", bucket_count=17)
    assert s.bucket_count == 17
    assert s.load_error_policy == "skip"


@pytest.mark.parametrize("kwargs", [
    {"load_error_policy": "explode"},
    {"bucket_count": 0},
    {"delimiter": "::"},
])
def test_invalid_settings(kwargs):
    base = {"load_error_policy": "skip", "bucket_count": 17, "delimiter": ","}
    base.update(kwargs)
    with pytest.raises(ValueError):
        Settings(**base)
