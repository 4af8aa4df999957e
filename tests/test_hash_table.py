import random

import pytest

from library_catalog.hash_table import HashTable


def test_insert_lookup_and_duplicate():
    table = HashTable()
    assert table.insert("dune", 1) is True
    assert table.insert("dune", 2) is False
    assert table.lookup("dune") == 1
    assert table.size() == 1
    assert len(table) == 1


def test_lookup_missing_returns_default():
    table = HashTable()
    assert table.lookup("nothing") is None
    assert table.lookup("nothing", default="x") == "x"
    assert "nothing" not in table


def test_anagrams_share_a_bucket_and_stay_retrievable():
    table = HashTable(17)
    assert table.bucket_index("cat") == 312 % 17
    assert table.bucket_index("act") == table.bucket_index("cat")

    table.insert("cat", "first")
    table.insert("act", "second")
    assert table.lookup("cat") == "first"
    assert table.lookup("act") == "second"
    chain = table.buckets()[table.bucket_index("cat")]
    assert chain == [("cat", "first"), ("act", "second")]


def test_delete_and_update():
    table = HashTable()
    table.insert("a", 1)
    assert table.update("a", 10) is True
    assert table.lookup("a") == 10
    assert table.update("missing", 5) is False
    assert table.delete("missing") is False
    assert table.delete("a") is True
    assert table.exists("a") is False
    assert table.size() == 0


def test_delete_from_middle_of_chain_keeps_order():
    table = HashTable(1)
    for key in ("x", "y", "z"):
        table.insert(key, key.upper())
    table.delete("y")
    assert table.buckets() == [[("x", "X"), ("z", "Z")]]
    assert table.all_values() == ["X", "Z"]


def test_clear():
    table = HashTable()
    table.insert("a", 1)
    table.insert("b", 2)
    table.clear()
    assert table.size() == 0
    assert table.all_values() == []
    assert table.insert("a", 3) is True


def test_size_matches_existing_keys_under_random_operations():
    rng = random.Random(434)
    keys = ["cat", "act", "tac", "dog", "god", "book", "library", "dune", "zed", "a"]
    table = HashTable(17)
    for _ in range(500):
        key = rng.choice(keys)
        if rng.random() < 0.6:
            table.insert(key, key)
        else:
            table.delete(key)
        live = [k for k in keys if table.exists(k)]
        assert table.size() == len(live)
        assert sum(len(chain) for chain in table.buckets()) == table.size()


def test_rejects_empty_bucket_count():
    with pytest.raises(ValueError):
        HashTable(0)
