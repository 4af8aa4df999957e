from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def _identity(item: Any) -> Any:
    return item


def merge_sort(items: Sequence[T], key: Optional[Callable[[T], Any]] = None, ascending: bool = True) -> List[T]:
    """Return a new list holding ``items`` in merge-sorted order.

    ``key`` picks the value each record is compared by (identity by default).
    The input sequence is never modified.
    """
    key = key or _identity
    if len(items) <= 1:
        return list(items)

    mid = len(items) // 2
    first = merge_sort(items[:mid], key, ascending)
    second = merge_sort(items[mid:], key, ascending)
    return _merge(first, second, key, ascending)


def _merge(first: List[T], second: List[T], key: Callable[[T], Any], ascending: bool) -> List[T]:
    merged: List[T] = []
    i = j = 0
    while i < len(first) and j < len(second):
        a, b = key(first[i]), key(second[j])
        # Equal keys fall through to the second list in both directions.
        take_first = a < b if ascending else a > b
        if take_first:
            merged.append(first[i])
            i += 1
        else:
            merged.append(second[j])
            j += 1
    merged.extend(first[i:])
    merged.extend(second[j:])
    return merged
