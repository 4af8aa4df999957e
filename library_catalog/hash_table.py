"""Separate-chaining hash table keyed by strings.

Each bucket owns a plain list of nodes kept in insertion order, so colliding
keys stay visible when the table is dumped with ``buckets()``.
"""

from __future__ import annotations

import logging
from typing import Generic, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")

DEFAULT_BUCKET_COUNT = 17


class _Node(Generic[V]):
    __slots__ = ("key", "value")

    def __init__(self, key: str, value: V) -> None:
        self.key = key
        self.value = value

    def __repr__(self) -> str:
        return f"({self.key!r}: {self.value!r})"


class HashTable(Generic[V]):
    """Fixed-size table using an ASCII-sum modular hash and tail-appended chains."""

    def __init__(self, bucket_count: int = DEFAULT_BUCKET_COUNT) -> None:
        if bucket_count < 1:
            raise ValueError("bucket_count must be at least 1.")
        self._buckets: List[List[_Node[V]]] = [[] for _ in range(bucket_count)]
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def bucket_index(self, key: str) -> int:
        # Anagrams collide on purpose; do not swap in hash().
        return sum(ord(ch) for ch in key) % len(self._buckets)

    def _chain(self, key: str) -> List[_Node[V]]:
        return self._buckets[self.bucket_index(key)]

    def _find(self, key: str) -> Optional[_Node[V]]:
        for node in self._chain(key):
            if node.key == key:
                return node
        return None

    # ------------------------- Mutations ------------------------- #
    def insert(self, key: str, value: V) -> bool:
        """Append a new pair at the tail of its chain. False if the key exists."""
        if self.exists(key):
            logger.debug("insert rejected, key %r already present", key)
            return False
        self._chain(key).append(_Node(key, value))
        self._size += 1
        return True

    def delete(self, key: str) -> bool:
        if not self.exists(key):
            logger.debug("delete rejected, key %r not present", key)
            return False
        chain = self._chain(key)
        for position, node in enumerate(chain):
            if node.key == key:
                del chain[position]
                break
        self._size -= 1
        return True

    def update(self, key: str, value: V) -> bool:
        node = self._find(key)
        if node is None:
            logger.debug("update rejected, key %r not present", key)
            return False
        node.value = value
        return True

    def clear(self) -> None:
        for chain in self._buckets:
            chain.clear()
        self._size = 0

    # ------------------------- Queries ------------------------- #
    def lookup(self, key: str, default: Optional[V] = None) -> Optional[V]:
        node = self._find(key)
        return default if node is None else node.value

    def exists(self, key: str) -> bool:
        return self._find(key) is not None

    def all_values(self) -> List[V]:
        """Every stored value, bucket by bucket, chain order within a bucket."""
        return [node.value for chain in self._buckets for node in chain]

    def size(self) -> int:
        return self._size

    def buckets(self) -> List[List[Tuple[str, V]]]:
        """Snapshot of every chain as ``(key, value)`` tuples, empty buckets included."""
        return [[(node.key, node.value) for node in chain] for chain in self._buckets]
