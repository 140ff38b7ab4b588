"""Copy-on-write rule table shared by the policy classes.

Readers take the currently published snapshot without locking, so reads
never block each other. Writers serialise on a lock, build a new table and
publish it with a single attribute assignment. Each individual mutation is
atomic; there is no multi-edit transaction.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class RuleTable(Generic[K, V]):
    """Mapping of key -> frozenset of values with atomic single-entry edits."""

    def __init__(self, initial: Mapping[K, Iterable[V]] | None = None) -> None:
        self._lock = threading.Lock()
        self._rules: Mapping[K, frozenset[V]] = MappingProxyType(
            {key: frozenset(values) for key, values in (initial or {}).items()}
        )

    def get(self, key: K) -> frozenset[V]:
        """Values registered for *key*; empty when the key is absent."""
        return self._rules.get(key, frozenset())

    def contains(self, key: K, value: V) -> bool:
        return value in self._rules.get(key, ())

    def snapshot(self) -> Mapping[K, frozenset[V]]:
        """Read-only view of the table as currently published."""
        return self._rules

    def add(self, key: K, value: V) -> None:
        with self._lock:
            rules = dict(self._rules)
            rules[key] = rules.get(key, frozenset()) | {value}
            self._rules = MappingProxyType(rules)

    def discard(self, key: K, value: V) -> None:
        with self._lock:
            current = self._rules.get(key)
            if current is None or value not in current:
                return
            rules = dict(self._rules)
            rules[key] = current - {value}
            self._rules = MappingProxyType(rules)

    def replace(self, key: K, values: Iterable[V]) -> None:
        with self._lock:
            rules = dict(self._rules)
            rules[key] = frozenset(values)
            self._rules = MappingProxyType(rules)

    def remove(self, key: K) -> None:
        with self._lock:
            if key not in self._rules:
                return
            rules = dict(self._rules)
            del rules[key]
            self._rules = MappingProxyType(rules)
