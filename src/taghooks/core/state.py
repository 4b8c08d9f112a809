"""Bookkeeping that lives next to the priority table.

- SortCache: which tags are sorted since their last mutation.
- InvocationStack: tags currently being dispatched, innermost last.
- FireCounter: how many times each action has been triggered.
"""

from __future__ import annotations

from collections import Counter


class SortCache:
    def __init__(self) -> None:
        self._sorted: set[str] = set()

    def is_sorted(self, tag: str) -> bool:
        return tag in self._sorted

    def mark_sorted(self, tag: str) -> None:
        self._sorted.add(tag)

    def invalidate(self, tag: str) -> None:
        self._sorted.discard(tag)


class InvocationStack:
    def __init__(self) -> None:
        self._tags: list[str] = []

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def push(self, tag: str) -> None:
        self._tags.append(tag)

    def pop(self) -> str:
        return self._tags.pop()

    def current(self) -> str | None:
        return self._tags[-1] if self._tags else None

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._tags)


class FireCounter:
    """Per-tag trigger counts. Never decremented or reset."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def increment(self, tag: str) -> int:
        self._counts[tag] += 1
        return self._counts[tag]

    def count(self, tag: str) -> int:
        return self._counts.get(tag, 0)
