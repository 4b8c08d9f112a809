"""Per-tag priority table.

Layout: ``tag -> priority -> {key: Entry}``. Entries within a priority level
keep insertion order; a level that becomes empty is dropped immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence


@dataclass(frozen=True)
class Entry:
    """One registered callback.

    Attributes:
        callback: The callable, or ``None`` for a tombstone that is never run.
        accepted_args: How many positional arguments are forwarded.
    """

    callback: Callable[..., Any] | None
    accepted_args: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.accepted_args, bool) or not isinstance(self.accepted_args, int):
            raise TypeError(
                f"accepted_args must be an int, got {type(self.accepted_args).__name__}"
            )
        if self.accepted_args < 0:
            raise ValueError(f"accepted_args must be >= 0, got {self.accepted_args}")

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the callback with at most ``accepted_args`` leading arguments."""
        if self.callback is None:
            return None
        return self.callback(*args[: self.accepted_args])


class PriorityTable:
    """Storage for registered entries, grouped by tag and priority."""

    def __init__(self) -> None:
        self._tags: dict[str, dict[int, dict[str, Entry]]] = {}

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __len__(self) -> int:
        """Total number of stored entries across all tags."""
        return sum(
            len(level) for levels in self._tags.values() for level in levels.values()
        )

    def tags(self) -> list[str]:
        return list(self._tags)

    def put(self, tag: str, priority: int, key: str, entry: Entry) -> None:
        """Insert or replace the entry stored under ``key``.

        Replacing keeps the entry's original position within its level.
        """
        self._tags.setdefault(tag, {}).setdefault(priority, {})[key] = entry

    def get(self, tag: str, priority: int, key: str) -> Entry | None:
        return self._tags.get(tag, {}).get(priority, {}).get(key)

    def discard(self, tag: str, priority: int, key: str) -> bool:
        """Remove one entry. Returns whether something was removed."""
        levels = self._tags.get(tag)
        if levels is None:
            return False
        level = levels.get(priority)
        if level is None or key not in level:
            return False

        del level[key]
        if not level:
            del levels[priority]
        if not levels:
            del self._tags[tag]
        return True

    def clear(self, tag: str, priority: int | None = None) -> list[Entry]:
        """Drop a whole tag, or only one of its priority levels.

        Returns the entries that were removed.
        """
        levels = self._tags.get(tag)
        if levels is None:
            return []
        if priority is None:
            del self._tags[tag]
            return [entry for level in levels.values() for entry in level.values()]
        removed = list(levels.pop(priority, {}).values())
        if not levels:
            del self._tags[tag]
        return removed

    def priorities(self, tag: str) -> list[int]:
        """Priority levels of ``tag`` in their current storage order."""
        return list(self._tags.get(tag, {}))

    def priorities_of(self, tag: str, key: str) -> list[int]:
        return [p for p, level in self._tags.get(tag, {}).items() if key in level]

    def keys_at(self, tag: str, priority: int) -> list[str]:
        """Snapshot of the keys at one level, in insertion order."""
        return list(self._tags.get(tag, {}).get(priority, {}))

    def next_priority(self, tag: str, after: int | None) -> int | None:
        """First stored priority greater than ``after``.

        This is the smallest such priority once the tag has been sorted.
        """
        for priority in self._tags.get(tag, {}):
            if after is None or priority > after:
                return priority
        return None

    def sort(self, tag: str) -> None:
        """Reorder the levels of ``tag`` by ascending priority."""
        levels = self._tags.get(tag)
        if levels is not None:
            self._tags[tag] = dict(sorted(levels.items()))

    def items(self, tag: str) -> Iterator[tuple[int, str, Entry]]:
        for priority, level in self._tags.get(tag, {}).items():
            for key, entry in level.items():
                yield priority, key, entry
