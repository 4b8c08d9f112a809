"""Hook registry: registration, removal and introspection.

Filters and actions share one registry. The difference between them lives
in the dispatcher (value threading vs. side effects) and in the fire
counter, which only action triggers bump.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from taghooks.core.identity import IdentityTable, callable_key, identity_owner
from taghooks.core.state import FireCounter, InvocationStack, SortCache
from taghooks.core.table import Entry, PriorityTable

logger = logging.getLogger(__name__)

ALL_TAG = "all"
DEFAULT_PRIORITY = 10
DEFAULT_ACCEPTED_ARGS = 1

_UNSET: Any = object()


class HookRegistry:
    """In-memory registry of tagged callbacks.

    Usage::

        registry = HookRegistry()
        registry.add_filter("the_title", str.strip)
        registry.has_filter("the_title", str.strip)   # -> 10
        registry.remove_filter("the_title", str.strip)

    ``has_filter`` may return ``0`` for a callback registered at priority 0,
    so compare its result with ``is False``.
    """

    def __init__(self) -> None:
        self.table = PriorityTable()
        self.sort_cache = SortCache()
        self.stack = InvocationStack()
        self.fired = FireCounter()
        self.identities = IdentityTable()

    # -- registration ---------------------------------------------------------

    def add_filter(
        self,
        tag: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> bool:
        """Register ``callback`` under ``tag``.

        Lower priorities run first; equal priorities run in registration
        order. Registering the same callback at the same tag and priority
        again replaces the stored entry instead of adding a second one.

        A value that is not callable is rejected here rather than stored
        and left to fail when the hook fires.

        Raises:
            TypeError: If ``callback`` is not callable.
            ValueError: If ``accepted_args`` is negative.
        """
        entry = Entry(callback, accepted_args)
        key = callable_key(callback, self.identities)
        if key is None:
            raise TypeError(f"Hook callback must be callable, got {callback!r}")

        if self.table.get(tag, priority, key) is None:
            self.identities.retain(identity_owner(callback))
        self.table.put(tag, priority, key, entry)
        self.sort_cache.invalidate(tag)
        logger.debug(
            "Hook added: tag=%s key=%s priority=%d accepted_args=%d",
            tag, key, priority, accepted_args,
        )
        return True

    add_action = add_filter

    def remove_filter(
        self,
        tag: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> bool:
        """Remove ``callback`` from one priority level of ``tag``.

        Returns whether an entry was actually removed.
        """
        key = callable_key(callback, self.identities, mint=False)
        entry = None if key is None else self.table.get(tag, priority, key)
        removed = entry is not None and self.table.discard(tag, priority, key)
        self.sort_cache.invalidate(tag)
        if removed:
            self.identities.release(identity_owner(entry.callback))
            logger.debug("Hook removed: tag=%s key=%s priority=%d", tag, key, priority)
        return removed

    remove_action = remove_filter

    def remove_all_filters(self, tag: str, priority: int | None = None) -> bool:
        """Drop every entry of ``tag``, or only those at ``priority``."""
        self.sort_cache.invalidate(tag)
        for entry in self.table.clear(tag, priority):
            self.identities.release(identity_owner(entry.callback))
        logger.debug("Hooks cleared: tag=%s priority=%s", tag, priority)
        return True

    remove_all_actions = remove_all_filters

    # -- introspection --------------------------------------------------------

    def has_filter(self, tag: str, callback: Callable[..., Any] = _UNSET) -> bool | int:
        """Check what is registered under ``tag``.

        Without ``callback``: whether the tag has any entry at all.
        With ``callback``: the lowest priority it is registered at, or
        ``False``. Looking a callback up never assigns it an identity.
        """
        if callback is _UNSET:
            return tag in self.table
        if tag not in self.table:
            return False

        key = callable_key(callback, self.identities, mint=False)
        if key is None:
            return False
        priorities = self.table.priorities_of(tag, key)
        return min(priorities) if priorities else False

    has_action = has_filter

    def did_action(self, tag: str) -> int:
        """Number of times the action ``tag`` has been triggered."""
        return self.fired.count(tag)

    def current_filter(self) -> str | None:
        """The innermost tag being dispatched right now, if any."""
        return self.stack.current()

    def doing_filter(self, tag: str | None = None) -> bool:
        """Whether ``tag`` (or, without a tag, any hook) is being dispatched."""
        if tag is None:
            return len(self.stack) > 0
        return tag in self.stack

    doing_action = doing_filter

    def entries(self, tag: str) -> Iterator[Entry]:
        """Live entries of ``tag`` in dispatch order.

        Levels are visited through a cursor and each level's keys are
        snapshotted, so a callback may add or remove entries of the same
        tag while it is being walked. Removed entries that were not reached
        yet are skipped. Entries added to the level being walked are not
        visited in this pass; entries added at a later priority are.
        """
        after: int | None = None
        while True:
            self.ensure_sorted(tag)
            priority = self.table.next_priority(tag, after)
            if priority is None:
                return
            after = priority
            for key in self.table.keys_at(tag, priority):
                entry = self.table.get(tag, priority, key)
                if entry is None or entry.callback is None:
                    continue
                yield entry

    def ensure_sorted(self, tag: str) -> None:
        if self.sort_cache.is_sorted(tag):
            return
        self.table.sort(tag)
        self.sort_cache.mark_sorted(tag)

    def debug(self) -> None:
        """Log the whole registry at DEBUG level."""
        from taghooks.core.debug import format_registry

        logger.debug("Hook registry:\n%s", format_registry(self))
