"""Stable keys for registered callbacks.

A key identifies "the same callback" for deduplication and removal:

- Named:      module-level function or static method   -> ``mod.qualname``
- Qualified:  classmethod bound to its class           -> ``mod.Cls::name``
- Bound:      method bound to an instance              -> ``#<token>:name``
- Anonymous:  lambda, closure, partial, callable object -> ``#<token>:``

Tokens come from an arena that numbers objects the first time they are
seen, so keys never depend on ``id()`` values that can be reused.
"""

from __future__ import annotations

import inspect
import itertools
import weakref
from collections import Counter
from typing import Any, Callable


class IdentityTable:
    """Arena of per-object tokens.

    Objects that support weak references are tracked weakly and forgotten
    once collected. Others are pinned so their ``id()`` cannot be reused
    while a token refers to them. Registered entries hold their owner's
    slot through :meth:`retain`; the slot is dropped when the last hold is
    released, which is what frees pinned objects.
    """

    def __init__(self) -> None:
        self._tokens: dict[int, int] = {}
        self._weak: dict[int, weakref.ref] = {}
        self._pinned: dict[int, Any] = {}
        self._holds: Counter[int] = Counter()
        self._counter = itertools.count(1)

    def __len__(self) -> int:
        return len(self._tokens)

    def lookup(self, obj: Any) -> int | None:
        """Return the token already assigned to ``obj``, if any."""
        oid = id(obj)
        token = self._tokens.get(oid)
        if token is None:
            return None
        if oid in self._pinned:
            target = self._pinned[oid]
        else:
            target = self._weak[oid]()
        if target is not obj:
            # Stale slot left by a collected object with the same id.
            self._forget(oid)
            return None
        return token

    def token_for(self, obj: Any) -> int:
        """Return the token for ``obj``, assigning one on first sight."""
        token = self.lookup(obj)
        if token is not None:
            return token

        oid = id(obj)
        token = next(self._counter)
        try:
            self._weak[oid] = weakref.ref(obj, self._on_collected(oid))
        except TypeError:
            self._pinned[oid] = obj
        self._tokens[oid] = token
        return token

    def retain(self, obj: Any) -> None:
        """Record one more registered entry keyed on ``obj``."""
        if obj is not None and self.lookup(obj) is not None:
            self._holds[id(obj)] += 1

    def release(self, obj: Any) -> None:
        """Drop one hold on ``obj``; forget its slot when none remain."""
        if obj is None or self.lookup(obj) is None:
            return
        oid = id(obj)
        self._holds[oid] -= 1
        if self._holds[oid] <= 0:
            self._forget(oid)

    def _on_collected(self, oid: int) -> Callable[[weakref.ref], None]:
        def _callback(ref: weakref.ref) -> None:
            if self._weak.get(oid) is ref:
                self._forget(oid)

        return _callback

    def _forget(self, oid: int) -> None:
        self._tokens.pop(oid, None)
        self._weak.pop(oid, None)
        self._pinned.pop(oid, None)
        self._holds.pop(oid, None)


def _is_named_function(func: Any) -> bool:
    qualname = getattr(func, "__qualname__", "")
    return (
        (inspect.isfunction(func) or inspect.isbuiltin(func))
        and "<lambda>" not in qualname
        and "<locals>" not in qualname
    )


def _is_bound(callback: Any) -> bool:
    owner = getattr(callback, "__self__", None)
    return inspect.ismethod(callback) or (
        inspect.isbuiltin(callback) and owner is not None and not inspect.ismodule(owner)
    )


def identity_owner(callback: Callable[..., Any] | None) -> Any:
    """The object whose token appears in the key of ``callback``.

    ``None`` for callables keyed by name alone.
    """
    if callback is None or not callable(callback):
        return None
    if _is_bound(callback):
        owner = callback.__self__
        return None if isinstance(owner, type) else owner
    if _is_named_function(callback):
        return None
    return callback


def callable_key(
    callback: Callable[..., Any] | None,
    table: IdentityTable,
    *,
    mint: bool = True,
) -> str | None:
    """Build the key under which ``callback`` is stored.

    With ``mint=False`` no token is assigned to an object that has not been
    seen before and ``None`` is returned instead, so read-only lookups leave
    the identity table untouched. Values that are not callable have no key.
    """
    if callback is None or not callable(callback):
        return None

    if _is_bound(callback):
        owner = callback.__self__
        name = callback.__name__
        if isinstance(owner, type):
            return f"{owner.__module__}.{owner.__qualname__}::{name}"
        return _object_key(owner, name, table, mint)

    if _is_named_function(callback):
        module = getattr(callback, "__module__", None) or "builtins"
        return f"{module}.{callback.__qualname__}"

    return _object_key(callback, "", table, mint)


def _object_key(obj: Any, name: str, table: IdentityTable, mint: bool) -> str | None:
    token = table.token_for(obj) if mint else table.lookup(obj)
    if token is None:
        return None
    return f"#{token}:{name}"
