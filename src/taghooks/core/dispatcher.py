"""Trigger engine for filters and actions.

Two protocols, each with a plain-arguments and an argument-list form:

- filters thread a value through every callback and return the result;
- actions call every callback for its side effects and count the trigger.

Callbacks registered under the reserved ``"all"`` tag run first on every
trigger, receive ``(tag, *args)`` and have their results discarded.

Callback exceptions are not caught here; they reach the trigger's caller.
The invocation stack is still unwound, a fire count already taken is kept.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, MutableSequence, Sequence

from taghooks.core.registry import ALL_TAG, HookRegistry

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (
    str, bytes, bytearray, int, float, complex, bool, type(None),
    list, tuple, dict, set, frozenset,
)


def _is_object_like(value: Any) -> bool:
    return not isinstance(value, _SCALAR_TYPES)


class Dispatcher:
    """Runs the callbacks stored in a :class:`HookRegistry`.

    Args:
        registry: The registry to read entries from and record state in.
        trace: Log the value before and after every filter callback.
    """

    def __init__(self, registry: HookRegistry, *, trace: bool = False) -> None:
        self.registry = registry
        self.trace = trace

    @contextmanager
    def _dispatching(self, tag: str) -> Iterator[None]:
        stack = self.registry.stack
        depth = len(stack)
        stack.push(tag)
        try:
            yield
        finally:
            while len(stack) > depth:
                stack.pop()

    def _call_all_hook(self, tag: str, args: Sequence[Any]) -> None:
        if ALL_TAG not in self.registry.table:
            return
        all_args = (tag, *args)
        for entry in self.registry.entries(ALL_TAG):
            entry.callback(*all_args)

    # -- filters --------------------------------------------------------------

    def apply_filters(self, tag: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every filter registered under ``tag``.

        Each callback receives the current value plus up to
        ``accepted_args - 1`` of ``args`` and returns the new value.
        Without registered filters ``value`` comes back unchanged.
        """
        with self._dispatching(tag):
            self._call_all_hook(tag, (value, *args))
            if tag not in self.registry.table:
                return value

            for entry in self.registry.entries(tag):
                call_args = (value, *args)
                if self.trace:
                    logger.debug("apply_filters %s: before -> %r", tag, value)
                value = entry.invoke(call_args)
                if self.trace:
                    logger.debug("apply_filters %s: after -> %r", tag, value)

        return value

    def apply_filters_ref_array(self, tag: str, args: Sequence[Any]) -> Any:
        """Like :meth:`apply_filters`, with all arguments in one list.

        The value is threaded through ``args[0]``. When ``args`` is a list it
        is updated in place, so the caller sees the final value there too.
        """
        if not isinstance(args, list):
            args = list(args)

        with self._dispatching(tag):
            self._call_all_hook(tag, args)
            if tag not in self.registry.table:
                return args[0] if args else None

            for entry in self.registry.entries(tag):
                if self.trace:
                    logger.debug("apply_filters_ref_array %s: before -> %r", tag, args[0])
                result = entry.invoke(args)
                if args:
                    args[0] = result
                else:
                    args.append(result)
                if self.trace:
                    logger.debug("apply_filters_ref_array %s: after -> %r", tag, args[0])

        return args[0] if args else None

    # -- actions --------------------------------------------------------------

    def do_action(self, tag: str, *args: Any) -> bool | None:
        """Run every action registered under ``tag``.

        The trigger is counted even when nothing is registered. A single
        argument that is a one-element list or tuple holding an object is
        unwrapped, so callbacks receive (and may mutate) that object itself.

        Returns:
            True once callbacks were dispatched, None if ``tag`` has none.
        """
        self.registry.fired.increment(tag)

        if (
            len(args) == 1
            and isinstance(args[0], (list, tuple))
            and len(args[0]) == 1
            and _is_object_like(args[0][0])
        ):
            call_args: tuple[Any, ...] = (args[0][0],)
        else:
            call_args = args

        return self._run_actions(tag, args, call_args)

    def do_action_ref_array(self, tag: str, args: MutableSequence[Any]) -> bool | None:
        """Like :meth:`do_action`, with all arguments in one list."""
        self.registry.fired.increment(tag)
        call_args = tuple(args)
        return self._run_actions(tag, call_args, call_args)

    def _run_actions(
        self, tag: str, raw_args: Sequence[Any], call_args: Sequence[Any]
    ) -> bool | None:
        with self._dispatching(tag):
            self._call_all_hook(tag, raw_args)
            if tag not in self.registry.table:
                return None

            for entry in self.registry.entries(tag):
                entry.invoke(call_args)

        return True
