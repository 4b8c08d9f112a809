"""Hooks facade and the process-wide default instance.

``Hooks`` bundles a :class:`HookRegistry` and a :class:`Dispatcher` behind
one object. Components that need hooks should accept a ``Hooks`` (or a
registry) as a parameter; ``get_hooks()`` exists for code that wants the
shared default.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from taghooks.core.dispatcher import Dispatcher
from taghooks.core.registry import (
    DEFAULT_ACCEPTED_ARGS,
    DEFAULT_PRIORITY,
    HookRegistry,
    _UNSET,
)

logger = logging.getLogger(__name__)


class Hooks:
    """Registration and trigger API over a single registry.

    Args:
        registry: Registry to use. A fresh one is created when omitted.
        trace: Log filter values before and after every callback.
    """

    def __init__(self, registry: HookRegistry | None = None, *, trace: bool = False) -> None:
        self.registry = registry if registry is not None else HookRegistry()
        self.dispatcher = Dispatcher(self.registry, trace=trace)

    def __copy__(self):
        raise TypeError("Hooks instances cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Hooks instances cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError("Hooks instances cannot be pickled")

    # -- registration ---------------------------------------------------------

    def add_filter(
        self,
        tag: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> bool:
        return self.registry.add_filter(tag, callback, priority, accepted_args)

    def add_action(
        self,
        tag: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> bool:
        return self.registry.add_action(tag, callback, priority, accepted_args)

    def remove_filter(
        self, tag: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> bool:
        return self.registry.remove_filter(tag, callback, priority)

    def remove_action(
        self, tag: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> bool:
        return self.registry.remove_action(tag, callback, priority)

    def remove_all_filters(self, tag: str, priority: int | None = None) -> bool:
        return self.registry.remove_all_filters(tag, priority)

    def remove_all_actions(self, tag: str, priority: int | None = None) -> bool:
        return self.registry.remove_all_actions(tag, priority)

    # -- introspection --------------------------------------------------------

    def has_filter(self, tag: str, callback: Callable[..., Any] = _UNSET) -> bool | int:
        return self.registry.has_filter(tag, callback)

    def has_action(self, tag: str, callback: Callable[..., Any] = _UNSET) -> bool | int:
        return self.registry.has_action(tag, callback)

    def did_action(self, tag: str) -> int:
        return self.registry.did_action(tag)

    def current_filter(self) -> str | None:
        return self.registry.current_filter()

    def doing_filter(self, tag: str | None = None) -> bool:
        return self.registry.doing_filter(tag)

    def doing_action(self, tag: str | None = None) -> bool:
        return self.registry.doing_action(tag)

    def debug(self) -> None:
        self.registry.debug()

    # -- triggers -------------------------------------------------------------

    def apply_filters(self, tag: str, value: Any, *args: Any) -> Any:
        return self.dispatcher.apply_filters(tag, value, *args)

    def apply_filters_ref_array(self, tag: str, args: list[Any]) -> Any:
        return self.dispatcher.apply_filters_ref_array(tag, args)

    def do_action(self, tag: str, *args: Any) -> bool | None:
        return self.dispatcher.do_action(tag, *args)

    def do_action_ref_array(self, tag: str, args: list[Any]) -> bool | None:
        return self.dispatcher.do_action_ref_array(tag, args)


_default_hooks: Hooks | None = None


def get_hooks() -> Hooks:
    """Return the process-wide ``Hooks``, creating it on first use.

    The first call reads :class:`taghooks.config.Config`: ``DEBUG`` turns on
    tracing and ``REGISTRY_PATH`` names a hooks YAML file to register.
    """
    global _default_hooks
    if _default_hooks is None:
        from taghooks.config import Config
        from taghooks.core.loader import load_hook_registry, register_from_registry

        hooks = Hooks(trace=Config.DEBUG)
        if Config.REGISTRY_PATH:
            count = register_from_registry(hooks, load_hook_registry(Config.REGISTRY_PATH))
            logger.info("Registered %d hooks from %s", count, Config.REGISTRY_PATH)
        _default_hooks = hooks
    return _default_hooks
