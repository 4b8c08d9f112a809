"""Hook registry and dispatch engine."""

from taghooks.core.dispatcher import Dispatcher
from taghooks.core.hooks import Hooks, get_hooks
from taghooks.core.registry import ALL_TAG, HookRegistry
from taghooks.core.table import Entry

__all__ = ["ALL_TAG", "Dispatcher", "Entry", "HookRegistry", "Hooks", "get_hooks"]
