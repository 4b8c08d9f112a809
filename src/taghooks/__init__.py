"""taghooks - named-hook callback registry with filters and actions.

Example::

    from taghooks import get_hooks

    hooks = get_hooks()
    hooks.add_filter("the_title", lambda title: title.strip())
    hooks.apply_filters("the_title", "  Hello  ")   # -> "Hello"
"""

from taghooks.core import ALL_TAG, Dispatcher, Entry, HookRegistry, Hooks, get_hooks

__all__ = ["ALL_TAG", "Dispatcher", "Entry", "HookRegistry", "Hooks", "get_hooks"]
__version__ = "0.1.0"
