"""Read-only views of a registry for humans.

Nothing here sorts tags in place or touches the invocation stack.
"""

from __future__ import annotations

from typing import Any

from taghooks.core.registry import HookRegistry


def _describe(callback: Any) -> str:
    name = getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None)
    if name:
        module = getattr(callback, "__module__", None)
        return f"{module}.{name}" if module else name
    return repr(callback)


def dump_registry(registry: HookRegistry) -> dict[str, dict[int, list[dict[str, Any]]]]:
    """Snapshot of ``tag -> priority -> entries``, priorities ascending.

    Example::

        {"the_title": {10: [{"key": "app.titles.strip_tags",
                             "callback": "app.titles.strip_tags",
                             "accepted_args": 1}]}}
    """
    snapshot: dict[str, dict[int, list[dict[str, Any]]]] = {}
    for tag in registry.table.tags():
        levels: dict[int, list[dict[str, Any]]] = {}
        for priority, key, entry in registry.table.items(tag):
            levels.setdefault(priority, []).append(
                {
                    "key": key,
                    "callback": _describe(entry.callback),
                    "accepted_args": entry.accepted_args,
                }
            )
        snapshot[tag] = dict(sorted(levels.items()))
    return snapshot


def format_registry(registry: HookRegistry) -> str:
    """Render :func:`dump_registry` as indented text."""
    snapshot = dump_registry(registry)
    if not snapshot:
        return "(no hooks registered)"

    lines: list[str] = []
    for tag, levels in snapshot.items():
        fired = registry.did_action(tag)
        lines.append(f"{tag} (fired {fired}x)" if fired else tag)
        for priority, entries in levels.items():
            for item in entries:
                lines.append(
                    f"  [{priority}] {item['callback']} "
                    f"(args={item['accepted_args']}, key={item['key']})"
                )
    return "\n".join(lines)
