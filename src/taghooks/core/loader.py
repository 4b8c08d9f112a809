"""Hook registry file loading.

Two responsibilities:
  - load_hook_registry:     Load and validate a hooks YAML file.
  - register_from_registry: Resolve callbacks and add them to a Hooks.

File format: a YAML list of mappings. Required fields per entry are
``tag`` and ``callback`` (``"package.module:attr.path"``). Optional:
``kind`` (``filter`` or ``action``), ``priority``, ``accepted_args``,
``enabled``.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml

from taghooks.core.registry import DEFAULT_ACCEPTED_ARGS, DEFAULT_PRIORITY

if TYPE_CHECKING:
    from taghooks.core.hooks import Hooks

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = frozenset({"tag", "callback"})
_KINDS = frozenset({"filter", "action"})


def load_hook_registry(path: str | Path) -> list[dict[str, Any]]:
    """Load the hook registry file.

    - File missing     -> empty list (no hooks, not an error).
    - Root not a list  -> empty list + warning.
    - Entry not a dict -> skip + warning.
    - Required fields missing -> skip + warning.
    - Unknown ``kind`` -> skip + warning.
    - Non-integer ``priority`` / ``accepted_args`` -> skip + warning.
    - ``enabled`` is False -> skip (disabled hook).
    """
    path = Path(path)
    if not path.exists():
        return []

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("%s root is not a list, returning empty registry", path.name)
        return []

    valid: list[dict[str, Any]] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("%s entry %d is not a dict, skipping", path.name, i)
            continue

        missing = _REQUIRED_FIELDS - set(entry.keys())
        if missing:
            logger.warning(
                "%s entry %d missing required fields %s, skipping: %s",
                path.name,
                i,
                sorted(missing),
                entry,
            )
            continue

        kind = entry.get("kind", "filter")
        if kind not in _KINDS:
            logger.warning(
                "%s entry %d has unknown kind %r, skipping", path.name, i, kind
            )
            continue

        bad_ints = [
            name
            for name in ("priority", "accepted_args")
            if name in entry
            and (isinstance(entry[name], bool) or not isinstance(entry[name], int))
        ]
        if bad_ints:
            logger.warning(
                "%s entry %d has non-integer %s, skipping", path.name, i, bad_ints
            )
            continue

        if "enabled" in entry and not entry["enabled"]:
            logger.info("%s entry %d disabled, skipping: %s", path.name, i, entry["tag"])
            continue

        valid.append(entry)

    return valid


def resolve_callback(path: str) -> Callable[..., Any]:
    """Import ``"package.module:attr.path"`` and return the callable.

    Raises:
        ValueError: If ``path`` is not in ``module:attr`` form.
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute path does not exist.
        TypeError: If the resolved object is not callable.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Callback path must look like 'module:attr', got {path!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)

    if not callable(obj):
        raise TypeError(f"Resolved hook callback is not callable: {path}")
    return obj


def register_from_registry(hooks: Hooks, entries: list[dict[str, Any]]) -> int:
    """Add every entry to ``hooks``. Returns the number registered."""
    for entry in entries:
        callback = resolve_callback(entry["callback"])
        add = hooks.add_action if entry.get("kind") == "action" else hooks.add_filter
        add(
            entry["tag"],
            callback,
            entry.get("priority", DEFAULT_PRIORITY),
            entry.get("accepted_args", DEFAULT_ACCEPTED_ARGS),
        )
    return len(entries)
