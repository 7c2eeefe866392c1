"""Path addressing over nested state, action and model trees.

A path is a tuple of keys from the root. Reads go through glom so the same
path resolves against plain dicts (state) and attribute-style objects (the
action tree hung off ``Dispatch``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from glom import Path, glom

type KeyPath = tuple[str, ...]


def get_in(path: Sequence[str], target: Any) -> Any:
    """Resolve ``path`` against ``target``.

    Args:
        path: Keys from the root; empty means the target itself
        target: A nested mapping or attribute tree

    Returns:
        The value at ``path``

    Raises:
        glom.PathAccessError: If a key along the path does not exist
    """
    if not path:
        return target
    return glom(target, Path(*path))


def assoc_in(target: dict[str, Any], path: Sequence[str], value: Any) -> Any:
    """Return a copy of ``target`` with ``value`` written at ``path``.

    Only the dicts along the path are copied; every sibling keeps its identity.
    """
    if not path:
        return value
    head, *rest = path
    updated = dict(target)
    updated[head] = assoc_in(target[head], rest, value) if rest else value
    return updated


def action_name(path: Sequence[str], key: str) -> str:
    """Dot-joined name of the handler declared as ``key`` under ``path``."""
    return ".".join((*path, key))
