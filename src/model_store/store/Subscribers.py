"""Listener registry for Store; listeners learn which state paths changed."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from deepdiff import Delta, parse_path

type Affects = Callable[[str], bool]
type SubscriberCallback = Callable[[Affects], None]


def _changed_paths(delta: Delta) -> frozenset[str]:
    """Dotted state paths touched by ``delta``, e.g. ``"todos.items"``."""
    paths: set[str] = set()
    for rows in (delta.diff or {}).values():
        if isinstance(rows, dict):
            paths.update(".".join(map(str, parse_path(row))) for row in rows)
    return frozenset(paths)


def _on_same_branch(changed: str, path: str) -> bool:
    return (
        changed == path
        or changed.startswith(f"{path}.")
        or path.startswith(f"{changed}.")
    )


def affects_for(delta: Delta) -> Affects:
    """Build the ``affects(path)`` predicate handed to listeners.

    ``affects("todos")`` is true when ``todos`` itself, something inside it, or
    a slice containing it changed. ``affects("")`` is true for any change.
    """
    changed = _changed_paths(delta)

    def affects(path: str) -> bool:
        if not changed:
            return False
        return not path or any(_on_same_branch(c, path) for c in changed)

    return affects


class Subscribers:
    """Ordered listeners, called once per dispatch that changed state."""

    _callbacks: list[SubscriberCallback]

    def __init__(self) -> None:
        self._callbacks = []

    def append(self, callback: SubscriberCallback) -> None:
        self._callbacks.append(callback)

    def remove(self, callback: SubscriberCallback) -> None:
        """Drop ``callback``; unknown callbacks are ignored."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def notify(self, delta: Delta) -> None:
        if not delta.diff:
            return
        affects = affects_for(delta)
        # listeners may unsubscribe mid-loop
        for callback in list(self._callbacks):
            callback(affects)

    def __iter__(self) -> Iterator[SubscriberCallback]:
        return iter(self._callbacks)

    def __len__(self) -> int:
        return len(self._callbacks)
