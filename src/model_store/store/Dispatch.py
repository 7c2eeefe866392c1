"""The dispatch entry point and the action namespaces hung off it."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any


class ActionNamespace:
    """A read-only group of bound actions.

    Members are reachable both as attributes and as items, so
    ``actions.todos.add`` and ``actions["todos"]["add"]`` are the same callable.
    """

    _members: dict[str, Any]

    def __init__(self, members: dict[str, Any] | None = None) -> None:
        object.__setattr__(self, "_members", dict(members or {}))

    def _attach(self, name: str, member: Any) -> None:
        self._members[name] = member

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails.
        members = object.__getattribute__(self, "_members")
        try:
            return members[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no action or namespace '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __getitem__(self, name: str) -> Any:
        return self._members[name]

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __dir__(self) -> list[str]:
        return [*super().__dir__(), *self._members]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._members)})"


class Dispatch(ActionNamespace):
    """Callable entry point: ``dispatch(message_or_task)``.

    After store assembly the root of the action tree is attached here, so
    ``store.dispatch.counter.increment(5)`` dispatches a message.
    """

    _dispatch: Callable[[Any], Any]

    def __init__(self, dispatch: Callable[[Any], Any]) -> None:
        super().__init__()
        object.__setattr__(self, "_dispatch", dispatch)

    def __call__(self, value: Any) -> Any:
        return self._dispatch(value)
