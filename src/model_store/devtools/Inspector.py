"""Inspection hooks attached to a store when dev tools are enabled.

An inspector is passed in explicitly through ``StoreOptions``; nothing is
looked up from the environment.

Example:
    inspector = RecordingInspector()
    store = create_store(model, StoreOptions(dev_tools_enabled=True, inspector=inspector))
    store.actions.counter.increment(1)
    store.actions.counter.increment(1)
    inspector.jump_to(0)  # state as it was after the first increment
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from model_store.store.Action import Message

if TYPE_CHECKING:
    from model_store.store.Store import Store


class Inspector(Protocol):
    def connect(self, store: Store[Any]) -> None:
        """Called once, when the store is created."""
        ...

    def send(self, message: Message, state: Any) -> None:
        """Called after every message, with the state it produced."""
        ...


@dataclass(frozen=True)
class HistoryEntry:
    message: Message | None
    state: Any


@dataclass
class RecordingInspector:
    """Keeps every (message, state) pair and can replay to any of them.

    Entry 0 is the initial state (``message`` is None).
    """

    history: list[HistoryEntry] = field(default_factory=list)
    _store: Store[Any] | None = field(default=None, repr=False)

    def connect(self, store: Store[Any]) -> None:
        self._store = store
        self.history = [HistoryEntry(None, store.get_state())]

    def send(self, message: Message, state: Any) -> None:
        self.history.append(HistoryEntry(message, state))

    def jump_to(self, index: int) -> None:
        """Put the store back into the state recorded at ``index``.

        Raises:
            RuntimeError: If the inspector was never connected to a store
            IndexError: If there is no such entry
        """
        if self._store is None:
            raise RuntimeError("RecordingInspector is not connected to a store")
        self._store.replace_state(self.history[index].state)

    @property
    def message_types(self) -> list[str]:
        return [entry.message.type for entry in self.history if entry.message]
