from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

@dataclass(frozen=True)
class Message:
    """A dispatched request to run the mutator registered as ``type``.

    type: The action name, e.g. ``"counter.increment"``
    payload: Passed to the mutator as its second argument
    """

    type: str
    payload: Any = None

    @classmethod
    def coerce(cls, value: Any) -> Message:
        """Accept a Message or a ``{"type": ..., "payload": ...}`` mapping.

        Raises:
            TypeError: For anything else
        """
        if isinstance(value, Message):
            return value
        if isinstance(value, Mapping) and "type" in value:
            return cls(value["type"], value.get("payload"))
        raise TypeError(
            f"Only messages, mappings with a 'type' key or callables can be "
            f"dispatched, got {type(value).__name__}"
        )


class Outcome(enum.Enum):
    """What a mutator wants done with the edit it just made.

    Returning nothing (or any other value) is the same as COMMIT.
    """

    COMMIT = "commit"
    """Keep the edit as the new state."""

    DEFER = "defer"
    """Compute the edit, then roll it back. A later dispatch commits for real."""
