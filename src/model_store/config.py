"""Options accepted by ``create_store``."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from model_store.devtools.Inspector import Inspector
from model_store.store.middleware import Middleware

# camelCase spellings accepted by StoreOptions.from_mapping
_ALIASES = {
    "devToolsEnabled": "dev_tools_enabled",
}


@dataclass(frozen=True)
class StoreOptions:
    """Store configuration.

    Attributes:
        dev_tools_enabled: Attach ``inspector`` to the update pipeline.
            Ignored when no inspector is given.
        inspector: Receives every message and the state it produced
        middleware: Extra dispatch middleware, run after the task middleware
    """

    dev_tools_enabled: bool = False
    inspector: Inspector | None = None
    middleware: tuple[Middleware, ...] = ()

    @property
    def active_inspector(self) -> Inspector | None:
        return self.inspector if self.dev_tools_enabled else None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> StoreOptions:
        """Build options from a plain dict, e.g. ``{"devToolsEnabled": True}``.

        Raises:
            ValueError: On an unrecognized key
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown store option '{key}'")
            kwargs[name] = tuple(value) if name == "middleware" else value
        return cls(**kwargs)
