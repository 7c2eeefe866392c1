from __future__ import annotations

import json as _json
from typing import Any


class json:
    """Typed wrapper around the standard json module."""

    @staticmethod
    def to_string(json_val: Any, indent: int | None = None) -> str:
        """Convert a Python value to a JSON string.

        Tuples are written as lists. Values JSON has no form for (dataclasses,
        sets, ...) are written as their ``str()``, so any state can be shown.

        Args:
            json_val: The value to serialize
            indent: Pretty-print with this many spaces per level

        Returns:
            The JSON string representation
        """
        return _json.dumps(json_val, indent=indent, default=str)
