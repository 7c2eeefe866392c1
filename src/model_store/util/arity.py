from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any


def positional_arity(fn: Callable[..., Any]) -> int | None:
    """Number of positional parameters ``fn`` takes; None if unbounded.

    Functions without an introspectable signature (some builtins) count as
    unbounded.
    """
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return None
    count = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count
