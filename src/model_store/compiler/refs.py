from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from model_store.store.Dispatch import Dispatch
from model_store.util.arity import positional_arity


@dataclass
class StoreRefs:
    """Late-bound handles to the store the compiled handlers will run in.

    Handlers are compiled before the store exists; ``create_store`` fills
    these in once it does.
    """

    dispatch: Dispatch | None = None
    get_state: Callable[[], Any] | None = None


def accepts_helpers(fn: Callable[..., Any]) -> bool:
    """Whether ``fn`` takes a third positional argument for its helpers."""
    arity = positional_arity(fn)
    return arity is None or arity >= 3
