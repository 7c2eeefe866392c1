from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from model_store.compiler.refs import StoreRefs, accepts_helpers
from model_store.util.paths import KeyPath, action_name


@dataclass(frozen=True)
class EffectHelpers:
    get_state: Callable[[], Any]


class CompiledEffect:
    """A user effect ``fn(dispatch, payload, helpers)`` bound to the store.

    Calling it runs ``fn`` right away and returns whatever ``fn`` returns
    (normally a coroutine). Effects never touch state themselves; they
    dispatch mutator messages when they have something to commit.
    """

    is_effect = True

    def __init__(
        self, fn: Callable[..., Any], path: KeyPath, key: str, refs: StoreRefs
    ) -> None:
        self.fn = fn
        self.path = path
        self.key = key
        self.action_name = action_name(path, key)
        self._refs = refs
        self._pass_helpers = accepts_helpers(fn)

    def __call__(self, payload: Any = None) -> Any:
        if self._pass_helpers:
            return self.fn(
                self._refs.dispatch, payload, EffectHelpers(self._refs.get_state)
            )
        return self.fn(self._refs.dispatch, payload)

    def __repr__(self) -> str:
        return f"CompiledEffect({self.action_name!r})"


def compile_effect(
    fn: Callable[..., Any], path: KeyPath, key: str, refs: StoreRefs
) -> CompiledEffect:
    return CompiledEffect(fn, path, key, refs)
