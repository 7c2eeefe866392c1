"""Fold a handler tree into the single update function the store calls."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from model_store.compiler.handlers import HandlerTree
from model_store.compiler.mutators import CompiledMutator
from model_store.util.paths import KeyPath, assoc_in, get_in

type UpdateFn = Callable[[Any, Any], Any]


class NamespaceReducer:
    """Update function of a namespace that declares mutators directly.

    For each message:
    1. a direct mutator whose action name matches wins outright;
    2. otherwise child namespaces are tried in declaration order, and the
       first one whose slice comes back as a different object is written into
       the result; later children are not consulted;
    3. otherwise the state is returned as is.
    """

    def __init__(
        self,
        path: KeyPath,
        mutators: Mapping[str, CompiledMutator],
        children: list[tuple[str, UpdateFn]],
        default: Any,
    ) -> None:
        self.path = path
        self.mutators = mutators
        self.children = children
        self.default = default

    def __call__(self, state: Any, message: Any) -> Any:
        if state is None:
            state = self.default

        mutator = self.mutators.get(getattr(message, "type", None))
        if mutator is not None:
            return mutator(state, message.payload)

        for key, child in self.children:
            previous = state[key]
            updated = child(previous, message)
            if updated is not previous:
                return assoc_in(state, (key,), updated)
        return state


def combine_independent(reducers: dict[str, UpdateFn], default: Any) -> UpdateFn:
    """Update function of a namespace with no direct mutators.

    Every child reducer sees every message; each owns its own key. Keys with
    no reducer (plain data) are carried over untouched.
    """

    def update(state: Any, message: Any) -> Any:
        if state is None:
            state = default
        changed: dict[str, Any] = {}
        for key, reducer in reducers.items():
            previous = state[key]
            updated = reducer(previous, message)
            if updated is not previous:
                changed[key] = updated
        if not changed:
            return state
        return {**state, **changed}

    return update


def synthesize(tree: HandlerTree, initial_state: Any, path: KeyPath = ()) -> UpdateFn:
    """Build the update function for ``tree`` and everything below it.

    Only child namespaces containing mutators get an update function; slices
    owned by effects or plain data never change through dispatch.
    """
    children = [
        (key, synthesize(child, initial_state, (*path, key)))
        for key, child in tree.children.items()
        if child.has_mutators
    ]
    default = get_in(path, initial_state)
    if tree.mutators:
        return NamespaceReducer(path, tree.mutators, children, default)
    return combine_independent(dict(children), default)
