"""Build the callable action tree that mirrors a model's handlers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from model_store.compiler.effects import CompiledEffect
from model_store.compiler.handlers import HandlerTree
from model_store.compiler.mutators import CompiledMutator
from model_store.compiler.refs import StoreRefs
from model_store.store.Action import Message
from model_store.store.Dispatch import ActionNamespace

type BoundAction = Callable[..., Any]


def build_action_tree(
    tree: HandlerTree, refs: StoreRefs, into: ActionNamespace | None = None
) -> ActionNamespace:
    """Mirror ``tree`` as nested ActionNamespaces of bound actions.

    Args:
        tree: Compiled handlers, already pruned of action-less namespaces
        refs: Resolved at call time, so the tree can be built before the store
        into: Attach the root members here instead of a fresh namespace

    Returns:
        The root namespace (``into`` when given)
    """
    root = into if into is not None else ActionNamespace()
    for key, member in tree.members.items():
        if isinstance(member, HandlerTree):
            child = build_action_tree(member, refs)
            if len(child):
                root._attach(key, child)
        elif isinstance(member, CompiledEffect):
            root._attach(key, _bind_effect(member, refs))
        else:
            root._attach(key, _bind_mutator(member, refs))
    return root


def _bind_mutator(mutator: CompiledMutator, refs: StoreRefs) -> BoundAction:
    def action(payload: Any = None) -> Any:
        return refs.dispatch(Message(mutator.action_name, payload))

    action.action_name = mutator.action_name  # type: ignore[attr-defined]
    action.__name__ = mutator.key
    return action


def _bind_effect(effect: CompiledEffect, refs: StoreRefs) -> BoundAction:
    def action(payload: Any = None) -> Any:
        return refs.dispatch(lambda: effect(payload))

    action.action_name = effect.action_name  # type: ignore[attr-defined]
    action.__name__ = effect.key
    return action
