"""Compile every mutator and effect of a classified model, once."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from model_store.compiler.effects import CompiledEffect, compile_effect
from model_store.compiler.mutators import CompiledMutator, compile_mutator
from model_store.compiler.refs import StoreRefs
from model_store.errors import ActionNameCollisionError
from model_store.model.classify import has_actions
from model_store.model.Node import Effect, Mutator, Namespace
from model_store.util.paths import KeyPath

logger = logging.getLogger(__name__)

type Handler = CompiledMutator | CompiledEffect


@dataclass(frozen=True)
class HandlerTree:
    """Compiled handlers of one namespace.

    Attributes:
        path: Where the namespace sits in the model
        members: Handlers and child trees in declaration order, with
            action-less namespaces already pruned
        mutators: Direct mutators keyed by action name, read-only
    """

    path: KeyPath
    members: dict[str, Handler | HandlerTree] = field(default_factory=dict)
    mutators: MappingProxyType[str, CompiledMutator] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def children(self) -> dict[str, HandlerTree]:
        return {k: v for k, v in self.members.items() if isinstance(v, HandlerTree)}

    @property
    def has_mutators(self) -> bool:
        return bool(self.mutators) or any(
            child.has_mutators for child in self.children.values()
        )

    def walk(self) -> list[Handler]:
        """Every handler in the tree, depth first, in declaration order."""
        found: list[Handler] = []
        for member in self.members.values():
            if isinstance(member, HandlerTree):
                found.extend(member.walk())
            else:
                found.append(member)
        return found


def compile_handlers(node: Namespace, refs: StoreRefs) -> HandlerTree:
    """Compile ``node`` and everything below it.

    Raises:
        ActionNameCollisionError: If two handlers derive the same action name
    """
    tree = _compile_namespace(node, (), refs, {})
    logger.debug("Compiled %d handler(s)", len(tree.walk()))
    return tree


def _compile_namespace(
    node: Namespace, path: KeyPath, refs: StoreRefs, seen: dict[str, KeyPath]
) -> HandlerTree:
    members: dict[str, Any] = {}
    mutators: dict[str, CompiledMutator] = {}

    for key, child in node.children.items():
        match child:
            case Mutator(fn=fn):
                handler = compile_mutator(fn, path, key, refs)
                _claim(handler.action_name, (*path, key), seen)
                members[key] = handler
                mutators[handler.action_name] = handler
            case Effect(fn=fn):
                handler = compile_effect(fn, path, key, refs)
                _claim(handler.action_name, (*path, key), seen)
                members[key] = handler
            case Namespace() if has_actions(child):
                members[key] = _compile_namespace(child, (*path, key), refs, seen)
            case _:
                pass

    return HandlerTree(path, members, MappingProxyType(mutators))


def _claim(name: str, path: KeyPath, seen: dict[str, KeyPath]) -> None:
    if name in seen:
        raise ActionNameCollisionError(name, seen[name], path)
    seen[name] = path
