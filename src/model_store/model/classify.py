"""Classify a model tree into DATA / MUTATOR / EFFECT / NAMESPACE nodes."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from model_store.errors import ModelShapeError
from model_store.model.Node import (
    Data,
    Effect,
    Mutator,
    Namespace,
    Node,
    is_effect,
)
from model_store.util.paths import KeyPath


def classify(value: Any, path: KeyPath = ()) -> Node:
    """Classify a single model value found at ``path``.

    Lists and tuples are always data, even when they hold callables; such
    callables are never discovered as mutators or effects.
    """
    if isinstance(value, (Data, Mutator, Effect)):
        return value
    if isinstance(value, Namespace):
        return classify_model(value.children, path)
    if callable(value) and not isinstance(value, type):
        return Effect(value) if is_effect(value) else Mutator(value)
    if isinstance(value, dict):
        return classify_model(value, path)
    return Data(value)


def classify_model(model: Mapping[str, Any], path: KeyPath = ()) -> Namespace:
    """Classify every node of ``model`` in one walk.

    Raises:
        ModelShapeError: If the model is not a mapping or has a non-string key
    """
    if not isinstance(model, Mapping):
        raise ModelShapeError(
            f"Model at {list(path)} must be a mapping, got {type(model).__name__}"
        )
    children: dict[str, Node] = {}
    for key, value in model.items():
        if not isinstance(key, str):
            raise ModelShapeError(
                f"Model keys must be strings, got {key!r} at {list(path)}"
            )
        children[key] = classify(value, (*path, key))
    return Namespace(children)


def has_actions(node: Namespace) -> bool:
    """True if any mutator or effect exists anywhere under ``node``."""
    for child in node.children.values():
        if isinstance(child, (Mutator, Effect)):
            return True
        if isinstance(child, Namespace) and has_actions(child):
            return True
    return False


def has_mutators(node: Namespace) -> bool:
    """True if any mutator exists anywhere under ``node``."""
    for child in node.children.values():
        if isinstance(child, Mutator):
            return True
        if isinstance(child, Namespace) and has_mutators(child):
            return True
    return False


def extract_initial_state(node: Namespace) -> dict[str, Any]:
    """Pure-data projection of a classified model.

    Data leaves are deep-copied so later state edits never reach the model.
    Namespaces without data still appear, as empty dicts.
    """
    state: dict[str, Any] = {}
    for key, child in node.children.items():
        match child:
            case Namespace():
                state[key] = extract_initial_state(child)
            case Data(value=value):
                state[key] = copy.deepcopy(value)
            case Mutator() | Effect():
                pass
    return state
