"""Tagged node types for a classified model tree.

A model tree can be written with plain Python values, where dicts are
namespaces and functions are mutators:

    model = {
        "counter": {
            "value": 0,
            "increment": lambda state, amount: state.update(value=state["value"] + amount),
        }
    }

or with explicit tags where plain values would be ambiguous:

    model = {
        "settings": data({"theme": "dark"}),  # a dict kept as one value
        "todos": {
            "items": [],
            "fetch": effect(fetch_todos),
        },
    }

Classification turns either form into the ``Node`` union below.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

EFFECT_MARKER = "__model_store_effect__"


@dataclass(frozen=True)
class Data:
    """A leaf value copied into state as is, even when it is a mapping."""

    value: Any


@dataclass(frozen=True)
class Mutator:
    """A state transition written as an in-place edit of a draft."""

    fn: Callable[..., Any]


@dataclass(frozen=True)
class Effect:
    """An async side effect that can dispatch further messages."""

    fn: Callable[..., Any]


@dataclass(frozen=True)
class Namespace:
    """A nested group of nodes. Key order is declaration order."""

    children: dict[str, Node] = field(default_factory=dict)


type Node = Data | Mutator | Effect | Namespace


def data(value: Any) -> Data:
    """Mark ``value`` as a data leaf, so a dict is not treated as a namespace."""
    return Data(value)


def mutator[F: Callable[..., Any]](fn: F) -> F:
    """Identity tag for readability; plain functions are mutators already."""
    return fn


def effect[F: Callable[..., Any]](fn: F) -> F:
    """Tag ``fn`` as an effect.

    The function is returned unchanged apart from the marker attribute, so it
    can still be called or tested directly.
    """
    setattr(fn, EFFECT_MARKER, True)
    return fn


def is_effect(fn: Any) -> bool:
    return bool(getattr(fn, EFFECT_MARKER, False))


def namespace(**children: Any) -> dict[str, Any]:
    """Build a namespace from keyword arguments, e.g. ``namespace(value=0, inc=inc)``."""
    return dict(children)
