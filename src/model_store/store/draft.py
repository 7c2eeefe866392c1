"""Immutable edits written as in-place mutations.

``produce`` hands a recipe a deep copy (the draft) of the base state, lets it
mutate the draft freely, then diffs the draft against the base with DeepDiff.
The resulting bidirectional Delta is both the forward patch set and its
inverse. Subtrees the recipe did not change are swapped back for the base's
own objects, so callers can compare slices by identity.

The draft is a plain ``copy.deepcopy``. Alternatives worth trying if edits on
large states get slow:
- copy-on-write proxies that only copy the touched path
- ``pyrsistent`` maps with evolvers
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from deepdiff import DeepDiff, Delta
from deepdiff.helper import FlatDeltaRow

_ATOMS = (str, bytes, int, float, complex, bool, type(None))


@dataclass(frozen=True)
class Produced[S]:
    """Outcome of one edit session.

    Attributes:
        base: The state the edit started from
        state: The edited state, sharing unchanged subtrees with ``base``
        delta: Bidirectional Delta from ``base`` to ``state``
        result: Whatever the recipe returned
    """

    base: S
    state: S
    delta: Delta
    result: Any

    @property
    def patches(self) -> list[FlatDeltaRow]:
        """Flat list of the changes; each one is invertible through ``delta``."""
        if not self.delta.diff:
            return []
        return list(self.delta.to_flat_rows())

    def rollback(self) -> S:
        """Apply the inverse patches to ``state``.

        The result is value-equal to ``base``.
        """
        if not self.delta.diff:
            return self.state
        reverted = self.state - self.delta
        return share(self.base, reverted)


def snapshot[S](state: S) -> S:
    """Create a deep copy of the state to use as a draft."""
    return copy.deepcopy(state)


def produce[S](base: S, recipe: Callable[[S], Any]) -> Produced[S]:
    """Run ``recipe`` against a draft of ``base`` and commit the edit.

    Args:
        base: The current state; never modified
        recipe: Mutates the draft it is given, may return anything

    Returns:
        Produced record. ``state`` is ``base`` itself when nothing changed.
    """
    draft = snapshot(base)
    result = recipe(draft)
    diff = DeepDiff(base, draft)
    if not diff:
        return Produced(base, base, Delta({}), result)
    delta = Delta(diff, bidirectional=True, raise_errors=True)
    return Produced(base, share(base, draft), delta, result)


def share(base: Any, edited: Any) -> Any:
    """Return ``edited`` with every subtree equal to ``base``'s replaced by it.

    A dict with the same keys as its base keeps the base's key order, so a
    removed key that is put back lands where it was.
    """
    if base is edited:
        return base
    if type(base) is dict and type(edited) is dict:
        merged = {
            key: share(base[key], value) if key in base else value
            for key, value in edited.items()
        }
        if merged.keys() != base.keys():
            return merged
        if all(merged[k] is base[k] for k in base):
            return base
        return {key: merged[key] for key in base}
    if type(base) is list and type(edited) is list:
        items = [share(b, e) for b, e in zip(base, edited)]
        items.extend(edited[len(base) :])
        if len(items) == len(base) and all(a is b for a, b in zip(items, base)):
            return base
        return items
    if type(base) is not type(edited):
        return edited
    if isinstance(base, _ATOMS):
        return base if base == edited else edited
    return base if not DeepDiff(base, edited) else edited
