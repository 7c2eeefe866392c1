"""Structured error types raised while compiling a model or dispatching."""

from __future__ import annotations


class ModelStoreError(Exception):
    """Base class for model_store errors."""


class ModelShapeError(ModelStoreError, ValueError):
    """The model tree cannot be compiled as written."""


class ActionNameCollisionError(ModelShapeError):
    """Two mutators/effects at different paths derive the same action name."""

    def __init__(
        self, name: str, first: tuple[str, ...], second: tuple[str, ...]
    ) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Action name '{name}' is declared at both {list(first)} and {list(second)}"
        )


class DispatchError(ModelStoreError, RuntimeError):
    """Dispatch was called at a point where the store cannot accept it."""
