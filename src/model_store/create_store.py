"""Compile a model tree into a ready-to-use Store.

Example:
    from model_store.create_store import create_store

    store = create_store({
        "counter": {
            "value": 0,
            "increment": lambda state, amount: state.update(value=state["value"] + amount),
        },
    })
    store.actions.counter.increment(5)
    store.get_state()  # {"counter": {"value": 5}}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from model_store.compiler.actions import build_action_tree
from model_store.compiler.handlers import compile_handlers
from model_store.compiler.reducers import synthesize
from model_store.compiler.refs import StoreRefs
from model_store.config import StoreOptions
from model_store.errors import ModelShapeError
from model_store.model.classify import classify_model, extract_initial_state
from model_store.store.middleware import thunk_middleware
from model_store.store.Store import Store
from model_store.util.json_utils import json

logger = logging.getLogger(__name__)

LOG_STATE = "log_state"


def log_state(state: dict[str, Any], _payload: Any = None) -> None:
    """Print the whole state as indented JSON. Leaves the state unchanged."""
    print(json.to_string(state, indent=2))


def create_store(
    model: Mapping[str, Any],
    options: StoreOptions | Mapping[str, Any] | None = None,
) -> Store[dict[str, Any]]:
    """Compile ``model`` and wire it into a Store.

    Args:
        model: Nested dict of data, mutators, effects and namespaces
        options: StoreOptions, or a dict accepted by StoreOptions.from_mapping

    Returns:
        The store; its action tree is ``store.actions`` (also ``store.dispatch``)

    Raises:
        ModelShapeError: If the model cannot be compiled
    """
    if options is None:
        options = StoreOptions()
    elif not isinstance(options, StoreOptions):
        options = StoreOptions.from_mapping(options)

    if not isinstance(model, Mapping):
        raise ModelShapeError(f"Model must be a mapping, got {type(model).__name__}")
    if LOG_STATE in model:
        raise ModelShapeError(f"'{LOG_STATE}' is reserved at the root of a model")
    definition = {**model, LOG_STATE: log_state}

    classified = classify_model(definition)
    initial_state = extract_initial_state(classified)
    refs = StoreRefs()
    handlers = compile_handlers(classified, refs)
    update = synthesize(handlers, initial_state)

    store = Store(
        update,
        initial_state,
        middleware=(thunk_middleware, *options.middleware),
        inspector=options.active_inspector,
    )
    build_action_tree(handlers, refs, into=store.dispatch)
    refs.dispatch = store.dispatch
    refs.get_state = store.get_state

    logger.debug(
        "Created store with actions: %s",
        ", ".join(h.action_name for h in handlers.walk()),
    )
    return store
