"""Dispatch middleware, including the task middleware that runs effects."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from model_store.util.arity import positional_arity

logger = logging.getLogger(__name__)

type DispatchFn = Callable[[Any], Any]
type Middleware = Callable[[MiddlewareAPI], Callable[[DispatchFn], DispatchFn]]


@dataclass(frozen=True)
class MiddlewareAPI:
    """What a middleware can see of the store.

    ``dispatch`` re-enters the full chain, not just the remaining links.
    """

    dispatch: DispatchFn
    get_state: Callable[[], Any]


def thunk_middleware(api: MiddlewareAPI) -> Callable[[DispatchFn], DispatchFn]:
    """Let a callable be dispatched as a task instead of a message.

    A zero-argument task is called bare, ``task()``. A task taking positional
    arguments gets as many of ``(dispatch, get_state)`` as it declares. The
    return value is handed back to the caller; coroutines come back
    un-awaited, so the caller decides when they run.
    """

    def wrap(next_dispatch: DispatchFn) -> DispatchFn:
        def dispatch(value: Any) -> Any:
            if callable(value):
                logger.debug("Running task %r", value)
                arity = positional_arity(value)
                return value(*(api.dispatch, api.get_state)[:arity])
            return next_dispatch(value)

        return dispatch

    return wrap


def apply_middleware(
    middleware: Sequence[Middleware], api: MiddlewareAPI, base: DispatchFn
) -> DispatchFn:
    """Chain ``middleware`` around ``base``; the first entry runs first."""
    dispatch = base
    for link in reversed(middleware):
        dispatch = link(api)(dispatch)
    return dispatch
