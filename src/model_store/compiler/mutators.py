"""Compile user mutators into pure ``(state, payload) -> state`` functions."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from model_store.compiler.refs import StoreRefs, accepts_helpers
from model_store.store.Action import Outcome
from model_store.store.draft import produce
from model_store.util.paths import KeyPath, action_name, get_in

logger = logging.getLogger(__name__)

# Strong references to optimistic tasks until they finish
_pending_tasks: set[asyncio.Future[Any]] = set()


@dataclass(frozen=True)
class MutatorHelpers:
    """Third argument passed to a mutator.

    Attributes:
        dispatch: The store's dispatch entry point, with the full action tree
        dispatch_local: The action namespace the mutator itself lives in
        get_state: Returns the store's current (pre-update) state
    """

    dispatch: Any
    dispatch_local: Any
    get_state: Callable[[], Any]


class CompiledMutator:
    """A user mutator wrapped as an immutable update.

    The user function edits a draft in place:

        def add_todo(state, text):
            state["items"].append(text)

    Calling the compiled mutator returns a new state and leaves the old one
    untouched. If nothing was edited the old state object is returned.

    A mutator that returns ``Outcome.DEFER`` or an awaitable is optimistic:
    its edit is computed, then rolled back, so the visible state is value-equal
    to what it was. An awaitable is scheduled on the running event loop so it
    can dispatch the real commit later; with no running loop it is closed
    without running and only the rollback happens.
    """

    is_effect = False

    def __init__(
        self, fn: Callable[..., Any], path: KeyPath, key: str, refs: StoreRefs
    ) -> None:
        self.fn = fn
        self.path = path
        self.key = key
        self.action_name = action_name(path, key)
        self._refs = refs
        self._pass_helpers = accepts_helpers(fn)

    def __call__(self, state: Any, payload: Any = None) -> Any:
        produced = produce(state, lambda draft: self._run(draft, payload))
        result = produced.result

        if inspect.isawaitable(result):
            _schedule(result, self.action_name)
        elif result is not Outcome.DEFER:
            return produced.state

        if not produced.patches:
            return produced.state
        logger.debug(
            "Rolling back %d change(s) from deferred mutator %s",
            len(produced.patches),
            self.action_name,
        )
        return produced.rollback()

    def _run(self, draft: Any, payload: Any) -> Any:
        if self._pass_helpers:
            return self.fn(draft, payload, self.helpers())
        return self.fn(draft, payload)

    def helpers(self) -> MutatorHelpers:
        dispatch = self._refs.dispatch
        return MutatorHelpers(
            dispatch=dispatch,
            dispatch_local=get_in(self.path, dispatch),
            get_state=self._refs.get_state,
        )

    def __repr__(self) -> str:
        return f"CompiledMutator({self.action_name!r})"


def _schedule(awaitable: Any, name: str) -> None:
    """Run an optimistic mutator's awaitable on the running event loop.

    Without a running loop there is nowhere to run it: the awaitable is closed
    and the rollback still happens.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        logger.warning(
            "Mutator %s returned an awaitable outside a running event loop; "
            "it was not run",
            name,
        )
        return
    task = asyncio.ensure_future(awaitable)
    _pending_tasks.add(task)
    task.add_done_callback(_finish_task(name))


def _finish_task(name: str) -> Callable[[asyncio.Future[Any]], None]:
    def done(task: asyncio.Future[Any]) -> None:
        _pending_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Task returned by mutator %s failed", name, exc_info=error)

    return done


def compile_mutator(
    fn: Callable[..., Any], path: KeyPath, key: str, refs: StoreRefs
) -> CompiledMutator:
    return CompiledMutator(fn, path, key, refs)
