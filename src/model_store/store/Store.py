from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from deepdiff import DeepDiff, Delta

from model_store.errors import DispatchError
from model_store.store.Action import Message
from model_store.store.Dispatch import Dispatch
from model_store.store.middleware import Middleware, MiddlewareAPI, apply_middleware
from model_store.store.Subscribers import SubscriberCallback, Subscribers

if TYPE_CHECKING:
    from model_store.devtools.Inspector import Inspector

logger = logging.getLogger(__name__)

type UpdateFn[S] = Callable[[S, Any], S]


class Store[S]:
    """Holds the current state and applies one update function to it.

    Every message goes through ``dispatch``: first the middleware chain, then
    the update function, synchronously. Subscribers are told about each
    dispatch that produced a different state object.

    Usage:
        store = Store(update, {"count": 0})
        unsubscribe = store.subscribe(lambda affects: print(affects("count")))
        store.dispatch(Message("increment", 1))
    """

    _state: S
    _update: UpdateFn[S]
    _subscribers: Subscribers
    _is_dispatching: bool
    _inspector: Inspector | None
    dispatch: Dispatch

    def __init__(
        self,
        update: UpdateFn[S],
        initial_state: S,
        middleware: Sequence[Middleware] = (),
        inspector: Inspector | None = None,
    ) -> None:
        self._state = initial_state
        self._update = update
        self._subscribers = Subscribers()
        self._is_dispatching = False
        self._inspector = inspector

        api = MiddlewareAPI(
            dispatch=lambda value: self.dispatch(value), get_state=self.get_state
        )
        self.dispatch = Dispatch(
            apply_middleware(middleware, api, self._dispatch_message)
        )

        if inspector is not None:
            inspector.connect(self)

    @property
    def actions(self) -> Dispatch:
        """The action tree; the same object as ``dispatch``."""
        return self.dispatch

    def get_state(self) -> S:
        return self._state

    def subscribe(self, listener: SubscriberCallback) -> Callable[[], None]:
        """Register ``listener`` for state changes.

        Returns:
            A function that removes the listener again
        """
        self._subscribers.append(listener)

        def unsubscribe() -> None:
            self._subscribers.remove(listener)

        return unsubscribe

    def replace_state(self, state: S) -> None:
        """Swap in a whole new state, e.g. when replaying recorded history."""
        if self._is_dispatching:
            raise DispatchError("Cannot replace state while an update is running")
        previous = self._state
        self._state = state
        self._notify_subscribers(previous, state)

    def _dispatch_message(self, message: Any) -> Any:
        """Innermost dispatch: run the update function for one message."""
        message = Message.coerce(message)
        if self._is_dispatching:
            raise DispatchError(
                f"Cannot dispatch '{message.type}' while an update is running; "
                "mutators may only dispatch asynchronously"
            )

        logger.debug("Dispatching %s", message.type)
        previous = self._state
        self._is_dispatching = True
        try:
            self._state = self._update(previous, message)
        finally:
            self._is_dispatching = False

        if self._inspector is not None:
            self._inspector.send(message, self._state)
        self._notify_subscribers(previous, self._state)
        return message

    def _notify_subscribers(self, previous: S, current: S) -> None:
        if current is previous or not len(self._subscribers):
            return
        self._subscribers.notify(Delta(DeepDiff(previous, current)))
