"""Tests for Store: dispatch, middleware, subscriptions and error handling."""

# pyright: reportPrivateUsage=false

from typing import Any

import pytest

from model_store.errors import DispatchError
from model_store.store.Action import Message
from model_store.store.middleware import MiddlewareAPI, thunk_middleware
from model_store.store.Store import Store


def counter_update(state: dict[str, int], message: Any) -> dict[str, int]:
    if message.type == "increment":
        return {**state, "count": state["count"] + message.payload}
    if message.type == "fail":
        raise ValueError("update failed")
    return state


def make_store(**kwargs: Any) -> Store[dict[str, int]]:
    return Store(counter_update, {"count": 0}, **kwargs)


class TestDispatch:
    """Tests for dispatching messages through the update function."""

    def test_message_updates_state(self) -> None:
        store = make_store()

        store.dispatch(Message("increment", 2))

        assert store.get_state() == {"count": 2}

    def test_dispatch_returns_message(self) -> None:
        store = make_store()
        message = Message("increment", 1)
        assert store.dispatch(message) is message

    def test_unknown_message_keeps_state_object(self) -> None:
        store = make_store()
        before = store.get_state()

        store.dispatch(Message("unknown"))

        assert store.get_state() is before

    def test_mapping_message_updates_state(self) -> None:
        store = make_store()

        store.dispatch({"type": "increment", "payload": 4})

        assert store.get_state() == {"count": 4}

    def test_mapping_without_payload(self) -> None:
        store = make_store()
        before = store.get_state()

        assert store.dispatch({"type": "unknown"}) == Message("unknown")
        assert store.get_state() is before

    def test_rejects_values_that_are_not_messages(self) -> None:
        store = make_store()
        with pytest.raises(TypeError, match="type"):
            store.dispatch({"payload": 1})
        with pytest.raises(TypeError):
            store.dispatch(42)

    def test_callables_need_task_middleware(self) -> None:
        store = make_store()
        with pytest.raises(TypeError):
            store.dispatch(lambda dispatch, get_state: None)

    def test_update_error_propagates_and_keeps_state(self) -> None:
        store = make_store()
        store.dispatch(Message("increment", 1))
        before = store.get_state()

        with pytest.raises(ValueError, match="update failed"):
            store.dispatch(Message("fail"))

        assert store.get_state() is before
        assert not store._is_dispatching

    def test_dispatch_from_inside_update_is_rejected(self) -> None:
        holder: dict[str, Store[dict[str, int]]] = {}

        def update(state: dict[str, int], message: Any) -> dict[str, int]:
            if message.type == "nested":
                holder["store"].dispatch(Message("other"))
            return state

        store = Store(update, {"count": 0})
        holder["store"] = store

        with pytest.raises(DispatchError, match="other"):
            store.dispatch(Message("nested"))


class TestMiddleware:
    def test_thunk_runs_task_with_dispatch_and_get_state(self) -> None:
        store = make_store(middleware=(thunk_middleware,))

        def task(dispatch: Any, get_state: Any) -> int:
            dispatch(Message("increment", 3))
            return get_state()["count"]

        assert store.dispatch(task) == 3

    def test_zero_argument_task_is_called_bare(self) -> None:
        store = make_store(middleware=(thunk_middleware,))
        assert store.dispatch(lambda: 42) == 42

    def test_task_gets_only_the_arguments_it_declares(self) -> None:
        store = make_store(middleware=(thunk_middleware,))

        def task(dispatch: Any) -> None:
            dispatch(Message("increment", 2))

        store.dispatch(task)

        assert store.get_state() == {"count": 2}

    def test_variadic_task_gets_dispatch_and_get_state(self) -> None:
        store = make_store(middleware=(thunk_middleware,))
        received = store.dispatch(lambda *args: args)
        assert len(received) == 2
        assert received[1]() == {"count": 0}

    def test_thunk_passes_messages_through(self) -> None:
        store = make_store(middleware=(thunk_middleware,))
        store.dispatch(Message("increment", 1))
        assert store.get_state() == {"count": 1}

    def test_first_middleware_runs_first(self) -> None:
        seen: list[str] = []

        def tagging(tag: str):
            def middleware(api: MiddlewareAPI):
                def wrap(next_dispatch):
                    def dispatch(value: Any) -> Any:
                        seen.append(tag)
                        return next_dispatch(value)

                    return dispatch

                return wrap

            return middleware

        store = make_store(middleware=(tagging("outer"), tagging("inner")))
        store.dispatch(Message("increment", 1))

        assert seen == ["outer", "inner"]

    def test_api_dispatch_reenters_whole_chain(self) -> None:
        seen: list[Any] = []

        def recorder(api: MiddlewareAPI):
            def wrap(next_dispatch):
                def dispatch(value: Any) -> Any:
                    seen.append(value)
                    return next_dispatch(value)

                return dispatch

            return wrap

        store = make_store(middleware=(recorder, thunk_middleware))
        store.dispatch(lambda dispatch, get_state: dispatch(Message("increment", 1)))

        assert len(seen) == 2
        assert seen[1] == Message("increment", 1)


class TestSubscribe:
    """Tests for Store.subscribe() and change notification."""

    def test_listener_called_on_change(self) -> None:
        store = make_store()
        received: list[bool] = []

        store.subscribe(lambda affects: received.append(affects("count")))
        store.dispatch(Message("increment", 1))

        assert received == [True]

    def test_listener_not_called_without_change(self) -> None:
        store = make_store()
        calls: list[int] = []

        store.subscribe(lambda _: calls.append(1))
        store.dispatch(Message("unknown"))

        assert calls == []

    def test_unsubscribe_stops_callbacks(self) -> None:
        store = make_store()
        call_count = 0

        def callback(_affects: Any) -> None:
            nonlocal call_count
            call_count += 1

        unsubscribe = store.subscribe(callback)
        store.dispatch(Message("increment", 1))
        assert call_count == 1

        unsubscribe()
        store.dispatch(Message("increment", 1))
        assert call_count == 1  # still 1, not called again

    def test_listener_sees_new_state(self) -> None:
        store = make_store()
        seen: list[dict[str, int]] = []

        store.subscribe(lambda _: seen.append(store.get_state()))
        store.dispatch(Message("increment", 4))

        assert seen == [{"count": 4}]


class TestReplaceState:
    def test_replace_state_notifies(self) -> None:
        store = make_store()
        calls: list[bool] = []
        store.subscribe(lambda affects: calls.append(affects("count")))

        store.replace_state({"count": 10})

        assert store.get_state() == {"count": 10}
        assert calls == [True]
