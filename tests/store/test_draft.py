"""Tests for produce() edit sessions, structural sharing and rollback."""

import pytest

from model_store.store.draft import produce, share


class TestProduce:
    def test_edit_returns_new_state(self) -> None:
        base = {"counter": {"value": 0}}

        produced = produce(base, lambda draft: draft["counter"].update(value=5))

        assert produced.state == {"counter": {"value": 5}}
        assert base == {"counter": {"value": 0}}

    def test_no_edit_returns_base_itself(self) -> None:
        base = {"counter": {"value": 0}}

        produced = produce(base, lambda draft: None)

        assert produced.state is base
        assert produced.patches == []

    def test_unchanged_subtrees_are_shared(self) -> None:
        base = {"a": {"value": 0}, "b": {"items": [1, 2]}}

        def recipe(draft: dict) -> None:
            draft["a"]["value"] = 1

        produced = produce(base, recipe)

        assert produced.state["b"] is base["b"]
        assert produced.state["a"] is not base["a"]

    def test_records_patches(self) -> None:
        base = {"items": []}

        produced = produce(base, lambda draft: draft["items"].append("x"))

        assert produced.patches

    def test_keeps_recipe_result(self) -> None:
        produced = produce({}, lambda draft: "done")
        assert produced.result == "done"

    def test_recipe_error_leaves_base_untouched(self) -> None:
        base = {"value": 0}

        def recipe(draft: dict) -> None:
            draft["value"] = 1
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            produce(base, recipe)
        assert base == {"value": 0}


class TestRollback:
    def test_rollback_restores_value(self) -> None:
        base = {"todos": {"items": ["a"], "count": 1}, "other": {"x": 1}}

        def recipe(draft: dict) -> None:
            draft["todos"]["items"].append("b")
            draft["todos"]["count"] = 2
            draft["todos"]["new_key"] = True

        produced = produce(base, recipe)
        assert produced.state != base

        assert produced.rollback() == base

    def test_rollback_without_changes_is_same_state(self) -> None:
        base = {"value": 0}
        produced = produce(base, lambda draft: None)
        assert produced.rollback() is base

    def test_rollback_of_removed_key_keeps_key_order(self) -> None:
        base = {"a": 1, "b": 2, "c": 3}

        def recipe(draft: dict) -> None:
            del draft["a"]
            draft["b"] = 5

        produced = produce(base, recipe)
        assert list(produced.state) == ["b", "c"]

        result = produced.rollback()
        assert result == base
        assert list(result) == ["a", "b", "c"]


class TestShare:
    def test_equal_trees_collapse_to_base(self) -> None:
        base = {"a": [1, {"b": 2}], "c": "x"}
        assert share(base, {"a": [1, {"b": 2}], "c": "x"}) is base

    def test_changed_leaf_keeps_siblings(self) -> None:
        base = {"a": {"x": 1}, "b": {"y": 2}}
        result = share(base, {"a": {"x": 9}, "b": {"y": 2}})

        assert result == {"a": {"x": 9}, "b": {"y": 2}}
        assert result["b"] is base["b"]

    def test_added_key_produces_new_dict(self) -> None:
        base = {"a": 1}
        result = share(base, {"a": 1, "b": 2})
        assert result == {"a": 1, "b": 2}
        assert result is not base

    def test_same_keys_keep_base_order(self) -> None:
        result = share({"a": 1, "b": 2}, {"b": 3, "a": 1})
        assert result == {"a": 1, "b": 3}
        assert list(result) == ["a", "b"]

    def test_type_change_is_not_shared(self) -> None:
        assert share({"a": 1}, {"a": 1.0})["a"] == 1.0
        assert isinstance(share({"a": 1}, {"a": 1.0})["a"], float)

    def test_list_growth(self) -> None:
        base = [{"a": 1}]
        result = share(base, [{"a": 1}, {"b": 2}])
        assert result[0] is base[0]
        assert result == [{"a": 1}, {"b": 2}]
