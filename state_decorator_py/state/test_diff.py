"""Tests for state diff computation."""

from decimal import Decimal
from fractions import Fraction
from typing import List, Optional

import pytest
from pydantic import BaseModel

from state_decorator_py.config import DecoratorConfig
from state_decorator_py.state.diff import StateDiffEngine, build_diff, snapshot_fields


class TestPrimitiveFields:
    """Tests for number, string and boolean fields."""

    def test_number_and_list(self):
        """Test the canonical mixed example."""
        diff = build_diff({"a": 1, "b": [1, 2, 3]}, {"a": 2, "b": [1, 2, 4]})

        assert diff == {"a": "1 => 2", "b": {"added": [4], "removed": [3]}}

    def test_empty_string_rendered_quoted(self):
        assert build_diff({"s": "abc"}, {"s": ""}) == {"s": 'abc => ""'}

    def test_boolean(self):
        assert build_diff({"flag": True}, {"flag": False}) == {"flag": "True => False"}

    def test_type_from_old_value_when_new_is_none(self):
        assert build_diff({"name": "bob"}, {"name": None}) == {"name": "bob => None"}

    def test_equal_primitives_omitted(self):
        """Test equal values are omitted even when they are distinct objects."""
        old = {"p": 1, "s": "".join(["ab", "c"])}
        new = {"p": 1, "s": "abc"}

        assert build_diff(old, new) == {}


class TestSequenceFields:
    """Tests for fields holding sequences."""

    def test_empty_to_null(self):
        assert build_diff({"x": []}, {"x": None}) == {"x": "contained 0 elements, now is null"}

    def test_null_to_sequence(self):
        assert build_diff({"x": None}, {"x": [1, 2]}) == {"x": "was null, now contains 2 elements"}

    def test_empty_to_nonempty(self):
        assert build_diff({"x": []}, {"x": [1]}) == {"x": "was empty, now contains 1 elements"}

    def test_nonempty_to_empty(self):
        assert build_diff({"x": [1, 2, 3]}, {"x": []}) == {"x": "contained 3 elements, now is empty"}

    def test_deep_equality(self):
        """Test elements are compared structurally, not by reference."""
        old = {"items": [{"id": 1, "tags": ["a"]}]}
        new = {"items": [{"id": 1, "tags": ["a"]}, {"id": 2, "tags": []}]}

        diff = build_diff(old, new)

        assert diff == {"items": {"added": [{"id": 2, "tags": []}], "removed": []}}

    def test_many_added_collapsed(self):
        """Test more than 10 added elements are reported as a count."""
        diff = build_diff({"x": [0]}, {"x": list(range(12))})

        assert diff == {"x": {"added": "11 elements added", "removed": []}}

    def test_ten_added_listed(self):
        diff = build_diff({"x": [0]}, {"x": list(range(11))})

        assert diff["x"]["added"] == list(range(1, 11))

    def test_many_removed_collapsed(self):
        diff = build_diff({"x": list(range(20))}, {"x": [0, 99]})

        assert diff == {"x": {"added": [99], "removed": "19 elements removed"}}

    def test_tuples(self):
        assert build_diff({"t": (1, 2)}, {"t": (2, 3)}) == {"t": {"added": [3], "removed": [1]}}

    def test_same_reference_omitted(self):
        items = [1, 2]

        assert build_diff({"items": items}, {"items": items}) == {}


class TestOtherFields:
    """Tests for objects, added and deleted fields."""

    def test_object_reports_new_value(self):
        new_value = {"a": 2}

        diff = build_diff({"o": {"a": 1}}, {"o": new_value})

        assert diff["o"] is new_value

    def test_deleted_field(self):
        assert build_diff({"gone": 1, "kept": 2}, {"kept": 2}) == {"gone": "was deleted"}

    def test_added_field_stringified(self):
        """Test fields only present in the new state are stringified."""
        assert build_diff({"p": 1}, {"p": 1, "q": 2}) == {"q": "2"}

    def test_key_order(self):
        diff = build_diff({"b": 1, "a": 1, "c": 1}, {"new": 1, "a": 2, "b": 2})

        assert list(diff) == ["b", "a", "c", "new"]

    def test_inputs_not_mutated(self):
        old = {"x": [1]}
        new = {"x": [2]}

        build_diff(old, new)

        assert old == {"x": [1]}
        assert new == {"x": [2]}


class TodoState(BaseModel):
    filter: str = "all"
    todos: List[str] = []
    selected: Optional[str] = None


class TestModelSnapshots:
    """Tests for pydantic snapshots."""

    def test_model_fields(self):
        old = TodoState(todos=["a"])
        new = old.model_copy(update={"todos": ["a", "b"], "filter": "done"})

        diff = build_diff(old, new)

        assert diff == {"filter": "all => done", "todos": {"added": ["b"], "removed": []}}


class TestStateDiffEngine:
    """Tests for the configuration-gated engine."""

    def test_inactive_in_production(self):
        engine = StateDiffEngine(DecoratorConfig(development=False))

        assert not engine.active
        assert engine.diff({"a": 1}, {"a": 2}) == {}

    def test_active_in_development(self):
        engine = StateDiffEngine(DecoratorConfig(development=True))

        assert engine.diff({"a": 1}, {"a": 2}) == {"a": "1 => 2"}

    def test_default_config_inactive(self):
        assert StateDiffEngine().diff({"a": 1}, {"a": 2}) == {}


class TestSnapshotFields:
    """Tests for reading snapshot fields."""

    def test_none_snapshot(self):
        assert snapshot_fields(None) == {}

    def test_plain_object(self):
        class Counter:
            def __init__(self):
                self.count = 3

        assert snapshot_fields(Counter()) == {"count": 3}

    def test_values_not_copied(self):
        items = [1]

        assert snapshot_fields({"items": items})["items"] is items


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class TestElementEquality:
    """Tests for structural comparison of sequence elements."""

    def test_rebuilt_plain_objects(self):
        """Test plain objects are compared by their fields, not identity."""
        diff = build_diff(
            {"points": [Point(1, 2), Point(3, 4)]},
            {"points": [Point(1, 2), Point(5, 6)]},
        )

        added = diff["points"]["added"]
        removed = diff["points"]["removed"]
        assert len(added) == 1 and vars(added[0]) == {"x": 5, "y": 6}
        assert len(removed) == 1 and vars(removed[0]) == {"x": 3, "y": 4}

    def test_nested_plain_objects(self):
        diff = build_diff(
            {"rows": [{"at": Point(0, 0), "tags": [Point(1, 1)]}]},
            {"rows": [{"at": Point(0, 0), "tags": [Point(1, 1)]}, {"at": None}]},
        )

        assert diff["rows"]["added"] == [{"at": None}]
        assert diff["rows"]["removed"] == []

    def test_bool_is_not_int(self):
        """Test True and 1 are different elements."""
        diff = build_diff({"x": [1, 2]}, {"x": [True, 2]})

        assert diff == {"x": {"added": [True], "removed": [1]}}

    def test_pydantic_elements(self):
        diff = build_diff(
            {"todos": [TodoState(filter="a")]},
            {"todos": [TodoState(filter="a"), TodoState(filter="b")]},
        )

        assert diff["todos"]["added"] == [TodoState(filter="b")]
        assert diff["todos"]["removed"] == []


class TestDecimalFields:
    """Tests for numeric types beyond int and float."""

    def test_equal_decimals_omitted(self):
        assert build_diff({"price": Decimal("1.50")}, {"price": Decimal("1.50")}) == {}

    def test_changed_decimal_rendered(self):
        diff = build_diff({"price": Decimal("1.50")}, {"price": Decimal("2.25")})

        assert diff == {"price": "1.50 => 2.25"}

    def test_fraction(self):
        assert build_diff({"ratio": Fraction(1, 2)}, {"ratio": Fraction(2, 4)}) == {}
