"""
Property Editor -- Value Coercion and Commits

Covers:
  - text / long-text / url / color pass through as strings
  - single-select commits the declared option itself (ints stay ints);
    undeclared values are rejected without touching the document
  - numeric-range: leading integer, min fallback, clamping, unit suffix
  - every accepted change is exactly one update of the selected instance
  - unknown keys and missing selection are refused
"""

import logging

import pytest

from builder.kernel.editor import (
    PropertyEditor,
    build_control,
    clamp,
    coerce_field_value,
    parse_range_number,
    serialize_range,
)
from builder.kernel.models import FieldDescriptor, RangeConstraint
from builder.kernel.registry import get_definition
from builder.kernel.types import InputKind

PX = RangeConstraint(min=20, max=100, unit="px")


def range_field(constraint=PX):
    return FieldDescriptor(
        key="height",
        label="Height",
        input_kind=InputKind.NUMERIC_RANGE,
        range=constraint,
    )


def selected(store, type_name):
    inst = store.place(get_definition(type_name))
    store.select(inst.id)
    return inst


class TestPassthrough:
    @pytest.mark.parametrize(
        "kind", [InputKind.TEXT, InputKind.LONG_TEXT, InputKind.URL, InputKind.COLOR]
    )
    def test_string_kinds(self, kind):
        descriptor = FieldDescriptor(key="k", label="K", input_kind=kind)
        assert coerce_field_value(descriptor, "anything at all") == (True, "anything at all")

    def test_none_becomes_empty(self):
        descriptor = FieldDescriptor(key="k", label="K", input_kind=InputKind.TEXT)
        assert coerce_field_value(descriptor, None) == (True, "")

    def test_color_not_validated(self):
        descriptor = FieldDescriptor(key="c", label="C", input_kind=InputKind.COLOR)
        assert coerce_field_value(descriptor, "not-a-color") == (True, "not-a-color")


class TestSelect:
    def test_string_option(self):
        descriptor = get_definition("heading").field("level")
        assert coerce_field_value(descriptor, "h3") == (True, "h3")

    def test_integer_option_from_string_input(self):
        descriptor = get_definition("columns").field("columnCount")
        ok, value = coerce_field_value(descriptor, "3")
        assert ok
        assert value == 3
        assert isinstance(value, int)

    def test_undeclared_option(self):
        descriptor = get_definition("heading").field("level")
        ok, _ = coerce_field_value(descriptor, "h7")
        assert not ok


class TestRangeHelpers:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("16px", 16),
            ("  42%", 42),
            ("-5px", -5),
            (30, 30),
            (12.9, 12),
            ("abc", 20),
            ("", 20),
            (None, 20),
            (True, 20),
        ],
    )
    def test_parse_range_number(self, raw, expected):
        assert parse_range_number(raw, PX) == expected

    def test_clamp(self):
        assert clamp(5, PX) == 20
        assert clamp(9999, PX) == 100
        assert clamp(50, PX) == 50

    def test_serialize(self):
        assert serialize_range(50, PX) == "50px"
        assert serialize_range(7, RangeConstraint(min=0, max=10)) == "7"

    def test_unparseable_falls_back_to_min(self):
        assert coerce_field_value(range_field(), "abc") == (True, "20px")

    def test_out_of_range_is_clamped(self):
        assert coerce_field_value(range_field(), "9999px") == (True, "100px")

    def test_in_range_keeps_unit(self):
        assert coerce_field_value(range_field(), "64") == (True, "64px")

    def test_percent_unit(self):
        descriptor = get_definition("text").field("width")
        assert coerce_field_value(descriptor, 75) == (True, "75%")

    def test_missing_constraint_passes_through(self):
        descriptor = FieldDescriptor.model_construct(
            key="height",
            label="Height",
            input_kind=InputKind.NUMERIC_RANGE,
            group="Size",
            options=None,
            range=None,
        )
        assert coerce_field_value(descriptor, "64px") == (True, "64px")
        control = build_control(descriptor, "64px")
        assert control.value == "64px"
        assert control.min is None


class TestCommit:
    def test_button_text_edit(self, store):
        inst = selected(store, "button")
        before = dict(inst.properties)

        assert PropertyEditor(store).change("text", "Buy Now")

        after = store.document.find(inst.id).properties
        assert after["text"] == "Buy Now"
        assert {k: v for k, v in after.items() if k != "text"} == {
            k: v for k, v in before.items() if k != "text"
        }

    def test_exactly_one_update_per_change(self, store):
        selected(store, "text")
        calls = []
        store.subscribe(lambda s: calls.append(1))
        PropertyEditor(store).change("fontSize", "20px")
        assert calls == [1]

    def test_only_selected_instance_changes(self, store):
        other = store.place(get_definition("text"))
        target = selected(store, "text")
        PropertyEditor(store).change("content", "Edited")
        assert target.properties["content"] == "Edited"
        assert other.properties["content"] == "Your text here..."

    def test_range_commit_is_serialized(self, store):
        inst = selected(store, "button")
        PropertyEditor(store).change("width", "9999")
        assert inst.properties["width"] == "400px"

    def test_column_count_commit(self, store):
        inst = selected(store, "columns")
        PropertyEditor(store).change("columnCount", "4")
        assert inst.properties["columnCount"] == 4

    def test_invalid_option_not_committed(self, store, caplog):
        inst = selected(store, "heading")
        calls = []
        store.subscribe(lambda s: calls.append(1))

        with caplog.at_level(logging.WARNING, logger="builder.kernel.editor"):
            assert PropertyEditor(store).change("level", "h9") is False

        assert inst.properties["level"] == "h2"
        assert calls == []
        assert "not an option" in caplog.text

    def test_unknown_key_refused(self, store):
        inst = selected(store, "image")
        before = dict(inst.properties)
        assert PropertyEditor(store).change("caption", "x") is False
        assert inst.properties == before

    def test_no_selection(self, store):
        inst = store.place(get_definition("text"))
        assert PropertyEditor(store).change("content", "x") is False
        assert inst.properties["content"] == "Your text here..."

    def test_stale_selection(self, store):
        inst = selected(store, "text")
        store.document.remove(inst.id)
        assert PropertyEditor(store).change("content", "x") is False
