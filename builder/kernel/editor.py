"""
Page Builder Kernel — Schema-Driven Property Editor

Builds the property form for the selected instance from its type's field
schema, and turns raw control input into exactly one Document update.

Per-kind behaviour:
  text / long-text / url  → string passthrough
  single-select           → must match a declared option; the option itself
                            is committed (so integer options stay integers)
  color                   → one string shown twice (swatch + raw text)
  numeric-range           → "<number><unit>"; unparseable input falls back
                            to the declared minimum, out-of-range input is
                            clamped like a slider would
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, assert_never

from builder.kernel.models import FieldDescriptor, RangeConstraint
from builder.kernel.registry import get_definition
from builder.kernel.types import DEFAULT_GROUP, InputKind

if TYPE_CHECKING:
    from builder.kernel.store import BuilderStore

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------------------------------------------------------
# Form structures
# ---------------------------------------------------------------------------


@dataclass
class FieldControl:
    """
    One rendered control. `value` is what the control displays.

    Color controls expose the same string as `swatch` and `text`.
    Range controls expose the parsed number as `value` and the serialized
    string as `display`.
    """

    key: str
    label: str
    kind: InputKind
    value: Any
    options: tuple[str | int, ...] = ()
    swatch: str | None = None
    text: str | None = None
    min: int | None = None
    max: int | None = None
    unit: str = ""
    display: str | None = None


@dataclass
class FieldGroup:
    name: str
    controls: list[FieldControl] = field(default_factory=list)


@dataclass
class PropertyForm:
    instance_id: str
    type: str
    title: str
    groups: list[FieldGroup] = field(default_factory=list)

    def control(self, key: str) -> FieldControl | None:
        for group in self.groups:
            for control in group.controls:
                if control.key == key:
                    return control
        return None


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def group_fields(schema: tuple[FieldDescriptor, ...]) -> list[tuple[str, list[FieldDescriptor]]]:
    """Group descriptors by `group`, groups in first-seen order."""
    groups: dict[str, list[FieldDescriptor]] = {}
    for descriptor in schema:
        groups.setdefault(descriptor.group or DEFAULT_GROUP, []).append(descriptor)
    return list(groups.items())


def parse_range_number(value: Any, constraint: RangeConstraint) -> int:
    """
    Numeric part of a range value ("16px" → 16).

    Accepts ints and floats as-is (truncated). Strings contribute their
    leading integer; anything unparseable becomes the declared minimum.
    """
    if isinstance(value, bool):
        return constraint.min
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    return constraint.min


def clamp(number: int, constraint: RangeConstraint) -> int:
    return max(constraint.min, min(constraint.max, number))


def serialize_range(number: int, constraint: RangeConstraint) -> str:
    return f"{number}{constraint.unit}"


def coerce_field_value(descriptor: FieldDescriptor, raw: Any) -> tuple[bool, Any]:
    """
    Coerce raw control input for one field.
    Returns (ok, value). ok is False only for a single-select value that is
    not among the declared options.
    """
    kind = descriptor.input_kind
    match kind:
        case InputKind.TEXT | InputKind.LONG_TEXT | InputKind.URL | InputKind.COLOR:
            return True, "" if raw is None else str(raw)
        case InputKind.SINGLE_SELECT:
            for option in descriptor.options or ():
                if str(option) == str(raw):
                    return True, option
            return False, raw
        case InputKind.NUMERIC_RANGE:
            constraint = descriptor.range
            if constraint is None:
                return True, "" if raw is None else str(raw)
            number = clamp(parse_range_number(raw, constraint), constraint)
            return True, serialize_range(number, constraint)
        case _:
            assert_never(kind)


def build_control(descriptor: FieldDescriptor, current: Any) -> FieldControl:
    kind = descriptor.input_kind
    value = "" if current is None else current
    match kind:
        case InputKind.TEXT | InputKind.LONG_TEXT | InputKind.URL:
            return FieldControl(key=descriptor.key, label=descriptor.label, kind=kind, value=value)
        case InputKind.SINGLE_SELECT:
            return FieldControl(
                key=descriptor.key,
                label=descriptor.label,
                kind=kind,
                value=value,
                options=descriptor.options or (),
            )
        case InputKind.COLOR:
            return FieldControl(
                key=descriptor.key,
                label=descriptor.label,
                kind=kind,
                value=value,
                swatch=value,
                text=value,
            )
        case InputKind.NUMERIC_RANGE:
            constraint = descriptor.range
            if constraint is None:
                return FieldControl(key=descriptor.key, label=descriptor.label, kind=kind, value=value)
            number = clamp(parse_range_number(value, constraint), constraint)
            return FieldControl(
                key=descriptor.key,
                label=descriptor.label,
                kind=kind,
                value=number,
                min=constraint.min,
                max=constraint.max,
                unit=constraint.unit,
                display=serialize_range(number, constraint),
            )
        case _:
            assert_never(kind)


# ---------------------------------------------------------------------------
# Editor bound to a store
# ---------------------------------------------------------------------------


class PropertyEditor:
    """
    Property panel for whatever the store currently has selected.

    Holds no state of its own: every call re-reads the selection and the
    instance, so the form is never stale after a mutation.
    """

    def __init__(self, store: BuilderStore) -> None:
        self._store = store

    def form(self) -> PropertyForm | None:
        selected_id = self._store.selection.current()
        if selected_id is None:
            return None
        instance = self._store.document.find(selected_id)
        if instance is None:
            return None
        definition = get_definition(instance.type)
        if definition is None:
            return None

        groups = []
        for name, descriptors in group_fields(definition.field_schema):
            controls = [build_control(d, instance.properties.get(d.key)) for d in descriptors]
            groups.append(FieldGroup(name=name, controls=controls))

        return PropertyForm(
            instance_id=instance.id,
            type=instance.type,
            title=definition.name,
            groups=groups,
        )

    def change(self, key: str, raw: Any) -> bool:
        """
        Commit one field edit to the selected instance.
        Issues exactly one store.update on success; nothing otherwise.
        """
        selected_id = self._store.selection.current()
        if selected_id is None:
            return False
        instance = self._store.document.find(selected_id)
        if instance is None:
            return False
        definition = get_definition(instance.type)
        descriptor = definition.field(key) if definition is not None else None
        if descriptor is None:
            logger.warning("editor: no field %r on %s", key, instance.type)
            return False

        ok, value = coerce_field_value(descriptor, raw)
        if not ok:
            logger.warning("editor: %r is not an option of %s.%s", raw, instance.type, key)
            return False

        return self._store.update(selected_id, {key: value})
