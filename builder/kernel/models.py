"""Registry models: component type definitions and their field schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from builder.kernel.types import DEFAULT_GROUP, ComponentType, InputKind


class RangeConstraint(BaseModel):
    """Bounds and unit suffix of a numeric-range field."""

    model_config = {"frozen": True, "extra": "forbid"}

    min: int
    max: int
    unit: str = ""

    @model_validator(mode="after")
    def _check_bounds(self) -> RangeConstraint:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self


class FieldDescriptor(BaseModel):
    """One editable property of a component type."""

    model_config = {"frozen": True, "extra": "forbid"}

    key: str = Field(min_length=1)
    label: str
    input_kind: InputKind
    group: str = DEFAULT_GROUP
    options: tuple[str | int, ...] | None = None  # single-select only
    range: RangeConstraint | None = None  # numeric-range only

    @model_validator(mode="after")
    def _check_constraints(self) -> FieldDescriptor:
        if self.input_kind is InputKind.SINGLE_SELECT and not self.options:
            raise ValueError(f"select field '{self.key}' requires options")
        if self.input_kind is InputKind.NUMERIC_RANGE and self.range is None:
            raise ValueError(f"range field '{self.key}' requires a range")
        return self


class ComponentTypeDefinition(BaseModel):
    """
    A component type as the palette offers it.

    Immutable and owned by the registry. Also the drag payload: it is
    serialized to JSON at drag-start and decoded again at drop.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    type: ComponentType
    name: str
    category: str
    default_properties: dict[str, Any] = Field(default_factory=dict)
    field_schema: tuple[FieldDescriptor, ...] = ()

    @model_validator(mode="after")
    def _check_schema_keys(self) -> ComponentTypeDefinition:
        seen: set[str] = set()
        for descriptor in self.field_schema:
            if descriptor.key in seen:
                raise ValueError(f"duplicate field key '{descriptor.key}' in {self.type}")
            seen.add(descriptor.key)
        return self

    def field(self, key: str) -> FieldDescriptor | None:
        for descriptor in self.field_schema:
            if descriptor.key == key:
                return descriptor
        return None
