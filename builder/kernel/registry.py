"""
Page Builder Kernel — Component Registry

The fixed catalog of component types: display name, palette category,
default properties, and the editable-field schema that drives the
property editor.

Pure and stateless. Built once at import time and never loaded at runtime.
Lookups for unregistered type strings return None / empty values rather
than raising.
"""

from __future__ import annotations

import copy
from typing import Any

from builder.kernel.models import ComponentTypeDefinition, FieldDescriptor, RangeConstraint
from builder.kernel.types import ComponentType, InputKind, parse_component_type

# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _text(key: str, label: str, group: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, input_kind=InputKind.TEXT, group=group)


def _long_text(key: str, label: str, group: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, input_kind=InputKind.LONG_TEXT, group=group)


def _url(key: str, label: str, group: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, input_kind=InputKind.URL, group=group)


def _color(key: str, label: str, group: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, input_kind=InputKind.COLOR, group=group)


def _select(key: str, label: str, options: list[str | int], group: str) -> FieldDescriptor:
    return FieldDescriptor(
        key=key,
        label=label,
        input_kind=InputKind.SINGLE_SELECT,
        group=group,
        options=tuple(options),
    )


def _range(key: str, label: str, lo: int, hi: int, unit: str, group: str) -> FieldDescriptor:
    return FieldDescriptor(
        key=key,
        label=label,
        input_kind=InputKind.NUMERIC_RANGE,
        group=group,
        range=RangeConstraint(min=lo, max=hi, unit=unit),
    )


_ALIGN = ["left", "center", "right"]

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

_LIBRARY: tuple[ComponentTypeDefinition, ...] = (
    ComponentTypeDefinition(
        type=ComponentType.TEXT,
        name="Text Block",
        category="Basic",
        default_properties={
            "content": "Your text here...",
            "fontSize": "16px",
            "color": "#333333",
            "textAlign": "left",
            "fontWeight": "normal",
            "width": "100%",
            "height": "40px",
            "padding": "8px",
            "margin": "8px",
        },
        field_schema=(
            _long_text("content", "Content", "Content"),
            _select("fontSize", "Font Size", ["12px", "14px", "16px", "18px", "20px", "24px"], "Style"),
            _color("color", "Text Color", "Style"),
            _select("textAlign", "Text Align", _ALIGN, "Style"),
            _select("fontWeight", "Font Weight", ["normal", "bold", "300", "400", "500", "600", "700"], "Style"),
            _range("width", "Width", 50, 100, "%", "Size"),
            _range("height", "Height", 20, 200, "px", "Size"),
            _range("padding", "Padding", 0, 50, "px", "Size"),
            _range("margin", "Margin", 0, 50, "px", "Size"),
        ),
    ),
    ComponentTypeDefinition(
        type=ComponentType.HEADING,
        name="Heading",
        category="Basic",
        default_properties={
            "content": "Your Heading",
            "level": "h2",
            "fontSize": "32px",
            "color": "#1a1a1a",
            "textAlign": "left",
            "fontWeight": "bold",
            "width": "100%",
            "height": "60px",
            "padding": "16px",
            "margin": "8px",
        },
        field_schema=(
            _text("content", "Heading Text", "Content"),
            _select("level", "Heading Level", ["h1", "h2", "h3", "h4", "h5", "h6"], "Content"),
            _select("fontSize", "Font Size", ["18px", "24px", "32px", "40px", "48px", "56px"], "Style"),
            _color("color", "Color", "Style"),
            _select("textAlign", "Text Align", _ALIGN, "Style"),
            _range("width", "Width", 30, 100, "%", "Size"),
            _range("height", "Height", 30, 150, "px", "Size"),
            _range("padding", "Padding", 0, 50, "px", "Size"),
            _range("margin", "Margin", 0, 50, "px", "Size"),
        ),
    ),
    ComponentTypeDefinition(
        type=ComponentType.BUTTON,
        name="Button",
        category="Basic",
        default_properties={
            "text": "Click Me",
            "backgroundColor": "#3b82f6",
            "color": "#ffffff",
            "padding": "12px",
            "borderRadius": "8px",
            "fontSize": "16px",
            "href": "#",
            "width": "200px",
            "height": "45px",
        },
        field_schema=(
            _text("text", "Button Text", "Content"),
            _url("href", "Link URL", "Content"),
            _color("backgroundColor", "Background Color", "Style"),
            _color("color", "Text Color", "Style"),
            _select("fontSize", "Font Size", ["12px", "14px", "16px", "18px", "20px"], "Style"),
            _select("borderRadius", "Border Radius", ["0px", "4px", "8px", "12px", "16px", "24px"], "Style"),
            _range("width", "Width", 80, 400, "px", "Size"),
            _range("height", "Height", 25, 80, "px", "Size"),
            _range("padding", "Padding", 5, 30, "px", "Size"),
        ),
    ),
    ComponentTypeDefinition(
        type=ComponentType.IMAGE,
        name="Image",
        category="Media",
        default_properties={
            "src": "https://via.placeholder.com/300x200?text=Your+Image",
            "alt": "Image description",
            "width": "300px",
            "height": "200px",
            "borderRadius": "0px",
            "objectFit": "cover",
        },
        field_schema=(
            _url("src", "Image URL", "Content"),
            _text("alt", "Alt Text", "Content"),
            _select("borderRadius", "Border Radius", ["0px", "4px", "8px", "12px", "16px"], "Style"),
            _range("width", "Width", 50, 800, "px", "Size"),
            _range("height", "Height", 50, 600, "px", "Size"),
            _select("objectFit", "Image Fit", ["cover", "contain", "fill", "scale-down"], "Style"),
        ),
    ),
    ComponentTypeDefinition(
        type=ComponentType.CONTAINER,
        name="Container",
        category="Layout",
        default_properties={
            "backgroundColor": "#f8f9fa",
            "padding": "20px",
            "borderRadius": "8px",
            "minHeight": "100px",
            "border": "2px dashed #dee2e6",
            "width": "100%",
            "height": "200px",
            "margin": "8px",
        },
        field_schema=(
            _color("backgroundColor", "Background Color", "Style"),
            _range("padding", "Padding", 0, 100, "px", "Style"),
            _select("borderRadius", "Border Radius", ["0px", "4px", "8px", "12px", "16px"], "Style"),
            _range("width", "Width", 20, 100, "%", "Size"),
            _range("height", "Height", 50, 800, "px", "Size"),
            _range("margin", "Margin", 0, 50, "px", "Size"),
        ),
    ),
    ComponentTypeDefinition(
        type=ComponentType.COLUMNS,
        name="2 Columns",
        category="Layout",
        default_properties={
            "columnCount": 2,
            "gap": "20px",
            "backgroundColor": "transparent",
            "padding": "10px",
            "width": "100%",
            "height": "300px",
        },
        field_schema=(
            _select("columnCount", "Columns", [1, 2, 3, 4], "Layout"),
            _select("gap", "Gap", ["10px", "20px", "30px", "40px"], "Layout"),
            _color("backgroundColor", "Background", "Style"),
            _range("padding", "Padding", 0, 60, "px", "Style"),
            _range("width", "Width", 30, 100, "%", "Size"),
            _range("height", "Height", 100, 800, "px", "Size"),
        ),
    ),
)

_BY_TYPE: dict[ComponentType, ComponentTypeDefinition] = {d.type: d for d in _LIBRARY}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_types() -> tuple[ComponentTypeDefinition, ...]:
    """All component types in palette order."""
    return _LIBRARY


def get_definition(type: str) -> ComponentTypeDefinition | None:
    component_type = parse_component_type(type)
    if component_type is None:
        return None
    return _BY_TYPE.get(component_type)


def get_schema(type: str) -> tuple[FieldDescriptor, ...]:
    """Ordered field schema for a type. Empty for unregistered types."""
    definition = get_definition(type)
    if definition is None:
        return ()
    return definition.field_schema


def get_defaults(type: str) -> dict[str, Any]:
    """
    Default properties for a type.
    Returns a fresh copy; callers may mutate it freely.
    """
    definition = get_definition(type)
    if definition is None:
        return {}
    return copy.deepcopy(definition.default_properties)


def list_categories() -> list[tuple[str, list[ComponentTypeDefinition]]]:
    """Palette groups as (category, definitions), categories in first-seen order."""
    groups: dict[str, list[ComponentTypeDefinition]] = {}
    for definition in _LIBRARY:
        groups.setdefault(definition.category, []).append(definition)
    return list(groups.items())
