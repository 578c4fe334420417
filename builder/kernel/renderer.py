"""
Page Builder Kernel — Render Dispatcher

Pure functions: (instance, is_selected) → VNode, (store) → canvas VNode.
No IO. Deterministic: same input → same tree, always.

Each component type maps its properties onto style attributes with a
literal fallback whenever a property is absent or empty. Selection changes
only the outline and adds a delete control bound to the instance ID.
Unregistered types render nothing.

`to_html` serializes a tree to an HTML fragment, escaping all text and
attribute values.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from html import escape as _html_escape
from typing import TYPE_CHECKING, Any, assert_never

from builder.kernel.registry import list_categories
from builder.kernel.types import (
    VIEWPORT_WIDTHS,
    ComponentInstance,
    ComponentType,
    parse_component_type,
)

if TYPE_CHECKING:
    from builder.kernel.store import BuilderStore

# ---------------------------------------------------------------------------
# Visual tree
# ---------------------------------------------------------------------------


@dataclass
class VNode:
    tag: str
    style: dict[str, str] = field(default_factory=dict)
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[VNode | str] = field(default_factory=list)

    def find_all(self, predicate: Callable[[VNode], bool]) -> list[VNode]:
        """Depth-first list of descendant nodes (self included) matching predicate."""
        found = [self] if predicate(self) else []
        for child in self.children:
            if isinstance(child, VNode):
                found.extend(child.find_all(predicate))
        return found

    def text(self) -> str:
        parts = []
        for child in self.children:
            parts.append(child.text() if isinstance(child, VNode) else child)
        return "".join(parts)


SELECTED_OUTLINE = "2px solid #3b82f6"
PLACEHOLDER_BORDER = "2px dashed #dee2e6"
MUTED_TEXT = "#6b7280"

_HEADING_LEVELS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_VOID_TAGS = {"img", "br", "hr", "input"}
_DEFAULT_COLUMN_COUNT = 2
_MAX_COLUMN_COUNT = 12


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(instance: ComponentInstance, is_selected: bool) -> VNode | None:
    """
    Render one placed instance.
    Returns None for an unregistered type. Never raises.
    """
    component_type = parse_component_type(instance.type)
    if component_type is None:
        return None

    props = instance.properties
    match component_type:
        case ComponentType.TEXT:
            node = _render_text(props)
        case ComponentType.HEADING:
            node = _render_heading(props)
        case ComponentType.BUTTON:
            node = _render_button(props)
        case ComponentType.IMAGE:
            node = _render_image(props)
        case ComponentType.CONTAINER:
            node = _render_container(props)
        case ComponentType.COLUMNS:
            node = _render_columns(props)
        case _:
            assert_never(component_type)

    node.style = {**_base_style(is_selected), **node.style}
    node.attrs = {"data-instance-id": instance.id, "data-component-type": instance.type, **node.attrs}
    if is_selected:
        node.children.append(_delete_control(instance.id))
    return node


def render_document(store: BuilderStore) -> list[VNode]:
    """All placed instances in document order, selection highlighted."""
    nodes = []
    for instance in store.document:
        node = render(instance, store.selection.is_selected(instance.id))
        if node is not None:
            nodes.append(node)
    return nodes


def render_canvas(store: BuilderStore) -> VNode:
    """
    The drop target: a frame sized by the viewport, showing either the
    placed instances or an empty-state prompt. Highlighted while a drag
    hovers over it.
    """
    active = store.drop_zone_active
    nodes = render_document(store)

    if nodes:
        body = VNode("div", attrs={"class": "builder-stack"}, children=list(nodes))
    else:
        body = VNode(
            "div",
            attrs={"class": "builder-empty"},
            style={"text-align": "center", "padding": "80px 0"},
            children=[
                VNode("h3", children=["Start Building Your Website"]),
                VNode("p", style={"color": MUTED_TEXT}, children=["Drag components from the sidebar to get started"]),
            ],
        )

    frame = VNode(
        "div",
        attrs={"class": "builder-frame"},
        style={
            "max-width": VIEWPORT_WIDTHS[store.viewport],
            "margin": "0 auto",
            "min-height": "100%",
            "padding": "32px",
            "background-color": "#ffffff",
            "border": "2px dashed #60a5fa" if active else "2px solid #e5e7eb",
        },
        children=[body],
    )
    return VNode(
        "div",
        attrs={
            "class": "builder-canvas",
            "data-drop-target": "canvas",
            "data-drop-active": "true" if active else "false",
            "data-viewport": str(store.viewport),
        },
        style={"padding": "32px", "background-color": "#eff6ff" if active else "#f1f5f9"},
        children=[frame],
    )


def render_palette() -> VNode:
    """Component library sidebar: one section per category, draggable items."""
    sections: list[VNode | str] = [VNode("h2", children=["Components"])]
    for category, definitions in list_categories():
        items: list[VNode | str] = [
            VNode(
                "div",
                attrs={"class": "builder-palette-item", "draggable": "true", "data-component-type": str(d.type)},
                children=[d.name],
            )
            for d in definitions
        ]
        sections.append(
            VNode(
                "section",
                attrs={"data-category": category},
                children=[VNode("h3", children=[category]), *items],
            )
        )
    return VNode("aside", attrs={"class": "builder-palette"}, children=sections)


def to_html(node: VNode | str) -> str:
    """Serialize a visual tree to an HTML fragment."""
    if isinstance(node, str):
        return escape(node)

    parts = [f"<{node.tag}"]
    attrs = dict(node.attrs)
    if node.style:
        attrs["style"] = "; ".join(f"{k}: {v}" for k, v in node.style.items())
    for name, value in attrs.items():
        parts.append(f' {name}="{escape(str(value))}"')
    parts.append(">")

    if node.tag in _VOID_TAGS:
        return "".join(parts)

    parts.extend(to_html(child) for child in node.children)
    parts.append(f"</{node.tag}>")
    return "".join(parts)


def escape(text: str) -> str:
    """HTML-escape text content and attribute values."""
    return _html_escape(str(text), quote=True)


# ---------------------------------------------------------------------------
# Per-type renderers
# ---------------------------------------------------------------------------


def _render_text(props: dict[str, Any]) -> VNode:
    style = {
        "font-size": _prop(props, "fontSize", "16px"),
        "color": _prop(props, "color", "inherit"),
        "text-align": _prop(props, "textAlign", "left"),
        "font-weight": _prop(props, "fontWeight", "normal"),
        "padding": _prop(props, "padding", "8px"),
        "margin": _prop(props, "margin", "8px"),
        "width": _prop(props, "width", "100%"),
        "height": _prop(props, "height", "auto"),
        "min-height": "20px",
        "box-sizing": "border-box",
        "display": "flex",
        "align-items": "center",
    }
    return VNode("div", style=style, children=[_str(props.get("content"))])


def _render_heading(props: dict[str, Any]) -> VNode:
    level = props.get("level")
    tag = level if isinstance(level, str) and level in _HEADING_LEVELS else "h2"
    style = {
        "font-size": _prop(props, "fontSize", "32px"),
        "color": _prop(props, "color", "inherit"),
        "text-align": _prop(props, "textAlign", "left"),
        "font-weight": _prop(props, "fontWeight", "bold"),
        "margin": _prop(props, "margin", "8px"),
        "padding": _prop(props, "padding", "16px"),
        "width": _prop(props, "width", "100%"),
        "height": _prop(props, "height", "auto"),
        "box-sizing": "border-box",
        "display": "flex",
        "align-items": "center",
    }
    return VNode(tag, style=style, children=[_str(props.get("content"))])


def _render_button(props: dict[str, Any]) -> VNode:
    link = VNode(
        "a",
        attrs={"href": _prop(props, "href", "#"), "role": "button"},
        style={
            "background-color": _prop(props, "backgroundColor", "#3b82f6"),
            "color": _prop(props, "color", "#ffffff"),
            "padding": _prop(props, "padding", "12px"),
            "border-radius": _prop(props, "borderRadius", "8px"),
            "font-size": _prop(props, "fontSize", "16px"),
            "border": "none",
            "cursor": "pointer",
            "width": _prop(props, "width", "200px"),
            "height": _prop(props, "height", "45px"),
            "box-sizing": "border-box",
            "display": "flex",
            "align-items": "center",
            "justify-content": "center",
            "text-decoration": "none",
        },
        children=[_str(props.get("text"))],
    )
    return VNode("div", style={"display": "inline-block", "margin": "8px"}, children=[link])


def _render_image(props: dict[str, Any]) -> VNode:
    img = VNode(
        "img",
        attrs={"src": _str(props.get("src")), "alt": _str(props.get("alt"))},
        style={
            "width": _prop(props, "width", "300px"),
            "height": _prop(props, "height", "200px"),
            "border-radius": _prop(props, "borderRadius", "0px"),
            "display": "block",
            "object-fit": _prop(props, "objectFit", "cover"),
            "box-sizing": "border-box",
        },
    )
    return VNode("div", style={"padding": "8px", "display": "inline-block"}, children=[img])


def _render_container(props: dict[str, Any]) -> VNode:
    style = {
        "background-color": _prop(props, "backgroundColor", "transparent"),
        "padding": _prop(props, "padding", "20px"),
        "border-radius": _prop(props, "borderRadius", "0px"),
        "min-height": _prop(props, "minHeight", "100px"),
        "border": _prop(props, "border", PLACEHOLDER_BORDER),
        "margin": _prop(props, "margin", "8px"),
        "width": _prop(props, "width", "100%"),
        "height": _prop(props, "height", "200px"),
        "box-sizing": "border-box",
    }
    hint = VNode(
        "div",
        style={"color": MUTED_TEXT, "text-align": "center", "padding": "20px"},
        children=["Container - Drop components here"],
    )
    return VNode("div", style=style, children=[hint])


def _render_columns(props: dict[str, Any]) -> VNode:
    count = column_count(props.get("columnCount"))
    style = {
        "display": "grid",
        "grid-template-columns": f"repeat({count}, 1fr)",
        "gap": _prop(props, "gap", "20px"),
        "background-color": _prop(props, "backgroundColor", "transparent"),
        "padding": _prop(props, "padding", "10px"),
        "width": _prop(props, "width", "100%"),
        "height": _prop(props, "height", "auto"),
        "margin": "8px 0",
        "border": PLACEHOLDER_BORDER,
        "border-radius": "8px",
        "min-height": "200px",
    }
    # Slots are derived from the count on every render; they are not instances.
    slots: list[VNode | str] = [
        VNode(
            "div",
            attrs={"data-column-slot": str(index)},
            style={
                "min-height": "100px",
                "background-color": "#f8f9fa",
                "border": "1px dashed #dee2e6",
                "border-radius": "4px",
                "display": "flex",
                "align-items": "center",
                "justify-content": "center",
                "color": MUTED_TEXT,
                "font-size": "14px",
            },
            children=[f"Column {index + 1}"],
        )
        for index in range(count)
    ]
    return VNode("div", style=style, children=slots)


def column_count(value: Any) -> int:
    """Slot count from a columnCount property; outside 1..12 or unparseable → 2."""
    if isinstance(value, bool):
        return _DEFAULT_COLUMN_COUNT
    if isinstance(value, int):
        count = value
    elif isinstance(value, str) and re.fullmatch(r"\s*\d+\s*", value):
        count = int(value)
    else:
        return _DEFAULT_COLUMN_COUNT
    return count if 1 <= count <= _MAX_COLUMN_COUNT else _DEFAULT_COLUMN_COUNT


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _base_style(is_selected: bool) -> dict[str, str]:
    return {
        "cursor": "pointer",
        "position": "relative",
        "outline": SELECTED_OUTLINE if is_selected else "none",
        "outline-offset": "2px",
        "margin-bottom": "16px",
    }


def _delete_control(instance_id: str) -> VNode:
    button = VNode(
        "button",
        attrs={"data-action": "delete", "data-target": instance_id, "title": "Delete component"},
        style={"padding": "4px", "color": "#ef4444"},
        children=["Delete"],
    )
    return VNode(
        "div",
        attrs={"class": "builder-controls"},
        style={"position": "absolute", "top": "-32px", "right": "-8px", "z-index": "10"},
        children=[button],
    )


def _prop(props: dict[str, Any], key: str, fallback: str) -> str:
    """Property as a string, or `fallback` when absent or empty."""
    value = props.get(key)
    if value is None or value == "":
        return fallback
    return str(value)


def _str(value: Any) -> str:
    return "" if value is None else str(value)
