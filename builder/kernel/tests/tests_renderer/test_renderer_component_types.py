"""
Renderer -- Per-Type Rendering

Covers:
  - Default properties map onto the expected style attributes
  - Absent or empty properties fall back to literals (never "undefined")
  - Selection changes only the outline and appends a delete control
  - Heading tag follows the level property; columns slot count follows columnCount
  - Unregistered types render nothing
"""

import pytest

from builder.kernel.registry import get_defaults, get_definition
from builder.kernel.renderer import (
    PLACEHOLDER_BORDER,
    SELECTED_OUTLINE,
    column_count,
    render,
    render_document,
)
from builder.kernel.types import ComponentInstance, ComponentType


def instance(type_name, **overrides):
    properties = get_defaults(type_name)
    properties.update(overrides)
    return ComponentInstance(id="component_1", type=type_name, properties=properties)


def bare(type_name):
    return ComponentInstance(id="component_1", type=type_name, properties={})


def slots(node):
    return node.find_all(lambda n: "data-column-slot" in n.attrs)


def delete_controls(node):
    return node.find_all(lambda n: n.attrs.get("data-action") == "delete")


def without_outline(style):
    return {k: v for k, v in style.items() if k != "outline"}


class TestSelection:
    @pytest.mark.parametrize("type_name", [str(t) for t in ComponentType])
    def test_only_outline_differs(self, type_name):
        inst = instance(type_name)
        plain = render(inst, False)
        chosen = render(inst, True)

        assert plain.style["outline"] == "none"
        assert chosen.style["outline"] == SELECTED_OUTLINE
        assert without_outline(plain.style) == without_outline(chosen.style)

    @pytest.mark.parametrize("type_name", [str(t) for t in ComponentType])
    def test_delete_control_only_when_selected(self, type_name):
        inst = instance(type_name)
        assert delete_controls(render(inst, False)) == []
        controls = delete_controls(render(inst, True))
        assert len(controls) == 1
        assert controls[0].attrs["data-target"] == "component_1"

    def test_instance_attributes(self):
        node = render(instance("image"), False)
        assert node.attrs["data-instance-id"] == "component_1"
        assert node.attrs["data-component-type"] == "image"

    def test_render_does_not_mutate_properties(self):
        inst = instance("text")
        before = dict(inst.properties)
        render(inst, True)
        assert inst.properties == before


class TestText:
    def test_defaults(self):
        node = render(instance("text"), False)
        assert node.text() == "Your text here..."
        assert node.style["font-size"] == "16px"
        assert node.style["color"] == "#333333"
        assert node.style["height"] == "40px"

    def test_fallbacks(self):
        node = render(bare("text"), False)
        assert node.style["width"] == "100%"
        assert node.style["height"] == "auto"
        assert node.style["font-weight"] == "normal"
        assert node.text() == ""

    def test_empty_string_uses_fallback(self):
        node = render(instance("text", fontSize=""), False)
        assert node.style["font-size"] == "16px"


class TestHeading:
    def test_default_level(self):
        assert render(instance("heading"), False).tag == "h2"

    def test_level_follows_property(self):
        assert render(instance("heading", level="h4"), False).tag == "h4"

    @pytest.mark.parametrize("level", ["h9", "", None, "div"])
    def test_invalid_level_falls_back(self, level):
        assert render(instance("heading", level=level), False).tag == "h2"

    @pytest.mark.parametrize("level", [["h1"], {"h1": 1}, 3])
    def test_non_string_level_falls_back(self, level):
        assert render(instance("heading", level=level), False).tag == "h2"

    def test_fallbacks(self):
        node = render(bare("heading"), False)
        assert node.style["font-weight"] == "bold"
        assert node.style["height"] == "auto"


class TestButton:
    def test_link_and_label(self):
        node = render(instance("button", text="Buy Now", href="https://example.com/buy"), False)
        (link,) = node.find_all(lambda n: n.tag == "a")
        assert link.attrs["href"] == "https://example.com/buy"
        assert link.attrs["role"] == "button"
        assert link.text() == "Buy Now"
        assert link.style["background-color"] == "#3b82f6"

    def test_fallbacks(self):
        (link,) = render(bare("button"), False).find_all(lambda n: n.tag == "a")
        assert link.attrs["href"] == "#"
        assert link.style["width"] == "200px"
        assert link.style["height"] == "45px"


class TestImage:
    def test_src_and_alt(self):
        (img,) = render(instance("image"), False).find_all(lambda n: n.tag == "img")
        assert img.attrs["src"].startswith("https://via.placeholder.com/")
        assert img.attrs["alt"] == "Image description"
        assert img.style["object-fit"] == "cover"

    def test_fallbacks(self):
        (img,) = render(bare("image"), False).find_all(lambda n: n.tag == "img")
        assert img.style["width"] == "300px"
        assert img.style["border-radius"] == "0px"


class TestContainer:
    def test_placeholder_hint(self):
        node = render(instance("container"), False)
        assert "Container - Drop components here" in node.text()
        assert node.style["background-color"] == "#f8f9fa"

    def test_fallbacks(self):
        node = render(instance("container", border="", backgroundColor=None), False)
        assert node.style["border"] == PLACEHOLDER_BORDER
        assert node.style["background-color"] == "transparent"


class TestColumns:
    def test_default_two_slots(self):
        node = render(instance("columns"), False)
        assert len(slots(node)) == 2
        assert node.style["grid-template-columns"] == "repeat(2, 1fr)"

    def test_slot_count_follows_update(self, store):
        inst = store.place(get_definition("columns"))
        store.update(inst.id, {"columnCount": 3})
        (node,) = render_document(store)
        assert len(slots(node)) == 3
        assert [s.text() for s in slots(node)] == ["Column 1", "Column 2", "Column 3"]

    def test_fallbacks(self):
        node = render(bare("columns"), False)
        assert len(slots(node)) == 2
        assert node.style["width"] == "100%"
        assert node.style["height"] == "auto"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (3, 3), ("4", 4), (1, 1), (12, 12),
            (0, 2), (-1, 2), (13, 2), ("100000000", 2),
            ("abc", 2), (None, 2), (True, 2), (2.5, 2),
        ],
    )
    def test_column_count(self, value, expected):
        assert column_count(value) == expected


class TestUnregistered:
    def test_unknown_type_renders_nothing(self):
        inst = ComponentInstance(id="component_9", type="carousel", properties={})
        assert render(inst, False) is None
        assert render(inst, True) is None


class TestRenderDocument:
    def test_order_and_selection(self, store):
        a = store.place(get_definition("heading"))
        b = store.place(get_definition("text"))
        store.select(b.id)
        nodes = render_document(store)
        assert [n.attrs["data-instance-id"] for n in nodes] == [a.id, b.id]
        assert [n.style["outline"] for n in nodes] == ["none", SELECTED_OUTLINE]
