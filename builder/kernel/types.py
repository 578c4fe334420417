"""
Page Builder Kernel — Shared Types

Data classes and constants used across registry, document, placement,
editor, renderer, and store. These are the contracts that bind the kernel
together.

Key points:
- `ComponentType` is a closed set. The renderer and editor match on it
  exhaustively, so a seventh type fails type-checking until it is handled.
- Instances are plain mutable dataclasses owned by the Document.
- Reducers never raise. They return a result object with `applied` and an
  `error` string of the form "CODE: message".
"""

from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Closed type sets
# ---------------------------------------------------------------------------


class ComponentType(StrEnum):
    TEXT = "text"
    HEADING = "heading"
    BUTTON = "button"
    IMAGE = "image"
    CONTAINER = "container"
    COLUMNS = "columns"


class InputKind(StrEnum):
    TEXT = "text"
    LONG_TEXT = "long-text"
    SINGLE_SELECT = "single-select"
    COLOR = "color"
    NUMERIC_RANGE = "numeric-range"
    URL = "url"


class Viewport(StrEnum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


class DragPhase(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROP_ZONE_ARMED = "drop_zone_armed"


class ToolbarActionName(StrEnum):
    SAVE = "save"
    PREVIEW = "preview"
    UNDO = "undo"
    REDO = "redo"


# Canvas max-width per viewport. Only the canvas frame reads this.
VIEWPORT_WIDTHS: dict[Viewport, str] = {
    Viewport.MOBILE: "24rem",
    Viewport.TABLET: "42rem",
    Viewport.DESKTOP: "72rem",
}

DEFAULT_GROUP = "General"


def parse_component_type(value: Any) -> ComponentType | None:
    """Return the ComponentType for a raw value, or None if unregistered."""
    try:
        return ComponentType(value)
    except ValueError:
        return None


def parse_viewport(value: Any) -> Viewport | None:
    try:
        return Viewport(value)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Instance IDs
# ---------------------------------------------------------------------------

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_instance_id(prefix: str = "component") -> str:
    """
    Generate an instance ID: <prefix>_<epoch-ms>_<9 random base36 chars>.

    Collisions are possible in theory; the Document rejects any ID it has
    already issued and asks for another.
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class ComponentInstance:
    """
    A placed occurrence of a component type.

    `id` and `type` are fixed at creation. `properties` starts as a copy of
    the type's defaults and is overwritten key by key through edits.
    """

    id: str
    type: str
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class DispatchResult:
    """
    Result of dispatching one UI event through the store.
    The store never raises; it always returns one of these.
    """

    applied: bool
    error: str | None = None
    effects: list[Any] = field(default_factory=list)
