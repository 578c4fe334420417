"""
Page Builder Kernel — Events and Effects

One frozen dataclass per UI event the engine reacts to. The store's
`dispatch` consumes these; the placement reducer consumes the drag subset.

Effects are what the placement reducer asks the store to do after a
transition. The reducer itself never touches the Document.
"""

from __future__ import annotations

from dataclasses import dataclass

from builder.kernel.models import ComponentTypeDefinition

# The only drop target the engine accepts.
CANVAS = "canvas"


# ---------------------------------------------------------------------------
# Drag events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DragStart:
    definition: ComponentTypeDefinition


@dataclass(frozen=True)
class DragEnter:
    target: str = CANVAS


@dataclass(frozen=True)
class DragLeave:
    target: str = CANVAS


@dataclass(frozen=True)
class Drop:
    """
    Pointer released over a target.

    `data` is the transferred string as the browser hands it back. None
    means the drop carried nothing and the session's own transfer string
    is decoded instead.
    """

    target: str = CANVAS
    data: str | None = None


@dataclass(frozen=True)
class DragEnd:
    """Gesture finished or aborted without a drop."""


DragEvent = DragStart | DragEnter | DragLeave | Drop | DragEnd


# ---------------------------------------------------------------------------
# Canvas and toolbar events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectInstance:
    instance_id: str


@dataclass(frozen=True)
class CanvasClick:
    """Click on empty canvas space; clears the selection."""


@dataclass(frozen=True)
class DeleteInstance:
    instance_id: str


@dataclass(frozen=True)
class SetViewport:
    viewport: str


@dataclass(frozen=True)
class ToolbarAction:
    """Save / preview / undo / redo. Accepted but inert."""

    action: str


Event = DragEvent | SelectInstance | CanvasClick | DeleteInstance | SetViewport | ToolbarAction


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlaceComponent:
    definition: ComponentTypeDefinition


@dataclass(frozen=True)
class ReportDecodeFailure:
    reason: str
    data: str | None = None


Effect = PlaceComponent | ReportDecodeFailure
