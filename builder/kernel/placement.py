"""
Page Builder Kernel — Drag-Drop Placement Protocol

Pure function: (session, drag event) → PlacementResult
No side effects. Never touches the Document. Never raises.

A session exists only between drag-start and drop/drag-end. `None` is Idle.

    Idle ──drag-start──▶ Dragging ──enter(0→1)──▶ DropZoneArmed
                            ▲                          │
                            └────────leave(1→0)────────┘
    Dragging / DropZoneArmed ──drop──▶ Idle   (+ PlaceComponent | ReportDecodeFailure)
    any ──drag-end──▶ Idle

The nesting depth counts enter/leave pairs on the canvas. Crossing a child
element fires leave on the parent and enter on the child, so the drop zone
is only disarmed once every enter has been matched by a leave.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from builder.kernel.events import (
    CANVAS,
    DragEnd,
    DragEnter,
    DragLeave,
    DragStart,
    Drop,
    Effect,
    PlaceComponent,
    ReportDecodeFailure,
)
from builder.kernel.models import ComponentTypeDefinition
from builder.kernel.transfer import TransferDecodeError, decode_transfer, encode_transfer
from builder.kernel.types import DragPhase

# ---------------------------------------------------------------------------
# Session and result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DragSession:
    payload: ComponentTypeDefinition
    transfer_data: str
    drop_zone_active: bool = False
    nesting_depth: int = 0

    @property
    def phase(self) -> DragPhase:
        return DragPhase.DROP_ZONE_ARMED if self.drop_zone_active else DragPhase.DRAGGING


@dataclass
class PlacementResult:
    session: DragSession | None
    applied: bool
    error: str | None = None
    effects: list[Effect] = field(default_factory=list)

    @property
    def phase(self) -> DragPhase:
        return phase_of(self.session)


def phase_of(session: DragSession | None) -> DragPhase:
    if session is None:
        return DragPhase.IDLE
    return session.phase


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def reduce_drag(session: DragSession | None, event: object) -> PlacementResult:
    """
    Apply one drag event to the current session.

    Sessions are frozen, so the input is never modified; transitions
    return a replacement (or None once the gesture is over).
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return _reject(session, "UNKNOWN_EVENT", type(event).__name__)
    return handler(session, event)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(session: DragSession | None, code: str, msg: str) -> PlacementResult:
    return PlacementResult(session=session, applied=False, error=f"{code}: {msg}")


def _ok(session: DragSession | None, effects: list[Effect] | None = None) -> PlacementResult:
    return PlacementResult(session=session, applied=True, effects=effects or [])


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_drag_start(session: DragSession | None, event: DragStart) -> PlacementResult:
    # Single slot: a second gesture cannot start until the first one ends.
    if session is not None:
        return _reject(session, "SESSION_ACTIVE", f"already dragging {session.payload.type}")
    return _ok(DragSession(payload=event.definition, transfer_data=encode_transfer(event.definition)))


def _handle_drag_enter(session: DragSession | None, event: DragEnter) -> PlacementResult:
    if event.target != CANVAS:
        return _reject(session, "WRONG_TARGET", event.target)
    if session is None:
        return _reject(session, "NO_SESSION", "drag-enter while idle")
    depth = session.nesting_depth + 1
    return _ok(
        dataclasses.replace(
            session,
            nesting_depth=depth,
            drop_zone_active=session.drop_zone_active or depth == 1,
        )
    )


def _handle_drag_leave(session: DragSession | None, event: DragLeave) -> PlacementResult:
    if event.target != CANVAS:
        return _reject(session, "WRONG_TARGET", event.target)
    if session is None:
        return _reject(session, "NO_SESSION", "drag-leave while idle")
    depth = max(session.nesting_depth - 1, 0)
    return _ok(
        dataclasses.replace(
            session,
            nesting_depth=depth,
            drop_zone_active=session.drop_zone_active and depth > 0,
        )
    )


def _handle_drop(session: DragSession | None, event: Drop) -> PlacementResult:
    if event.target != CANVAS:
        return _reject(session, "WRONG_TARGET", event.target)

    data = event.data
    if data is None and session is not None:
        data = session.transfer_data

    # Counter reset and zone clear happen by discarding the session.
    try:
        definition = decode_transfer(data)
    except TransferDecodeError as e:
        return PlacementResult(
            session=None,
            applied=False,
            error=f"DECODE_FAILED: {e}",
            effects=[ReportDecodeFailure(reason=str(e), data=data)],
        )

    return _ok(None, [PlaceComponent(definition=definition)])


def _handle_drag_end(session: DragSession | None, event: DragEnd) -> PlacementResult:
    return _ok(None)


_HANDLERS = {
    DragStart: _handle_drag_start,
    DragEnter: _handle_drag_enter,
    DragLeave: _handle_drag_leave,
    Drop: _handle_drop,
    DragEnd: _handle_drag_end,
}
