"""
Page Builder Kernel — Store

Sits between the pure pieces (placement reducer, renderer, editor helpers)
and the UI event source. Owns the Document, the Selection, the single drag
session slot, and the viewport. Every write goes through a method here.

Operations: dispatch (UI events), place, update, remove, select,
clear_selection, set_viewport, subscribe.

Mutations are serialized by one re-entrant lock, so a drop's counter reset,
placement, and selection are observed as one step. Subscribers run after
each applied mutation, still inside the lock, and see the new state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from builder.config import settings
from builder.kernel.document import Document
from builder.kernel.events import (
    CanvasClick,
    DeleteInstance,
    DragEnd,
    DragEnter,
    DragLeave,
    DragStart,
    Drop,
    PlaceComponent,
    ReportDecodeFailure,
    SelectInstance,
    SetViewport,
    ToolbarAction,
)
from builder.kernel.models import ComponentTypeDefinition
from builder.kernel.placement import DragSession, phase_of, reduce_drag
from builder.kernel.selection import Selection
from builder.kernel.types import (
    ComponentInstance,
    DispatchResult,
    DragPhase,
    ToolbarActionName,
    Viewport,
    new_instance_id,
    parse_viewport,
)

logger = logging.getLogger(__name__)

Listener = Callable[["BuilderStore"], None]

_DRAG_EVENTS = (DragStart, DragEnter, DragLeave, Drop, DragEnd)


class BuilderStore:
    def __init__(
        self,
        *,
        viewport: Viewport | str | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.document = Document(id_factory or (lambda: new_instance_id(settings.ID_PREFIX)))
        self.selection = Selection()
        self._drag: DragSession | None = None
        if viewport is None:
            viewport = settings.DEFAULT_VIEWPORT
        parsed = parse_viewport(viewport)
        if parsed is None:
            raise ValueError(f"unknown viewport: {viewport!r}")
        self._viewport = parsed
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    # -- read side ----------------------------------------------------------

    @property
    def drag_session(self) -> DragSession | None:
        return self._drag

    @property
    def drag_phase(self) -> DragPhase:
        return phase_of(self._drag)

    @property
    def drop_zone_active(self) -> bool:
        return self._drag is not None and self._drag.drop_zone_active

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def selected_instance(self) -> ComponentInstance | None:
        """The selected instance, or None when nothing (or something stale) is selected."""
        selected_id = self.selection.current()
        if selected_id is None:
            return None
        return self.document.find(selected_id)

    # -- subscribers --------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(store)` after every applied mutation. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("store: listener %r failed", listener)

    # -- owner methods ------------------------------------------------------

    def place(self, definition: ComponentTypeDefinition) -> ComponentInstance:
        with self._lock:
            instance = self.document.place(definition)
            logger.debug("store: placed %s id=%s", instance.type, instance.id)
            self._notify()
            return instance

    def update(self, instance_id: str, partial: dict[str, Any]) -> bool:
        with self._lock:
            if not self.document.update(instance_id, partial):
                return False
            self._notify()
            return True

    def remove(self, instance_id: str) -> ComponentInstance | None:
        """Delete an instance; a selection pointing at it is cleared in the same step."""
        with self._lock:
            removed = self.document.remove(instance_id)
            if removed is None:
                return None
            if self.selection.current() == instance_id:
                self.selection.clear()
            logger.debug("store: removed %s id=%s", removed.type, removed.id)
            self._notify()
            return removed

    def select(self, instance_id: str) -> None:
        with self._lock:
            self.selection.select(instance_id)
            self._notify()

    def clear_selection(self) -> None:
        with self._lock:
            self.selection.clear()
            self._notify()

    def set_viewport(self, viewport: Viewport | str) -> bool:
        parsed = parse_viewport(viewport)
        if parsed is None:
            return False
        with self._lock:
            self._viewport = parsed
            self._notify()
            return True

    # -- event dispatch -----------------------------------------------------

    def dispatch(self, event: object) -> DispatchResult:
        """
        Apply one UI event. Never raises.

        Drag events go through the placement reducer; its effects are applied
        here before the lock is released.
        """
        with self._lock:
            if isinstance(event, _DRAG_EVENTS):
                return self._dispatch_drag(event)

            match event:
                case SelectInstance(instance_id=instance_id):
                    self.select(instance_id)
                case CanvasClick():
                    self.clear_selection()
                case DeleteInstance(instance_id=instance_id):
                    if self.remove(instance_id) is None:
                        return DispatchResult(applied=False)
                case SetViewport(viewport=viewport):
                    if not self.set_viewport(viewport):
                        return DispatchResult(applied=False, error=f"INVALID_VIEWPORT: {viewport}")
                case ToolbarAction(action=action):
                    try:
                        ToolbarActionName(action)
                    except ValueError:
                        return DispatchResult(applied=False, error=f"UNKNOWN_EVENT: toolbar action {action!r}")
                    logger.debug("store: toolbar action %r has no handler", action)
                    return DispatchResult(applied=False, error=f"NOT_IMPLEMENTED: {action}")
                case _:
                    return DispatchResult(applied=False, error=f"UNKNOWN_EVENT: {type(event).__name__}")
            return DispatchResult(applied=True)

    def _dispatch_drag(self, event: object) -> DispatchResult:
        result = reduce_drag(self._drag, event)
        session_changed = result.session != self._drag
        self._drag = result.session

        for effect in result.effects:
            match effect:
                case PlaceComponent(definition=definition):
                    instance = self.document.place(definition)
                    self.selection.select(instance.id)
                    logger.debug("store: dropped %s id=%s", instance.type, instance.id)
                case ReportDecodeFailure(reason=reason, data=data):
                    logger.warning(
                        "store: failed to parse dropped data: %s (%r)",
                        reason,
                        (data or "")[:200],
                    )

        if session_changed or result.effects:
            self._notify()
        return DispatchResult(applied=result.applied, error=result.error, effects=list(result.effects))
