"""
Page Builder Kernel — Selection

At most one selected instance ID. `select` does not check existence: a stale
ID is tolerated and simply highlights nothing. The store clears the
selection when the selected instance is removed.
"""

from __future__ import annotations


class Selection:
    def __init__(self) -> None:
        self._current: str | None = None

    def select(self, instance_id: str) -> None:
        self._current = instance_id

    def clear(self) -> None:
        self._current = None

    def current(self) -> str | None:
        return self._current

    def is_selected(self, instance_id: str) -> bool:
        return self._current is not None and self._current == instance_id
