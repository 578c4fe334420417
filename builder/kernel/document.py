"""
Page Builder Kernel — Document Model

Ordered collection of placed component instances.
Insertion order is render order: top-to-bottom stacking on the canvas.

The sequence only ever grows at the end. Deletion removes exactly one
element and leaves the relative order of the rest untouched. IDs are never
reused, not even after their instance is deleted.

Lookups and mutations against an absent ID are silent no-ops. A stale
handler referring to a deleted instance is not an error.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from typing import Any

from builder.kernel.models import ComponentTypeDefinition
from builder.kernel.types import ComponentInstance, new_instance_id


class Document:
    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._instances: list[ComponentInstance] = []
        self._issued: set[str] = set()
        self._id_factory = id_factory or new_instance_id

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[ComponentInstance]:
        return iter(tuple(self._instances))

    def __contains__(self, instance_id: object) -> bool:
        return self.find(instance_id) is not None  # type: ignore[arg-type]

    def ids(self) -> list[str]:
        return [inst.id for inst in self._instances]

    def instances(self) -> tuple[ComponentInstance, ...]:
        return tuple(self._instances)

    def _allocate_id(self) -> str:
        instance_id = self._id_factory()
        while instance_id in self._issued:
            instance_id = self._id_factory()
        self._issued.add(instance_id)
        return instance_id

    def place(self, definition: ComponentTypeDefinition) -> ComponentInstance:
        """
        Create an instance of `definition` and append it to the end.

        Properties start as a deep copy of the definition's defaults, so
        edits never leak back into the registry or into sibling instances.
        """
        instance = ComponentInstance(
            id=self._allocate_id(),
            type=str(definition.type),
            properties=copy.deepcopy(definition.default_properties),
        )
        self._instances.append(instance)
        return instance

    def find(self, instance_id: str) -> ComponentInstance | None:
        for inst in self._instances:
            if inst.id == instance_id:
                return inst
        return None

    def update(self, instance_id: str, partial: dict[str, Any]) -> bool:
        """
        Shallow-merge `partial` into the instance's properties.
        Returns False (and changes nothing) when the ID is absent.
        """
        inst = self.find(instance_id)
        if inst is None:
            return False
        inst.properties.update(partial)
        return True

    def remove(self, instance_id: str) -> ComponentInstance | None:
        """Delete the matching instance. Returns it, or None if absent."""
        for index, inst in enumerate(self._instances):
            if inst.id == instance_id:
                return self._instances.pop(index)
        return None

