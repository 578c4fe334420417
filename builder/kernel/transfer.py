"""
Drag transfer encoding.

The dragged ComponentTypeDefinition travels as a JSON string between
drag-start and drop, the way a browser's dataTransfer carries text/plain.
Encoding is lossless: decode(encode(d)) == d.
"""

from __future__ import annotations

from pydantic import ValidationError

from builder.kernel.models import ComponentTypeDefinition


class TransferDecodeError(ValueError):
    """Transferred drag data is not a valid component definition."""


def encode_transfer(definition: ComponentTypeDefinition) -> str:
    return definition.model_dump_json()


def decode_transfer(data: str | bytes | None) -> ComponentTypeDefinition:
    """
    Parse transferred drag data back into a definition.

    Raises TransferDecodeError for missing data, malformed JSON, or JSON that
    does not describe a registered component type.
    """
    if data is None or not data.strip():
        raise TransferDecodeError("no drag data")
    try:
        return ComponentTypeDefinition.model_validate_json(data)
    except ValidationError as e:
        raise TransferDecodeError(f"invalid drag data: {e.error_count()} error(s)") from e
