"""
Page Builder Kernel — the document state engine.

Components:
  registry   — fixed catalog of component types and their field schemas
  document   — ordered collection of placed instances
  placement  — (drag session, drag event) → session + effects  (pure)
  selection  — zero-or-one selected instance
  editor     — schema-driven property form and per-kind coercion
  renderer   — (instance, is_selected) → visual tree  (pure)
  store      — owns document, selection, and drag slot; single write path
"""

from builder.kernel.editor import PropertyEditor
from builder.kernel.placement import reduce_drag
from builder.kernel.registry import get_defaults, get_definition, get_schema, list_categories, list_types
from builder.kernel.renderer import render, render_canvas, render_palette, to_html
from builder.kernel.store import BuilderStore
from builder.kernel.transfer import TransferDecodeError, decode_transfer, encode_transfer

__all__ = [
    "list_types",
    "get_definition",
    "get_schema",
    "get_defaults",
    "list_categories",
    "reduce_drag",
    "encode_transfer",
    "decode_transfer",
    "TransferDecodeError",
    "BuilderStore",
    "PropertyEditor",
    "render",
    "render_canvas",
    "render_palette",
    "to_html",
]
