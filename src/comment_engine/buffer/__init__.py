"""Buffer abstractions: document storage, selection state and batched edits."""

from .buffer import (
    Buffer,
    BufferDelta,
    Edit,
    Transaction,
    apply_edits,
    remap_offset,
    validate_edits,
)
from .document import BufferDocument, Position
from .state import BufferState, Selection, Span
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import ensure_offset, ensure_span, ensure_spans

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferSync",
    "BufferValidationError",
    "Edit",
    "Position",
    "Selection",
    "Span",
    "Transaction",
    "apply_edits",
    "ensure_offset",
    "ensure_span",
    "ensure_spans",
    "remap_offset",
    "validate_edits",
]
