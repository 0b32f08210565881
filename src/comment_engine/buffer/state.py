"""Cursor and selection state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Span = Tuple[int, int]  # (start offset, end offset)
Selection = Tuple[Span, ...]


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection tied to a BufferDocument version.

    A selection is an ordered tuple of spans so discontinuous regions
    (several disjoint spans) are first-class.
    """

    cursor: int = 0
    selection: Optional[Selection] = None

    def set_cursor(self, offset: int) -> None:
        self.cursor = offset

    def set_selection(self, *spans: Span) -> None:
        self.selection = tuple(spans) or None
