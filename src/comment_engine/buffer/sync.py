"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Selection, Span


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: int
    selection: Optional[Selection]
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How adapters exchange text and selections with the buffer layer."""

    def pull_buffer(self) -> BufferMirror:
        """Return the host's current text, cursor and selection."""
        ...

    def push_buffer(self, mirror: BufferMirror) -> None:
        """Write an updated buffer back into the host widget."""
        ...


class BufferValidationError(RuntimeError):
    """Raised for out-of-range offsets, overlapping spans or clashing edits."""

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        span: Span | None = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.span = span
