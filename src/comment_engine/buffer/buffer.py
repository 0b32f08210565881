"""Buffer façade combining document, state and batched edits."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, List, Optional, Sequence

from comment_engine.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Selection, Span
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_offset, ensure_spans


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace ``[start, end)`` of the pre-edit text with ``text``."""

    start: int
    end: int
    text: str = ""

    @classmethod
    def insert(cls, offset: int, text: str) -> "Edit":
        return cls(offset, offset, text)

    @classmethod
    def delete(cls, start: int, end: int) -> "Edit":
        return cls(start, end, "")

    @property
    def delta(self) -> int:
        return len(self.text) - (self.end - self.start)

    @property
    def is_noop(self) -> bool:
        return self.start == self.end and not self.text


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: int
    selection: Optional[Selection]
    label: str
    edits: tuple[Edit, ...] = ()


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_mirror(cls, mirror: BufferMirror, *, name: str = "default") -> "Buffer":
        """Rebuild a buffer from a host snapshot."""

        buffer = cls.from_text(mirror.text, name=name)
        buffer.state.set_cursor(ensure_offset(buffer.document.length, mirror.cursor))
        if mirror.selection:
            buffer.state.set_selection(*mirror.selection)
        return buffer

    @property
    def text(self) -> str:
        return self.document.text

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
            attributes=dict(attributes or {}),
        )

    def selection_spans(self) -> Selection:
        """Ordered, non-overlapping, non-empty spans of the active selection.

        Collapsed spans carry no region and are dropped, so an all-collapsed
        selection reads as no selection at all.
        """

        spans = self.state.selection or ()
        ordered = ensure_spans(self.document.length, spans)
        return tuple(span for span in ordered if span[0] != span[1])

    def apply_edits(
        self,
        edits: Iterable[Edit],
        *,
        label: str,
        selection: Optional[Sequence[Span]] = None,
    ) -> BufferDelta:
        """Apply a batch of edits atomically.

        All offsets refer to the current text. Nothing changes unless every
        edit validates. The cursor follows the edits; ``selection``, when
        given, replaces the active selection afterwards.
        """

        batch = tuple(edit for edit in edits if not edit.is_noop)
        with Transaction(self, label) as tx:
            before_text = self.text
            ordered = validate_edits(batch, len(before_text))
            after_text = apply_edits(before_text, ordered)
            cursor = remap_offset(self.state.cursor, ordered, after_insert=True)
            self.document = self.document.replace_text(after_text)
            self.state.set_cursor(cursor)
            if selection is not None:
                self.state.set_selection(*selection)
            tx.commit(ordered)

        return BufferDelta(
            version=self.document.version,
            text=after_text,
            cursor=self.state.cursor,
            selection=self.state.selection,
            label=label,
            edits=ordered,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.edits: tuple[Edit, ...] = ()
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def commit(self, edits: tuple[Edit, ...]) -> None:
        self.edits = edits
        if self._handle is not None:
            self._handle.add_metadata("edits", len(edits))
            self._handle.add_metadata("version", self.buffer.document.version)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def validate_edits(edits: Iterable[Edit], length: int) -> tuple[Edit, ...]:
    """Sort edits by position; reject out-of-range, overlapping or ambiguous ones."""

    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))
    for edit in ordered:
        if edit.start > edit.end:
            raise BufferValidationError("Edit ends before it starts", offset=edit.start)
        ensure_offset(length, edit.start)
        ensure_offset(length, edit.end)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.end > current.start:
            raise BufferValidationError(
                "Edits overlap", span=(current.start, current.end)
            )
        if previous.start == previous.end == current.start == current.end:
            # two insertions at one offset have no defined order
            raise BufferValidationError(
                "Multiple insertions at one offset", offset=current.start
            )
    return tuple(ordered)


def apply_edits(text: str, edits: Sequence[Edit]) -> str:
    """Rebuild ``text`` with validated, position-ordered ``edits`` applied."""

    pieces: List[str] = []
    position = 0
    for edit in edits:
        pieces.append(text[position : edit.start])
        pieces.append(edit.text)
        position = edit.end
    pieces.append(text[position:])
    return "".join(pieces)


def remap_offset(offset: int, edits: Sequence[Edit], *, after_insert: bool = False) -> int:
    """Translate a pre-edit offset into the post-edit text.

    An insertion exactly at ``offset`` pushes it forward only when
    ``after_insert`` is set. An offset inside a replaced range lands on the
    start of the replacement (or its end with ``after_insert``).
    """

    shift = 0
    for edit in sorted(edits, key=lambda item: (item.start, item.end)):
        if edit.start > offset:
            break
        if edit.start == edit.end == offset:
            if after_insert:
                shift += len(edit.text)
            continue
        if edit.end <= offset:
            shift += edit.delta
            continue
        if edit.start == offset:
            break
        return edit.start + shift + (len(edit.text) if after_insert else 0)
    return offset + shift
