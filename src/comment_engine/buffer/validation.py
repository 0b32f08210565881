"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Iterable

from .state import Selection, Span
from .sync import BufferValidationError


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_span(length: int, span: Span) -> Span:
    start, end = span
    ensure_offset(length, start)
    ensure_offset(length, end)
    if start > end:
        start, end = end, start
    return (start, end)


def ensure_spans(length: int, spans: Iterable[Span]) -> Selection:
    """Order spans by position and reject any pair that overlaps."""

    ordered = sorted(ensure_span(length, span) for span in spans)
    for previous, current in zip(ordered, ordered[1:]):
        if current[0] < previous[1]:
            raise BufferValidationError("Selection spans overlap", span=current)
    return tuple(ordered)
