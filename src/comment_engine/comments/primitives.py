"""Line-prefix comment and uncomment primitives.

These return edits against the current text instead of mutating anything;
callers batch them into one buffer transaction.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from comment_engine.buffer import Edit
from comment_engine.buffer.document import indentation, is_blank, line_end, line_start
from comment_engine.syntax import CommentSyntax

Segment = Tuple[int, int]


def line_segments(text: str, start: int, end: int) -> List[Segment]:
    """Full ``(start, end)`` bounds of every line touched by ``[start, end]``."""

    segments: List[Segment] = []
    position = line_start(text, start)
    while True:
        stop = line_end(text, position)
        segments.append((position, stop))
        if stop >= end:
            return segments
        position = stop + 1


def comment_segments(
    text: str, segments: Iterable[Segment], marker: str, padding: str = " "
) -> List[Edit]:
    """Prefix each non-blank segment at their shared minimum indentation."""

    filled = [(s, e) for s, e in segments if not is_blank(text[s:e])]
    if not filled:
        return []
    column = min(indentation(text[s:e]) for s, e in filled)
    return [Edit.insert(s + column, marker + padding) for s, _ in filled]


def comment_region(
    text: str, start: int, end: int, syntax: CommentSyntax, padding: str = " "
) -> List[Edit]:
    return comment_segments(text, line_segments(text, start, end), syntax.marker, padding)


def uncomment_region(
    text: str, start: int, end: int, syntax: CommentSyntax
) -> List[Edit]:
    """Strip one marker (plus one space or tab) from each commented line.

    A first line that is code with a trailing comment reaching into the span
    loses that trailing marker instead.
    """

    edits: List[Edit] = []
    first_line = line_start(text, start)
    for position, stop in line_segments(text, start, end):
        first = position == first_line
        lead = position + indentation(text[position:stop])
        if syntax.in_commented_line(text, position):
            if first or lead < end:
                edits.append(strip_marker(text, lead, syntax.marker))
        elif first:
            trailing = syntax.comment_start(text, start)
            if trailing is not None and trailing < end:
                edits.append(strip_marker(text, trailing, syntax.marker))
    return edits


def strip_marker(text: str, at: int, marker: str) -> Edit:
    stop = at + len(marker)
    if text[stop : stop + 1] in (" ", "\t"):
        stop += 1
    return Edit.delete(at, stop)


def merge_insertions(edits: Iterable[Edit]) -> List[Edit]:
    """Fold insertions sharing an offset into one, keeping generation order."""

    merged: List[Edit] = []
    pending: dict[int, int] = {}
    for edit in edits:
        if edit.start != edit.end:
            merged.append(edit)
            continue
        index = pending.get(edit.start)
        if index is None:
            pending[edit.start] = len(merged)
            merged.append(edit)
        else:
            previous = merged[index]
            merged[index] = Edit.insert(edit.start, previous.text + edit.text)
    return merged
