"""Turn a classified span into the edits that toggle it."""

from __future__ import annotations

from typing import List

from comment_engine.buffer import Edit, Span
from comment_engine.buffer.document import is_blank, line_end, line_start
from comment_engine.syntax import CommentSyntax

from .models import ToggleAction
from .primitives import (
    Segment,
    comment_segments,
    line_segments,
    merge_insertions,
    uncomment_region,
)


class TransformApplier:
    """Builds edits for one span; offsets refer to the untouched text."""

    def __init__(self, syntax: CommentSyntax, *, padding: str = " ") -> None:
        self.syntax = syntax
        self.padding = padding

    def apply(self, text: str, span: Span, action: ToggleAction) -> List[Edit]:
        start, end = span
        if action is ToggleAction.UNCOMMENT:
            return uncomment_region(text, start, end, self.syntax)
        return self._comment(text, start, end)

    def _comment(self, text: str, start: int, end: int) -> List[Edit]:
        marker = self.syntax.marker
        first_line = line_start(text, start)
        last_stop = line_end(text, end)
        edits: List[Edit] = []

        # trailing content after ``end`` moves to its own commented line
        split_tail = not is_blank(text[end:last_stop])

        segments: List[Segment] = line_segments(text, start, end)
        if split_tail:
            segments[-1] = (segments[-1][0], end)

        if self.syntax.in_comment(text, start):
            run = self._marker_run_before(text, first_line, start)
            if run is not None:
                run_end = run[1]
                if text[run_end:start] != " ":
                    edits.append(Edit(run_end, start, " "))
                segments = segments[1:]
            else:
                # selected text starts a fresh line of its own
                edits.append(Edit.insert(start, "\n"))
                segments[0] = (start, segments[0][1])

        edits.extend(comment_segments(text, segments, marker, self.padding))

        for run_start, run_end in self.syntax.marker_runs(text, start, end):
            edits.append(Edit.delete(run_start, run_end))

        if split_tail:
            edits.append(Edit.insert(end, "\n" + marker))

        return merge_insertions(edits)

    def _marker_run_before(self, text: str, first_line: int, start: int) -> Span | None:
        """``(run_start, run_end)`` of a marker run that, with optional
        whitespace, sits directly before ``start``; ``None`` otherwise."""

        marker = self.syntax.marker
        width = len(marker)
        before = text[first_line:start]
        run_end = first_line + len(before.rstrip(" \t"))
        run_start = run_end
        while run_start - width >= first_line and text.startswith(
            marker, run_start - width
        ):
            run_start -= width
        if run_start == run_end or self.syntax.is_escaped(text, run_start):
            return None
        return (run_start, run_end)
