"""Span classification: is a span commented, uncommented, or neither?

A span only gets a definite status when its comment state is uniform.
Blank lines are neutral and fit either state. Everything else that mixes
code and comments is reported ``INVALID`` rather than guessed at.
"""

from __future__ import annotations

from typing import Optional

from comment_engine.buffer import Span
from comment_engine.buffer.document import (
    indentation,
    is_blank,
    line_end,
    line_index,
    line_start,
)
from comment_engine.runtime import telemetry
from comment_engine.syntax import CommentSyntax, Direction

from .models import SpanReport, SpanStatus


class SpanClassifier:
    def __init__(self, syntax: CommentSyntax, *, logger_name: str | None = None) -> None:
        self.syntax = syntax
        self._logger_name = logger_name or "comment_engine.comments"

    def classify(self, text: str, span: Span) -> SpanStatus:
        return self.inspect(text, span).status

    def inspect(self, text: str, span: Span) -> SpanReport:
        report = self._inspect(text, span)
        telemetry.record_event(
            "comments.classify",
            level="debug",
            data={"span": report.span, "status": report.status.value, "reason": report.reason},
            logger_name=self._logger_name,
        )
        return report

    def _inspect(self, text: str, span: Span) -> SpanReport:
        start, end = span
        same_line = line_start(text, start) == line_start(text, end)
        end_in_comment = self.syntax.in_comment(text, end)

        if same_line:
            if end_in_comment:
                return SpanReport(span, SpanStatus.COMMENTED)
            if self._start_in_comment(text, start):
                return SpanReport(
                    span, SpanStatus.INVALID, "comment opens inside the span"
                )
            return SpanReport(span, SpanStatus.UNCOMMENTED)

        if end_in_comment:
            offending = self._first_code_line(text, start, end)
            if offending is not None:
                return SpanReport(
                    span,
                    SpanStatus.INVALID,
                    f"line {offending + 1} is neither commented nor blank",
                )
            if self._start_in_comment(text, start):
                return SpanReport(span, SpanStatus.COMMENTED)
            return SpanReport(span, SpanStatus.INVALID, "span starts outside a comment")

        hit = self.syntax.search_unescaped(
            text, self.syntax.marker, Direction.BACKWARD, start, end
        )
        if hit is None:
            return SpanReport(span, SpanStatus.UNCOMMENTED)
        return SpanReport(
            span, SpanStatus.INVALID, f"comment marker at offset {hit} inside the span"
        )

    def _start_in_comment(self, text: str, start: int) -> bool:
        """Probe one marker width past the span's start.

        A start inside leading indentation is moved to the first character
        of the line, so an indented comment line selected from column 0
        reads as commented. The probe never leaves the start's line.
        """

        first = line_start(text, start)
        stop = line_end(text, start)
        anchor = start
        if is_blank(text[first:start]):
            anchor = max(start, first + indentation(text[first:stop]))
        probe = min(anchor + len(self.syntax.marker), stop)
        return self.syntax.in_comment(text, probe)

    def _first_code_line(self, text: str, start: int, end: int) -> Optional[int]:
        """Walk up from ``end``'s line; return the first line that is not
        commented or blank. The start's own line is not checked."""

        top = line_start(text, start)
        position = line_start(text, end)
        while position > top:
            line = text[position : line_end(text, position)]
            if not (is_blank(line) or self.syntax.in_commented_line(text, position)):
                return line_index(text, position)
            position = line_start(text, position - 1)
        return None
