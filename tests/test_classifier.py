from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from comment_engine.comments import SpanClassifier, SpanStatus
from comment_engine.syntax import Direction, LineCommentSyntax


def make_classifier() -> SpanClassifier:
    return SpanClassifier(LineCommentSyntax())


def whole(text: str) -> tuple[int, int]:
    return (0, len(text))


@dataclass
class FakeSyntax:
    """Comment awareness driven by an explicit set of commented offsets."""

    commented: set[int] = field(default_factory=set)
    marker: str = "%"

    def is_escaped(self, text: str, index: int) -> bool:
        return False

    def in_comment(self, text: str, offset: int) -> bool:
        return offset in self.commented

    def in_commented_line(self, text: str, offset: int) -> bool:
        return False

    def search_unescaped(
        self, text: str, literal: str, direction: Direction, bound: int, offset: int
    ) -> Optional[int]:
        return None

    def comment_start(self, text: str, offset: int) -> Optional[int]:
        return None

    def marker_runs(self, text: str, start: int, end: int) -> list[tuple[int, int]]:
        return []


def test_single_line_comment_is_commented() -> None:
    text = "% foo\nbar"

    assert make_classifier().classify(text, (0, 5)) is SpanStatus.COMMENTED


def test_single_line_code_is_uncommented() -> None:
    assert make_classifier().classify("foo bar", (0, 3)) is SpanStatus.UNCOMMENTED


def test_single_line_span_with_comment_opening_after_start_is_invalid() -> None:
    # end sits just before the marker, the probe after start lands inside it
    report = make_classifier().inspect("a % b", (2, 2))

    assert report.status is SpanStatus.INVALID
    assert "inside the span" in report.reason


def test_blank_lines_inside_commented_block() -> None:
    text = "% a\n\n% b"

    assert make_classifier().classify(text, whole(text)) is SpanStatus.COMMENTED


def test_code_line_inside_commented_block_is_invalid() -> None:
    text = "% a\nb\n% c"
    report = make_classifier().inspect(text, whole(text))

    assert report.status is SpanStatus.INVALID
    assert "line 2" in report.reason


def test_commented_tail_with_code_start_is_invalid() -> None:
    text = "a\n% b"
    report = make_classifier().inspect(text, whole(text))

    assert report.status is SpanStatus.INVALID
    assert report.reason == "span starts outside a comment"


def test_trailing_comment_on_last_line_is_invalid() -> None:
    text = "% a\nb % c"

    assert make_classifier().classify(text, whole(text)) is SpanStatus.INVALID


def test_multi_line_code_is_uncommented() -> None:
    text = "\\section{Intro}\nSome text."

    assert make_classifier().classify(text, whole(text)) is SpanStatus.UNCOMMENTED


def test_marker_inside_multi_line_code_is_invalid() -> None:
    text = "foo % x\nbar"
    report = make_classifier().inspect(text, whole(text))

    assert report.status is SpanStatus.INVALID
    assert "offset 4" in report.reason


def test_escaped_marker_does_not_count() -> None:
    text = "Save 50\\% today\nand more"

    assert make_classifier().classify(text, whole(text)) is SpanStatus.UNCOMMENTED


def test_indented_comment_selected_from_column_zero() -> None:
    text = "  % a\n  % b"

    assert make_classifier().classify(text, whole(text)) is SpanStatus.COMMENTED


def test_classifier_accepts_injected_syntax() -> None:
    text = "abcdef"

    commented_end = SpanClassifier(FakeSyntax(commented={4}))
    assert commented_end.classify(text, (1, 4)) is SpanStatus.COMMENTED

    probe_only = SpanClassifier(FakeSyntax(commented={2}))
    assert probe_only.classify(text, (1, 4)) is SpanStatus.INVALID

    neither = SpanClassifier(FakeSyntax())
    assert neither.classify(text, (1, 4)) is SpanStatus.UNCOMMENTED
