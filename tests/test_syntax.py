import pytest

from comment_engine.syntax import Direction, LineCommentSyntax


def test_in_comment_starts_after_the_marker() -> None:
    syntax = LineCommentSyntax()
    text = "x = 1 % note"

    assert syntax.in_comment(text, 0) is False
    assert syntax.in_comment(text, 6) is False
    assert syntax.in_comment(text, 7) is True
    assert syntax.in_comment(text, len(text)) is True


def test_in_comment_is_false_at_line_start() -> None:
    syntax = LineCommentSyntax()
    text = "% one\ntwo"

    assert syntax.in_comment(text, 5) is True
    assert syntax.in_comment(text, 6) is False


def test_escaped_marker_is_not_a_comment() -> None:
    syntax = LineCommentSyntax()
    text = r"50\% off % real"

    assert syntax.comment_start(text, 0) == 9
    assert syntax.in_comment(text, 5) is False
    assert syntax.in_comment(text, 10) is True


def test_double_escape_does_not_escape_marker() -> None:
    syntax = LineCommentSyntax()

    assert syntax.comment_start(r"a\\% b", 0) == 3


def test_in_commented_line_needs_marker_first() -> None:
    syntax = LineCommentSyntax()

    assert syntax.in_commented_line("  % x\ny", 0) is True
    assert syntax.in_commented_line("  % x\ny", 6) is False
    assert syntax.in_commented_line("y % x", 4) is False
    assert syntax.in_commented_line(r"\% x", 0) is False


def test_search_unescaped_both_directions() -> None:
    syntax = LineCommentSyntax()
    text = "% a\n" + r"\% b" + "\nc"

    assert syntax.search_unescaped(text, "%", Direction.BACKWARD, 0, len(text)) == 0
    assert syntax.search_unescaped(text, "%", Direction.BACKWARD, 1, len(text)) is None
    assert syntax.search_unescaped(text, "%", Direction.FORWARD, len(text), 1) is None
    assert syntax.search_unescaped(text, "%", Direction.FORWARD, len(text), 0) == 0


def test_marker_runs_are_maximal() -> None:
    syntax = LineCommentSyntax()

    assert syntax.marker_runs("a %% b % c", 0, 10) == [(2, 4), (7, 8)]
    assert syntax.marker_runs("a %% b % c", 3, 10) == [(3, 4), (7, 8)]


def test_multi_character_marker() -> None:
    syntax = LineCommentSyntax(marker="//", escape="")
    text = "a // b"

    assert syntax.in_comment(text, 3) is False
    assert syntax.in_comment(text, 4) is True
    assert syntax.in_commented_line("  // c", 0) is True


def test_empty_marker_rejected() -> None:
    with pytest.raises(ValueError):
        LineCommentSyntax(marker="")
