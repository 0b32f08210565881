"""Comment awareness for languages with a single line-prefix marker.

The engine never parses the markup language itself. Everything it needs to
know about comments goes through the ``CommentSyntax`` protocol, which
``LineCommentSyntax`` implements for a plain marker string with an optional
escape character (``%`` and ``\\`` for LaTeX).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from comment_engine.buffer.document import line_end, line_start


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class CommentSyntax(Protocol):
    """Queries the engine makes about comment state at a given offset."""

    marker: str

    def is_escaped(self, text: str, index: int) -> bool:
        ...

    def in_comment(self, text: str, offset: int) -> bool:
        ...

    def in_commented_line(self, text: str, offset: int) -> bool:
        ...

    def search_unescaped(
        self,
        text: str,
        literal: str,
        direction: Direction,
        bound: int,
        offset: int,
    ) -> Optional[int]:
        ...

    def comment_start(self, text: str, offset: int) -> Optional[int]:
        ...

    def marker_runs(self, text: str, start: int, end: int) -> List[Tuple[int, int]]:
        ...


@dataclass(frozen=True, slots=True)
class LineCommentSyntax:
    marker: str = "%"
    escape: str = "\\"

    def __post_init__(self) -> None:
        if not self.marker:
            raise ValueError("comment marker cannot be empty")
        if len(self.escape) > 1:
            raise ValueError("escape must be a single character or empty")
        if self.escape and self.escape in self.marker:
            raise ValueError("escape character cannot be part of the marker")

    def is_escaped(self, text: str, index: int) -> bool:
        """True when ``index`` is preceded by an odd run of escape characters."""

        if not self.escape:
            return False
        count = 0
        position = index - 1
        while position >= 0 and text[position] == self.escape:
            count += 1
            position -= 1
        return count % 2 == 1

    def comment_start(self, text: str, offset: int) -> Optional[int]:
        """Offset of the first unescaped marker on the line holding ``offset``."""

        start = line_start(text, offset)
        return self.search_unescaped(
            text, self.marker, Direction.FORWARD, line_end(text, offset), start
        )

    def in_comment(self, text: str, offset: int) -> bool:
        start = line_start(text, offset)
        if offset == start:
            return False
        found = self.search_unescaped(
            text, self.marker, Direction.FORWARD, offset, start
        )
        return found is not None

    def in_commented_line(self, text: str, offset: int) -> bool:
        start = line_start(text, offset)
        line = text[start : line_end(text, offset)]
        first = start + len(line) - len(line.lstrip(" \t"))
        return text.startswith(self.marker, first) and not self.is_escaped(text, first)

    def search_unescaped(
        self,
        text: str,
        literal: str,
        direction: Direction,
        bound: int,
        offset: int,
    ) -> Optional[int]:
        """Start of the nearest unescaped ``literal`` between ``offset`` and ``bound``.

        Matches must lie entirely inside the searched range: ``[bound, offset)``
        going backward, ``[offset, bound)`` going forward.
        """

        if direction is Direction.BACKWARD:
            index = text.rfind(literal, bound, offset)
            while index != -1 and self.is_escaped(text, index):
                index = text.rfind(literal, bound, index + len(literal) - 1)
        else:
            index = text.find(literal, offset, bound)
            while index != -1 and self.is_escaped(text, index):
                index = text.find(literal, index + 1, bound)
        return None if index == -1 else index

    def marker_runs(self, text: str, start: int, end: int) -> List[Tuple[int, int]]:
        """Maximal runs of consecutive unescaped markers inside ``[start, end)``."""

        runs: List[Tuple[int, int]] = []
        width = len(self.marker)
        position = start
        while True:
            found = self.search_unescaped(
                text, self.marker, Direction.FORWARD, end, position
            )
            if found is None:
                return runs
            run_end = found + width
            while run_end + width <= end and text.startswith(self.marker, run_end):
                run_end += width
            runs.append((found, run_end))
            position = run_end
