"""Line-oriented document storage and offset helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

Position = Tuple[int, int]  # (row, column)


def line_start(text: str, offset: int) -> int:
    """Offset of the first character of the line holding ``offset``."""

    return text.rfind("\n", 0, offset) + 1


def line_end(text: str, offset: int) -> int:
    """Offset of the newline (or end of text) closing the line at ``offset``."""

    end = text.find("\n", offset)
    return len(text) if end == -1 else end


def line_index(text: str, offset: int) -> int:
    return text.count("\n", 0, offset)


def is_blank(text: str) -> bool:
    return not text.strip(" \t")


def indentation(text: str) -> int:
    return len(text) - len(text.lstrip(" \t"))


@dataclass(slots=True)
class BufferDocument:
    """Text kept as a list of lines; offsets count one character per newline.

    Only ``"\\n"`` separates lines, so offsets computed on the flat text and
    on the document always agree.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "BufferDocument":
        return cls(_lines=text.split("\n"), version=version)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def length(self) -> int:
        return sum(len(line) for line in self._lines) + len(self._lines) - 1

    def replace_text(self, text: str) -> "BufferDocument":
        """Return a new document holding ``text`` with a bumped version."""

        return BufferDocument.from_text(text, version=self.version + 1)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def offset_of(self, row: int, col: int) -> int:
        offset = 0
        for line in self._lines[:row]:
            offset += len(line) + 1
        return offset + col

    def position_of(self, offset: int) -> Position:
        running = 0
        for row, line in enumerate(self._lines):
            if offset <= running + len(line):
                return (row, offset - running)
            running += len(line) + 1
        return (len(self._lines) - 1, len(self._lines[-1]))
