"""Engine configuration and its ``COMMENT_ENGINE_*`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

from comment_engine.runtime.telemetry import ENV_PREFIX, env_flag
from comment_engine.syntax import LineCommentSyntax


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Comment marker settings shared by every command.

    ``padding`` is written after a newly inserted marker. ``escape`` may be
    empty for languages without escaped markers.
    """

    marker: str = "%"
    escape: str = "\\"
    padding: str = " "
    normalize_line_end: bool = True

    def __post_init__(self) -> None:
        if not self.marker:
            raise ValueError("comment marker cannot be empty")
        if self.padding.strip(" \t"):
            raise ValueError("padding may only contain spaces or tabs")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        defaults = cls()
        return cls(
            marker=os.getenv(f"{ENV_PREFIX}MARKER", defaults.marker),
            escape=os.getenv(f"{ENV_PREFIX}ESCAPE", defaults.escape),
            padding=os.getenv(f"{ENV_PREFIX}PADDING", defaults.padding),
            normalize_line_end=env_flag(
                "NORMALIZE_LINE_END", defaults.normalize_line_end
            ),
        )

    def syntax(self) -> LineCommentSyntax:
        return LineCommentSyntax(marker=self.marker, escape=self.escape)


__all__ = ["EngineConfig"]
