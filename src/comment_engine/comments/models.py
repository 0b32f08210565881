"""Statuses, decisions and reports produced by the toggle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from comment_engine.buffer import Selection, Span


class SpanStatus(str, Enum):
    COMMENTED = "commented"
    UNCOMMENTED = "uncommented"
    INVALID = "invalid"


class ToggleAction(str, Enum):
    COMMENT = "comment"
    UNCOMMENT = "uncomment"

    @classmethod
    def for_status(cls, status: SpanStatus) -> "ToggleAction":
        if status is SpanStatus.COMMENTED:
            return cls.UNCOMMENT
        if status is SpanStatus.UNCOMMENTED:
            return cls.COMMENT
        raise ValueError("An invalid span has no toggle action")


@dataclass(frozen=True, slots=True)
class SpanReport:
    """Classification of one span, with a reason when it is invalid."""

    span: Span
    status: SpanStatus
    reason: str = ""


@dataclass(frozen=True, slots=True)
class RegionDecision:
    """Unanimous status of every span in a selection."""

    status: SpanStatus
    reports: tuple[SpanReport, ...]

    @property
    def action(self) -> ToggleAction:
        return ToggleAction.for_status(self.status)

    @property
    def spans(self) -> Selection:
        return tuple(report.span for report in self.reports)
