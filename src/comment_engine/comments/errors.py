"""User-facing failures of the region toggle. Neither mutates the buffer."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import SpanReport, SpanStatus


class CommentToggleError(RuntimeError):
    """Base class for toggles refused before any edit is made."""

    status = "error"


class NoActiveSelection(CommentToggleError):
    status = "no_selection"

    def __init__(self, message: str = "No active selection") -> None:
        super().__init__(message)


class InvalidRegion(CommentToggleError):
    """A span could not be classified, the spans disagree, or their edits clash.

    ``disagreement`` is set when every span is valid on its own but they
    do not share one status. ``reason`` explains an edit clash between
    otherwise valid spans.
    """

    status = "invalid_region"

    def __init__(
        self, reports: Iterable[SpanReport], *, reason: Optional[str] = None
    ) -> None:
        self.reports = tuple(reports)
        self.reason = reason
        invalid = [r for r in self.reports if r.status is SpanStatus.INVALID]
        self.disagreement = not invalid and reason is None
        if invalid:
            first = invalid[0]
            message = f"Invalid region at {first.span}: {first.reason}"
        elif reason is not None:
            message = f"Selected sections cannot be toggled together: {reason}"
        else:
            message = "Selected sections disagree on comment state"
        super().__init__(message)

    @property
    def invalid_spans(self) -> tuple[SpanReport, ...]:
        return tuple(r for r in self.reports if r.status is SpanStatus.INVALID)
