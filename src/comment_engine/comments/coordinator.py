"""Toggle a possibly discontinuous selection as one unit.

Every span is classified; the selection proceeds only when all spans agree.
The edits for all spans are then applied in a single buffer transaction, so
either every span changes or none does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set

from comment_engine.buffer import (
    Buffer,
    BufferDelta,
    BufferValidationError,
    Edit,
    Selection,
    Span,
    ensure_spans,
    remap_offset,
    validate_edits,
)
from comment_engine.buffer.document import line_start
from comment_engine.runtime import telemetry
from comment_engine.syntax import CommentSyntax

from .applier import TransformApplier
from .classifier import SpanClassifier
from .errors import CommentToggleError, InvalidRegion, NoActiveSelection
from .models import RegionDecision, SpanStatus, ToggleAction


@dataclass(slots=True)
class ToggleOutcome:
    action: ToggleAction
    spans: Selection
    delta: BufferDelta


class RegionCoordinator:
    def __init__(
        self,
        syntax: CommentSyntax,
        *,
        padding: str = " ",
        normalize_line_end: bool = True,
        classifier: Optional[SpanClassifier] = None,
        applier: Optional[TransformApplier] = None,
        logger_name: str | None = None,
    ) -> None:
        self.syntax = syntax
        self.normalize_line_end = normalize_line_end
        self.classifier = classifier or SpanClassifier(syntax, logger_name=logger_name)
        self.applier = applier or TransformApplier(syntax, padding=padding)
        self._logger_name = logger_name or "comment_engine.comments"

    def prepare(self, text: str, spans: Iterable[Span]) -> Selection:
        """Order and validate spans, then pull line-start ends back a line."""

        ordered = ensure_spans(len(text), spans)
        if not self.normalize_line_end:
            return ordered
        return tuple(self._normalize(text, span) for span in ordered)

    def _normalize(self, text: str, span: Span) -> Span:
        start, end = span
        if end > start and line_start(text, end) == end:
            return (start, end - 1)
        return span

    def decide(self, text: str, spans: Sequence[Span]) -> RegionDecision:
        """Classify every span and require one shared, valid status."""

        if not spans:
            raise NoActiveSelection()
        reports = tuple(self.classifier.inspect(text, span) for span in spans)
        statuses = {report.status for report in reports}
        if SpanStatus.INVALID in statuses or len(statuses) > 1:
            raise InvalidRegion(reports)
        return RegionDecision(status=statuses.pop(), reports=reports)

    def plan(self, text: str, decision: RegionDecision) -> List[Edit]:
        """Edits for every span, gathered from the last span to the first.

        Spans sharing a line plan the same line edit; it is kept once. Edits
        that still clash refuse the whole region.
        """

        edits: List[Edit] = []
        seen: Set[Edit] = set()
        for span in reversed(decision.spans):
            for edit in self.applier.apply(text, span, decision.action):
                if edit not in seen:
                    seen.add(edit)
                    edits.append(edit)
        try:
            validate_edits(edits, len(text))
        except BufferValidationError as exc:
            raise InvalidRegion(decision.reports, reason=str(exc)) from exc
        return edits

    def toggle(self, buffer: Buffer, spans: Optional[Iterable[Span]] = None) -> ToggleOutcome:
        """Toggle ``spans`` (default: the buffer's selection) in place.

        Raises ``NoActiveSelection`` or ``InvalidRegion`` before touching the
        buffer. On success the selection is moved onto the toggled text.
        """

        text = buffer.text
        raw = buffer.selection_spans() if spans is None else tuple(spans)
        with telemetry.span(
            "comments::toggle",
            logger_name=self._logger_name,
            component="comments",
            metadata={"buffer": buffer.name, "spans": len(raw)},
            expected=(CommentToggleError,),
        ) as handle:
            prepared = self.prepare(text, raw)
            decision = self.decide(text, prepared)
            edits = self.plan(text, decision)
            moved = tuple(
                (remap_offset(start, edits), remap_offset(end, edits))
                for start, end in prepared
            )
            delta = buffer.apply_edits(
                edits, label=f"comments_{decision.action.value}", selection=moved
            )
            handle.add_metadata("action", decision.action.value)
            handle.add_metadata("edits", len(delta.edits))
            return ToggleOutcome(action=decision.action, spans=moved, delta=delta)
