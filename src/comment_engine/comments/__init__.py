"""Region comment-toggle engine: classify, decide, apply."""

from .applier import TransformApplier
from .classifier import SpanClassifier
from .coordinator import RegionCoordinator, ToggleOutcome
from .errors import CommentToggleError, InvalidRegion, NoActiveSelection
from .models import RegionDecision, SpanReport, SpanStatus, ToggleAction
from .primitives import comment_region, uncomment_region

__all__ = [
    "CommentToggleError",
    "InvalidRegion",
    "NoActiveSelection",
    "RegionCoordinator",
    "RegionDecision",
    "SpanClassifier",
    "SpanReport",
    "SpanStatus",
    "ToggleAction",
    "ToggleOutcome",
    "TransformApplier",
    "comment_region",
    "uncomment_region",
]
