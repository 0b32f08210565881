"""Commands hosts bind to: region toggle, dwim toggle and line helpers."""

from .base import ActionContext, ActionResult, EventBus
from .toggle import (
    comment_line,
    insert_inline_comment,
    toggle_dwim,
    toggle_region,
    uncomment_line,
)

__all__ = [
    "ActionContext",
    "ActionResult",
    "EventBus",
    "comment_line",
    "insert_inline_comment",
    "toggle_dwim",
    "toggle_region",
    "uncomment_line",
]
