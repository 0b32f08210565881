"""Comment commands exposed to hosts.

``toggle_region`` is the smart region toggle. ``toggle_dwim`` picks between
it and the simple single-line commands depending on the selection and the
cursor.
"""

from __future__ import annotations

from comment_engine.buffer import BufferValidationError, Edit
from comment_engine.buffer.document import is_blank, line_end, line_start
from comment_engine.comments import CommentToggleError, comment_region, uncomment_region

from .base import ActionContext, ActionResult


def toggle_region(context: ActionContext) -> ActionResult:
    try:
        outcome = context.coordinator().toggle(context.buffer)
    except CommentToggleError as exc:
        context.bus.emit("comments.error", {"status": exc.status, "message": str(exc)})
        return ActionResult(consumed=False, status=exc.status, message=str(exc))
    except BufferValidationError as exc:
        context.bus.emit(
            "comments.error", {"status": "invalid_selection", "message": str(exc)}
        )
        return ActionResult(
            consumed=False, status="invalid_selection", message=str(exc)
        )

    context.bus.emit(
        "comments.toggle",
        {"action": outcome.action.value, "spans": outcome.spans},
    )
    return ActionResult(
        consumed=True,
        status=f"region_{outcome.action.value}",
        message=f"{outcome.action.value}ed {len(outcome.spans)} section(s)",
    )


def toggle_dwim(context: ActionContext) -> ActionResult:
    if context.buffer.selection_spans():
        return toggle_region(context)

    text = context.buffer.text
    cursor = context.buffer.state.cursor
    syntax = context.syntax
    if syntax.in_commented_line(text, cursor):
        return uncomment_line(context)
    stop = line_end(text, cursor)
    if (
        cursor == stop
        or is_blank(text[line_start(text, cursor) : stop])
        or syntax.in_comment(text, cursor)
    ):
        return insert_inline_comment(context)
    return comment_line(context)


def comment_line(context: ActionContext) -> ActionResult:
    text = context.buffer.text
    cursor = context.buffer.state.cursor
    edits = comment_region(
        text,
        line_start(text, cursor),
        line_end(text, cursor),
        context.syntax,
        context.config.padding,
    )
    return _apply_line_edits(context, edits, "comment_line")


def uncomment_line(context: ActionContext) -> ActionResult:
    text = context.buffer.text
    cursor = context.buffer.state.cursor
    edits = uncomment_region(
        text, line_start(text, cursor), line_end(text, cursor), context.syntax
    )
    return _apply_line_edits(context, edits, "uncomment_line")


def insert_inline_comment(context: ActionContext) -> ActionResult:
    """Start a comment on the cursor's line, or jump into the existing one."""

    buffer = context.buffer
    text = buffer.text
    cursor = buffer.state.cursor
    syntax = context.syntax
    first = line_start(text, cursor)
    stop = line_end(text, cursor)

    existing = syntax.comment_start(text, cursor)
    if existing is not None:
        target = existing + len(syntax.marker)
        while target < stop and text[target] in " \t":
            target += 1
        buffer.state.set_cursor(target)
        return ActionResult(consumed=True, status="inline_comment", message="moved")

    marker = syntax.marker + context.config.padding
    line = text[first:stop]
    if is_blank(line):
        position, insertion = cursor, marker
    else:
        gap = "" if line.endswith((" ", "\t")) else " "
        position, insertion = stop, gap + marker
    buffer.apply_edits([Edit.insert(position, insertion)], label="inline_comment")
    buffer.state.set_cursor(position + len(insertion))
    context.bus.emit("comments.line", {"command": "inline_comment", "offset": position})
    return ActionResult(consumed=True, status="inline_comment", message="inserted")


def _apply_line_edits(context: ActionContext, edits: list[Edit], label: str) -> ActionResult:
    if not edits:
        return ActionResult(consumed=False, status="noop")
    context.buffer.apply_edits(edits, label=label)
    context.bus.emit("comments.line", {"command": label, "edits": len(edits)})
    return ActionResult(consumed=True, status=label)


__all__ = [
    "comment_line",
    "insert_inline_comment",
    "toggle_dwim",
    "toggle_region",
    "uncomment_line",
]
