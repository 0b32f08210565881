"""Bridge a Textual ``TextArea`` to the comment commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from textual.widgets.text_area import Selection

from comment_engine.actions import (
    ActionContext,
    ActionResult,
    EventBus,
    toggle_dwim,
    toggle_region,
)
from comment_engine.buffer import Buffer, BufferDocument, BufferMirror, BufferSync
from comment_engine.config import EngineConfig


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


class TextAreaLike(Protocol):
    """The part of ``textual.widgets.TextArea`` the adapter relies on."""

    text: str
    selection: Any


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to report back to the Textual app."""

    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextAreaCommentAdapter(BufferSync):
    """Runs comment commands against the text and selection of a text area.

    The widget's single selection becomes a one-span region; the resulting
    text is written back and the selection restored over the toggled text.
    """

    def __init__(
        self,
        text_area: TextAreaLike,
        *,
        config: Optional[EngineConfig] = None,
        hooks: Optional[TextualUIHooks] = None,
    ) -> None:
        self.text_area = text_area
        self.config = config or EngineConfig()
        self.hooks = hooks or TextualUIHooks()
        self.bus = EventBus()
        for event in ("comments.toggle", "comments.error", "comments.line"):
            self.bus.subscribe(
                event, lambda payload, name=event: self.hooks.handle_event(name, payload)
            )

    def toggle_region(self) -> ActionResult:
        return self._run(toggle_region)

    def toggle_dwim(self) -> ActionResult:
        return self._run(toggle_dwim)

    def _run(self, command: Callable[[ActionContext], ActionResult]) -> ActionResult:
        mirror = self.pull_buffer()
        buffer = Buffer.from_mirror(mirror, name="text_area")
        result = command(ActionContext(buffer=buffer, config=self.config, bus=self.bus))
        if result.consumed:
            self.push_buffer(buffer.mirror())
        self.hooks.update_status(result.message or result.status)
        self.hooks.log(
            f"{command.__name__} -> status={result.status!r} consumed={result.consumed}"
        )
        return result

    def pull_buffer(self) -> BufferMirror:
        """Read the widget's text and its selection as offsets."""

        text = self.text_area.text
        document = BufferDocument.from_text(text)
        anchor = document.offset_of(*self.text_area.selection.start)
        cursor = document.offset_of(*self.text_area.selection.end)
        selection = None
        if anchor != cursor:
            selection = ((min(anchor, cursor), max(anchor, cursor)),)
        return BufferMirror(text=text, cursor=cursor, selection=selection)

    def push_buffer(self, mirror: BufferMirror) -> None:
        if mirror.text != self.text_area.text:
            self.text_area.text = mirror.text
        document = BufferDocument.from_text(mirror.text)
        spans = mirror.selection
        if spans:
            start = document.position_of(spans[0][0])
            end = document.position_of(spans[-1][1])
            self.text_area.selection = Selection(start, end)
        else:
            self.text_area.selection = Selection.cursor(
                document.position_of(mirror.cursor)
            )


__all__ = ["TextAreaCommentAdapter", "TextAreaLike", "TextualUIHooks"]
