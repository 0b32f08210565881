"""Context, result and event bus shared by every command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from comment_engine.buffer import Buffer
from comment_engine.comments import RegionCoordinator
from comment_engine.config import EngineConfig
from comment_engine.syntax import CommentSyntax


@dataclass(slots=True)
class ActionResult:
    """What a command did; ``consumed`` is false when nothing changed."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class EventBus:
    """Minimal event bus letting hosts observe commands."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Everything a command may touch: the buffer, settings and the bus."""

    buffer: Buffer
    config: EngineConfig = field(default_factory=EngineConfig)
    bus: EventBus = field(default_factory=EventBus)
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def syntax(self) -> CommentSyntax:
        return self.coordinator().syntax

    def coordinator(self) -> RegionCoordinator:
        coordinator = self.extras.get("coordinator")
        if not isinstance(coordinator, RegionCoordinator):
            coordinator = RegionCoordinator(
                self.config.syntax(),
                padding=self.config.padding,
                normalize_line_end=self.config.normalize_line_end,
            )
            self.extras["coordinator"] = coordinator
        return coordinator
