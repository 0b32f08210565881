from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from comment_engine.buffer import Buffer
from comment_engine.comments import CommentToggleError, NoActiveSelection, RegionCoordinator
from comment_engine.runtime import telemetry
from comment_engine.syntax import LineCommentSyntax

FAKE = "tests.fake"


class FakeLogger:
    """Records what telemetry sends to a telelog logger."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Dict[str, str]]] = []
        self.context: Dict[str, Any] = {}
        self.profiled: List[str] = []
        self.components: List[str] = []

    def _record(self, level: str):
        def method(message: str, pairs: List[Tuple[str, str]]) -> None:
            self.records.append((level, message, dict(pairs)))

        return method

    def __getattr__(self, name: str):
        if name.endswith("_with"):
            return self._record(name[: -len("_with")])
        raise AttributeError(name)

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    logger = FakeLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, FAKE, logger)
    return logger


def test_record_event_sends_pairs(fake_logger: FakeLogger) -> None:
    telemetry.record_event("demo", level="debug", data={"n": 1}, logger_name=FAKE)

    assert fake_logger.records == [("debug", "event::demo", {"event": "demo", "n": "1"})]


def test_span_rejects_expected_errors(fake_logger: FakeLogger) -> None:
    with pytest.raises(NoActiveSelection):
        with telemetry.span(
            "work",
            logger_name=FAKE,
            metadata={"buffer": "main"},
            expected=(CommentToggleError,),
        ):
            assert fake_logger.context == {"buffer": "main"}
            raise NoActiveSelection()

    level, message, payload = fake_logger.records[-1]
    assert (level, message) == ("warning", "span::reject")
    assert payload["reason"] == "No active selection"
    assert fake_logger.context == {}
    assert fake_logger.profiled == ["work"]


def test_span_fails_on_unexpected_errors(fake_logger: FakeLogger) -> None:
    with pytest.raises(KeyError):
        with telemetry.span("work", logger_name=FAKE, component=True):
            raise KeyError("boom")

    level, message, payload = fake_logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["component"] == "work"
    assert fake_logger.components == ["work"]


def test_toggle_is_traced(fake_logger: FakeLogger) -> None:
    buffer = Buffer.from_text("alpha")
    buffer.state.set_selection((0, 5))

    RegionCoordinator(LineCommentSyntax(), logger_name=FAKE).toggle(buffer)

    events = [record[2] for record in fake_logger.records if record[1].startswith("event::")]
    assert events[0]["event"] == "comments.classify"
    assert events[0]["status"] == "uncommented"
    assert "comments::toggle" in fake_logger.profiled


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")
