"""Tests for progress event routing."""

import logging

from seekbridge.llm.client import CompletionItem, CompletionProgress, Content
from seekbridge.llm.progress import ProgressRouter, ProgressSink, send_progress


def _event(text: str = "hi") -> CompletionProgress:
    return CompletionProgress(
        model="deepseek-chat",
        message_id="chatcmpl-1",
        item=CompletionItem(
            id="chatcmpl-1-0", partial=True, has_more=True, content=Content(text=text)
        ),
    )


def test_router_is_a_sink():
    assert isinstance(ProgressRouter(), ProgressSink)


def test_router_dispatches_by_token():
    router = ProgressRouter()
    a, b = [], []
    router.register("a", a.append)
    router.register("b", b.append)

    router.send(_event("x"), "a")
    router.send(_event("y"), "b")
    router.send(_event("z"), "unknown")

    assert [e.item.content.text for e in a] == ["x"]
    assert [e.item.content.text for e in b] == ["y"]


def test_unregister_stops_delivery():
    router = ProgressRouter()
    received = []
    router.register(7, received.append)
    router.unregister(7)
    router.unregister(7)

    router.send(_event(), 7)

    assert received == []


def test_send_progress_skips_missing_sink_or_token():
    received = []
    router = ProgressRouter()
    router.register(None, received.append)

    send_progress(None, _event(), "t")
    send_progress(router, _event(), None)

    assert received == []


def test_send_progress_logs_sink_failure(caplog):
    class Broken:
        def send(self, progress, token):
            raise RuntimeError("boom")

    with caplog.at_level(logging.WARNING):
        send_progress(Broken(), _event(), "t")

    assert "Progress delivery failed" in caplog.text
