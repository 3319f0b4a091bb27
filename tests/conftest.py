"""Pytest configuration and shared fixtures."""

import json
from typing import Any

import pytest

from seekbridge.config.schema import SeekbridgeConfig
from seekbridge.llm.client import CompletionItem, CompletionRequest, Content, Message


@pytest.fixture
def default_config() -> SeekbridgeConfig:
    """Provide a default configuration for tests."""
    return SeekbridgeConfig()


@pytest.fixture
def simple_request() -> CompletionRequest:
    """A single-turn request with one user message."""
    return CompletionRequest(
        model="deepseek-chat",
        agent="tester",
        input=[
            Message(
                role="user",
                items=[CompletionItem(content=Content(type="text", text="Hi"))],
            )
        ],
    )


def chunk(
    content: str | None = None,
    tool_calls: list[dict[str, Any]] | None = None,
    finish_reason: str | None = None,
    id: str = "chatcmpl-1",
    model: str = "deepseek-chat",
) -> dict[str, Any]:
    """Build a stream chunk payload."""
    delta: dict[str, Any] = {}
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    return {
        "id": id,
        "object": "chat.completion.chunk",
        "created": 1718345013,
        "model": model,
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }


def tool_fragment(
    index: int, arguments: str, id: str | None = None, name: str | None = None
) -> dict[str, Any]:
    """Build one tool call fragment of a delta."""
    fragment: dict[str, Any] = {"index": index, "function": {"arguments": arguments}}
    if id is not None:
        fragment["id"] = id
        fragment["type"] = "function"
    if name is not None:
        fragment["function"]["name"] = name
    return fragment


def data_line(payload: dict[str, Any] | str) -> str:
    """Frame a payload as an SSE data line."""
    if not isinstance(payload, str):
        payload = json.dumps(payload)
    return f"data: {payload}"


def sse_body(*payloads: dict[str, Any] | str, done: bool = True) -> bytes:
    """Build a full SSE response body."""
    lines = [data_line(p) + "\n\n" for p in payloads]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()
