"""Reassembly of a streamed DeepSeek response from SSE lines.

Folding a chunk into the response is kept separate from publishing progress:
:meth:`StreamAccumulator.add_chunk` only mutates the assembled response and
reports what it applied, while :meth:`StreamAccumulator.feed` also turns those
deltas into :class:`CompletionProgress` events.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable
from dataclasses import dataclass

from pydantic import ValidationError

from seekbridge.llm.client import CompletionItem, CompletionProgress, Content, ToolCall
from seekbridge.llm.deepseek import schema
from seekbridge.llm.deepseek.translate import item_id

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

ProgressCallback = Callable[[CompletionProgress], None]


@dataclass
class TextDelta:
    """A text fragment appended to the assistant message."""

    text: str


@dataclass
class ToolCallDelta:
    """An arguments fragment applied to the tool call at ``position``.

    ``position`` is the slot's place in arrival order, not the stream index.
    """

    position: int
    call_id: str
    name: str
    arguments: str


Delta = TextDelta | ToolCallDelta


def parse_chunk(payload: str) -> schema.StreamChunk | None:
    """Parse one SSE payload, returning None (and logging) if it is malformed."""
    try:
        return schema.StreamChunk.model_validate_json(payload)
    except ValidationError as e:
        logger.error("failed to decode chunk: %s: %s", e, payload)
        return None


class StreamAccumulator:
    """Folds stream chunks into a single :class:`schema.Response`.

    Tool call fragments are routed by their ``index``. Slots are kept in the
    order their index was first seen; a fragment for a known index only
    extends that slot's arguments, while a non-empty ``id`` or ``name`` on a
    later fragment replaces the captured value.
    """

    def __init__(self, agent: str = "", on_progress: ProgressCallback | None = None) -> None:
        """Initialize an empty accumulator.

        Args:
            agent: Agent name stamped on progress events
            on_progress: Called synchronously with each progress event
        """
        self.agent = agent
        self.on_progress = on_progress
        self.response = schema.Response()
        self.done = False
        self._slots: dict[int, int] = {}  # stream index -> position in tool_calls

    def _message(self) -> schema.Message:
        """Return the assistant message, creating it on first use."""
        if not self.response.choices:
            self.response.choices.append(schema.Choice(message=schema.Message(role="assistant")))
        return self.response.choices[0].message

    def add_chunk(self, chunk: schema.StreamChunk) -> list[Delta]:
        """Fold a chunk into the response.

        Args:
            chunk: Parsed stream chunk

        Returns:
            The deltas applied, in order
        """
        if not self.response.id and chunk.id:
            self.response.id = chunk.id
            self.response.model = chunk.model
            self.response.created = chunk.created

        if chunk.usage is not None:
            self.response.usage = chunk.usage

        if not chunk.choices:
            return []

        choice = chunk.choices[0]
        deltas: list[Delta] = []

        if choice.delta.content:
            message = self._message()
            message.content += choice.delta.content
            deltas.append(TextDelta(choice.delta.content))

        if choice.delta.tool_calls:
            message = self._message()
            for fragment in choice.delta.tool_calls:
                slot = self._apply_tool_call(message, fragment)
                deltas.append(
                    ToolCallDelta(
                        position=self._slots[fragment.index],
                        call_id=slot.id,
                        name=slot.function.name,
                        arguments=fragment.function.arguments,
                    )
                )

        if choice.finish_reason:
            self._message()
            self.response.choices[0].finish_reason = choice.finish_reason

        return deltas

    def _apply_tool_call(self, message: schema.Message, fragment: schema.ToolCall) -> schema.ToolCall:
        position = self._slots.get(fragment.index)
        if position is None:
            self._slots[fragment.index] = len(message.tool_calls)
            slot = fragment.model_copy(deep=True)
            message.tool_calls.append(slot)
            return slot

        slot = message.tool_calls[position]
        slot.function.arguments += fragment.function.arguments
        if fragment.id:
            slot.id = fragment.id
        if fragment.type:
            slot.type = fragment.type
        if fragment.function.name:
            slot.function.name = fragment.function.name
        return slot

    def progress(self, delta: Delta) -> CompletionProgress:
        """Build the progress event describing a delta."""
        if isinstance(delta, TextDelta):
            item = CompletionItem(
                id=item_id(self.response.id, 0),
                partial=True,
                has_more=True,
                content=Content(type="text", text=delta.text),
            )
        else:
            item = CompletionItem(
                id=item_id(self.response.id, delta.position),
                partial=True,
                has_more=True,
                tool_call=ToolCall(
                    call_id=delta.call_id,
                    name=delta.name,
                    arguments=delta.arguments,
                ),
            )

        return CompletionProgress(
            model=self.response.model,
            agent=self.agent,
            message_id=self.response.id,
            item=item,
        )

    def feed(self, line: str) -> bool:
        """Process one line of the event stream.

        Args:
            line: Raw line, without the trailing newline

        Returns:
            False once the ``[DONE]`` sentinel has been seen
        """
        if self.done:
            return False
        if not line.startswith(DATA_PREFIX):
            return True

        payload = line[len(DATA_PREFIX) :].strip()
        if payload == DONE_SENTINEL:
            self.done = True
            return False

        chunk = parse_chunk(payload)
        if chunk is None:
            return True

        for delta in self.add_chunk(chunk):
            if self.on_progress is not None:
                self.on_progress(self.progress(delta))
        return True

    async def consume(self, lines: AsyncIterable[str]) -> schema.Response:
        """Read lines until ``[DONE]`` or end of input.

        Errors raised by ``lines`` propagate unchanged.

        Returns:
            The assembled response
        """
        async for line in lines:
            if not self.feed(line):
                break
        return self.response
