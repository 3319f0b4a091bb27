"""Pydantic models for the DeepSeek chat completions wire format.

The API is OpenAI-compatible. Scalar fields listed in ``omit_empty`` are left
out of the serialized JSON when they hold a zero value, and ``null`` values in
incoming payloads are treated as absent so that field defaults apply.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer, model_validator


class WireModel(BaseModel):
    """Base for wire models."""

    omit_empty: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @model_serializer(mode="wrap")
    def _omit_empty_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in self.omit_empty:
            if key in data and not data[key]:
                del data[key]
        return data


class FunctionDefinition(WireModel):
    """Function declaration inside a tool definition."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"description", "parameters"})

    name: str
    description: str = ""
    parameters: dict[str, Any] | None = None


class Tool(WireModel):
    """A tool the model may call."""

    type: str = "function"
    function: FunctionDefinition


class FunctionCall(WireModel):
    """Function name and (possibly partial) JSON arguments of a tool call."""

    name: str = ""
    arguments: str = ""


class ToolCall(WireModel):
    """A tool call, or a fragment of one when streamed."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"id", "type", "index"})

    id: str = ""
    type: str = ""
    index: int = 0  # Which logical tool call a streamed fragment belongs to
    function: FunctionCall = Field(default_factory=FunctionCall)


class Message(WireModel):
    """A chat message, also used for streamed deltas."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"content", "tool_calls", "tool_call_id"})

    role: str = ""
    content: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)
    tool_call_id: str = ""


# "auto", "none", "required" or {"type": "function", "function": {"name": ...}}
ToolChoice = str | dict[str, Any]


class Request(WireModel):
    """Chat completion request body."""

    # Zero sampling values are dropped, so an explicit 0.0 cannot be sent and
    # the server default applies.
    omit_empty: ClassVar[frozenset[str]] = frozenset(
        {"temperature", "top_p", "max_tokens", "stream", "tools", "tool_choice"}
    )

    model: str
    messages: list[Message] = Field(default_factory=list)
    temperature: float = 0.0
    top_p: float = 0.0
    max_tokens: int = 0
    stream: bool = False
    tools: list[Tool] = Field(default_factory=list)
    tool_choice: ToolChoice | None = None


class Usage(WireModel):
    """Token accounting."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class Choice(WireModel):
    """One completion choice; ``delta`` is populated in streamed chunks."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"finish_reason"})

    index: int = 0
    message: Message = Field(default_factory=Message)
    delta: Message = Field(default_factory=Message)
    finish_reason: str = ""


class Response(WireModel):
    """Chat completion response, assembled from stream chunks."""

    omit_empty: ClassVar[frozenset[str]] = frozenset({"usage"})

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None

    @property
    def content(self) -> str:
        """Text content of the first choice."""
        if self.choices:
            return self.choices[0].message.content
        return ""


class StreamChunk(WireModel):
    """A single ``data:`` event of a streamed response."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None
