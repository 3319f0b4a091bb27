"""LLM client protocol and provider-agnostic completion types."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

# MIME types whose resource bodies can be forwarded as plain text
TEXT_MIME_TYPES = frozenset(
    {
        "application/javascript",
        "application/json",
        "application/ld+json",
        "application/toml",
        "application/x-sh",
        "application/x-yaml",
        "application/xml",
        "application/yaml",
        "text/css",
        "text/csv",
        "text/html",
        "text/javascript",
        "text/markdown",
        "text/plain",
        "text/x-python",
        "text/xml",
        "text/yaml",
    }
)


def is_text_mime_type(mime_type: str | None) -> bool:
    """Check whether a MIME type denotes textual content.

    Parameters such as ``; charset=utf-8`` are ignored.
    """
    if not mime_type:
        return False
    base = mime_type.split(";", 1)[0].strip().lower()
    return base in TEXT_MIME_TYPES or base.startswith("text/")


class Annotations(BaseModel):
    """Audience and priority hints attached to content."""

    audience: list[str] = Field(default_factory=list)
    priority: float | None = None


class ResourceContents(BaseModel):
    """An embedded resource, carrying either text or a base64 blob."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mimeType: str | None = Field(None, alias="mime_type")  # noqa: N815
    text: str | None = None
    blob: str | None = None
    annotations: Annotations | None = None


class Content(BaseModel):
    """A single content block (text, image or embedded resource)."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "text"  # "text", "image", "resource"
    text: str | None = None
    data: str | None = None  # Base64 encoded for images
    mimeType: str | None = Field(None, alias="mime_type")  # noqa: N815
    resource: ResourceContents | None = None


class ToolCall(BaseModel):
    """A tool invocation requested by the model.

    ``arguments`` stays a string: during streaming it is an incomplete JSON
    document and it is passed through verbatim when sent back.
    """

    call_id: str = ""
    name: str = ""
    arguments: str = ""


class CallToolResult(BaseModel):
    """Output of a tool invocation."""

    content: list[Content] = Field(default_factory=list)
    is_error: bool = False


class ToolCallResult(BaseModel):
    """The result of a tool call, correlated by call ID."""

    call_id: str
    output: CallToolResult = Field(default_factory=CallToolResult)


class CompletionItem(BaseModel):
    """One item of a message: exactly one of content, tool call or tool result."""

    id: str = ""
    partial: bool = False
    has_more: bool = False
    content: Content | None = None
    tool_call: ToolCall | None = None
    tool_call_result: ToolCallResult | None = None


class Message(BaseModel):
    """A message in the conversation."""

    id: str = ""
    created: datetime | None = None
    role: Literal["system", "user", "assistant", "tool"]
    items: list[CompletionItem] = Field(default_factory=list)


class ToolUseDefinition(BaseModel):
    """A tool the model may call."""

    name: str
    description: str = ""
    parameters: dict[str, Any] | None = None  # JSON Schema


class CompletionRequest(BaseModel):
    """Provider-agnostic completion request."""

    model: str
    agent: str = ""
    system_prompt: str = ""
    input: list[Message] = Field(default_factory=list)
    tools: list[ToolUseDefinition] = Field(default_factory=list)
    tool_choice: str = ""
    temperature: float | None = None
    top_p: float | None = None
    max_tokens: int = 0


class CompletionResponse(BaseModel):
    """Provider-agnostic completion response."""

    model: str = ""
    output: Message


class CompletionProgress(BaseModel):
    """An incremental update published while a response streams in."""

    model: str = ""
    agent: str = ""
    message_id: str = ""
    item: CompletionItem


@dataclass
class CompletionOptions:
    """Per-call options."""

    progress_token: Any = None  # Routing token for progress events
    timeout: float | None = None  # Overall deadline in seconds


class LLMClient(Protocol):
    """Protocol for LLM client implementations."""

    async def complete(
        self,
        request: CompletionRequest,
        options: CompletionOptions | None = None,
    ) -> CompletionResponse:
        """Generate a completion.

        Args:
            request: Provider-agnostic completion request
            options: Progress routing and deadline for this call

        Returns:
            CompletionResponse with the assembled assistant message
        """
        ...
