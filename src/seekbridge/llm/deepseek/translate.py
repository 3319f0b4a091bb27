"""Conversion between the generic completion types and the DeepSeek wire format."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING

from seekbridge.llm.client import (
    CompletionItem,
    CompletionRequest,
    CompletionResponse,
    Content,
    Message,
    ToolCall,
    is_text_mime_type,
)
from seekbridge.llm.deepseek import schema

if TYPE_CHECKING:
    from datetime import datetime

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 4096
TOOL_CHOICE_MODES = frozenset({"auto", "none", "required"})
IMAGE_PLACEHOLDER = "[Image content not supported in text format]"


def item_id(response_id: str, index: int) -> str:
    """Build the item ID for the content slot (0) or a tool call index."""
    return f"{response_id}-{index}"


def to_request(request: CompletionRequest) -> schema.Request:
    """Translate a generic completion request into a DeepSeek request.

    Args:
        request: Provider-agnostic completion request

    Returns:
        Wire request (streaming is left off; the client enables it)
    """
    result = schema.Request(
        model=request.model,
        max_tokens=request.max_tokens or DEFAULT_MAX_TOKENS,
        temperature=request.temperature if request.temperature is not None else 0.0,
        top_p=request.top_p if request.top_p is not None else 0.0,
    )

    for tool in request.tools:
        result.tools.append(
            schema.Tool(
                type="function",
                function=schema.FunctionDefinition(
                    name=tool.name,
                    description=tool.description,
                    parameters=tool.parameters,
                ),
            )
        )

    result.tool_choice = convert_tool_choice(request.tool_choice)

    system_prompt = request.system_prompt.strip()
    if system_prompt:
        result.messages.append(schema.Message(role="system", content=system_prompt))

    for msg in request.input:
        result.messages.extend(_convert_message(msg))

    return result


def convert_tool_choice(tool_choice: str) -> schema.ToolChoice | None:
    """Map a tool choice string onto the wire directive.

    Mode strings pass through; any other value names a specific function.
    An empty string means no directive.
    """
    if not tool_choice:
        return None
    if tool_choice in TOOL_CHOICE_MODES:
        return tool_choice
    return {"type": "function", "function": {"name": tool_choice}}


def _convert_message(msg: Message) -> list[schema.Message]:
    """Flatten one generic message into wire messages, one per item."""
    messages: list[schema.Message] = []

    for item in msg.items:
        if item.content is not None:
            text = convert_content(item.content)
            if text:
                messages.append(schema.Message(role=msg.role, content=text))

        if item.tool_call is not None:
            messages.append(
                schema.Message(
                    role="assistant",
                    tool_calls=[
                        schema.ToolCall(
                            id=item.tool_call.call_id,
                            type="function",
                            function=schema.FunctionCall(
                                name=item.tool_call.name,
                                arguments=item.tool_call.arguments,
                            ),
                        )
                    ],
                )
            )

        if item.tool_call_result is not None:
            text_parts = [
                block.text or ""
                for block in item.tool_call_result.output.content
                if block.type == "text"
            ]
            messages.append(
                schema.Message(
                    role="tool",
                    content="\n".join(text_parts),
                    tool_call_id=item.tool_call_result.call_id,
                )
            )

    return messages


def convert_content(content: Content) -> str:
    """Render a content block as text.

    The chat endpoint is text-only, so images become a placeholder and
    resources are inlined only when addressed to the assistant and textual.

    Args:
        content: Content block

    Returns:
        Text to send, or an empty string when the block should be dropped
    """
    if content.type in ("text", ""):
        return content.text or ""

    if content.type == "resource" and content.resource is not None:
        resource = content.resource
        annotations = resource.annotations
        if annotations is None or "assistant" not in annotations.audience:
            return ""

        if is_text_mime_type(resource.mimeType):
            if resource.blob:
                try:
                    return base64.b64decode(resource.blob).decode("utf-8", errors="replace")
                except (binascii.Error, ValueError) as e:
                    logger.warning("Failed to decode resource %s: %s", resource.uri, e)
            elif resource.text:
                return resource.text

        return f"[Resource: {resource.uri}]"

    if content.type == "image":
        return IMAGE_PLACEHOLDER

    return ""


def to_response(resp: schema.Response, created: datetime) -> CompletionResponse:
    """Translate an assembled DeepSeek response into a generic response.

    Args:
        resp: Response assembled from the stream
        created: When the call was initiated

    Returns:
        CompletionResponse whose output holds the text item followed by one
        item per tool call, in stream order
    """
    result = CompletionResponse(
        model=resp.model,
        output=Message(id=resp.id, created=created, role="assistant"),
    )

    if not resp.choices:
        return result

    message = resp.choices[0].message

    if message.content:
        result.output.items.append(
            CompletionItem(
                id=item_id(resp.id, 0),
                content=Content(type="text", text=message.content),
            )
        )

    for i, tc in enumerate(message.tool_calls):
        result.output.items.append(
            CompletionItem(
                id=item_id(resp.id, i),
                tool_call=ToolCall(
                    call_id=tc.id,
                    name=tc.function.name,
                    arguments=tc.function.arguments,
                ),
            )
        )

    return result
