"""Factory functions for building clients and requests from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from seekbridge.audit import LoggingMessageLog
from seekbridge.llm.client import CompletionItem, CompletionRequest, Content, Message
from seekbridge.llm.deepseek import DeepSeekClient

if TYPE_CHECKING:
    from seekbridge.audit import MessageLog
    from seekbridge.config.schema import SeekbridgeConfig
    from seekbridge.llm.progress import ProgressSink


def create_llm_client(
    config: SeekbridgeConfig,
    progress: ProgressSink | None = None,
    message_log: MessageLog | None = None,
) -> DeepSeekClient:
    """Create a DeepSeek client from configuration.

    Args:
        config: seekbridge configuration
        progress: Sink for streaming progress events
        message_log: Payload log; when omitted and ``logging.log_messages``
            is enabled, a :class:`LoggingMessageLog` is attached

    Returns:
        A configured DeepSeekClient
    """
    if message_log is None and config.logging.log_messages:
        message_log = LoggingMessageLog(redact=config.logging.redact)

    return DeepSeekClient(
        api_key=config.deepseek.api_key,
        base_url=config.deepseek.base_url,
        headers=config.deepseek.headers,
        timeout=config.deepseek.timeout,
        progress=progress,
        message_log=message_log,
    )


def build_request(
    config: SeekbridgeConfig,
    prompt: str,
    system_prompt: str | None = None,
    model: str | None = None,
    tool_choice: str = "",
) -> CompletionRequest:
    """Build a single-turn request using configured defaults.

    Args:
        config: seekbridge configuration
        prompt: User prompt
        system_prompt: Overrides ``agent.system_prompt`` when given
        model: Overrides ``model.name`` when given
        tool_choice: Tool choice mode or tool name

    Returns:
        CompletionRequest with one user message
    """
    return CompletionRequest(
        model=model or config.model.name,
        agent=config.agent.name,
        system_prompt=config.agent.system_prompt if system_prompt is None else system_prompt,
        input=[
            Message(
                role="user",
                items=[CompletionItem(content=Content(type="text", text=prompt))],
            )
        ],
        tool_choice=tool_choice,
        temperature=config.model.temperature,
        top_p=config.model.top_p,
        max_tokens=config.model.max_tokens,
    )
