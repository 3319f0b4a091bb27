"""LLM client implementations."""

from .client import (
    CompletionOptions,
    CompletionProgress,
    CompletionRequest,
    CompletionResponse,
    LLMClient,
    Message,
    ToolCall,
)
from .deepseek import DeepSeekClient
from .factory import build_request, create_llm_client
from .progress import ProgressRouter, ProgressSink

__all__ = [
    "CompletionOptions",
    "CompletionProgress",
    "CompletionRequest",
    "CompletionResponse",
    "DeepSeekClient",
    "LLMClient",
    "Message",
    "ProgressRouter",
    "ProgressSink",
    "ToolCall",
    "build_request",
    "create_llm_client",
]
