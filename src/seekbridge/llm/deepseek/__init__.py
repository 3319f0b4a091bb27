"""DeepSeek chat completions adapter."""

from .client import (
    CompletionTimeoutError,
    DeepSeekClient,
    DeepSeekError,
    DeepSeekHTTPError,
    DeepSeekStreamError,
)
from .stream import StreamAccumulator
from .translate import to_request, to_response

__all__ = [
    "CompletionTimeoutError",
    "DeepSeekClient",
    "DeepSeekError",
    "DeepSeekHTTPError",
    "DeepSeekStreamError",
    "StreamAccumulator",
    "to_request",
    "to_response",
]
