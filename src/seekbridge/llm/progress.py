"""Delivery of completion progress events to observers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from seekbridge.llm.client import CompletionProgress

logger = logging.getLogger(__name__)

ProgressHandler = Callable[["CompletionProgress"], None]


@runtime_checkable
class ProgressSink(Protocol):
    """Receives progress events addressed by an opaque routing token.

    Delivery is fire-and-forget; clients never wait for acknowledgement.
    """

    def send(self, progress: CompletionProgress, token: Any) -> None:
        """Deliver a progress event.

        Args:
            progress: The event
            token: Routing token supplied by the caller of ``complete``
        """
        ...


class ProgressRouter:
    """Dispatches progress events to handlers registered per token.

    Events for tokens without a handler are dropped.
    """

    def __init__(self) -> None:
        self._handlers: dict[Hashable, ProgressHandler] = {}

    def register(self, token: Hashable, handler: ProgressHandler) -> None:
        """Route events carrying ``token`` to ``handler``."""
        self._handlers[token] = handler

    def unregister(self, token: Hashable) -> None:
        """Stop routing events for ``token``."""
        self._handlers.pop(token, None)

    def send(self, progress: CompletionProgress, token: Any) -> None:
        handler = self._handlers.get(token)
        if handler is not None:
            handler(progress)


def send_progress(sink: ProgressSink | None, progress: CompletionProgress, token: Any) -> None:
    """Send an event, logging instead of raising if the sink fails."""
    if sink is None or token is None:
        return
    try:
        sink.send(progress, token)
    except Exception as e:
        logger.warning("Progress delivery failed for %s: %s", progress.item.id, e)
