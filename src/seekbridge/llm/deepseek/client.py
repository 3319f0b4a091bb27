"""DeepSeek chat completions client using httpx.

Every call is streamed: the response is reassembled from SSE chunks by
:class:`StreamAccumulator` while progress events are published to the
configured sink, then translated back into a generic response.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx

from seekbridge.audit import record_message
from seekbridge.llm.client import CompletionOptions, CompletionRequest, CompletionResponse
from seekbridge.llm.deepseek.stream import StreamAccumulator
from seekbridge.llm.deepseek.translate import to_request, to_response
from seekbridge.llm.progress import send_progress

if TYPE_CHECKING:
    from seekbridge.audit import MessageLog
    from seekbridge.llm.deepseek import schema
    from seekbridge.llm.progress import ProgressSink

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
MESSAGE_SOURCE = "deepseek-api"


class DeepSeekError(Exception):
    """DeepSeek API error."""


class DeepSeekHTTPError(DeepSeekError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"failed to get response from DeepSeek API: {status_code} {reason} {body!r}"
        )


class DeepSeekStreamError(DeepSeekError):
    """Reading the event stream failed part way through."""


class CompletionTimeoutError(DeepSeekError):
    """The call did not finish before its deadline."""


class DeepSeekClient:
    """LLM client for the DeepSeek chat completions API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        headers: dict[str, str] | None = None,
        timeout: float = 120,
        progress: ProgressSink | None = None,
        message_log: MessageLog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize DeepSeek client.

        Args:
            api_key: API key, sent as a bearer token unless an
                ``Authorization`` header is given
            base_url: API root; requests go to ``<base_url>/chat/completions``
            headers: Extra headers sent with every request
            timeout: HTTP timeout in seconds
            progress: Sink receiving streaming progress events
            message_log: Receives raw request and response payloads
            transport: Custom httpx transport (mainly for tests)
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.headers = httpx.Headers(headers or {})
        if "Authorization" not in self.headers and api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"
        if "Content-Type" not in self.headers:
            self.headers["Content-Type"] = "application/json"

        self.progress = progress
        self.message_log = message_log
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

    async def complete(
        self,
        request: CompletionRequest,
        options: CompletionOptions | None = None,
    ) -> CompletionResponse:
        """Generate a completion from DeepSeek.

        Args:
            request: Provider-agnostic completion request
            options: Progress routing token and optional deadline

        Returns:
            CompletionResponse with the assembled assistant message

        Raises:
            DeepSeekHTTPError: If the API returns a non-success status
            DeepSeekStreamError: If the stream breaks while being read
            CompletionTimeoutError: If ``options.timeout`` elapses
            DeepSeekError: For other transport failures
        """
        options = options or CompletionOptions()
        wire_request = to_request(request)

        created = datetime.now(UTC)
        try:
            async with asyncio.timeout(options.timeout):
                resp = await self._complete(request.agent, wire_request, options.progress_token)
        except TimeoutError as e:
            raise CompletionTimeoutError(
                f"DeepSeek completion did not finish within {options.timeout}s"
            ) from e

        return to_response(resp, created)

    async def _complete(
        self,
        agent: str,
        wire_request: schema.Request,
        progress_token: Any,
    ) -> schema.Response:
        wire_request.stream = True
        data = wire_request.model_dump_json().encode()
        record_message(self.message_log, MESSAGE_SOURCE, True, data)

        on_progress = None
        if self.progress is not None and progress_token is not None:

            def on_progress(progress):
                send_progress(self.progress, progress, progress_token)

        accumulator = StreamAccumulator(agent=agent, on_progress=on_progress)

        try:
            async with self.client.stream(
                "POST",
                f"{self.base_url}/chat/completions",
                content=data,
                headers=self.headers,
            ) as response:
                if not response.is_success:
                    body = await response.aread()
                    raise DeepSeekHTTPError(
                        response.status_code,
                        response.reason_phrase,
                        body.decode("utf-8", errors="replace"),
                    )

                try:
                    resp = await accumulator.consume(response.aiter_lines())
                except httpx.HTTPError as e:
                    raise DeepSeekStreamError(f"failed to read response: {e}") from e
        except httpx.HTTPError as e:
            raise DeepSeekError(f"DeepSeek request failed: {e}") from e

        logger.debug(
            "DeepSeek response %s: %d chars, %d tool calls",
            resp.id,
            len(resp.content),
            len(resp.choices[0].message.tool_calls) if resp.choices else 0,
        )
        record_message(self.message_log, MESSAGE_SOURCE, False, resp.model_dump_json().encode())

        return resp

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
