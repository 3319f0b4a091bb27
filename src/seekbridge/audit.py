"""Audit trail of raw API payloads.

The DeepSeek client hands every serialized request and assembled response to a
:class:`MessageLog`. The default implementation writes them, with credentials
masked, to the ``seekbridge.messages`` logger at DEBUG level.
"""

import logging
import re
from typing import ClassVar, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class SensitiveDataRedactor:
    """Redact credentials from logged payloads.

    Detects and redacts:
    - API keys and access tokens in key/value form
    - Bearer tokens
    - JWTs
    - ``sk-`` style secret keys
    """

    PATTERNS: ClassVar[dict[str, re.Pattern]] = {
        "api_key": re.compile(
            r"(?i)(\"?(?:api[_-]?key|apikey|access[_-]?token|secret[_-]?key)\"?\s*[:=]\s*\"?)([a-zA-Z0-9_\-\.]{8,})"
        ),
        "bearer": re.compile(r"(?i)(bearer\s+)([a-zA-Z0-9_\-\.=]{8,})"),
        "jwt": re.compile(r"eyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"),
        "secret_key": re.compile(r"\bsk-[a-zA-Z0-9]{16,}\b"),
    }

    REDACTED_PLACEHOLDER = "[REDACTED]"

    @classmethod
    def redact(cls, text: str) -> str:
        """Redact sensitive data from text.

        Args:
            text: Text to redact

        Returns:
            Redacted text
        """
        if not text:
            return text

        result = text
        for pattern_name, pattern in cls.PATTERNS.items():
            if pattern_name in ("api_key", "bearer"):
                # Keep the key or scheme, drop the value
                result = pattern.sub(lambda m: f"{m.group(1)}{cls.REDACTED_PLACEHOLDER}", result)
            else:
                result = pattern.sub(cls.REDACTED_PLACEHOLDER, result)

        return result


@runtime_checkable
class MessageLog(Protocol):
    """Receives raw payloads exchanged with an API."""

    def record(self, source: str, outbound: bool, data: bytes) -> None:
        """Record a payload.

        Args:
            source: Name of the API the payload belongs to
            outbound: True for requests, False for responses
            data: Raw serialized payload
        """
        ...


class LoggingMessageLog:
    """MessageLog that writes redacted payloads to a standard logger."""

    def __init__(self, name: str = "seekbridge.messages", redact: bool = True) -> None:
        self.logger = logging.getLogger(name)
        self.redact = redact

    def record(self, source: str, outbound: bool, data: bytes) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        text = data.decode("utf-8", errors="replace")
        if self.redact:
            text = SensitiveDataRedactor.redact(text)
        direction = "->" if outbound else "<-"
        self.logger.debug("%s %s %s", source, direction, text)


def record_message(log: MessageLog | None, source: str, outbound: bool, data: bytes) -> None:
    """Record a payload, ignoring failures of the log itself."""
    if log is None:
        return
    try:
        log.record(source, outbound, data)
    except Exception as e:
        logger.debug("Failed to record %s message: %s", source, e)
