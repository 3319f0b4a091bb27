"""seekbridge - DeepSeek adapter for a provider-agnostic completion API.

seekbridge translates generic chat completion requests into DeepSeek's
OpenAI-compatible wire format, streams the response over server-sent events,
and reassembles it while publishing incremental progress events.

Key modules:

- :mod:`seekbridge.llm` - Generic completion types, progress routing, client factory
- :mod:`seekbridge.llm.deepseek` - Wire schema, translators, stream accumulator, HTTP client
- :mod:`seekbridge.audit` - Redacted audit log of raw API payloads
- :mod:`seekbridge.config` - YAML configuration
- :mod:`seekbridge.cli` - Command line interface
"""

__version__ = "0.1.0"
