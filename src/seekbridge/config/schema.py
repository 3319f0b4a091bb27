"""Pydantic models for seekbridge.yaml configuration."""

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """Model and sampling configuration."""

    name: str = Field(default="deepseek-chat", description="DeepSeek model identifier")
    max_tokens: int = Field(default=4096, description="Maximum tokens to generate", ge=1)
    temperature: float | None = Field(
        default=None, description="Sampling temperature (server default if unset)", ge=0.0, le=2.0
    )
    top_p: float | None = Field(
        default=None, description="Nucleus sampling probability (server default if unset)", ge=0.0, le=1.0
    )


class DeepSeekConfig(BaseModel):
    """DeepSeek API connection configuration."""

    base_url: str = Field(default="https://api.deepseek.com/v1", description="API root URL")
    api_key: str | None = Field(
        default=None, description="API key (falls back to DEEPSEEK_API_KEY)"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every request"
    )
    timeout: int = Field(default=120, description="Request timeout in seconds", ge=1)


class AgentConfig(BaseModel):
    """Caller identity and prompting."""

    name: str = Field(default="seekbridge", description="Agent name stamped on progress events")
    system_prompt: str = Field(
        default="You are a helpful assistant.",
        description="System prompt sent ahead of the conversation",
    )


class LoggingConfig(BaseModel):
    """Audit logging configuration."""

    log_messages: bool = Field(
        default=False, description="Log raw request and response payloads at DEBUG level"
    )
    redact: bool = Field(default=True, description="Mask credentials in logged payloads")


class SeekbridgeConfig(BaseModel):
    """Root configuration model."""

    model: ModelConfig = Field(default_factory=ModelConfig)
    deepseek: DeepSeekConfig = Field(default_factory=DeepSeekConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
