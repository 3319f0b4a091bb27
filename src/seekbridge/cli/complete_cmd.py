"""One-shot streamed completion command."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from seekbridge.config.loader import ConfigError, load_config
from seekbridge.llm.client import CompletionOptions, ToolUseDefinition
from seekbridge.llm.deepseek import DeepSeekError
from seekbridge.llm.factory import build_request, create_llm_client
from seekbridge.llm.progress import ProgressRouter

if TYPE_CHECKING:
    from seekbridge.config.schema import SeekbridgeConfig
    from seekbridge.llm.client import CompletionProgress, CompletionRequest, CompletionResponse

console = Console()
logger = logging.getLogger(__name__)


def complete_command(
    prompt: str,
    config_path: str | None = None,
    model: str | None = None,
    system: str | None = None,
    tools_path: str | None = None,
    tool_choice: str = "",
    verbose: bool = False,
) -> None:
    """Run a single completion, streaming text to the console.

    Args:
        prompt: User prompt
        config_path: Optional path to config file
        model: Model override
        system: System prompt override
        tools_path: JSON file holding a list of tool definitions
        tool_choice: Tool choice mode or tool name
        verbose: Enable debug logging
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from None

    if not config.deepseek.api_key and "Authorization" not in config.deepseek.headers:
        console.print("[red]No API key configured.[/red] Set DEEPSEEK_API_KEY or deepseek.api_key.")
        raise typer.Exit(1)

    request = build_request(config, prompt, system_prompt=system, model=model, tool_choice=tool_choice)
    if tools_path:
        try:
            request.tools = load_tools(Path(tools_path))
        except (OSError, ValueError) as e:
            console.print(f"[red]Failed to load tools: {escape(str(e))}[/red]", soft_wrap=True)
            raise typer.Exit(1) from None

    try:
        response = asyncio.run(_run(config, request))
    except DeepSeekError as e:
        console.print(f"\n[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from None

    console.print()
    _print_tool_calls(response)


def load_tools(path: Path) -> list[ToolUseDefinition]:
    """Read tool definitions from a JSON file."""
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of tools")
    return [ToolUseDefinition.model_validate(tool) for tool in data]


async def _run(config: SeekbridgeConfig, request: CompletionRequest) -> CompletionResponse:
    router = ProgressRouter()
    token = uuid.uuid4().hex

    def on_progress(progress: CompletionProgress) -> None:
        content = progress.item.content
        if content is not None and content.text:
            console.print(content.text, end="", markup=False, highlight=False, soft_wrap=True)

    router.register(token, on_progress)
    try:
        async with create_llm_client(config, progress=router) as client:
            return await client.complete(request, CompletionOptions(progress_token=token))
    finally:
        router.unregister(token)


def _print_tool_calls(response: CompletionResponse) -> None:
    calls = [item.tool_call for item in response.output.items if item.tool_call is not None]
    if not calls:
        return

    table = Table(title="Tool calls")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Arguments")
    for call in calls:
        table.add_row(call.call_id, call.name, call.arguments)
    console.print(table)
