"""Main CLI application using Typer."""

import sys

import typer
from rich.console import Console

from seekbridge import __version__

app = typer.Typer(
    name="seekbridge",
    help="seekbridge - streaming DeepSeek completions through a provider-agnostic API",
    no_args_is_help=True,
)

console = Console()


@app.command()
def version():
    """Show seekbridge version."""
    console.print(f"seekbridge version {__version__}")


@app.command()
def complete(
    prompt: str = typer.Argument(..., help="User prompt to send"),
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.seekbridge/seekbridge.yaml)",
    ),
    model: str = typer.Option(None, "--model", "-m", help="Override the configured model"),
    system: str = typer.Option(None, "--system", "-s", help="Override the system prompt"),
    tools_path: str = typer.Option(
        None, "--tools", "-t", help="JSON file with a list of tool definitions"
    ),
    tool_choice: str = typer.Option(
        "", "--tool-choice", help="auto, none, required, or a tool name"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run one streamed completion and print it as it arrives."""
    from seekbridge.cli.complete_cmd import complete_command

    complete_command(
        prompt=prompt,
        config_path=config_path,
        model=model,
        system=system,
        tools_path=tools_path,
        tool_choice=tool_choice,
        verbose=verbose,
    )


def main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
