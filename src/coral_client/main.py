"""Command-line entry point for the ElasticMapReduce client."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from coral_client import __version__
from coral_client.client import OPERATIONS, ElasticMapReduceClient
from coral_client.config import CoralConfig
from coral_client.exceptions import CoralError, DecodeError, TransportError
from coral_client.logging import configure_logging

app = typer.Typer(
    name="coral-emr",
    help="Coral EMR - call ElasticMapReduce operations over AWS/QUERY",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def get_client(config: CoralConfig) -> ElasticMapReduceClient:
    """Create the client used by commands."""
    return ElasticMapReduceClient.from_config(config)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Coral EMR version: {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Coral EMR - command-line interface for ElasticMapReduce.

    Use 'coral-emr COMMAND --help' for help with specific commands.
    """
    pass


@app.command()
def operations() -> None:
    """List the operations the service supports."""
    for name in OPERATIONS:
        console.print(name)


@app.command()
def call(
    operation: Annotated[str, typer.Argument(help="Operation name (e.g., DescribeJobFlows)")],
    input: Annotated[
        str,
        typer.Option("--input", "-i", help="Operation input as a JSON object"),
    ] = "{}",
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", "-e", help="Service URL (overrides config)"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a YAML config file"),
    ] = None,
) -> None:
    """Invoke an operation and print its result as JSON.

    Examples:
        # Describe a job flow
        coral-emr call DescribeJobFlows -i '{"JobFlowIds": ["j-1"]}'

        # Use another endpoint
        coral-emr call TerminateJobFlows -e http://localhost:8080 -i '{"JobFlowIds": ["j-1"]}'
    """
    if operation not in OPERATIONS:
        err_console.print(
            f"[red]Unknown operation:[/red] {operation} "
            f"(expected one of: {', '.join(OPERATIONS)})"
        )
        raise typer.Exit(2)

    try:
        payload = json.loads(input)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid JSON input:[/red] {e}")
        raise typer.Exit(2)
    if not isinstance(payload, dict):
        err_console.print("[red]Invalid JSON input:[/red] expected an object")
        raise typer.Exit(2)

    try:
        config = CoralConfig.load(config_path)
        if endpoint:
            config = CoralConfig(**{**config.model_dump(), "endpoint": endpoint})
    except ValueError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(2)

    configure_logging(config.log_level, config.log_format)

    with get_client(config) as client:
        try:
            result = client.new_call(operation).call(payload)
        except TransportError as e:
            err_console.print(f"[red]Transport error:[/red] {e}")
            raise typer.Exit(1)
        except DecodeError as e:
            err_console.print(f"[red]Decode error:[/red] {e}")
            raise typer.Exit(1)
        except CoralError as e:
            err_console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)

    # Use print() for JSON to avoid Rich's text wrapping
    print(json.dumps(result, indent=2))
    if isinstance(result, dict) and "Error" in result:
        raise typer.Exit(1)


def cli_main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
