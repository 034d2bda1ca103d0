"""Command-line interface for retriable."""

import asyncio
import sys
from typing import Any, Dict, Optional, Tuple

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from retriable import __version__
from retriable.core.config import RuntimeSettings, configure_logging
from retriable.core.exceptions import CommandParseError, ConfigurationError, ValidationError
from retriable.core.types import RunOutcome
from retriable.parsers import parse_command, parse_config, resolve_config
from retriable.resilience import RetryEngine

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


@click.group()
@click.version_option(version=__version__, prog_name="retriable")
def cli() -> None:
    """Retriable - Re-run failing commands."""
    load_dotenv()
    configure_logging(RuntimeSettings())


@cli.command(context_settings={"allow_interspersed_args": False})
@click.option("--retries", "-r", envvar="RETRIES", help="Maximum attempts (default: 9).")
@click.option("--sleep", "-s", envvar="SLEEP", help="Delay between attempts (default: 5s).")
@click.option(
    "--regex",
    multiple=True,
    envvar="REGEX",
    help=(
        "Stop retrying when exit code 1 output matches this pattern. "
        "Repeat the flag for several patterns; commas are part of the pattern."
    ),
)
@click.option("--min", "min_delay", envvar="MIN", help="Reserved (default: 10s).")
@click.option("--max", "max_delay", envvar="MAX", help="Reserved (default: 10s).")
@click.option(
    "--config",
    "config_path",
    envvar="CONFIG",
    type=click.Path(dir_okay=False),
    help="Path to config file.",
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def retry(
    retries: Optional[str],
    sleep: Optional[str],
    regex: Tuple[str, ...],
    min_delay: Optional[str],
    max_delay: Optional[str],
    config_path: Optional[str],
    command: Tuple[str, ...],
) -> None:
    """Run COMMAND, retrying it when it fails.

    Example:
        retriable retry --retries 3 --sleep 2s --regex "not found" make deploy
    """
    overrides: Dict[str, Any] = {
        key: value
        for key, value in (
            ("retries", retries),
            ("sleep", sleep),
            ("min", min_delay),
            ("max", max_delay),
        )
        if value is not None
    }
    if regex:
        overrides["regex"] = list(regex)

    try:
        config = resolve_config(overrides, config_path)
    except (ConfigurationError, ValidationError) as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)

    try:
        invocation = parse_command(command)
    except CommandParseError as e:
        console.print(escape(str(e)))
        sys.exit(1)

    console.print("Executing command in retriable CLI...")
    engine = RetryEngine(console=console)
    try:
        outcome = asyncio.run(
            engine.execute(invocation, config.to_policy(), config.to_match_rules())
        )
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
        sys.exit(130)

    if outcome == RunOutcome.SUCCESS:
        sys.exit(0)

    console.print("[red]Command execution failed after retries.[/red]")
    sys.exit(1)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
def validate(config_path: str) -> None:
    """Validate a retry configuration file.

    Example:
        retriable validate retry.yaml
    """
    try:
        console.print(f"[cyan]Validating config: {escape(config_path)}[/cyan]")
        config = parse_config(config_path)
    except (ConfigurationError, ValidationError) as e:
        console.print(f"[red]✗ Validation failed: {escape(str(e))}[/red]")
        sys.exit(1)

    console.print("[green]✓ Config is valid[/green]")
    console.print(f"  Retries: {config.retries}")
    console.print(f"  Sleep: {config.sleep}")
    console.print(f"  Patterns: {len(config.regex)}")
    for pattern in config.regex:
        console.print(f"    - {escape(pattern)}")
    sys.exit(0)


@cli.command()
def version() -> None:
    """Show retriable version."""
    console.print(f"retriable version {__version__}")


if __name__ == "__main__":
    cli()
