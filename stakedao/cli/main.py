#!/usr/bin/env python3
"""
Main CLI entry point for stakedao.

Commands:
- replay: apply a JSON script of governance calls to a fresh engine
- show-config: print the effective governance settings
"""

import json
import sys

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from stakedao.core.config import GovernanceSettings, load_settings
from stakedao.core.logging import configure_logging
from stakedao.core.replay import ReplayReport, load_script, run_script

console = Console()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--debug-scope",
    "-d",
    "debug_scopes",
    multiple=True,
    help="Emit DEBUG records for one module (e.g. core.engine); repeatable",
)
@click.pass_context
def cli(ctx, verbose: bool, debug_scopes: tuple[str, ...]):
    """
    stakedao governance CLI.

    Replay governance call traces and inspect configuration for the
    stake-weighted DAO engine.
    """
    configure_logging(
        "DEBUG" if verbose else "WARNING",
        debug_scopes=debug_scopes,
        colorize=verbose,
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _settings_from(config: str | None) -> GovernanceSettings | None:
    if config is None:
        return None
    return load_settings(config)


def _display_report(report: ReplayReport) -> None:
    table = Table(title="Governance Replay")

    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Height", justify="right")
    table.add_column("Caller", style="magenta")
    table.add_column("Operation", style="green")
    table.add_column("Result", justify="center")

    for outcome in report.outcomes:
        result = outcome.result
        if result.error is None:
            rendered = f"[green]ok {result.value}[/green]"
        else:
            rendered = f"[red]{result.error.name}[/red]"
        table.add_row(
            str(outcome.index),
            str(outcome.height),
            outcome.step.caller,
            outcome.step.op,
            rendered,
        )

    console.print(table)

    stats = report.final_state["statistics"]
    console.print(
        f"Members: {stats['member_count']}  Staked: {stats['total_staked']}  "
        f"Proposals: {stats['total_proposals']}  Votes: {stats['total_votes_cast']}"
    )


@cli.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config", "-c", type=click.Path(exists=True), help="Settings file path"
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option(
    "--strict", is_flag=True, help="Exit non-zero if any step was rejected"
)
def replay(script: str, config: str | None, output: str, strict: bool):
    """Replay a governance call script against a fresh engine."""
    report = run_script(load_script(script), _settings_from(config))

    if output == "table":
        _display_report(report)
    elif output == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))

    if strict and report.failures:
        logger.warning("{} replay steps were rejected", len(report.failures))
        sys.exit(1)


@cli.command("show-config")
@click.option(
    "--config", "-c", type=click.Path(exists=True), help="Settings file path"
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
def show_config(config: str | None, output: str):
    """Show effective governance settings."""
    settings = _settings_from(config) or GovernanceSettings()

    if output == "json":
        click.echo(json.dumps(settings.to_dict(), indent=2))
        return

    table = Table(title="Governance Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name, value in settings.to_dict().items():
        table.add_row(name, str(value))
    console.print(table)


def main():
    """Main CLI entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
