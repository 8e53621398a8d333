"""Unified CLI entry point for walletcurs.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (WALLETCURS_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import logging

import typer

from walletcurs.cli.currencies_cmd import currencies_app
from walletcurs.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("walletcurs")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "walletcurs — wallet currency registry CLI. "
    "Inspect which currencies the wallet supports given the client list, the definition table, and the server config. "
    "Config precedence: settings.default.toml -> settings.local.toml -> env vars (WALLETCURS_* with __) -> CLI flags."
)

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

app = typer.Typer(add_completion=True, help=APP_HELP)

app.add_typer(currencies_app, name="currencies")
app.add_typer(settings_app, name="settings")


def setup_logging(level: str) -> None:
    """Configure the root logger; safe to call repeatedly."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", force=True)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"walletcurs {VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from walletcurs.settings import get_settings

    setup_logging("DEBUG" if verbose else get_settings().log_level)


if __name__ == "__main__":
    app()
