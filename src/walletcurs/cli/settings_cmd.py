"""CLI commands for inspecting and validating walletcurs settings."""

from __future__ import annotations

import json

import typer
from rich.console import Console

settings_app = typer.Typer(help="Inspect and validate walletcurs configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings."""
    from walletcurs.settings import get_settings

    settings = get_settings()
    console.print_json(json.dumps(settings.model_dump(mode="json"), indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Validate settings and the currency configuration they point at."""
    from walletcurs.currencies import create_registry
    from walletcurs.exceptions import CurrencyConfigError
    from walletcurs.settings import get_settings

    try:
        settings = get_settings()
        registry = create_registry(settings)
    except (CurrencyConfigError, ValueError) as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    console.print(f"  Testnet: {settings.server.testnet}")
    console.print(f"  Client currencies: {', '.join(settings.wallet.currencies) or '—'}")
    console.print(f"  Active currencies: {', '.join(d.code for d in registry.get_active_currencies()) or '—'}")
