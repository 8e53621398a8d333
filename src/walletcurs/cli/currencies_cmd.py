"""CLI commands for the wallet currency registry.

Subcommands for listing active currencies, looking one up, filtering codes
against client and server support, checking addresses, and building
explorer links.
"""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

currencies_app = typer.Typer(help="Wallet currency tools — list, look up, filter, and validate addresses.")
console = Console()

_NETWORK_OPTION_HELP = "Use testnet or mainnet codes. Defaults to the server config."


def _registry():
    from walletcurs.currencies import create_registry
    from walletcurs.exceptions import CurrencyConfigError

    try:
        return create_registry()
    except CurrencyConfigError as e:
        console.print(f"[red]Invalid currency configuration:[/red] {e}")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# walletcurs currencies list
# ---------------------------------------------------------------------------


@currencies_app.command("list")
def list_currencies(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
    testnet: Optional[bool] = typer.Option(None, "--testnet/--mainnet", help=_NETWORK_OPTION_HELP),
) -> None:
    """Display the active wallet currencies."""
    registry = _registry()
    active = registry.get_active_currencies()
    codes = registry.supported_wallet_currencies(testnet=testnet)

    if json_output:
        data = [{**d.to_dict(), "network_code": code} for d, code in zip(active, codes)]
        console.print_json(json.dumps(data, indent=2))
        return

    if not active:
        console.print("[yellow]No active wallet currencies[/yellow]")
        return

    table = Table(title=f"Active Wallet Currencies ({len(active)})")
    table.add_column("Code", style="cyan", width=8)
    table.add_column("Network", style="bold", width=8)
    table.add_column("Name")
    table.add_column("Div.", style="dim", width=5)
    table.add_column("Block time", style="dim")
    table.add_column("Escrow timeout")

    for d, code in zip(active, codes):
        block_time = f"{d.block_time:g}s" if d.block_time is not None else "—"
        table.add_row(d.code, code or "—", d.name, str(d.divisibility), block_time, "yes" if d.supports_escrow_timeout else "no")

    console.print(table)


# ---------------------------------------------------------------------------
# walletcurs currencies show <code>
# ---------------------------------------------------------------------------


@currencies_app.command("show")
def show_currency(
    code: str = typer.Argument(..., help="Currency code (mainnet or testnet)."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """Show the definition of one active wallet currency."""
    registry = _registry()
    currency = registry.get_currency_by_code(code, include_testnet_codes=True)
    if currency is None:
        console.print(f"[yellow]'{code}' is not an active wallet currency[/yellow]")
        raise typer.Exit(code=1)

    data = currency.to_dict()
    if json_output:
        console.print_json(json.dumps(data, indent=2))
        return

    table = Table(title=f"{currency.name} ({currency.code})", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, "—" if value is None else str(value))
    console.print(table)


# ---------------------------------------------------------------------------
# walletcurs currencies supported
# ---------------------------------------------------------------------------


@currencies_app.command("supported")
def show_supported(
    testnet: Optional[bool] = typer.Option(None, "--testnet/--mainnet", help=_NETWORK_OPTION_HELP),
) -> None:
    """Print the client-supported wallet currency codes, one per line."""
    registry = _registry()
    for code in registry.supported_wallet_currencies(testnet=testnet):
        typer.echo(code)


# ---------------------------------------------------------------------------
# walletcurs currencies filter <codes...>
# ---------------------------------------------------------------------------


@currencies_app.command("filter")
def filter_codes(
    codes: list[str] = typer.Argument(..., help="Currency codes to filter."),
    server: Optional[list[str]] = typer.Option(
        None, "--server", "-s", help="Server-supported code (repeatable). Defaults to the server config."
    ),
    client: bool = typer.Option(True, "--client/--no-client", help="Also require client support."),
    testnet: Optional[bool] = typer.Option(None, "--testnet/--mainnet", help=_NETWORK_OPTION_HELP),
) -> None:
    """Keep only the codes the wallet supports, in input order."""
    registry = _registry()
    supported = registry.only_supported_wallet_currencies(
        codes,
        client_supported=client,
        server_curs=server or None,
        testnet=testnet,
    )
    if not supported:
        console.print("[yellow]None of the given currencies are supported[/yellow]")
        raise typer.Exit(code=1)
    for code in supported:
        typer.echo(code)


# ---------------------------------------------------------------------------
# walletcurs currencies check-address <code> <address>
# ---------------------------------------------------------------------------


@currencies_app.command("check-address")
def check_address(
    code: str = typer.Argument(..., help="Currency code."),
    address: str = typer.Argument(..., help="Address to check."),
    testnet: Optional[bool] = typer.Option(None, "--testnet/--mainnet", help=_NETWORK_OPTION_HELP),
) -> None:
    """Check an address's format. Exit 0 if valid, 1 if invalid, 2 if undetermined."""
    registry = _registry()
    if registry.get_currency_by_code(code, include_testnet_codes=True) is None:
        console.print(f"[red]✗[/red] '{code}' is not an active wallet currency")
        raise typer.Exit(code=1)

    result = registry.check_address(code, address, testnet=testnet)
    if result is None:
        console.print(f"[yellow]?[/yellow] Could not determine whether this is a valid {code} address")
        raise typer.Exit(code=2)
    if not result:
        console.print(f"[red]✗[/red] Not a valid {code} address")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Valid {code} address")


# ---------------------------------------------------------------------------
# walletcurs currencies urls <code> <address-or-txid>
# ---------------------------------------------------------------------------


@currencies_app.command("urls")
def show_urls(
    code: str = typer.Argument(..., help="Currency code."),
    value: str = typer.Argument(..., help="Address or transaction id."),
    testnet: Optional[bool] = typer.Option(None, "--testnet/--mainnet", help=_NETWORK_OPTION_HELP),
) -> None:
    """Print the QR code text and block-explorer links for an address or transaction."""
    registry = _registry()
    currency = registry.get_currency_by_code(code, include_testnet_codes=True)
    if currency is None:
        console.print(f"[red]✗[/red] '{code}' is not an active wallet currency")
        raise typer.Exit(code=1)

    on_testnet = registry.server_config.testnet if testnet is None else testnet
    typer.echo(f"QR text:     {currency.qr_code_text(value)}")
    typer.echo(f"Address URL: {currency.block_chain_address_url(value, testnet=on_testnet)}")
    typer.echo(f"Tx URL:      {currency.block_chain_tx_url(value, testnet=on_testnet)}")
