"""walletcurs test configuration — shared fixtures for unit tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch: pytest.MonkeyPatch):
    """Clear the settings LRU cache and stray WALLETCURS_* env vars between tests."""
    import os

    from walletcurs.settings.config import get_settings

    for key in list(os.environ):
        if key.startswith("WALLETCURS_") and key != "WALLETCURS_PROJECT_ROOT":
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Server config collaborator
# ---------------------------------------------------------------------------


@dataclass
class FakeServerConfig:
    """Stand-in for the server configuration: a testnet flag and optional wallets list."""

    testnet: bool = False
    wallets: list[str] | None = None


@pytest.fixture()
def server_config() -> FakeServerConfig:
    return FakeServerConfig()


# ---------------------------------------------------------------------------
# Definition tables
# ---------------------------------------------------------------------------

WALLET_CURS = ["BCH", "BTC"]


def make_wallet_cur_def() -> dict[str, dict[str, Any]]:
    """A small camelCase definition table: one fiat and two crypto currencies."""
    return {
        "AED": {
            "code": "AED",
            "currencyType": "fiat",
            "divisibility": 2,
            "name": "UAE Dirham",
            "testnetCode": "",
        },
        "BCH": {
            "code": "BCH",
            "currencyType": "crypto",
            "divisibility": 8,
            "name": "Bitcoin Cash",
            "testnetCode": "TBCH",
            "averageModeratedTransactionSize": 184,
            "feeBumpTransactionSize": 154,
            "supportsEscrowTimeout": True,
            "blockTime": 600,
            "chain": "bitcoin_cash",
        },
        "BTC": {
            "code": "BTC",
            "currencyType": "crypto",
            "divisibility": 8,
            "name": "Bitcoin",
            "testnetCode": "TBTC",
            "symbol": "₿",
            "averageModeratedTransactionSize": 184,
            "supportsEscrowTimeout": True,
            "chain": "bitcoin",
        },
    }


@pytest.fixture()
def wallet_cur_def() -> dict[str, dict[str, Any]]:
    return make_wallet_cur_def()


@pytest.fixture()
def registry(server_config: FakeServerConfig, wallet_cur_def: dict[str, dict[str, Any]]):
    """A registry initialized with client list ``["BCH", "BTC"]``."""
    from walletcurs.currencies.registry import WalletCurrencyRegistry

    reg = WalletCurrencyRegistry(server_config)
    reg.init(WALLET_CURS, wallet_cur_def)
    return reg


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that require external services or real I/O")
