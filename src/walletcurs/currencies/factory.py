"""Build a ``WalletCurrencyRegistry`` from walletcurs settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from walletcurs.currencies.definitions import load_definitions
from walletcurs.currencies.registry import WalletCurrencyRegistry

if TYPE_CHECKING:
    from walletcurs.settings.config import Settings

logger = logging.getLogger(__name__)


def create_registry(settings: Settings | None = None) -> WalletCurrencyRegistry:
    """Create and initialize a registry from settings.

    Args:
        settings: Explicit settings.  If None, uses ``get_settings()``.

    Returns:
        An initialized ``WalletCurrencyRegistry`` whose server config is
        ``settings.server``.

    Raises:
        CurrencyConfigError: If the definition table is malformed or, under
            the ``error`` policy, a client code has no definition.
    """
    if settings is None:
        from walletcurs.settings import get_settings

        settings = get_settings()

    definitions = load_definitions(settings.wallet.definitions_path or None)
    logger.debug(
        "Creating registry: client=%s testnet=%s policy=%s",
        settings.wallet.currencies,
        settings.server.testnet,
        settings.wallet.missing_definition,
    )
    return WalletCurrencyRegistry(
        settings.server,
        settings.wallet.currencies,
        definitions,
        missing_definition=settings.wallet.missing_definition,
    )
