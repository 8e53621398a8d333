"""Wallet currencies — definitions, blockchain capabilities, and the active-currency registry.

This package owns everything related to deciding which currencies the
wallet can use:

* ``models`` — Pydantic ``CurrencyDefinition`` and ``CurrencyType``.
* ``chains`` — Per-blockchain QR text, explorer URLs, and address checks.
* ``definitions`` — Built-in definition table and JSON loader.
* ``registry`` — ``WalletCurrencyRegistry``, the client/server/definition intersection.
* ``factory`` — Build a registry from settings.
"""

from walletcurs.currencies.chains import Blockchain, get_chain
from walletcurs.currencies.definitions import DEFAULT_CURRENCY_DEFINITIONS, load_definitions
from walletcurs.currencies.factory import create_registry
from walletcurs.currencies.models import CurrencyDefinition, CurrencyType
from walletcurs.currencies.registry import MissingDefinitionPolicy, WalletCurrencyRegistry

__all__ = [
    "Blockchain",
    "CurrencyDefinition",
    "CurrencyType",
    "DEFAULT_CURRENCY_DEFINITIONS",
    "MissingDefinitionPolicy",
    "WalletCurrencyRegistry",
    "create_registry",
    "get_chain",
    "load_definitions",
]
