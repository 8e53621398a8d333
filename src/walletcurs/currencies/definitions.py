"""Currency definition table — built-in defaults and JSON loading.

The definition table maps currency code to ``CurrencyDefinition``.  It lists
every currency the application knows about, crypto and fiat alike; the
registry decides which of them are active.

A custom table can be supplied as JSON via ``WALLETCURS_WALLET__DEFINITIONS_PATH``::

    {"currencies": [
        {"code": "BTC", "currencyType": "crypto", "divisibility": 8,
         "name": "Bitcoin", "testnetCode": "TBTC", "chain": "bitcoin",
         "averageModeratedTransactionSize": 184, "supportsEscrowTimeout": true}
    ]}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from walletcurs.currencies.chains import get_chain
from walletcurs.currencies.models import CurrencyDefinition, CurrencyType
from walletcurs.exceptions import CurrencyDefinitionError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Built-in table
# ---------------------------------------------------------------------------

_CRYPTO: list[CurrencyDefinition] = [
    CurrencyDefinition(
        code="BTC",
        currency_type=CurrencyType.CRYPTO,
        divisibility=8,
        name="Bitcoin",
        testnet_code="TBTC",
        symbol="₿",
        icon="imgs/cryptoIcons/BTC.png",
        need_coin_link="https://bitcoin.org/en/buy",
        block_time=600,
        fee_bump_transaction_size=154,
        average_moderated_transaction_size=184,
        supports_escrow_timeout=True,
        chain=get_chain("bitcoin"),
    ),
    CurrencyDefinition(
        code="BCH",
        currency_type=CurrencyType.CRYPTO,
        divisibility=8,
        name="Bitcoin Cash",
        testnet_code="TBCH",
        icon="imgs/cryptoIcons/BCH.png",
        need_coin_link="https://bitcoincash.org/exchanges/",
        block_time=600,
        fee_bump_transaction_size=154,
        average_moderated_transaction_size=184,
        supports_escrow_timeout=True,
        chain=get_chain("bitcoin_cash"),
    ),
    CurrencyDefinition(
        code="LTC",
        currency_type=CurrencyType.CRYPTO,
        divisibility=8,
        name="Litecoin",
        testnet_code="TLTC",
        symbol="Ł",
        icon="imgs/cryptoIcons/LTC.png",
        need_coin_link="https://litecoin.org/#exchanges",
        block_time=150,
        fee_bump_transaction_size=154,
        average_moderated_transaction_size=184,
        supports_escrow_timeout=True,
        chain=get_chain("litecoin"),
    ),
    CurrencyDefinition(
        code="ZEC",
        currency_type=CurrencyType.CRYPTO,
        divisibility=8,
        name="Zcash",
        testnet_code="TZEC",
        symbol="ⓩ",
        icon="imgs/cryptoIcons/ZEC.png",
        need_coin_link="https://z.cash/exchanges/",
        block_time=75,
        average_moderated_transaction_size=184,
        supports_escrow_timeout=False,
        chain=get_chain("zcash"),
    ),
    CurrencyDefinition(
        code="ETH",
        currency_type=CurrencyType.CRYPTO,
        divisibility=18,
        name="Ethereum",
        testnet_code="TETH",
        symbol="Ξ",
        icon="imgs/cryptoIcons/ETH.png",
        need_coin_link="https://ethereum.org/en/get-eth/",
        block_time=12,
        average_moderated_transaction_size=184,
        supports_escrow_timeout=False,
        chain=get_chain("ethereum"),
    ),
]

_FIAT: list[CurrencyDefinition] = [
    CurrencyDefinition(code="USD", currency_type=CurrencyType.FIAT, divisibility=2, name="US Dollar", symbol="$"),
    CurrencyDefinition(code="EUR", currency_type=CurrencyType.FIAT, divisibility=2, name="Euro", symbol="€"),
    CurrencyDefinition(code="GBP", currency_type=CurrencyType.FIAT, divisibility=2, name="British Pound", symbol="£"),
    CurrencyDefinition(code="AED", currency_type=CurrencyType.FIAT, divisibility=2, name="UAE Dirham"),
    CurrencyDefinition(code="JPY", currency_type=CurrencyType.FIAT, divisibility=0, name="Japanese Yen", symbol="¥"),
]

DEFAULT_CURRENCY_DEFINITIONS: dict[str, CurrencyDefinition] = {d.code: d for d in _CRYPTO + _FIAT}


# ---------------------------------------------------------------------------
# Table construction and loading
# ---------------------------------------------------------------------------


def build_definitions(items: Iterable[dict[str, Any] | CurrencyDefinition]) -> dict[str, CurrencyDefinition]:
    """Validate raw entries into a code-keyed definition table.

    Raises:
        CurrencyDefinitionError: If an entry is malformed or a code repeats.
    """
    table: dict[str, CurrencyDefinition] = {}
    for item in items:
        definition = coerce_definition(item)
        if definition.code in table:
            raise CurrencyDefinitionError("duplicate definition", code=definition.code)
        table[definition.code] = definition
    return table


def coerce_definition(item: Any, code: str | None = None) -> CurrencyDefinition:
    """Return *item* as a ``CurrencyDefinition``, validating plain dicts.

    Raises:
        CurrencyDefinitionError: If *item* fails validation.
    """
    if isinstance(item, CurrencyDefinition):
        return item
    if not isinstance(item, dict):
        raise CurrencyDefinitionError(f"expected a mapping, got {type(item).__name__}", code=code)
    try:
        return CurrencyDefinition.model_validate(item)
    except ValidationError as exc:
        raise CurrencyDefinitionError(
            f"invalid definition: {exc.error_count()} error(s)\n{exc}",
            code=code or item.get("code"),
        ) from exc


def load_definitions(path: str | Path | None = None) -> dict[str, CurrencyDefinition]:
    """Load the currency definition table from a JSON file.

    Falls back to the built-in table if ``path`` is ``None`` or the file
    doesn't exist.  A file that exists but can't be parsed is a
    configuration defect and is not silently replaced.

    Args:
        path: Path to a definitions JSON file.

    Returns:
        Mapping of currency code to ``CurrencyDefinition``.

    Raises:
        CurrencyDefinitionError: If the file is malformed.
    """
    if path is None or str(path) == "":
        logger.debug("Using built-in currency definitions (%d entries)", len(DEFAULT_CURRENCY_DEFINITIONS))
        return dict(DEFAULT_CURRENCY_DEFINITIONS)

    filepath = Path(path)
    if not filepath.exists():
        logger.warning("Currency definitions file not found at %s, using defaults", filepath)
        return dict(DEFAULT_CURRENCY_DEFINITIONS)

    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CurrencyDefinitionError(f"invalid JSON in {filepath}: {exc}") from exc

    items = data.get("currencies") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise CurrencyDefinitionError(f"{filepath} must contain a 'currencies' array")

    table = build_definitions(items)
    logger.info("Loaded %d currency definitions from %s", len(table), filepath)
    return table
