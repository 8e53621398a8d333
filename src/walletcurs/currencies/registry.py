"""Wallet currency registry — the active currency list and its queries.

Three sources decide whether a currency can be used by the wallet:

1. the currency definition table (only ``crypto`` entries qualify),
2. the client-enabled code list,
3. the server-supported code list (``server_config.wallets`` or per call).

``WalletCurrencyRegistry.init`` intersects (1) and (2) into the *active*
currencies.  The query methods then combine that list with (3) and the
server's testnet flag, which is read on every call.

Usage::

    registry = WalletCurrencyRegistry(settings.server)
    registry.init(["BCH", "BTC"], load_definitions())
    registry.only_supported_wallet_currencies(["BTC", "DOGE"])  # ["BTC"]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, Protocol

from walletcurs.currencies.definitions import coerce_definition
from walletcurs.currencies.models import CurrencyDefinition
from walletcurs.exceptions import CurrencyDefinitionError, UnknownCurrencyError

logger = logging.getLogger(__name__)


class ServerConfig(Protocol):
    """The server configuration collaborator.

    ``testnet`` is required.  A ``wallets`` attribute holding the
    server-approved code list is optional.
    """

    @property
    def testnet(self) -> bool: ...


class MissingDefinitionPolicy(str, Enum):
    """What ``init`` does with a client-enabled code that has no definition."""

    SKIP = "skip"
    ERROR = "error"


class WalletCurrencyRegistry:
    """Active wallet currencies plus lookup and membership queries.

    A registry starts uninitialized, behaving as if no currency were active.
    ``init`` may be called again at any time and replaces the active list
    wholesale.
    """

    def __init__(
        self,
        server_config: ServerConfig,
        client_codes: Iterable[str] | None = None,
        definitions: Mapping[str, CurrencyDefinition | dict[str, Any]] | None = None,
        *,
        missing_definition: MissingDefinitionPolicy | str = MissingDefinitionPolicy.SKIP,
    ) -> None:
        self._server_config = server_config
        self._missing_definition = MissingDefinitionPolicy(missing_definition)
        self._active: tuple[CurrencyDefinition, ...] = ()
        self._by_code: dict[str, CurrencyDefinition] = {}
        self._initialized = False
        if client_codes is not None and definitions is not None:
            self.init(client_codes, definitions)

    # -- Initialization ----------------------------------------------------

    def init(
        self,
        client_codes: Iterable[str],
        definitions: Mapping[str, CurrencyDefinition | dict[str, Any]],
    ) -> None:
        """Compute the active currencies from the client list and definition table.

        Every entry of *definitions* is validated, so a malformed table fails
        here rather than on a later query.  Active currencies follow the order
        of *client_codes*; repeated client codes are kept once.

        Args:
            client_codes: Currency codes the client enables.
            definitions: Definition table keyed by currency code.

        Raises:
            CurrencyDefinitionError: If a definition is malformed or filed
                under a key that differs from its ``code``.
            UnknownCurrencyError: If a client code has no definition and the
                policy is ``MissingDefinitionPolicy.ERROR``.
            TypeError: If *client_codes* is a single string.
        """
        if isinstance(client_codes, str):
            raise TypeError(f"client_codes must be a list of currency codes, not a string: {client_codes!r}")

        table: dict[str, CurrencyDefinition] = {}
        for key, raw in definitions.items():
            definition = coerce_definition(raw, code=key)
            if definition.code != key:
                raise CurrencyDefinitionError(f"filed under mismatched key '{key}'", code=definition.code)
            table[key] = definition

        active: list[CurrencyDefinition] = []
        seen: set[str] = set()
        for code in client_codes:
            if code in seen:
                continue
            seen.add(code)
            definition = table.get(code)
            if definition is None:
                if self._missing_definition is MissingDefinitionPolicy.ERROR:
                    raise UnknownCurrencyError(code)
                logger.warning("Skipping client currency %s: no definition found", code)
                continue
            if not definition.is_crypto:
                logger.debug("Skipping client currency %s: not a crypto currency", code)
                continue
            active.append(definition)

        self._active = tuple(active)
        self._by_code = {d.code: d for d in self._active}
        self._initialized = True
        logger.info(
            "Wallet currencies initialized: %d active of %d client-enabled (%s)",
            len(self._active),
            len(seen),
            ", ".join(self._by_code) or "none",
        )

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def server_config(self) -> ServerConfig:
        return self._server_config

    # -- Lookup ------------------------------------------------------------

    def get_active_currencies(self) -> tuple[CurrencyDefinition, ...]:
        """Return the active currencies in client-list order."""
        return self._active

    def get_currency_by_code(self, code: str, *, include_testnet_codes: bool = False) -> CurrencyDefinition | None:
        """Return the active currency with *code*, or ``None``.

        Matching is exact and case-sensitive.  Fiat, unknown, and
        non-enabled codes all return ``None``.  With
        ``include_testnet_codes``, a testnet code also resolves to its currency.
        """
        found = self._by_code.get(code)
        if found is None and include_testnet_codes and code:
            found = next((d for d in self._active if d.testnet_code == code), None)
        return found

    def ensure_mainnet_code(self, code: str) -> str:
        """Map a testnet code to its mainnet code; other codes pass through."""
        found = self.get_currency_by_code(code, include_testnet_codes=True)
        return found.code if found else code

    # -- Supported-currency queries ----------------------------------------

    def _is_testnet(self, testnet: bool | None) -> bool:
        if testnet is None:
            return bool(self._server_config.testnet)
        return testnet

    def supported_wallet_currencies(self, *, testnet: bool | None = None) -> list[str]:
        """Return the active currency codes for the selected network.

        Args:
            testnet: Use testnet codes.  ``None`` reads the server
                config's ``testnet`` flag at call time.
        """
        on_testnet = self._is_testnet(testnet)
        return [d.code_for(on_testnet) for d in self._active]

    def _server_currencies(self, server_curs: Sequence[str] | None, testnet: bool | None) -> Sequence[str]:
        if server_curs is not None:
            return server_curs
        wallets = getattr(self._server_config, "wallets", None)
        if wallets is not None:
            return wallets
        return self.supported_wallet_currencies(testnet=testnet)

    def is_supported_wallet_currency(
        self,
        code: str,
        *,
        client_supported: bool = True,
        server_curs: Sequence[str] | None = None,
        testnet: bool | None = None,
    ) -> bool:
        """Return whether *code* can be used by the wallet.

        Args:
            code: Currency code to check (exact match).
            client_supported: Also require *code* to be an active client
                currency for the selected network.
            server_curs: Server-supported codes.  ``None`` uses the server
                config's ``wallets`` list, or the client-supported codes
                if the server config has none.
            testnet: Network selection, as in ``supported_wallet_currencies``.
        """
        if code not in self._server_currencies(server_curs, testnet):
            return False
        if client_supported:
            return code in self.supported_wallet_currencies(testnet=testnet)
        return True

    def only_supported_wallet_currencies(self, codes: Iterable[str], **options: Any) -> list[str]:
        """Filter *codes* to the supported ones, preserving order.

        Keyword options are those of ``is_supported_wallet_currency``.
        """
        return [code for code in codes if self.is_supported_wallet_currency(code, **options)]

    def any_supported_by_wallet(self, codes: Iterable[str], **options: Any) -> bool:
        """Return ``True`` as soon as one of *codes* is supported."""
        return any(self.is_supported_wallet_currency(code, **options) for code in codes)

    # -- Capabilities --------------------------------------------------------

    def check_address(self, code: str, address: str, *, testnet: bool | None = None) -> bool | None:
        """Validate *address* for the active currency *code*.

        Returns:
            ``True``/``False`` when the currency's chain can decide, ``None``
            when the currency is not active, has no address check, or its
            check raised.
        """
        currency = self.get_currency_by_code(code, include_testnet_codes=True)
        if currency is None or not currency.supports_address_validation:
            return None
        try:
            return currency.is_valid_address(address, testnet=self._is_testnet(testnet))
        except Exception as exc:
            logger.debug("Could not validate %s address %s: %s", currency.code, address[:16], exc)
            return None
