"""Pydantic models for wallet currency definitions.

``CurrencyType`` — ``crypto`` or ``fiat``.
``CurrencyDefinition`` — one entry of the static currency definition table.

Definitions accept both snake_case field names and the camelCase keys used
by JSON definition tables (``currencyType``, ``testnetCode``, ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    StrictBool,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from walletcurs.currencies.chains import Blockchain, get_chain
from walletcurs.exceptions import WalletCurrencyError


class CurrencyType(str, Enum):
    """Kind of currency in the definition table."""

    CRYPTO = "crypto"
    FIAT = "fiat"


# ---------------------------------------------------------------------------
# CurrencyDefinition
# ---------------------------------------------------------------------------


class CurrencyDefinition(BaseModel):
    """A single currency from the definition table.

    Crypto definitions must carry a ``chain``, an
    ``average_moderated_transaction_size`` and an explicit
    ``supports_escrow_timeout``; fiat definitions need none of them.

    Attributes:
        code: Unique currency code, e.g. ``"BTC"``.
        currency_type: ``crypto`` or ``fiat``.
        divisibility: Number of decimal places in the smallest unit.
        name: Display name, e.g. ``"Bitcoin"``.
        testnet_code: Code used on the test network, e.g. ``"TBTC"``.
        symbol: Display symbol, e.g. ``"₿"``.
        icon: Path to an icon image.
        need_coin_link: URL where users can acquire the coin.
        block_time: Average block interval in seconds.
        fee_bump_transaction_size: Size in bytes of a fee-bump transaction.
        average_moderated_transaction_size: Size in bytes of a typical escrow release.
        supports_escrow_timeout: Whether escrow timeouts can be enforced on-chain.
        chain: Blockchain capabilities (QR text, explorer URLs, address checks).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )

    code: str
    currency_type: CurrencyType
    divisibility: int = Field(ge=0)
    name: str
    testnet_code: str = ""
    symbol: str | None = None
    icon: str | None = None
    need_coin_link: str | None = None
    block_time: float | None = None
    fee_bump_transaction_size: PositiveFloat | None = None
    average_moderated_transaction_size: PositiveFloat | None = None
    supports_escrow_timeout: StrictBool = False
    chain: Blockchain | None = None

    @field_validator("code")
    @classmethod
    def _code_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("code must not be empty")
        return v

    @field_validator("chain", mode="before")
    @classmethod
    def _resolve_chain_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return get_chain(v)
            except KeyError as exc:
                raise ValueError(str(exc.args[0])) from exc
        return v

    @model_validator(mode="after")
    def _crypto_requirements(self) -> "CurrencyDefinition":
        if self.currency_type is CurrencyType.CRYPTO:
            if self.chain is None:
                raise ValueError(f"crypto currency {self.code} requires a chain")
            if self.average_moderated_transaction_size is None:
                raise ValueError(f"crypto currency {self.code} requires averageModeratedTransactionSize")
            if "supports_escrow_timeout" not in self.model_fields_set:
                raise ValueError(f"crypto currency {self.code} requires supportsEscrowTimeout")
        return self

    # -- Convenience properties ------------------------------------------

    @property
    def is_crypto(self) -> bool:
        return self.currency_type is CurrencyType.CRYPTO

    @property
    def supports_address_validation(self) -> bool:
        """Whether ``is_valid_address`` is available for this currency."""
        return self.chain is not None and self.chain.supports_address_validation

    def code_for(self, testnet: bool) -> str:
        """Return ``testnet_code`` on testnet, else ``code``."""
        return self.testnet_code if testnet else self.code

    # -- Capabilities ----------------------------------------------------

    def _require_chain(self) -> Blockchain:
        if self.chain is None:
            raise WalletCurrencyError(f"{self.code} is not backed by a blockchain")
        return self.chain

    def qr_code_text(self, address: str) -> str:
        return self._require_chain().qr_code_text(address)

    def block_chain_address_url(self, address: str, testnet: bool = False) -> str:
        return self._require_chain().address_url(address, testnet=testnet)

    def block_chain_tx_url(self, txid: str, testnet: bool = False) -> str:
        return self._require_chain().tx_url(txid, testnet=testnet)

    def is_valid_address(self, address: str, testnet: bool = False) -> bool:
        """Delegate to the chain's address check.

        Raises:
            AddressValidationError: If the chain cannot decide.
        """
        return self._require_chain().is_valid_address(address, testnet=testnet)

    # -- Serialization ----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict, naming the chain instead of embedding it."""
        data = self.model_dump(mode="json", exclude={"chain"})
        data["chain"] = self.chain.name if self.chain else None
        return data
