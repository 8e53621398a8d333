"""walletcurs exception hierarchy."""

from __future__ import annotations


class WalletCurrencyError(Exception):
    """Base exception for all walletcurs errors."""


class CurrencyConfigError(WalletCurrencyError):
    """Raised when the currency configuration itself is defective."""


class CurrencyDefinitionError(CurrencyConfigError):
    """Raised when a currency definition or definition table is malformed.

    Attributes:
        code: The offending currency code, if known.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.code = code
        prefix = f"{code}: " if code else ""
        super().__init__(f"{prefix}{message}")


class UnknownCurrencyError(CurrencyConfigError):
    """Raised when a client-enabled code has no matching definition."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"No currency definition found for client-enabled code '{code}'")


class AddressValidationError(WalletCurrencyError):
    """Raised by a blockchain that cannot decide whether an address is valid."""
