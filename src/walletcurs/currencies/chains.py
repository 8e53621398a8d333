"""Per-blockchain capabilities: payment-URI text, explorer URLs, address checks.

Every crypto currency definition carries a ``Blockchain`` instance.  The
registry stores and exposes it unmodified; callers use it to render QR code
payloads, link to block explorers, and (where supported) sanity-check an
address before handing it to a wallet.

Address validation is regex-based and intentionally shallow: it checks the
address *shape* for the selected network, not its checksum.
"""

from __future__ import annotations

import abc
import logging
import re
from dataclasses import dataclass

from walletcurs.exceptions import AddressValidationError

logger = logging.getLogger(__name__)

_BASE58 = "[a-km-zA-HJ-NP-Z1-9]"
_BECH32 = "[qpzry9x8gf2tvdw0s3jn54khce6mua7l]"


# ---------------------------------------------------------------------------
# Address patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddressPattern:
    """A regex describing one address format on one network.

    Attributes:
        name: Human-readable format name, e.g. ``"Bitcoin (bech32)"``.
        regex: Compiled regex that must match the whole address.
        testnet: Whether the format belongs to the test network.
        example: A well-known example address for documentation / testing.
    """

    name: str
    regex: re.Pattern[str]
    testnet: bool = False
    example: str = ""

    def matches(self, address: str) -> bool:
        """Return ``True`` if *address* has this format."""
        return self.regex.fullmatch(address) is not None


# ---------------------------------------------------------------------------
# Capability interface
# ---------------------------------------------------------------------------


class Blockchain(abc.ABC):
    """Abstract interface for blockchain-specific currency behaviour."""

    #: Registry key used by JSON definition tables to reference the chain.
    name: str = ""

    @abc.abstractmethod
    def qr_code_text(self, address: str) -> str:
        """Return the payment URI to encode in a QR code for *address*."""

    @abc.abstractmethod
    def address_url(self, address: str, *, testnet: bool = False) -> str:
        """Return a block-explorer URL for *address*."""

    @abc.abstractmethod
    def tx_url(self, txid: str, *, testnet: bool = False) -> str:
        """Return a block-explorer URL for the transaction *txid*."""

    @property
    def supports_address_validation(self) -> bool:
        """Whether ``is_valid_address`` can return an answer at all."""
        return False

    def is_valid_address(self, address: str, *, testnet: bool = False) -> bool:
        """Check whether *address* is well-formed for this chain.

        The default implementation raises ``AddressValidationError``.
        Override in chains that know their address formats.

        Raises:
            AddressValidationError: If validity cannot be determined.
        """
        raise AddressValidationError(f"{type(self).__name__} does not validate addresses")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ExplorerChain(Blockchain):
    """A ``Blockchain`` driven by URI scheme, explorer templates, and address patterns.

    Subclasses only set class attributes; override methods for chains whose
    addresses or URIs need special handling.
    """

    uri_scheme: str = ""
    address_url_template: str = ""
    tx_url_template: str = ""
    testnet_address_url_template: str = ""
    testnet_tx_url_template: str = ""
    address_patterns: tuple[AddressPattern, ...] = ()

    def qr_code_text(self, address: str) -> str:
        return f"{self.uri_scheme}:{address}"

    def address_url(self, address: str, *, testnet: bool = False) -> str:
        template = self.testnet_address_url_template if testnet else self.address_url_template
        return template.format(address=address)

    def tx_url(self, txid: str, *, testnet: bool = False) -> str:
        template = self.testnet_tx_url_template if testnet else self.tx_url_template
        return template.format(txid=txid)

    @property
    def supports_address_validation(self) -> bool:
        return bool(self.address_patterns)

    def patterns_for(self, testnet: bool) -> list[AddressPattern]:
        """Return the address patterns for the selected network."""
        return [p for p in self.address_patterns if p.testnet == testnet]

    def is_valid_address(self, address: str, *, testnet: bool = False) -> bool:
        if not self.address_patterns:
            return super().is_valid_address(address, testnet=testnet)
        text = address.strip()
        return any(p.matches(text) for p in self.patterns_for(testnet))


# ---------------------------------------------------------------------------
# Concrete chains
# ---------------------------------------------------------------------------


class BitcoinChain(ExplorerChain):
    name = "bitcoin"
    uri_scheme = "bitcoin"
    address_url_template = "https://blockstream.info/address/{address}"
    tx_url_template = "https://blockstream.info/tx/{txid}"
    testnet_address_url_template = "https://blockstream.info/testnet/address/{address}"
    testnet_tx_url_template = "https://blockstream.info/testnet/tx/{txid}"
    address_patterns = (
        AddressPattern(
            name="Bitcoin (legacy)",
            regex=re.compile(rf"[13]{_BASE58}{{25,34}}"),
            example="1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
        ),
        AddressPattern(
            name="Bitcoin (bech32)",
            regex=re.compile(rf"bc1{_BECH32}{{39,59}}"),
            example="bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
        ),
        AddressPattern(
            name="Bitcoin testnet (legacy)",
            regex=re.compile(rf"[mn2]{_BASE58}{{25,34}}"),
            testnet=True,
            example="mipcBbFg9gMiCh81Kj8tqqdgoZub1ZJRfn",
        ),
        AddressPattern(
            name="Bitcoin testnet (bech32)",
            regex=re.compile(rf"tb1{_BECH32}{{39,59}}"),
            testnet=True,
        ),
    )


class BitcoinCashChain(ExplorerChain):
    """Bitcoin Cash accepts cashaddr (with or without prefix) and legacy addresses."""

    name = "bitcoin_cash"
    uri_scheme = "bitcoincash"
    testnet_uri_scheme = "bchtest"
    address_url_template = "https://blockchair.com/bitcoin-cash/address/{address}"
    tx_url_template = "https://blockchair.com/bitcoin-cash/transaction/{txid}"
    testnet_address_url_template = "https://tbch.loping.net/address/{address}"
    testnet_tx_url_template = "https://tbch.loping.net/tx/{txid}"
    address_patterns = (
        AddressPattern(
            name="Bitcoin Cash (cashaddr)",
            regex=re.compile(rf"(?:bitcoincash:)?[qp]{_BECH32}{{41}}"),
            example="bitcoincash:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a",
        ),
        AddressPattern(
            name="Bitcoin Cash (legacy)",
            regex=re.compile(rf"[13]{_BASE58}{{25,34}}"),
        ),
        AddressPattern(
            name="Bitcoin Cash testnet (cashaddr)",
            regex=re.compile(rf"(?:bchtest:)?[qp]{_BECH32}{{41}}"),
            testnet=True,
        ),
        AddressPattern(
            name="Bitcoin Cash testnet (legacy)",
            regex=re.compile(rf"[mn2]{_BASE58}{{25,34}}"),
            testnet=True,
        ),
    )

    def qr_code_text(self, address: str) -> str:
        # cashaddr strings may already carry their network prefix
        if address.startswith((f"{self.uri_scheme}:", f"{self.testnet_uri_scheme}:")):
            return address
        return f"{self.uri_scheme}:{address}"


class LitecoinChain(ExplorerChain):
    name = "litecoin"
    uri_scheme = "litecoin"
    address_url_template = "https://blockchair.com/litecoin/address/{address}"
    tx_url_template = "https://blockchair.com/litecoin/transaction/{txid}"
    testnet_address_url_template = "https://blockexplorer.one/litecoin/testnet/address/{address}"
    testnet_tx_url_template = "https://blockexplorer.one/litecoin/testnet/tx/{txid}"
    address_patterns = (
        AddressPattern(
            name="Litecoin (legacy)",
            regex=re.compile(rf"[LM3]{_BASE58}{{26,33}}"),
            example="LaMT348PWRnrqeeWArpwQPbuanpXDZGEUz",
        ),
        AddressPattern(
            name="Litecoin (bech32)",
            regex=re.compile(rf"ltc1{_BECH32}{{39,59}}"),
            example="ltc1qg42tkwuuxefutzentevevhfhv0tyersh5z46vu",
        ),
        AddressPattern(
            name="Litecoin testnet (legacy)",
            regex=re.compile(rf"[mn2Q]{_BASE58}{{26,33}}"),
            testnet=True,
        ),
        AddressPattern(
            name="Litecoin testnet (bech32)",
            regex=re.compile(rf"tltc1{_BECH32}{{39,59}}"),
            testnet=True,
        ),
    )


class ZcashChain(ExplorerChain):
    """Zcash transparent addresses are checked; shielded ones cannot be."""

    name = "zcash"
    uri_scheme = "zcash"
    address_url_template = "https://blockchair.com/zcash/address/{address}"
    tx_url_template = "https://blockchair.com/zcash/transaction/{txid}"
    testnet_address_url_template = "https://explorer.testnet.z.cash/address/{address}"
    testnet_tx_url_template = "https://explorer.testnet.z.cash/tx/{txid}"
    address_patterns = (
        AddressPattern(
            name="Zcash (transparent)",
            regex=re.compile(rf"t[13]{_BASE58}{{33}}"),
            example="t1Rv4exT7bqhZqi2j7xz8bUHDMxwosrjADU",
        ),
        AddressPattern(
            name="Zcash testnet (transparent)",
            regex=re.compile(rf"t[m2]{_BASE58}{{33}}"),
            testnet=True,
            example="tmHQEHyXHm98LRBxBgELNzc58WPpJgZMJmJ",
        ),
    )
    shielded_prefixes: tuple[str, ...] = ("zs1", "zc", "ztestsapling1", "zt", "u1", "utest1")

    def is_valid_address(self, address: str, *, testnet: bool = False) -> bool:
        if address.strip().startswith(self.shielded_prefixes):
            raise AddressValidationError("Shielded Zcash addresses cannot be validated")
        return super().is_valid_address(address, testnet=testnet)


class EthereumChain(ExplorerChain):
    name = "ethereum"
    uri_scheme = "ethereum"
    address_url_template = "https://etherscan.io/address/{address}"
    tx_url_template = "https://etherscan.io/tx/{txid}"
    testnet_address_url_template = "https://sepolia.etherscan.io/address/{address}"
    testnet_tx_url_template = "https://sepolia.etherscan.io/tx/{txid}"
    address_patterns = (
        AddressPattern(
            name="Ethereum",
            regex=re.compile(r"0x[a-fA-F0-9]{40}"),
            example="0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe",
        ),
        AddressPattern(
            name="Ethereum testnet",
            regex=re.compile(r"0x[a-fA-F0-9]{40}"),
            testnet=True,
        ),
    )


# ---------------------------------------------------------------------------
# Chain lookup
# ---------------------------------------------------------------------------

CHAINS: dict[str, Blockchain] = {
    chain.name: chain
    for chain in (BitcoinChain(), BitcoinCashChain(), LitecoinChain(), ZcashChain(), EthereumChain())
}


def get_chain(name: str) -> Blockchain:
    """Return the built-in chain registered under *name*.

    Raises:
        KeyError: If no chain has that name.
    """
    key = name.strip().lower()
    try:
        return CHAINS[key]
    except KeyError:
        logger.debug("Unknown chain name %r (known: %s)", name, ", ".join(sorted(CHAINS)))
        raise KeyError(f"Unknown blockchain '{name}'") from None
