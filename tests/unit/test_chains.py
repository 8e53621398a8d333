"""Unit tests for walletcurs.currencies.chains — blockchain capabilities."""

from __future__ import annotations

import pytest

from walletcurs.currencies.chains import (
    CHAINS,
    BitcoinCashChain,
    BitcoinChain,
    Blockchain,
    EthereumChain,
    LitecoinChain,
    ZcashChain,
    get_chain,
)
from walletcurs.exceptions import AddressValidationError

# Well-known addresses per chain and network
VALID_ADDRESSES = [
    (BitcoinChain, "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", False),
    (BitcoinChain, "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq", False),
    (BitcoinChain, "mipcBbFg9gMiCh81Kj8tqqdgoZub1ZJRfn", True),
    (BitcoinCashChain, "bitcoincash:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a", False),
    (BitcoinCashChain, "qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a", False),
    (BitcoinCashChain, "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", False),
    (LitecoinChain, "LaMT348PWRnrqeeWArpwQPbuanpXDZGEUz", False),
    (LitecoinChain, "ltc1qg42tkwuuxefutzentevevhfhv0tyersh5z46vu", False),
    (ZcashChain, "t1Rv4exT7bqhZqi2j7xz8bUHDMxwosrjADU", False),
    (ZcashChain, "tmHQEHyXHm98LRBxBgELNzc58WPpJgZMJmJ", True),
    (EthereumChain, "0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe", False),
    (EthereumChain, "0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe", True),
]


class TestAddressValidation:
    """Regex-based address checks per chain."""

    @pytest.mark.parametrize("chain_cls, address, testnet", VALID_ADDRESSES)
    def test_valid_addresses(self, chain_cls, address: str, testnet: bool) -> None:
        assert chain_cls().is_valid_address(address, testnet=testnet) is True

    @pytest.mark.parametrize(
        "chain_cls, address",
        [
            (BitcoinChain, "mipcBbFg9gMiCh81Kj8tqqdgoZub1ZJRfn"),
            (ZcashChain, "tmHQEHyXHm98LRBxBgELNzc58WPpJgZMJmJ"),
        ],
    )
    def test_testnet_address_rejected_on_mainnet(self, chain_cls, address: str) -> None:
        assert chain_cls().is_valid_address(address) is False

    def test_mainnet_address_rejected_on_testnet(self) -> None:
        assert BitcoinChain().is_valid_address("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", testnet=True) is False

    @pytest.mark.parametrize("chain_cls", [BitcoinChain, BitcoinCashChain, LitecoinChain, ZcashChain, EthereumChain])
    def test_garbage_rejected(self, chain_cls) -> None:
        assert chain_cls().is_valid_address("abcdefghijklmnop") is False

    def test_partial_match_rejected(self) -> None:
        addr = "0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe"
        assert EthereumChain().is_valid_address(f"{addr}ff") is False
        assert EthereumChain().is_valid_address(f"pay {addr}") is False

    def test_surrounding_whitespace_ignored(self) -> None:
        assert BitcoinChain().is_valid_address("  1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa ") is True

    def test_zcash_shielded_raises(self) -> None:
        with pytest.raises(AddressValidationError, match="Shielded"):
            ZcashChain().is_valid_address("zs1z7rejlpsa98s2rrrfkwmaxu53e4ue0ulcrw0h4x5g8jl04tak0d3mm47vdtahatqrlkngh9sly")

    def test_all_builtin_chains_validate(self) -> None:
        assert all(chain.supports_address_validation for chain in CHAINS.values())

    def test_pattern_examples_match_their_pattern(self) -> None:
        for chain in CHAINS.values():
            for pattern in chain.address_patterns:
                if pattern.example:
                    assert pattern.matches(pattern.example), pattern.name


class _NoValidationChain(Blockchain):
    def qr_code_text(self, address: str) -> str:
        return f"x:{address}"

    def address_url(self, address: str, *, testnet: bool = False) -> str:
        return f"https://x/{address}"

    def tx_url(self, txid: str, *, testnet: bool = False) -> str:
        return f"https://x/tx/{txid}"


class TestBlockchainInterface:
    """Defaults of the abstract capability interface."""

    def test_validation_unsupported_by_default(self) -> None:
        chain = _NoValidationChain()
        assert chain.supports_address_validation is False
        with pytest.raises(AddressValidationError):
            chain.is_valid_address("anything")

    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            Blockchain()  # type: ignore[abstract]


class TestUrisAndUrls:
    """QR code payloads and explorer links."""

    def test_bitcoin_qr_text(self) -> None:
        assert BitcoinChain().qr_code_text("1abc") == "bitcoin:1abc"

    def test_bitcoin_cash_qr_adds_prefix(self) -> None:
        assert BitcoinCashChain().qr_code_text("qpm2") == "bitcoincash:qpm2"

    @pytest.mark.parametrize("address", ["bitcoincash:qpm2", "bchtest:qpm2"])
    def test_bitcoin_cash_qr_keeps_existing_prefix(self, address: str) -> None:
        assert BitcoinCashChain().qr_code_text(address) == address

    def test_mainnet_and_testnet_urls_differ(self) -> None:
        chain = BitcoinChain()
        assert chain.address_url("1abc") == "https://blockstream.info/address/1abc"
        assert chain.address_url("mabc", testnet=True) == "https://blockstream.info/testnet/address/mabc"
        assert chain.tx_url("deadbeef") == "https://blockstream.info/tx/deadbeef"
        assert chain.tx_url("deadbeef", testnet=True) == "https://blockstream.info/testnet/tx/deadbeef"

    @pytest.mark.parametrize("chain", list(CHAINS.values()), ids=list(CHAINS))
    def test_every_chain_builds_urls(self, chain: Blockchain) -> None:
        for testnet in (False, True):
            assert chain.address_url("ADDR", testnet=testnet).startswith("https://")
            assert "ADDR" in chain.address_url("ADDR", testnet=testnet)
            assert "TXID" in chain.tx_url("TXID", testnet=testnet)


class TestGetChain:
    """Chain lookup by name."""

    def test_known_names(self) -> None:
        assert isinstance(get_chain("bitcoin"), BitcoinChain)
        assert isinstance(get_chain("bitcoin_cash"), BitcoinCashChain)

    def test_case_and_whitespace_insensitive(self) -> None:
        assert get_chain(" Ethereum ") is CHAINS["ethereum"]

    def test_unknown_name(self) -> None:
        with pytest.raises(KeyError, match="dogecoin"):
            get_chain("dogecoin")
