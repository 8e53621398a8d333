"""Wallet currency registry — filter, look up, and validate wallet currency configuration."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("walletcurs")
except Exception:
    __version__ = "0.0.0"
