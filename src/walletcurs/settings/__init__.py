"""walletcurs configuration."""

from walletcurs.settings.config import ServerSettings, Settings, WalletSettings, get_settings

__all__ = ["ServerSettings", "Settings", "WalletSettings", "get_settings"]
