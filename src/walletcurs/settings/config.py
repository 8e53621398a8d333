"""Configuration loader for walletcurs using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (WALLETCURS_* with __ for nesting)
  3. settings.local.toml
  4. settings.{env}.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("WALLETCURS_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "WALLETCURS_ENV"
DEFAULT_ENV = "local"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class WalletSettings(BaseSettings):
    """Client-side wallet currency configuration."""

    model_config = SettingsConfigDict(env_prefix="WALLETCURS_WALLET__")

    currencies: list[str] = Field(default_factory=lambda: ["BTC", "BCH", "LTC", "ZEC", "ETH"])
    definitions_path: str = ""
    missing_definition: Literal["skip", "error"] = "skip"

    @field_validator("currencies")
    @classmethod
    def _strip_codes(cls, v: list[str]) -> list[str]:
        return [code.strip() for code in v if code.strip()]


class ServerSettings(BaseSettings):
    """What the server reports: network mode and approved wallet currencies."""

    model_config = SettingsConfigDict(env_prefix="WALLETCURS_SERVER__")

    testnet: bool = False
    wallets: list[str] | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root walletcurs settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="WALLETCURS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    debug: bool = False
    log_level: str = "WARNING"

    wallet: WalletSettings = Field(default_factory=WalletSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Normalize a relative definitions path against project_root."""
        path = self.wallet.definitions_path
        if path and not Path(path).is_absolute():
            self.wallet.definitions_path = str(self.project_root / path)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
