"""Pydantic BaseSettings — raw token amounts as int, never float."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from web3 import Web3

from web3_infra.contracts import COW_VAULT_RELAYER_ADDRESS, MAX_UINT256


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


class Settings(BaseSettings):
    """Central configuration loaded from env / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ─────────────────────────────────────────────
    APP_ENV: Literal["dev", "prod"] = "dev"
    APP_NAME: str = "cow-hooks"
    LOG_LEVEL: str = "INFO"

    # ── Network / RPC ───────────────────────────────────────────
    NODE_URL: str = "https://rpc.gnosischain.com/"
    RPC_TIMEOUT_SECONDS: float = 10.0
    # Read from eth_chainId when unset
    CHAIN_ID: Optional[int] = None

    # ── Claim hook ──────────────────────────────────────────────
    WITHDRAWAL_ADDRESS: str = ""

    # ── Permit hook (skipped when PERMIT_TOKEN_ADDRESS is empty) ─
    PRIVATE_KEY: str = ""
    PERMIT_TOKEN_ADDRESS: str = ""
    PERMIT_SPENDER: str = COW_VAULT_RELAYER_ADDRESS
    PERMIT_AMOUNT: int = Field(default=0, ge=0)
    PERMIT_DEADLINE: int = Field(default=MAX_UINT256, ge=0)

    # ── App-data registry ───────────────────────────────────────
    COW_API_BASE_URL: str = "https://api.cow.fi"
    COW_NETWORK: str = "xdai"
    HTTP_TIMEOUT_SECONDS: float = 10.0
    APP_CODE: str = "CoW Swap"
    APP_DATA_VERSION: str = "0.9.0"

    @property
    def permit_enabled(self) -> bool:
        return bool(self.PERMIT_TOKEN_ADDRESS)


def validate_settings(cfg: Settings) -> None:
    """Check required values without touching the network.

    Raises
    ------
    ConfigError
        If ``WITHDRAWAL_ADDRESS`` is missing or not an address, if a
        permit token is configured without a signing key, or if the permit
        amount or deadline is outside the uint256 range.
    """
    if not cfg.WITHDRAWAL_ADDRESS:
        raise ConfigError("env var WITHDRAWAL_ADDRESS is required")
    if not Web3.is_address(cfg.WITHDRAWAL_ADDRESS):
        raise ConfigError(
            f"WITHDRAWAL_ADDRESS is not a valid address: {cfg.WITHDRAWAL_ADDRESS!r}"
        )

    if cfg.permit_enabled:
        if not cfg.PRIVATE_KEY:
            raise ConfigError("env var PRIVATE_KEY is required when PERMIT_TOKEN_ADDRESS is set")
        for name in ("PERMIT_TOKEN_ADDRESS", "PERMIT_SPENDER"):
            value = getattr(cfg, name)
            if not Web3.is_address(value):
                raise ConfigError(f"{name} is not a valid address: {value!r}")
        # permit() takes both as uint256
        for name in ("PERMIT_AMOUNT", "PERMIT_DEADLINE"):
            value = getattr(cfg, name)
            if not 0 <= value <= MAX_UINT256:
                raise ConfigError(f"{name} does not fit in uint256: {value}")


settings = Settings()
