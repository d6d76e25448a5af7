"""Tests for config/settings.py — env loading and validation."""

from __future__ import annotations

import pytest

from config.settings import ConfigError, Settings, validate_settings
from web3_infra.contracts import COW_VAULT_RELAYER_ADDRESS, MAX_UINT256

WITHDRAWAL = "0x1111111111111111111111111111111111111111"
TOKEN = "0xe91d153e0b41518a2ce8dd3d7944fa863463a97d"
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


def _settings(**overrides) -> Settings:
    values = {"WITHDRAWAL_ADDRESS": WITHDRAWAL, "PERMIT_TOKEN_ADDRESS": "", "PRIVATE_KEY": ""}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettingsDefaults:

    def test_defaults(self) -> None:
        cfg = _settings()
        assert cfg.NODE_URL == "https://rpc.gnosischain.com/"
        assert cfg.COW_API_BASE_URL == "https://api.cow.fi"
        assert cfg.COW_NETWORK == "xdai"
        assert cfg.APP_CODE == "CoW Swap"
        assert cfg.APP_DATA_VERSION == "0.9.0"
        assert cfg.PERMIT_SPENDER == COW_VAULT_RELAYER_ADDRESS
        assert cfg.PERMIT_DEADLINE == MAX_UINT256
        assert cfg.CHAIN_ID is None
        assert cfg.permit_enabled is False

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WITHDRAWAL_ADDRESS", WITHDRAWAL)
        monkeypatch.setenv("NODE_URL", "http://localhost:8545")
        monkeypatch.setenv("CHAIN_ID", "100")
        monkeypatch.setenv("PERMIT_AMOUNT", "1000000000000000000")
        cfg = Settings(_env_file=None)
        assert cfg.WITHDRAWAL_ADDRESS == WITHDRAWAL
        assert cfg.NODE_URL == "http://localhost:8545"
        assert cfg.CHAIN_ID == 100
        assert cfg.PERMIT_AMOUNT == 10**18

    def test_permit_enabled_with_token(self) -> None:
        assert _settings(PERMIT_TOKEN_ADDRESS=TOKEN).permit_enabled is True


class TestValidateSettings:

    def test_valid_claim_only(self) -> None:
        validate_settings(_settings())

    def test_valid_with_permit(self) -> None:
        validate_settings(_settings(PERMIT_TOKEN_ADDRESS=TOKEN, PRIVATE_KEY=PRIVATE_KEY))

    def test_missing_withdrawal_address(self) -> None:
        with pytest.raises(ConfigError, match="WITHDRAWAL_ADDRESS"):
            validate_settings(_settings(WITHDRAWAL_ADDRESS=""))

    def test_malformed_withdrawal_address(self) -> None:
        with pytest.raises(ConfigError, match="not a valid address"):
            validate_settings(_settings(WITHDRAWAL_ADDRESS="0xABC"))

    def test_permit_without_key(self) -> None:
        with pytest.raises(ConfigError, match="PRIVATE_KEY"):
            validate_settings(_settings(PERMIT_TOKEN_ADDRESS=TOKEN))

    def test_permit_bad_token(self) -> None:
        with pytest.raises(ConfigError, match="PERMIT_TOKEN_ADDRESS"):
            validate_settings(
                _settings(PERMIT_TOKEN_ADDRESS="not-an-address", PRIVATE_KEY=PRIVATE_KEY)
            )

    def test_permit_bad_spender(self) -> None:
        with pytest.raises(ConfigError, match="PERMIT_SPENDER"):
            validate_settings(
                _settings(
                    PERMIT_TOKEN_ADDRESS=TOKEN,
                    PRIVATE_KEY=PRIVATE_KEY,
                    PERMIT_SPENDER="0x12",
                )
            )

    def test_permit_amount_above_uint256(self) -> None:
        cfg = _settings(PERMIT_TOKEN_ADDRESS=TOKEN, PRIVATE_KEY=PRIVATE_KEY, PERMIT_AMOUNT=2**256)
        with pytest.raises(ConfigError, match="PERMIT_AMOUNT does not fit in uint256"):
            validate_settings(cfg)

    def test_permit_deadline_above_uint256(self) -> None:
        cfg = _settings(
            PERMIT_TOKEN_ADDRESS=TOKEN, PRIVATE_KEY=PRIVATE_KEY, PERMIT_DEADLINE=MAX_UINT256 + 1
        )
        with pytest.raises(ConfigError, match="PERMIT_DEADLINE"):
            validate_settings(cfg)

    def test_permit_max_values_accepted(self) -> None:
        validate_settings(
            _settings(
                PERMIT_TOKEN_ADDRESS=TOKEN,
                PRIVATE_KEY=PRIVATE_KEY,
                PERMIT_AMOUNT=MAX_UINT256,
                PERMIT_DEADLINE=MAX_UINT256,
            )
        )
