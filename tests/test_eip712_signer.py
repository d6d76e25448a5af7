"""Tests for web3_infra/eip712_signer.py."""

from __future__ import annotations

import pytest
from eth_account import Account

from web3_infra.contracts import COW_VAULT_RELAYER_ADDRESS, MAX_UINT256
from web3_infra.eip712_signer import (
    EIP712Signer,
    PermitDomain,
    PermitMessage,
    SignedPermit,
    encode_permit,
)

# Well-known development key (anvil/hardhat account #0)
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TOKEN = "0xe91d153e0b41518a2ce8dd3d7944fa863463a97d"


def _domain(chain_id: int = 100) -> PermitDomain:
    return PermitDomain(
        name="Wrapped XDAI",
        version="1",
        chain_id=chain_id,
        verifying_contract=TOKEN,
    )


def _message(nonce: int = 0, value: int = 10**18) -> PermitMessage:
    return PermitMessage(
        owner=OWNER,
        spender=COW_VAULT_RELAYER_ADDRESS,
        value=value,
        nonce=nonce,
        deadline=MAX_UINT256,
    )


class TestEIP712Signer:

    @pytest.fixture
    def signer(self) -> EIP712Signer:
        return EIP712Signer(PRIVATE_KEY)

    def test_address_from_key(self, signer: EIP712Signer) -> None:
        assert signer.address == OWNER

    def test_sign_permit_returns_signed(self, signer: EIP712Signer) -> None:
        result = signer.sign_permit(_domain(), _message())
        assert isinstance(result, SignedPermit)
        assert result.v in (27, 28)
        assert len(result.r) == 32
        assert len(result.s) == 32
        assert result.signature.startswith("0x")
        assert len(result.signature) == 2 + 65 * 2

    def test_deterministic_signing(self, signer: EIP712Signer) -> None:
        r1 = signer.sign_permit(_domain(), _message(nonce=3))
        r2 = signer.sign_permit(_domain(), _message(nonce=3))
        assert r1.call_params == r2.call_params
        assert r1.signature == r2.signature

    def test_different_nonce_different_sig(self, signer: EIP712Signer) -> None:
        r1 = signer.sign_permit(_domain(), _message(nonce=0))
        r2 = signer.sign_permit(_domain(), _message(nonce=1))
        assert r1.signature != r2.signature

    def test_different_chain_different_sig(self, signer: EIP712Signer) -> None:
        r1 = signer.sign_permit(_domain(chain_id=100), _message())
        r2 = signer.sign_permit(_domain(chain_id=1), _message())
        assert r1.signature != r2.signature

    def test_signature_recovers_owner(self, signer: EIP712Signer) -> None:
        domain, message = _domain(), _message(nonce=7)
        result = signer.sign_permit(domain, message)
        recovered = Account.recover_message(
            encode_permit(domain, message),
            signature=result.signature,
        )
        assert recovered == OWNER

    def test_call_params_order(self, signer: EIP712Signer) -> None:
        result = signer.sign_permit(_domain(), _message(value=42))
        owner, spender, value, deadline, v, r, s = result.call_params
        assert owner == OWNER
        assert spender == COW_VAULT_RELAYER_ADDRESS
        assert value == 42
        assert deadline == MAX_UINT256
        assert (v, r, s) == (result.v, result.r, result.s)

    def test_owner_mismatch_raises(self, signer: EIP712Signer) -> None:
        message = PermitMessage(
            owner="0x1111111111111111111111111111111111111111",
            spender=COW_VAULT_RELAYER_ADDRESS,
            value=1,
            nonce=0,
            deadline=MAX_UINT256,
        )
        with pytest.raises(ValueError, match="does not match signer"):
            signer.sign_permit(_domain(), message)

    def test_owner_case_insensitive(self, signer: EIP712Signer) -> None:
        message = PermitMessage(
            owner=OWNER.lower(),
            spender=COW_VAULT_RELAYER_ADDRESS,
            value=1,
            nonce=0,
            deadline=MAX_UINT256,
        )
        result = signer.sign_permit(_domain(), message)
        assert result.call_params[0] == OWNER
