"""EIP712Signer — EIP-2612 permit signing with a local key.

Signatures are RFC 6979 deterministic: the same domain and message always
yield the same ``(v, r, s)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from web3 import Web3

logger = structlog.get_logger("web3_infra.eip712_signer")

PERMIT_TYPES: dict[str, list[dict[str, str]]] = {
    "Permit": [
        {"name": "owner", "type": "address"},
        {"name": "spender", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "nonce", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
    ],
}


@dataclass(frozen=True)
class PermitDomain:
    """EIP-712 domain of a permittable token."""

    name: str
    version: str
    chain_id: int
    verifying_contract: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": Web3.to_checksum_address(self.verifying_contract),
        }


@dataclass(frozen=True)
class PermitMessage:
    """EIP-2612 ``Permit`` struct."""

    owner: str
    spender: str
    value: int
    nonce: int
    deadline: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "owner": Web3.to_checksum_address(self.owner),
            "spender": Web3.to_checksum_address(self.spender),
            "value": self.value,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }


@dataclass(frozen=True)
class SignedPermit:
    """Permit message plus its split signature."""

    message: PermitMessage
    v: int
    r: bytes
    s: bytes
    signature: str

    @property
    def call_params(self) -> tuple[str, str, int, int, int, bytes, bytes]:
        """Arguments for ``permit(owner, spender, value, deadline, v, r, s)``."""
        return (
            Web3.to_checksum_address(self.message.owner),
            Web3.to_checksum_address(self.message.spender),
            self.message.value,
            self.message.deadline,
            self.v,
            self.r,
            self.s,
        )


def encode_permit(domain: PermitDomain, message: PermitMessage) -> SignableMessage:
    """Build the signable EIP-712 payload for a permit."""
    return encode_typed_data(
        domain_data=domain.as_dict(),
        message_types=PERMIT_TYPES,
        message_data=message.as_dict(),
    )


class EIP712Signer:
    """Signs EIP-2612 permits with a local private key.

    Parameters
    ----------
    private_key:
        Hex-encoded private key (``0x`` prefix optional).
    """

    def __init__(self, private_key: str) -> None:
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        """Checksummed address of the signing key (the permit owner)."""
        return self._account.address

    def sign_permit(self, domain: PermitDomain, message: PermitMessage) -> SignedPermit:
        """Sign ``message`` under ``domain``.

        Raises
        ------
        ValueError
            If ``message.owner`` is not the signer's address.
        """
        if Web3.to_checksum_address(message.owner) != self.address:
            raise ValueError(
                f"permit owner {message.owner} does not match signer {self.address}"
            )

        signed = self._account.sign_message(encode_permit(domain, message))

        logger.debug(
            "eip712_signer.signed",
            token=domain.verifying_contract,
            nonce=message.nonce,
        )
        return SignedPermit(
            message=message,
            v=signed.v,
            r=signed.r.to_bytes(32, "big"),
            s=signed.s.to_bytes(32, "big"),
            signature=signed.signature.to_0x_hex(),
        )
