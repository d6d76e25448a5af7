"""Contract bindings used by the hook builders.

- ``PermittableToken`` — EIP-2612 ERC-20 (metadata reads, permit encoding)
- ``DepositContract`` — Gnosis Chain validator deposit contract (claims)

Encoding methods are pure; reads go through ``RPCClient.execute`` so that
provider failures surface as ``RPCError``.
"""

from __future__ import annotations

from typing import Any, Sequence

from web3 import AsyncWeb3

from .rpc_client import RPCClient

# ── Constants ────────────────────────────────────────────────────────

# Gnosis Chain deposit contract (validator withdrawals)
DEPOSIT_CONTRACT_ADDRESS = AsyncWeb3.to_checksum_address("0x0b98057ea310f4d31f2a452b414647007d1645d9")

# Observed on gnosisscan for claimWithdrawal:
# 0x9501e8cbe873126bfb52ceab26a8644f1f8607f0de2937fa29d2112569480c59
CLAIM_WITHDRAWAL_GAS_LIMIT = 82264

MAX_UINT256 = 2**256 - 1

# GPv2VaultRelayer, same address on every chain CoW is deployed to
COW_VAULT_RELAYER_ADDRESS = AsyncWeb3.to_checksum_address("0xc92e8bdf79f0507f65a392b0ab4667716bfe0110")

# ── ABI fragments ────────────────────────────────────────────────────

PERMITTABLE_TOKEN_ABI = [
    {
        "name": "decimals",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "name": "name",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "name": "version",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "name": "nonces",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "permit",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
            {"name": "value", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
            {"name": "v", "type": "uint8"},
            {"name": "r", "type": "bytes32"},
            {"name": "s", "type": "bytes32"},
        ],
        "outputs": [],
    },
    {
        "name": "transferFrom",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
]

DEPOSIT_CONTRACT_ABI = [
    {
        "name": "withdrawableAmount",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "claimWithdrawal",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "_address", "type": "address"}],
        "outputs": [],
    },
]


class PermittableToken:
    """EIP-2612 token bound to an RPC client.

    Parameters
    ----------
    rpc:
        Started ``RPCClient``.
    address:
        Token contract address (any case; checksummed internally).
    """

    def __init__(self, rpc: RPCClient, address: str) -> None:
        self._rpc = rpc
        self.address = AsyncWeb3.to_checksum_address(address)
        self._contract = rpc.get_web3().eth.contract(
            address=self.address,
            abi=PERMITTABLE_TOKEN_ABI,
        )

    # ── Reads ────────────────────────────────────────────────────

    async def name(self) -> str:
        return await self._rpc.execute(lambda _w3: self._contract.functions.name().call())

    async def version(self) -> str:
        return await self._rpc.execute(lambda _w3: self._contract.functions.version().call())

    async def decimals(self) -> int:
        return await self._rpc.execute(lambda _w3: self._contract.functions.decimals().call())

    async def nonces(self, owner: str) -> int:
        owner = AsyncWeb3.to_checksum_address(owner)
        return await self._rpc.execute(
            lambda _w3: self._contract.functions.nonces(owner).call()
        )

    # ── Encoding ─────────────────────────────────────────────────

    def encode_permit(self, params: Sequence[Any]) -> str:
        """ABI-encode ``permit(owner, spender, value, deadline, v, r, s)``."""
        return self._contract.encode_abi("permit", args=list(params))

    def encode_transfer_from(self, sender: str, recipient: str, amount: int) -> str:
        return self._contract.encode_abi(
            "transferFrom",
            args=[
                AsyncWeb3.to_checksum_address(sender),
                AsyncWeb3.to_checksum_address(recipient),
                amount,
            ],
        )

    # ── Gas estimation ───────────────────────────────────────────

    async def estimate_permit_gas(self, params: Sequence[Any]) -> int:
        return await self._rpc.execute(
            lambda _w3: self._contract.functions.permit(*params).estimate_gas()
        )

    async def estimate_transfer_from_gas(
        self, sender: str, recipient: str, amount: int
    ) -> int:
        fn = self._contract.functions.transferFrom(
            AsyncWeb3.to_checksum_address(sender),
            AsyncWeb3.to_checksum_address(recipient),
            amount,
        )
        return await self._rpc.execute(lambda _w3: fn.estimate_gas())


class DepositContract:
    """Gnosis Chain deposit contract, used to claim validator withdrawals."""

    def __init__(self, rpc: RPCClient, address: str = DEPOSIT_CONTRACT_ADDRESS) -> None:
        self._rpc = rpc
        self.address = AsyncWeb3.to_checksum_address(address)
        self._contract = rpc.get_web3().eth.contract(
            address=self.address,
            abi=DEPOSIT_CONTRACT_ABI,
        )

    def encode_claim_withdrawal(self, withdrawal_address: str) -> str:
        """ABI-encode ``claimWithdrawal(_address)``. No network access."""
        return self._contract.encode_abi(
            "claimWithdrawal",
            args=[AsyncWeb3.to_checksum_address(withdrawal_address)],
        )

    async def withdrawable_amount(self, user: str) -> int:
        user = AsyncWeb3.to_checksum_address(user)
        return await self._rpc.execute(
            lambda _w3: self._contract.functions.withdrawableAmount(user).call()
        )
