"""Claim hook — collect validator withdrawals from the deposit contract."""

from __future__ import annotations

import structlog

from models.hook import Hook
from web3_infra.contracts import CLAIM_WITHDRAWAL_GAS_LIMIT, DepositContract
from web3_infra.rpc_client import RPCClient

logger = structlog.get_logger("hooks.claim")


def build_claim_hook(rpc: RPCClient, withdrawal_address: str) -> Hook:
    """Encode ``claimWithdrawal(withdrawal_address)``.

    Uses a fixed gas limit instead of an estimate, so no RPC call is made.
    """
    deposit = DepositContract(rpc)
    hook = Hook(
        target=deposit.address,
        call_data=deposit.encode_claim_withdrawal(withdrawal_address),
        gas_limit=CLAIM_WITHDRAWAL_GAS_LIMIT,
    )
    logger.info(
        "hooks.claim_built",
        target=hook.target,
        withdrawal_address=withdrawal_address,
    )
    return hook
