"""transferFrom hook — pull tokens from an address that granted an allowance."""

from __future__ import annotations

import structlog

from models.hook import Hook
from web3_infra.contracts import PermittableToken
from web3_infra.rpc_client import RPCClient

logger = structlog.get_logger("hooks.transfer_from")


async def build_transfer_from_hook(
    rpc: RPCClient,
    token_address: str,
    sender: str,
    recipient: str,
    amount: int,
) -> Hook:
    token = PermittableToken(rpc, token_address)
    hook = Hook(
        target=token.address,
        call_data=token.encode_transfer_from(sender, recipient, amount),
        gas_limit=await token.estimate_transfer_from_gas(sender, recipient, amount),
    )
    logger.info(
        "hooks.transfer_from_built",
        target=hook.target,
        sender=sender,
        recipient=recipient,
        gas_limit=hook.gas_limit,
    )
    return hook
