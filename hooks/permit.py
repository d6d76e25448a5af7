"""Permit hook — EIP-2612 approval signed off-chain, executed as a pre-hook."""

from __future__ import annotations

import structlog

from models.hook import Hook
from web3_infra.contracts import MAX_UINT256, PermittableToken
from web3_infra.eip712_signer import EIP712Signer, PermitDomain, PermitMessage
from web3_infra.rpc_client import RPCClient

logger = structlog.get_logger("hooks.permit")


async def build_permit_hook(
    rpc: RPCClient,
    signer: EIP712Signer,
    token_address: str,
    spender: str,
    amount: int,
    chain_id: int,
    deadline: int = MAX_UINT256,
) -> Hook:
    """Sign a permit for ``spender`` and wrap the ``permit`` call as a hook.

    The nonce, token name and version are read from the token; the gas limit
    is an ``eth_estimateGas`` of the exact call placed in the hook.

    Raises
    ------
    RPCError
        If any of the token reads or the gas estimate fails.
    """
    token = PermittableToken(rpc, token_address)

    message = PermitMessage(
        owner=signer.address,
        spender=spender,
        value=amount,
        nonce=await token.nonces(signer.address),
        deadline=deadline,
    )
    domain = PermitDomain(
        name=await token.name(),
        version=await token.version(),
        chain_id=chain_id,
        verifying_contract=token.address,
    )
    signed = signer.sign_permit(domain, message)
    params = signed.call_params

    hook = Hook(
        target=token.address,
        call_data=token.encode_permit(params),
        gas_limit=await token.estimate_permit_gas(params),
    )
    logger.info(
        "hooks.permit_built",
        target=hook.target,
        owner=message.owner,
        spender=message.spender,
        nonce=message.nonce,
        gas_limit=hook.gas_limit,
    )
    return hook
