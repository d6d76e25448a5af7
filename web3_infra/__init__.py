"""CoW hooks — web3_infra package.

- RPCClient: single-endpoint JSON-RPC access
- EIP712Signer: EIP-2612 permit signing
- PermittableToken / DepositContract: contract bindings for the hooks
"""

from .contracts import DepositContract, PermittableToken
from .eip712_signer import EIP712Signer, PermitDomain, PermitMessage, SignedPermit
from .rpc_client import RPCClient, RPCClientConfig, RPCError

__all__ = [
    "DepositContract",
    "EIP712Signer",
    "PermitDomain",
    "PermitMessage",
    "PermittableToken",
    "RPCClient",
    "RPCClientConfig",
    "RPCError",
    "SignedPermit",
]
