"""Hook — a single call executed around a CoW order."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3


class Hook(BaseModel):
    """Pre/post interaction: contract target, ABI calldata and gas limit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target: str = Field(..., description="Contract called by the hook")
    call_data: str = Field(..., alias="callData", description="0x-prefixed ABI-encoded call")
    gas_limit: str = Field(..., alias="gasLimit", description="Gas limit as a decimal string")

    @field_validator("target")
    @classmethod
    def checksum_target(cls, v: str) -> str:
        if not Web3.is_address(v):
            raise ValueError(f"invalid target address: {v!r}")
        return Web3.to_checksum_address(v)

    @field_validator("call_data")
    @classmethod
    def hex_call_data(cls, v: str) -> str:
        """Calldata must at least carry a 4-byte selector."""
        if not v.startswith("0x") or len(v) < 10:
            raise ValueError("callData must be 0x-prefixed hex with a selector")
        try:
            bytes.fromhex(v[2:])
        except ValueError as exc:
            raise ValueError(f"callData is not valid hex: {exc}") from exc
        return v.lower()

    @field_validator("gas_limit", mode="before")
    @classmethod
    def decimal_gas_limit(cls, v: Union[int, str]) -> str:
        if isinstance(v, bool):
            raise ValueError("gasLimit must be an integer")
        if isinstance(v, int):
            if v <= 0:
                raise ValueError("gasLimit must be positive")
            return str(v)
        if isinstance(v, str) and v.isdigit() and int(v) > 0:
            return str(int(v))
        raise ValueError(f"gasLimit must be a positive decimal string: {v!r}")

    def to_payload(self) -> dict[str, str]:
        """Wire form: ``{target, callData, gasLimit}``."""
        return self.model_dump(by_alias=True)
