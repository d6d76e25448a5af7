"""AppData — hook metadata document and its content hash."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .hook import Hook


class HooksMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    pre: list[Hook] = Field(default_factory=list)
    post: list[Hook] = Field(default_factory=list)


class Metadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    hooks: HooksMetadata = Field(default_factory=HooksMetadata)


class AppDataDocument(BaseModel):
    """App-data JSON document as understood by the CoW orderbook."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_code: str = Field(default="CoW Swap", alias="appCode")
    version: str = Field(default="0.9.0")
    metadata: Metadata = Field(default_factory=Metadata)

    def serialize(self) -> str:
        """Compact JSON, keys in declaration order, non-ASCII kept as-is."""
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class AppData:
    """Serialized app-data document plus its keccak256 hash."""

    hash: str
    data: str
