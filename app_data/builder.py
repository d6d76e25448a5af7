"""App-data document generation and content hashing."""

from __future__ import annotations

from typing import Sequence

import structlog
from web3 import Web3

from models.app_data import AppData, AppDataDocument, HooksMetadata, Metadata
from models.hook import Hook

logger = structlog.get_logger("app_data.builder")

DEFAULT_APP_CODE = "CoW Swap"
DEFAULT_VERSION = "0.9.0"


def app_data_hash(data: str) -> str:
    """keccak256 of the UTF-8 encoded document, 0x-prefixed."""
    return Web3.keccak(text=data).to_0x_hex()


def generate_app_data(
    pre_hooks: Sequence[Hook],
    post_hooks: Sequence[Hook] = (),
    app_code: str = DEFAULT_APP_CODE,
    version: str = DEFAULT_VERSION,
) -> AppData:
    """Serialize the hooks into an app-data document and hash it."""
    document = AppDataDocument(
        app_code=app_code,
        version=version,
        metadata=Metadata(
            hooks=HooksMetadata(pre=list(pre_hooks), post=list(post_hooks)),
        ),
    )
    data = document.serialize()
    digest = app_data_hash(data)

    logger.info(
        "app_data.generated",
        app_data=data,
        app_hash=digest,
        pre_hooks=len(pre_hooks),
        post_hooks=len(post_hooks),
    )
    return AppData(hash=digest, data=data)
