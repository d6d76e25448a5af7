"""Entrypoint — build the hooks, hash the app data, publish it."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import NoReturn, Optional, Sequence

import httpx
import uvloop

from app_data.builder import generate_app_data
from app_data.client import AppDataClient, AppDataPublishError
from config.settings import ConfigError, Settings, settings, validate_settings
from core.logger import get_logger, setup_logging
from hooks.claim import build_claim_hook
from hooks.permit import build_permit_hook
from models.app_data import AppData
from models.hook import Hook
from web3_infra.eip712_signer import EIP712Signer
from web3_infra.rpc_client import RPCClient, RPCClientConfig, RPCError

log = get_logger(__name__)


async def build_hooks(cfg: Settings, rpc: RPCClient) -> tuple[list[Hook], list[Hook]]:
    """Return ``(pre_hooks, post_hooks)``: claim, then permit if configured."""
    pre_hooks = [build_claim_hook(rpc, cfg.WITHDRAWAL_ADDRESS)]

    if cfg.permit_enabled:
        signer = EIP712Signer(cfg.PRIVATE_KEY)
        chain_id = cfg.CHAIN_ID if cfg.CHAIN_ID is not None else await rpc.chain_id()
        pre_hooks.append(
            await build_permit_hook(
                rpc,
                signer,
                token_address=cfg.PERMIT_TOKEN_ADDRESS,
                spender=cfg.PERMIT_SPENDER,
                amount=cfg.PERMIT_AMOUNT,
                chain_id=chain_id,
                deadline=cfg.PERMIT_DEADLINE,
            )
        )
    else:
        log.info("permit_hook_skipped", reason="PERMIT_TOKEN_ADDRESS not set")

    return pre_hooks, []


async def publish_app_data(
    app_data: AppData,
    cfg: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """PUT the document to the registry. Failures are logged, not raised."""
    client = AppDataClient(
        base_url=cfg.COW_API_BASE_URL,
        network=cfg.COW_NETWORK,
        timeout=cfg.HTTP_TIMEOUT_SECONDS,
        transport=transport,
    )
    try:
        async with client:
            await client.put_app_data(app_data)
    except AppDataPublishError as exc:
        log.error(
            "app_data_update_failed",
            app_hash=exc.app_hash,
            status_code=exc.status_code,
            error=str(exc),
        )
        return False

    log.info("app_data_updated", app_hash=app_data.hash)
    return True


async def post_app_data(
    cfg: Settings,
    *,
    dry_run: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppData:
    """Run the full pipeline and return the generated app data.

    Configuration is validated before any network client is created.

    Raises
    ------
    ConfigError
        If required configuration is missing.
    RPCError
        If an on-chain read or gas estimate fails.
    """
    validate_settings(cfg)

    rpc = RPCClient(cfg.NODE_URL, RPCClientConfig(request_timeout_s=cfg.RPC_TIMEOUT_SECONDS))
    async with rpc:
        pre_hooks, post_hooks = await build_hooks(cfg, rpc)

    app_data = generate_app_data(
        pre_hooks,
        post_hooks,
        app_code=cfg.APP_CODE,
        version=cfg.APP_DATA_VERSION,
    )

    if dry_run:
        log.info("dry_run_skip_publish", app_hash=app_data.hash)
        return app_data

    published = await publish_app_data(app_data, cfg, transport=transport)
    log.info("app_data_update_initiated", app_hash=app_data.hash, published=published)
    return app_data


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cow-hooks",
        description="Build claim/permit hooks and publish them as CoW app data",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and hash the app data without publishing it",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, ...)",
    )
    return parser


async def main(argv: Optional[Sequence[str]] = None, cfg: Settings | None = None) -> int:
    """Top-level orchestrator. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    if cfg is None:
        cfg = settings
    setup_logging(cfg, args.log_level)

    try:
        validate_settings(cfg)
    except ConfigError as exc:
        log.error("config_error", error=str(exc))
        return 1

    log.info(
        "starting",
        app=cfg.APP_NAME,
        env=cfg.APP_ENV,
        network=cfg.COW_NETWORK,
        dry_run=args.dry_run,
    )

    try:
        await post_app_data(cfg, dry_run=args.dry_run)
    except RPCError as exc:
        log.error("app_data_update_aborted", error=str(exc))
    return 0


def run() -> NoReturn:
    """CLI entry: install uvloop policy and run."""
    uvloop.install()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
