"""RPCClient — single-endpoint JSON-RPC access with latency logging.

Wraps one ``AsyncWeb3`` instance. Every call goes through ``execute()``,
which records latency and turns provider failures into ``RPCError``.
There is exactly one attempt per call.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar
from urllib.parse import urlparse

import structlog
from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider

logger = structlog.get_logger("web3_infra.rpc_client")

T = TypeVar("T")


@dataclass
class RPCClientConfig:
    """Configuration for the RPC client."""

    # Request timeout in seconds
    request_timeout_s: float = 10.0


class RPCClient:
    """JSON-RPC client for a single node endpoint.

    Usage::

        async with RPCClient("https://rpc.gnosischain.com/") as rpc:
            chain_id = await rpc.chain_id()
            nonce = await rpc.execute(lambda w3: token.functions.nonces(owner).call())
    """

    def __init__(
        self,
        url: str,
        config: RPCClientConfig | None = None,
    ) -> None:
        if not url:
            raise ValueError("An RPC endpoint URL is required")

        self._url = url
        self._config = config or RPCClientConfig()
        self._w3: AsyncWeb3 | None = None

    @property
    def config(self) -> RPCClientConfig:
        """Return current configuration (read-only)."""
        return self._config

    @property
    def url(self) -> str:
        return self._url

    # ── Lifecycle ────────────────────────────────────────────────

    async def start(self) -> None:
        """Create the Web3 instance. Idempotent."""
        if self._w3 is not None:
            return

        provider = AsyncHTTPProvider(
            self._url,
            request_kwargs={"timeout": self._config.request_timeout_s},
        )
        self._w3 = AsyncWeb3(provider)
        logger.info("rpc_client.started", url=self.redact_url(self._url))

    async def stop(self) -> None:
        """Close the provider session. Idempotent."""
        if self._w3 is None:
            return

        disconnect = getattr(self._w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
        self._w3 = None
        logger.info("rpc_client.stopped")

    # ── Public API ───────────────────────────────────────────────

    def get_web3(self) -> AsyncWeb3:
        """Return the Web3 instance.

        Raises
        ------
        RuntimeError
            If the client has not been started.
        """
        if self._w3 is None:
            raise RuntimeError("RPCClient not started — call start() first")
        return self._w3

    async def execute(self, fn: Callable[[AsyncWeb3], Awaitable[T]]) -> T:
        """Run an async Web3 call against the endpoint.

        Parameters
        ----------
        fn:
            Async callable taking the ``AsyncWeb3`` instance.

        Raises
        ------
        RPCError
            If the call fails for any reason.
        """
        w3 = self.get_web3()
        start = time.monotonic()
        try:
            result = await fn(w3)
        except Exception as exc:
            latency_ms = (time.monotonic() - start) * 1000
            logger.warning(
                "rpc_client.call_failed",
                url=self.redact_url(self._url),
                error=str(exc),
                latency_ms=round(latency_ms, 1),
            )
            raise RPCError(f"RPC call failed: {exc}", last_error=exc) from exc

        logger.debug(
            "rpc_client.call_ok",
            latency_ms=round((time.monotonic() - start) * 1000, 1),
        )
        return result

    async def chain_id(self) -> int:
        """Read ``eth_chainId`` from the node."""

        async def _get(w3: AsyncWeb3) -> int:
            return await w3.eth.chain_id

        return await self.execute(_get)

    # ── Helpers ──────────────────────────────────────────────────

    @staticmethod
    def redact_url(url: str) -> str:
        """Show scheme and host only; node URLs often embed API keys."""
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.hostname:
            return url[:30] + "..."
        return f"{parsed.scheme}://{parsed.hostname}:***"

    # ── Context manager ──────────────────────────────────────────

    async def __aenter__(self) -> RPCClient:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()


class RPCError(Exception):
    """Raised when a JSON-RPC call fails."""

    def __init__(self, message: str, last_error: Exception | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error
