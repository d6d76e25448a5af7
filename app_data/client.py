"""AppDataClient — publishes app-data documents to the CoW orderbook API.

The orderbook stores the full document under its hash:

    PUT {base_url}/{network}/api/v1/app_data/{hash}
    {"fullAppData": "<serialized document>"}
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from models.app_data import AppData

logger = structlog.get_logger("app_data.client")

_DEFAULT_BASE_URL = "https://api.cow.fi"
_DEFAULT_NETWORK = "xdai"

_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class AppDataClient:
    """HTTP client for the app-data registry.

    Parameters
    ----------
    base_url:
        Orderbook API base URL.
    network:
        Network path segment (``xdai``, ``mainnet``, ``arbitrum_one``, ...).
    timeout:
        HTTP request timeout in seconds.
    transport:
        Optional ``httpx`` transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = _DEFAULT_BASE_URL,
        network: str = _DEFAULT_NETWORK,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._network = network.strip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # ── Lifecycle ────────────────────────────────────────────────

    async def start(self) -> None:
        """Create the underlying HTTP client. Idempotent."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        logger.info("app_data_client.started", base_url=self._base_url, network=self._network)

    async def stop(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
        logger.info("app_data_client.stopped")

    # ── Public API ───────────────────────────────────────────────

    def app_data_url(self, app_hash: str) -> str:
        return f"{self._base_url}/{self._network}/api/v1/app_data/{app_hash}"

    async def put_app_data(self, app_data: AppData) -> dict[str, Any] | str | None:
        """Upload ``app_data`` under its hash.

        Returns
        -------
        The decoded JSON response body, the raw text if it is not JSON, or
        ``None`` for an empty body.

        Raises
        ------
        AppDataPublishError
            On transport errors or a non-2xx response.
        """
        assert self._client is not None, "Call start() first"

        url = self.app_data_url(app_data.hash)
        try:
            resp = await self._client.put(
                url,
                json={"fullAppData": app_data.data},
                headers=_HEADERS,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise AppDataPublishError(
                f"Registry rejected app data: HTTP {exc.response.status_code} {exc.response.text}",
                app_hash=app_data.hash,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise AppDataPublishError(
                f"Registry request failed: {exc}",
                app_hash=app_data.hash,
            ) from exc

        logger.info(
            "app_data.published",
            app_hash=app_data.hash,
            status_code=resp.status_code,
        )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    # ── Context manager ──────────────────────────────────────────

    async def __aenter__(self) -> AppDataClient:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()


class AppDataPublishError(Exception):
    """Raised when the registry PUT fails."""

    def __init__(
        self,
        message: str,
        app_hash: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.app_hash = app_hash
        self.status_code = status_code
