"""CoinMarketCap pro API transport over httpx."""

from __future__ import annotations

from typing import Any

import httpx

from coinmap.config import DEFAULT_BASE_URL
from coinmap.errors import CoinMapError, CoinMapErrorCode, TransportError
from coinmap.log import get_logger
from coinmap.transports.base import BaseTransport

log = get_logger("transport.http")

API_KEY_HEADER = "X-CMC_PRO_API_KEY"


class HttpTransport(BaseTransport):
    """Authenticated GETs against the provider origin.

    Pass ``client`` to share an ``httpx.AsyncClient``; it is then left
    open on ``aclose()`` for its owner to close.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise CoinMapError(
                "CoinMarketCap API key required. Set COINMARKETCAP_API_KEY env var or pass api_key.",
                code=CoinMapErrorCode.AUTH_FAILED,
            )
        self.base_url = base_url.rstrip("/")
        self._headers = {API_KEY_HEADER: api_key, "Accept": "application/json"}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = await self._client.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"GET {path} failed: {exc}",
                retryable=True,
            ) from exc

        if not resp.is_success:
            payload = _decode_or_none(resp)
            raise TransportError(
                f"GET {path} returned HTTP {resp.status_code}: {_upstream_message(payload) or resp.reason_phrase}",
                status_code=resp.status_code,
                payload=payload,
                retryable=resp.status_code == 429 or resp.status_code >= 500,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(
                f"GET {path} returned a non-JSON body",
                status_code=resp.status_code,
                payload=resp.text,
            ) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _decode_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


def _upstream_message(payload: Any) -> str | None:
    # Provider errors look like {"status": {"error_code": 1001, "error_message": "..."}}
    if isinstance(payload, dict):
        status = payload.get("status")
        if isinstance(status, dict):
            return status.get("error_message")
    return None
