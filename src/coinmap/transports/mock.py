"""Mock transport for testing and CI — no API key required."""

from __future__ import annotations

from typing import Any

from coinmap.errors import TransportError
from coinmap.transports.base import MAP_PATH, QUOTES_PATH, BaseTransport


class MockTransport(BaseTransport):
    """In-memory fake of the listing and quote endpoints.

    Use ``set_assets`` and ``set_quote`` to pre-load provider-shaped
    records and ``fail_on`` to make a path raise. Every call is recorded
    in ``requests`` as ``(path, params)``.
    """

    def __init__(self) -> None:
        self._assets: list[dict[str, Any]] = []
        self._quotes: dict[int, dict[str, Any]] = {}
        self._failures: dict[str, TransportError] = {}
        self.requests: list[tuple[str, dict[str, Any]]] = []

    # --- Pre-load helpers ---

    def set_assets(self, assets: list[dict[str, Any]]) -> None:
        self._assets = list(assets)

    def set_quote(self, coin_id: int, quote: dict[str, Any]) -> None:
        self._quotes[int(coin_id)] = quote

    def fail_on(self, path: str, error: TransportError | None = None) -> None:
        self._failures[path] = error or TransportError(
            f"GET {path} returned HTTP 500",
            status_code=500,
            payload={"status": {"error_code": 500, "error_message": "Internal error"}},
            retryable=True,
        )

    def requests_for(self, path: str) -> list[dict[str, Any]]:
        return [params for p, params in self.requests if p == path]

    # --- Transport implementation ---

    async def get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        self.requests.append((path, dict(params)))
        if path in self._failures:
            raise self._failures[path]
        if path == MAP_PATH:
            return self._map_page(params)
        if path == QUOTES_PATH:
            return self._quotes_latest(params)
        raise TransportError(f"GET {path} returned HTTP 404", status_code=404)

    def _map_page(self, params: dict[str, Any]) -> dict[str, Any]:
        start = int(params.get("start", 1))
        limit = int(params.get("limit", 5000))
        # start is 1-based on the provider side
        page = self._assets[start - 1:start - 1 + limit]
        return {"status": {"error_code": 0}, "data": page}

    def _quotes_latest(self, params: dict[str, Any]) -> dict[str, Any]:
        ids = [int(i) for i in str(params.get("id", "")).split(",") if i]
        data = {str(i): self._quotes[i] for i in ids if i in self._quotes}
        return {"status": {"error_code": 0}, "data": data}
