"""Provider transport registry."""

from __future__ import annotations

from coinmap.config import TransportType
from coinmap.errors import CoinMapError, CoinMapErrorCode
from coinmap.transports.base import MAP_PATH, QUOTES_PATH, BaseTransport
from coinmap.transports.mock import MockTransport


def create_transport(
    transport_type: TransportType,
    **kwargs,
) -> BaseTransport:
    """Instantiate a transport by type, forwarding kwargs to its constructor."""
    if transport_type is TransportType.HTTP:
        # httpx is only imported when the HTTP transport is used
        from coinmap.transports.http import HttpTransport

        return HttpTransport(**kwargs)
    if transport_type is TransportType.MOCK:
        return MockTransport(**kwargs)
    raise CoinMapError(
        f"Unsupported transport: {transport_type!r}",
        code=CoinMapErrorCode.INVALID_REQUEST,
    )


__all__ = ["BaseTransport", "MockTransport", "MAP_PATH", "QUOTES_PATH", "create_transport"]
