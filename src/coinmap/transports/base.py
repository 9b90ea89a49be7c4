"""Abstract base class for provider transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

MAP_PATH = "v1/cryptocurrency/map"
QUOTES_PATH = "v2/cryptocurrency/quotes/latest"


class BaseTransport(ABC):
    """Issues one GET against the provider and returns the decoded body.

    Implementations raise ``TransportError`` for HTTP and network
    failures. They never retry and never interpret status codes beyond
    mapping them onto the error.
    """

    @abstractmethod
    async def get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """Fetch ``path`` with query ``params``.

        Args:
            path: Provider operation, e.g. ``v1/cryptocurrency/map``.
            params: Flat mapping of scalar query parameters.

        Returns:
            The decoded JSON response body.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources (default: nothing to release)."""
