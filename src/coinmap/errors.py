"""coinmap error types."""

from __future__ import annotations

from enum import Enum
from typing import Any


class CoinMapErrorCode(Enum):
    """Error classification codes."""

    TRANSPORT = "transport"
    NOT_READY = "not_ready"
    NOT_FOUND = "not_found"
    POPULATION_FAILED = "population_failed"
    INVALID_REQUEST = "invalid_request"
    AUTH_FAILED = "auth_failed"


class CoinMapError(Exception):
    """coinmap exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the same call may succeed if issued again later.
    """

    def __init__(
        self,
        message: str,
        code: CoinMapErrorCode = CoinMapErrorCode.TRANSPORT,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class TransportError(CoinMapError):
    """HTTP or network failure talking to the provider.

    Attributes:
        status_code: HTTP status, or None for network-level failures.
        payload: Decoded upstream error body, when the provider sent one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: Any = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message, code=CoinMapErrorCode.TRANSPORT, retryable=retryable)
        self.status_code = status_code
        self.payload = payload


class NotReadyError(CoinMapError):
    """The identifier map has not finished populating yet."""

    def __init__(self, message: str = "Identifier map is not ready yet") -> None:
        super().__init__(message, code=CoinMapErrorCode.NOT_READY, retryable=True)


class PopulationError(NotReadyError):
    """The identifier map failed to populate and will never become ready."""

    def __init__(self, message: str = "Identifier map population failed") -> None:
        super().__init__(message)
        self.code = CoinMapErrorCode.POPULATION_FAILED
        self.retryable = False


class NotFoundError(CoinMapError):
    """A symbol or identifier has no matching asset or quote."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=CoinMapErrorCode.NOT_FOUND)
