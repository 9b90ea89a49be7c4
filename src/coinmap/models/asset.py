"""Asset (listed coin/token) data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Platform:
    """Chain a token is issued on.

    Attributes:
        id: Provider id of the platform coin.
        name: Platform display name.
        symbol: Platform coin symbol.
        slug: Platform URL slug.
        token_address: Contract address of the token on that platform.
    """

    id: int
    name: str
    symbol: str
    slug: str
    token_address: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Platform:
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            symbol=data.get("symbol", ""),
            slug=data.get("slug", ""),
            token_address=data.get("token_address"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "symbol": self.symbol,
            "slug": self.slug,
            "token_address": self.token_address,
        }


@dataclass(frozen=True)
class Asset:
    """A provider-listed cryptocurrency or token.

    ``id`` is unique across the provider; ``symbol`` is not, several
    independently listed tokens may share a ticker.

    Attributes:
        id: Provider-assigned numeric identifier.
        symbol: Ticker symbol.
        name: Display name.
        slug: URL slug.
        rank: Provider rank, if ranked.
        is_active: Whether the asset is actively listed.
        first_historical_data: Timestamp of the first recorded data point.
        last_historical_data: Timestamp of the latest recorded data point.
        platform: Issuing platform for tokens, None for native coins.
    """

    id: int
    symbol: str
    name: str
    slug: str
    rank: int | None = None
    is_active: bool = True
    first_historical_data: str | None = None
    last_historical_data: str | None = None
    platform: Platform | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Asset:
        """Build from a ``/v1/cryptocurrency/map`` record."""
        platform = data.get("platform")
        rank = data.get("rank")
        return cls(
            id=int(data["id"]),
            symbol=data["symbol"],
            name=data.get("name", data["symbol"]),
            slug=data.get("slug", ""),
            rank=int(rank) if rank is not None else None,
            is_active=bool(data.get("is_active", 1)),
            first_historical_data=data.get("first_historical_data"),
            last_historical_data=data.get("last_historical_data"),
            platform=Platform.from_api(platform) if platform else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Provider-shaped record, the inverse of ``from_api``."""
        return {
            "id": self.id,
            "rank": self.rank,
            "name": self.name,
            "symbol": self.symbol,
            "slug": self.slug,
            "is_active": int(self.is_active),
            "first_historical_data": self.first_historical_data,
            "last_historical_data": self.last_historical_data,
            "platform": self.platform.to_dict() if self.platform else None,
        }
