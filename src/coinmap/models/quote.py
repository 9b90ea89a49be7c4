"""Quote (latest market snapshot) data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _float(value: Any) -> float | None:
    return float(value) if value is not None else None


def _int(value: Any) -> int | None:
    return int(value) if value is not None else None


@dataclass(frozen=True)
class UsdQuote:
    """USD-denominated market figures for one asset.

    Attributes:
        price: Latest price in USD.
        volume_24h: Rolling 24h volume.
        volume_change_24h: 24h change of the volume, in percent.
        percent_change_1h: Price change over 1 hour, in percent.
        percent_change_24h: Price change over 24 hours, in percent.
        percent_change_7d: Price change over 7 days, in percent.
        percent_change_30d: Price change over 30 days, in percent.
        market_cap: Market capitalization.
        market_cap_dominance: Share of total market cap, in percent.
        fully_diluted_market_cap: Market cap at max supply.
        last_updated: Timestamp of the figures.
    """

    price: float | None
    volume_24h: float | None = None
    volume_change_24h: float | None = None
    percent_change_1h: float | None = None
    percent_change_24h: float | None = None
    percent_change_7d: float | None = None
    percent_change_30d: float | None = None
    market_cap: float | None = None
    market_cap_dominance: float | None = None
    fully_diluted_market_cap: float | None = None
    last_updated: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> UsdQuote:
        return cls(
            price=_float(data.get("price")),
            volume_24h=_float(data.get("volume_24h")),
            volume_change_24h=_float(data.get("volume_change_24h")),
            percent_change_1h=_float(data.get("percent_change_1h")),
            percent_change_24h=_float(data.get("percent_change_24h")),
            percent_change_7d=_float(data.get("percent_change_7d")),
            percent_change_30d=_float(data.get("percent_change_30d")),
            market_cap=_float(data.get("market_cap")),
            market_cap_dominance=_float(data.get("market_cap_dominance")),
            fully_diluted_market_cap=_float(data.get("fully_diluted_market_cap")),
            last_updated=data.get("last_updated"),
        )


@dataclass(frozen=True)
class Quote:
    """Point-in-time market snapshot for one asset. Never cached."""

    id: int
    symbol: str
    name: str
    slug: str | None = None
    circulating_supply: float | None = None
    total_supply: float | None = None
    max_supply: float | None = None
    cmc_rank: int | None = None
    num_market_pairs: int | None = None
    date_added: str | None = None
    last_updated: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    usd: UsdQuote | None = None

    @property
    def price(self) -> float | None:
        """USD price, or None when the provider sent no USD block."""
        return self.usd.price if self.usd else None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Quote:
        """Build from a ``/v2/cryptocurrency/quotes/latest`` entry."""
        usd = (data.get("quote") or {}).get("USD")
        tags = []
        for tag in data.get("tags") or []:
            # v2 returns tag objects, v1 plain strings
            tags.append(tag.get("slug", "") if isinstance(tag, dict) else str(tag))
        return cls(
            id=int(data["id"]),
            symbol=data.get("symbol", ""),
            name=data.get("name", ""),
            slug=data.get("slug"),
            circulating_supply=_float(data.get("circulating_supply")),
            total_supply=_float(data.get("total_supply")),
            max_supply=_float(data.get("max_supply")),
            cmc_rank=_int(data.get("cmc_rank")),
            num_market_pairs=_int(data.get("num_market_pairs")),
            date_added=data.get("date_added"),
            last_updated=data.get("last_updated"),
            tags=tuple(tags),
            usd=UsdQuote.from_api(usd) if usd else None,
        )
