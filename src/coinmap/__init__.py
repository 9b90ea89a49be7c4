"""coinmap — symbol-aware CoinMarketCap client.

Resolves ticker symbols to CoinMarketCap ids through an identifier map
that is bulk-fetched once, then serves latest quotes and USD prices.

Quick start::

    from coinmap import create_client_from_env

    async def main():
        async with create_client_from_env() as client:
            await client.wait_until_ready()
            price = await client.usd_price_for_symbol("btc")
"""

from __future__ import annotations

import os

from coinmap.client import CoinMapClient
from coinmap.config import CoinMapConfig, TransportType
from coinmap.errors import (
    CoinMapError,
    CoinMapErrorCode,
    NotFoundError,
    NotReadyError,
    PopulationError,
    TransportError,
)
from coinmap.id_map import IdentifierMap, MapState
from coinmap.models.asset import Asset, Platform
from coinmap.models.quote import Quote, UsdQuote
from coinmap.storage import MapFileStore

__version__ = "0.1.0"

__all__ = [
    # Client
    "CoinMapClient",
    "create_client_from_env",
    # Identifier map
    "IdentifierMap",
    "MapState",
    "MapFileStore",
    # Config
    "CoinMapConfig",
    "TransportType",
    # Errors
    "CoinMapError",
    "CoinMapErrorCode",
    "TransportError",
    "NotReadyError",
    "PopulationError",
    "NotFoundError",
    # Models
    "Asset",
    "Platform",
    "Quote",
    "UsdQuote",
]

_TRUTHY = {"1", "true", "yes", "on"}


def config_from_env() -> CoinMapConfig:
    """Build a CoinMapConfig from environment variables.

    Environment variables:
        COINMARKETCAP_API_KEY: CoinMarketCap pro API key.
        COINMAP_PERSIST_MAP: Write coins_map.json after population (default: off).
        COINMAP_MAP_FOLDER: Folder for coins_map.json (default: "./tmp").
        COINMAP_BASE_URL: Provider origin override.
        COINMAP_TRANSPORT: "http" or "mock" (default: "http").
    """
    defaults = CoinMapConfig()
    transport_name = os.getenv("COINMAP_TRANSPORT", "http").strip().lower()
    try:
        transport = TransportType(transport_name)
    except ValueError:
        raise CoinMapError(
            f"Unknown COINMAP_TRANSPORT {transport_name!r}; expected one of "
            f"{[t.value for t in TransportType]}",
            code=CoinMapErrorCode.INVALID_REQUEST,
        ) from None
    return CoinMapConfig(
        api_key=os.getenv("COINMARKETCAP_API_KEY"),
        persist_map=os.getenv("COINMAP_PERSIST_MAP", "").strip().lower() in _TRUTHY,
        map_folder=os.getenv("COINMAP_MAP_FOLDER", defaults.map_folder),
        base_url=os.getenv("COINMAP_BASE_URL", defaults.base_url),
        transport=transport,
    )


def create_client_from_env() -> CoinMapClient:
    """Zero-config factory — reads the API key and options from env vars.

    See ``config_from_env`` for the variables read.
    """
    return CoinMapClient(config_from_env())
