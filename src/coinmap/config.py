"""coinmap configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_BASE_URL = "https://pro-api.coinmarketcap.com"
MAX_PAGE_SIZE = 5000
MAP_FILE_NAME = "coins_map.json"


class TransportType(Enum):
    """Supported transport backends."""

    HTTP = "http"
    MOCK = "mock"


@dataclass
class CoinMapConfig:
    """Configuration for CoinMapClient.

    Attributes:
        api_key: CoinMarketCap pro API key (required for the HTTP transport).
        persist_map: Write the populated symbol map to disk once.
        map_folder: Folder receiving ``coins_map.json`` when persisting.
        base_url: Provider origin.
        page_size: Listing page size; the provider caps it at 5000.
        request_timeout: Per-request timeout handed to the HTTP transport.
        transport: Transport backend.
    """

    api_key: str | None = None
    persist_map: bool = False
    map_folder: str = "./tmp"
    base_url: str = DEFAULT_BASE_URL
    page_size: int = MAX_PAGE_SIZE
    request_timeout: float = 30.0
    transport: TransportType = TransportType.HTTP
