"""Shared fixtures for coinmap tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from coinmap.transports.mock import MockTransport


def _usd(price: float) -> dict[str, Any]:
    return {
        "price": price,
        "volume_24h": 1_000_000.0,
        "volume_change_24h": -2.5,
        "percent_change_1h": 0.1,
        "percent_change_24h": 1.2,
        "percent_change_7d": -3.4,
        "percent_change_30d": 10.0,
        "market_cap": price * 1_000_000,
        "market_cap_dominance": 12.5,
        "fully_diluted_market_cap": price * 2_000_000,
        "last_updated": "2024-01-15T10:00:00.000Z",
    }


@pytest.fixture
def asset_records() -> list[dict[str, Any]]:
    """Listing records sorted by id, with ABC listed twice."""
    return [
        {
            "id": 1, "rank": 1, "name": "Bitcoin", "symbol": "BTC", "slug": "bitcoin",
            "is_active": 1,
            "first_historical_data": "2013-04-28T18:47:21.000Z",
            "last_historical_data": "2024-01-15T10:00:00.000Z",
            "platform": None,
        },
        {
            "id": 100, "rank": 900, "name": "Alpha Coin", "symbol": "ABC", "slug": "alpha-coin",
            "is_active": 1,
            "first_historical_data": "2018-01-01T00:00:00.000Z",
            "last_historical_data": "2024-01-15T10:00:00.000Z",
            "platform": None,
        },
        {
            "id": 200, "rank": None, "name": "ABC Token", "symbol": "ABC", "slug": "abc-token",
            "is_active": 1,
            "first_historical_data": "2021-06-01T00:00:00.000Z",
            "last_historical_data": "2024-01-15T10:00:00.000Z",
            "platform": {
                "id": 1027, "name": "Ethereum", "symbol": "ETH", "slug": "ethereum",
                "token_address": "0xabc0000000000000000000000000000000000000",
            },
        },
        {
            "id": 1027, "rank": 2, "name": "Ethereum", "symbol": "ETH", "slug": "ethereum",
            "is_active": 1,
            "first_historical_data": "2015-08-07T14:49:30.000Z",
            "last_historical_data": "2024-01-15T10:00:00.000Z",
            "platform": None,
        },
    ]


@pytest.fixture
def quote_records() -> dict[int, dict[str, Any]]:
    return {
        1: {
            "id": 1, "name": "Bitcoin", "symbol": "BTC", "slug": "bitcoin",
            "circulating_supply": 19_500_000, "total_supply": 19_500_000,
            "max_supply": 21_000_000, "cmc_rank": 1, "num_market_pairs": 10_000,
            "date_added": "2013-04-28T00:00:00.000Z",
            "last_updated": "2024-01-15T10:00:00.000Z",
            "tags": [{"slug": "mineable", "name": "Mineable", "category": "OTHERS"}],
            "quote": {"USD": _usd(42_000.0)},
        },
        1027: {
            "id": 1027, "name": "Ethereum", "symbol": "ETH", "slug": "ethereum",
            "circulating_supply": 120_000_000, "total_supply": 120_000_000,
            "max_supply": None, "cmc_rank": 2, "num_market_pairs": 8_000,
            "date_added": "2015-08-07T00:00:00.000Z",
            "last_updated": "2024-01-15T10:00:00.000Z",
            "tags": ["pos", "smart-contracts"],
            "quote": {"USD": _usd(2_500.0)},
        },
        100: {
            "id": 100, "name": "Alpha Coin", "symbol": "ABC", "slug": "alpha-coin",
            "cmc_rank": 900,
            "quote": {"USD": _usd(0.05)},
        },
    }


@pytest.fixture
def mock_transport(asset_records, quote_records) -> MockTransport:
    transport = MockTransport()
    transport.set_assets(asset_records)
    for coin_id, record in quote_records.items():
        transport.set_quote(coin_id, record)
    return transport


@pytest.fixture
def log_records():
    """Loguru records emitted while the test runs."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
