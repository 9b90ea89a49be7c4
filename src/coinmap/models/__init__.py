"""coinmap models."""

from coinmap.models.asset import Asset, Platform
from coinmap.models.quote import Quote, UsdQuote

__all__ = [
    "Asset",
    "Platform",
    "Quote",
    "UsdQuote",
]
