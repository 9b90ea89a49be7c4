"""Loguru logger access for coinmap modules.

The library only binds a ``name`` onto loguru's global logger; adding
sinks and choosing levels is left to the embedding application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger


def get_logger(name: str) -> Logger:
    return logger.bind(name=f"coinmap.{name}")
