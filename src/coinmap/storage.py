"""On-disk snapshot of the symbol map.

Storage layout: ``{base_path}/coins_map.json``, pretty-printed JSON of
symbol -> list of provider-shaped asset records.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from coinmap.config import MAP_FILE_NAME
from coinmap.models.asset import Asset


class MapFileStore:
    """Writes and reads the populated symbol map as JSON."""

    def __init__(self, base_path: Path | str) -> None:
        self.base_path = Path(base_path)

    @property
    def file_path(self) -> Path:
        return self.base_path / MAP_FILE_NAME

    def exists(self) -> bool:
        return self.file_path.exists()

    def save(self, symbol_map: dict[str, list[dict[str, Any]]]) -> Path:
        """Write the map, creating the folder if needed. Returns the file path."""
        self.base_path.mkdir(parents=True, exist_ok=True)
        fp = self.file_path
        with fp.open("w", encoding="utf-8") as f:
            json.dump(symbol_map, f, indent=2, ensure_ascii=False)
        return fp

    def load(self) -> dict[str, list[Asset]] | None:
        """Read the map back, or None when no snapshot was written."""
        fp = self.file_path
        if not fp.exists():
            return None
        with fp.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        return {
            symbol: [Asset.from_api(record) for record in records]
            for symbol, records in raw.items()
        }
