"""IdentifierMap — symbol/id index built by paginated bulk fetch."""

from __future__ import annotations

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from coinmap.config import MAX_PAGE_SIZE
from coinmap.errors import (
    CoinMapError,
    CoinMapErrorCode,
    NotReadyError,
    PopulationError,
    TransportError,
)
from coinmap.log import get_logger
from coinmap.models.asset import Asset
from coinmap.storage import MapFileStore
from coinmap.transports.base import MAP_PATH, BaseTransport

log = get_logger("id_map")

ReadyListener = Callable[[], Union[None, Awaitable[None]]]
ErrorListener = Callable[[PopulationError], Union[None, Awaitable[None]]]


class MapState(Enum):
    """Population lifecycle. Transitions only move forward."""

    UNINITIALIZED = "uninitialized"
    POPULATING = "populating"
    READY = "ready"
    FAILED = "failed"


class IdentifierMap:
    """In-memory index of every active asset, keyed by symbol and by id.

    Symbols collide across assets, so the symbol index is one-to-many and
    keeps provider pagination order inside each bucket. The id index is
    one-to-one.

    Only ``populate()`` mutates the index. Every lookup requires the
    ``READY`` state and raises ``NotReadyError`` before that, so "not
    loaded yet" is never mistaken for "not found". A failed population
    moves to ``FAILED`` and lookups raise ``PopulationError`` from then on.

    Usage::

        id_map = IdentifierMap(transport)
        asyncio.create_task(id_map.populate())
        await id_map.wait_until_ready()
        btc = id_map.lookup_one_by_symbol("BTC")
    """

    def __init__(
        self,
        transport: BaseTransport,
        page_size: int = MAX_PAGE_SIZE,
        store: MapFileStore | None = None,
    ) -> None:
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise CoinMapError(
                f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}",
                code=CoinMapErrorCode.INVALID_REQUEST,
            )
        self.transport = transport
        self.page_size = page_size
        self.store = store

        self._by_symbol: dict[str, list[Asset]] = {}
        self._by_id: dict[int, Asset] = {}
        self._state = MapState.UNINITIALIZED
        self._error: PopulationError | None = None
        self._settled = asyncio.Event()
        self._ready_listeners: list[ReadyListener] = []
        self._error_listeners: list[ErrorListener] = []
        self._late_tasks: set[asyncio.Task[Any]] = set()

    # ----------------------------------------------------------- state

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def error(self) -> PopulationError | None:
        """Population failure, if population ended in ``FAILED``."""
        return self._error

    def is_ready(self) -> bool:
        return self._state is MapState.READY

    def __len__(self) -> int:
        return len(self._by_id)

    async def wait_until_ready(self, timeout: float | None = None) -> None:
        """Block the calling task until population settles.

        Raises:
            PopulationError: Population failed.
            NotReadyError: ``timeout`` elapsed first.
        """
        try:
            await asyncio.wait_for(self._settled.wait(), timeout)
        except asyncio.TimeoutError:
            raise NotReadyError(
                f"Identifier map not ready after {timeout}s (state: {self._state.value})"
            ) from None
        if self._state is MapState.FAILED:
            raise self._population_error()

    def add_ready_listener(self, listener: ReadyListener) -> None:
        """Call ``listener`` once when the map becomes ready.

        Listeners added after the fact are invoked right away.
        """
        if self._state is MapState.READY:
            self._invoke_late(listener)
        else:
            self._ready_listeners.append(listener)

    def add_error_listener(self, listener: ErrorListener) -> None:
        """Call ``listener(error)`` once if population fails."""
        if self._state is MapState.FAILED:
            self._invoke_late(listener, self._population_error())
        else:
            self._error_listeners.append(listener)

    # ------------------------------------------------------ population

    async def populate(self) -> None:
        """Fetch every active asset page by page until an empty page.

        Never raises for fetch errors; they move the map to ``FAILED``
        and are reported through ``wait_until_ready``, ``error`` and the
        error listeners.
        """
        if self._state is not MapState.UNINITIALIZED:
            raise CoinMapError(
                f"Identifier map population already started (state: {self._state.value})",
                code=CoinMapErrorCode.INVALID_REQUEST,
            )
        self._state = MapState.POPULATING

        start = 1
        pages = 0
        try:
            while True:
                body = await self.transport.get(MAP_PATH, {
                    "listing_status": "active",
                    "start": start,
                    "limit": self.page_size,
                    "sort": "id",
                })
                records = body.get("data") or []
                pages += 1
                if not records:
                    break
                for record in records:
                    self._insert(Asset.from_api(record))
                log.debug(f"Fetched map page {pages} (start={start}, {len(records)} assets)")
                start += self.page_size
        except Exception as exc:
            await self._fail(exc)
            return

        self._state = MapState.READY
        self._settled.set()
        log.info(
            f"Identifier map ready: {len(self._by_id)} assets, "
            f"{len(self._by_symbol)} symbols, {pages} pages"
        )
        for listener in self._ready_listeners:
            await self._invoke(listener)
        self._ready_listeners.clear()

        if self.store is not None:
            await self._persist()

    def _insert(self, asset: Asset) -> None:
        self._by_symbol.setdefault(asset.symbol, []).append(asset)
        self._by_id[asset.id] = asset

    async def _fail(self, exc: Exception) -> None:
        detail = exc.payload if isinstance(exc, TransportError) and exc.payload else exc
        log.error(f"Error fetching CoinMarketCap ID map: {detail}")

        error = PopulationError(f"Identifier map population failed: {exc}")
        error.__cause__ = exc
        self._error = error
        self._state = MapState.FAILED
        self._settled.set()
        for listener in self._error_listeners:
            await self._invoke(listener, self._population_error())
        self._error_listeners.clear()

    async def _persist(self) -> None:
        try:
            path = await asyncio.to_thread(self.store.save, self.symbol_map())
        except OSError as exc:
            log.error(f"Failed to write identifier map to {self.store.file_path}: {exc}")
            return
        log.info(f"Identifier map written to {path}")

    # --------------------------------------------------------- lookups

    def lookup_by_symbol(self, symbol: str) -> list[Asset]:
        """All assets listed under ``symbol``, in pagination order."""
        self._require_ready()
        return list(self._by_symbol.get(symbol, ()))

    def lookup_one_by_symbol(self, symbol: str) -> Asset | None:
        """First-listed asset for ``symbol``; logs a warning on ambiguity."""
        self._require_ready()
        bucket = self._by_symbol.get(symbol)
        if not bucket:
            return None
        chosen = bucket[0]
        if len(bucket) > 1:
            ids = ", ".join(str(a.id) for a in bucket)
            log.warning(
                f"Symbol {symbol} matches {len(bucket)} assets (ids {ids}); "
                f"using id {chosen.id} ({chosen.name})"
            )
        return chosen

    def lookup_by_identifier(self, coin_id: int) -> Asset | None:
        self._require_ready()
        return self._by_id.get(int(coin_id))

    def all_assets(self) -> list[list[Asset]]:
        """Every symbol bucket, in insertion order."""
        self._require_ready()
        return [list(bucket) for bucket in self._by_symbol.values()]

    def symbol_map(self) -> dict[str, list[dict[str, Any]]]:
        """Provider-shaped snapshot of the symbol index."""
        self._require_ready()
        return {
            symbol: [asset.to_dict() for asset in bucket]
            for symbol, bucket in self._by_symbol.items()
        }

    # --------------------------------------------------------- helpers

    def _require_ready(self) -> None:
        if self._state is MapState.READY:
            return
        if self._state is MapState.FAILED:
            raise self._population_error()
        raise NotReadyError(f"Identifier map is not ready yet (state: {self._state.value})")

    def _population_error(self) -> PopulationError:
        # fresh instance per raise so tracebacks don't pile up
        error = PopulationError(str(self._error))
        error.__cause__ = self._error.__cause__ if self._error else None
        return error

    async def _invoke(self, listener: Callable[..., Any], *args: Any) -> None:
        try:
            if inspect.iscoroutinefunction(listener):
                await listener(*args)
            else:
                listener(*args)
        except Exception as exc:
            log.error(f"Identifier map listener {listener!r} failed: {exc}")

    def _invoke_late(self, listener: Callable[..., Any], *args: Any) -> None:
        if inspect.iscoroutinefunction(listener):
            task = asyncio.get_running_loop().create_task(self._invoke(listener, *args))
            self._late_tasks.add(task)
            task.add_done_callback(self._late_tasks.discard)
            return
        try:
            listener(*args)
        except Exception as exc:
            log.error(f"Identifier map listener {listener!r} failed: {exc}")
