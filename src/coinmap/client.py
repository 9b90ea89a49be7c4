"""CoinMapClient — identifier map + quote queries over one transport."""

from __future__ import annotations

import asyncio
from typing import Any, Iterable

from coinmap.config import CoinMapConfig, TransportType
from coinmap.errors import CoinMapError, CoinMapErrorCode, NotFoundError
from coinmap.id_map import IdentifierMap, MapState
from coinmap.log import get_logger
from coinmap.models.asset import Asset
from coinmap.models.quote import Quote
from coinmap.storage import MapFileStore
from coinmap.transports import QUOTES_PATH, BaseTransport, create_transport

log = get_logger("client")


class CoinMapClient:
    """Symbol-aware CoinMarketCap client.

    Building the client inside a running event loop schedules the
    identifier map population right away; otherwise it starts on
    ``start()`` or when entering ``async with``. Symbol lookups raise
    ``NotReadyError`` until population completes.

    Usage::

        async with CoinMapClient(CoinMapConfig(api_key=key)) as client:
            await client.wait_until_ready()
            prices = await client.usd_prices_for_symbols(["BTC", "ETH"])
    """

    def __init__(
        self,
        config: CoinMapConfig,
        transport: BaseTransport | None = None,
    ) -> None:
        self.config = config

        if transport is None:
            kwargs: dict[str, Any] = {}
            if config.transport is TransportType.HTTP:
                kwargs["api_key"] = config.api_key
                kwargs["base_url"] = config.base_url
                kwargs["timeout"] = config.request_timeout
            transport = create_transport(config.transport, **kwargs)
        self.transport = transport

        store = MapFileStore(config.map_folder) if config.persist_map else None
        self.id_map = IdentifierMap(transport, page_size=config.page_size, store=store)

        self._population: asyncio.Task[None] | None = None
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            log.debug("No running event loop; identifier map population deferred to start()")
        else:
            self.start()

    # ------------------------------------------------------- lifecycle

    def start(self) -> asyncio.Task[None]:
        """Schedule map population (once) and return its task."""
        if self._population is None:
            self._population = asyncio.get_running_loop().create_task(
                self.id_map.populate(), name="coinmap-populate",
            )
        return self._population

    @property
    def population(self) -> asyncio.Task[None] | None:
        return self._population

    @property
    def state(self) -> MapState:
        return self.id_map.state

    def is_ready(self) -> bool:
        return self.id_map.is_ready()

    async def wait_until_ready(self, timeout: float | None = None) -> None:
        self.start()
        await self.id_map.wait_until_ready(timeout)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> CoinMapClient:
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ----------------------------------------------------- map lookups

    def coin_by_symbol(self, symbol: str) -> Asset | None:
        return self.id_map.lookup_one_by_symbol(symbol)

    def coins_by_symbol(self, symbol: str) -> list[Asset]:
        return self.id_map.lookup_by_symbol(symbol)

    def coin_by_id(self, coin_id: int) -> Asset | None:
        return self.id_map.lookup_by_identifier(coin_id)

    def coin_id_by_symbol(self, symbol: str) -> int | None:
        coin = self.coin_by_symbol(symbol)
        return coin.id if coin else None

    def all_coins(self) -> list[list[Asset]]:
        return self.id_map.all_assets()

    # ---------------------------------------------------------- quotes

    async def quotes_for(self, coin_ids: Iterable[int]) -> dict[int, Quote]:
        """Latest quotes for ``coin_ids`` in a single batched request.

        Ids the provider does not return are absent from the result.
        """
        ids = sorted({int(i) for i in coin_ids})
        if not ids:
            raise CoinMapError(
                "quotes_for needs at least one coin id",
                code=CoinMapErrorCode.INVALID_REQUEST,
            )

        body = await self.transport.get(QUOTES_PATH, {"id": ",".join(str(i) for i in ids)})

        quotes: dict[int, Quote] = {}
        for key, entry in (body.get("data") or {}).items():
            # symbol-keyed v2 responses wrap each entry in a list
            if isinstance(entry, list):
                if not entry:
                    continue
                entry = entry[0]
            quotes[int(key)] = Quote.from_api(entry)
        return quotes

    async def quote_for_id(self, coin_id: int) -> Quote:
        """Latest quote for one id; raises ``NotFoundError`` if omitted."""
        quote = (await self.quotes_for([coin_id])).get(int(coin_id))
        if quote is None:
            raise NotFoundError(f"No quote data found for coin id {coin_id}")
        return quote

    async def quote_for_symbol(self, symbol: str) -> Quote | None:
        """Latest quote for the first asset listed under ``symbol``.

        Raises:
            NotReadyError: Identifier map not populated yet.
            NotFoundError: No asset has this symbol.
        """
        coin = self.id_map.lookup_one_by_symbol(symbol)
        if coin is None:
            raise NotFoundError(f"Coin with symbol {symbol} not found")
        return (await self.quotes_for([coin.id])).get(coin.id)

    async def usd_price_for_symbol(self, symbol: str) -> float | None:
        quote = await self.quote_for_symbol(symbol.upper())
        return quote.price if quote else None

    async def usd_prices_for_symbols(self, symbols: Iterable[str]) -> dict[str, float | None]:
        """USD prices keyed by the given symbols, in input order.

        Each symbol is tried as given, then upper-cased. Unknown symbols
        and assets without a quote map to None. All resolved ids go out
        in one ``quotes_for`` request.
        """
        symbols = list(symbols)
        resolved: dict[str, int | None] = {}
        for symbol in symbols:
            coin = self.id_map.lookup_one_by_symbol(symbol)
            if coin is None and symbol != symbol.upper():
                coin = self.id_map.lookup_one_by_symbol(symbol.upper())
            resolved[symbol] = coin.id if coin else None

        ids = {coin_id for coin_id in resolved.values() if coin_id is not None}
        quotes = await self.quotes_for(ids) if ids else {}

        prices: dict[str, float | None] = {}
        for symbol in symbols:
            coin_id = resolved[symbol]
            quote = quotes.get(coin_id) if coin_id is not None else None
            prices[symbol] = quote.price if quote else None
        return prices
