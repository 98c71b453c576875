"""CoinGecko market data provider for cryptocurrencies."""
import logging

import httpx
from pydantic import TypeAdapter

from market_pulse.config import Settings, get_settings
from market_pulse.providers.core import (PROVIDER_EXCEPTIONS,
                                         MarketProviderABC, get_json)
from market_pulse.providers.crypto.coingecko.models import (
    CoinGeckoMarketItem, CoinGeckoMarketsParams, CoinGeckoNewsItem,
    CoinGeckoPriceRow, CoinGeckoSimplePriceParams, CoinGeckoTokenPriceParams,
    CoinGeckoTrendingResponse)
from market_pulse.schemas import Asset, NewsArticle, TokenPrice

logger = logging.getLogger(__name__)

_MARKET_ROWS = TypeAdapter(list[CoinGeckoMarketItem])
_NEWS_ROWS = TypeAdapter(list[CoinGeckoNewsItem])
_PRICE_MAP = TypeAdapter(dict[str, CoinGeckoPriceRow | None])


class CoinGeckoProvider(MarketProviderABC):
    """Market data provider for cryptocurrencies via CoinGecko API.

    Uses CoinGecko IDs as identifiers (e.g., "bitcoin", "ethereum", "solana").
    Also serves the trending list, ETH and ERC20 spot prices used for wallet
    valuation, and the crypto news feed.
    """

    name = "coingecko"
    TOKEN_PLATFORM = "ethereum"

    def __init__(
        self,
        api_key: str | None = None,
        use_pro_api: bool | None = None,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the CoinGecko provider.

        Args:
            api_key: CoinGecko API key. Defaults to settings.coingecko_api_key.
            use_pro_api: Whether to use the Pro API endpoint (needs a key).
            settings: Application settings; defaults to get_settings().
            client: Preconfigured HTTP client (tests inject a mock transport).
        """
        settings = settings or get_settings()
        self._api_key = api_key or settings.coingecko_api_key
        if use_pro_api is None:
            use_pro_api = settings.coingecko_use_pro_api
        self._use_pro_api = use_pro_api and bool(self._api_key)

        headers: dict[str, str] = {"Accept": "application/json"}
        if self._api_key:
            key_header = "x-cg-pro-api-key" if self._use_pro_api else "x-cg-demo-api-key"
            headers[key_header] = self._api_key

        base = (
            settings.coingecko_pro_base_url
            if self._use_pro_api
            else settings.coingecko_base_url
        )
        self._client = client or httpx.AsyncClient(
            base_url=base, headers=headers, timeout=settings.http_timeout_seconds
        )

    async def get_assets(self, symbols: str | None = None) -> list[Asset]:
        """Fetch coins from /coins/markets.

        Args:
            symbols: Comma-joined CoinGecko IDs. None or blank returns the top
                coins by market cap.
        """
        params = CoinGeckoMarketsParams().model_dump()
        if symbols and symbols.strip():
            params["ids"] = symbols
        try:
            data = await get_json(self._client, "/coins/markets", params=params)
            return [row.to_asset() for row in _MARKET_ROWS.validate_python(data)]
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("CoinGecko markets fetch failed: %s", exc)
            return []

    async def get_trending(self) -> list[Asset]:
        """Fetch the trending coins list."""
        try:
            data = await get_json(self._client, "/search/trending")
            response = CoinGeckoTrendingResponse.model_validate(data)
            return [coin.item.to_asset() for coin in response.coins]
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("CoinGecko trending fetch failed: %s", exc)
            return []

    async def get_native_price(self) -> TokenPrice:
        """Fetch ETH price and market cap; zeros on failure."""
        params = CoinGeckoSimplePriceParams().model_dump()
        try:
            data = await get_json(self._client, "/simple/price", params=params)
            row = _PRICE_MAP.validate_python(data).get(params["ids"])
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("CoinGecko native price fetch failed: %s", exc)
            return TokenPrice()
        return row.to_price() if row else TokenPrice()

    async def get_token_prices(self, addresses: list[str]) -> dict[str, TokenPrice]:
        """Fetch ERC20 prices in one batch, keyed by lowercase contract address.

        Addresses absent from the response are simply missing from the result;
        callers treat them as price 0.
        """
        if not addresses:
            return {}
        params = CoinGeckoTokenPriceParams().model_dump() | {
            "contract_addresses": ",".join(addresses),
        }
        try:
            data = await get_json(
                self._client,
                f"/simple/token_price/{self.TOKEN_PLATFORM}",
                params=params,
            )
            rows = _PRICE_MAP.validate_python(data)
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("CoinGecko token price fetch failed: %s", exc)
            return {}
        return {addr.lower(): row.to_price() for addr, row in rows.items() if row}

    async def get_news(self) -> list[NewsArticle]:
        """Fetch the crypto news feed."""
        try:
            data = await get_json(self._client, "/news")
            articles = data.get("data", []) if isinstance(data, dict) else data
            return [row.to_article() for row in _NEWS_ROWS.validate_python(articles)]
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("CoinGecko news fetch failed: %s", exc)
            return []

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
