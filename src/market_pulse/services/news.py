"""News feed by category."""
from enum import Enum

from market_pulse.providers import CoinGeckoProvider, FMPProvider
from market_pulse.schemas import NewsArticle


class NewsCategory(str, Enum):
    STOCKS = "stocks"
    CRYPTO = "crypto"


class NewsService:
    """Stock news from FMP, crypto news from CoinGecko."""

    def __init__(self, stocks: FMPProvider, crypto: CoinGeckoProvider) -> None:
        self._stocks = stocks
        self._crypto = crypto

    async def get_news(self, category: NewsCategory = NewsCategory.STOCKS) -> list[NewsArticle]:
        if NewsCategory(category) is NewsCategory.CRYPTO:
            return await self._crypto.get_news()
        return await self._stocks.get_news()
