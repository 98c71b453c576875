"""Financial Modeling Prep provider for equity quotes and stock news."""
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from market_pulse.config import Settings, get_settings
from market_pulse.providers.core import (PROVIDER_EXCEPTIONS,
                                         MarketProviderABC, get_json)
from market_pulse.providers.stocks.fmp.models import FMPNewsItem, FMPQuote
from market_pulse.schemas import Asset, NewsArticle

logger = logging.getLogger(__name__)

_QUOTE_ROWS = TypeAdapter(list[FMPQuote])
_NEWS_ROWS = TypeAdapter(list[FMPNewsItem])


def _require_list(data: Any, what: str) -> list:
    """Return data if it is a list; otherwise raise, logging FMP's own message."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and "Error Message" in data:
        raise ValueError(f"FMP {what} error: {data['Error Message']}")
    raise ValueError(f"FMP {what} returned non-list payload")


class FMPProvider(MarketProviderABC):
    """Equity quotes via Financial Modeling Prep.

    One batch request per symbol list (``/quote/AAPL,MSFT``). Quotes carry no
    inline history, so every Asset has an empty sparkline.
    """

    name = "fmp"
    NEWS_LIMIT = 20

    def __init__(
        self,
        api_key: str | None = None,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the FMP provider.

        Args:
            api_key: FMP API key. Defaults to settings.fmp_api_key.
            settings: Application settings; defaults to get_settings().
            client: Preconfigured HTTP client (tests inject a mock transport).
        """
        settings = settings or get_settings()
        self._api_key = api_key or settings.fmp_api_key
        self._client = client or httpx.AsyncClient(
            base_url=settings.fmp_base_url,
            headers={"Accept": "application/json"},
            timeout=settings.http_timeout_seconds,
        )

    def _params(self, **extra: Any) -> dict[str, Any]:
        params = dict(extra)
        if self._api_key:
            params["apikey"] = self._api_key
        return params

    async def get_assets(self, symbols: str | None = None) -> list[Asset]:
        """Fetch quotes for a comma-joined ticker list; empty list on failure."""
        if not symbols or not symbols.strip():
            return []
        try:
            data = await get_json(self._client, f"/quote/{symbols}", params=self._params())
            rows = _QUOTE_ROWS.validate_python(_require_list(data, "quote"))
            return [row.to_asset() for row in rows]
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("FMP quote fetch failed for %s: %s", symbols, exc)
            return []

    async def get_news(self, limit: int = NEWS_LIMIT) -> list[NewsArticle]:
        """Fetch general stock market news."""
        try:
            data = await get_json(
                self._client, "/stock_news", params=self._params(limit=limit)
            )
            rows = _NEWS_ROWS.validate_python(_require_list(data, "news"))
            return [row.to_article() for row in rows]
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("FMP news fetch failed: %s", exc)
            return []

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
