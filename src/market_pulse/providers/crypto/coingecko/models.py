"""Models for CoinGecko provider (API params and response rows)."""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from market_pulse.providers.core.normalize import (parse_currency, to_number,
                                                   to_price_series)
from market_pulse.schemas import (Asset, AssetClass, NewsArticle,
                                  TokenPrice)

FALLBACK_NEWS_IMAGE = "https://assets.coingecko.com/coins/images/1/large/bitcoin.png"


class CoinGeckoMarketsParams(BaseModel):
    """Params for /coins/markets. Merge with 'ids' at call site when given."""

    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    per_page: int = 250
    page: int = 1
    sparkline: str = "true"
    price_change_percentage: str = "24h"


class CoinGeckoSimplePriceParams(BaseModel):
    """Params for /simple/price (native currency price)."""

    ids: str = "ethereum"
    vs_currencies: str = "usd"
    include_market_cap: str = "true"


class CoinGeckoTokenPriceParams(BaseModel):
    """Params for /simple/token_price/{platform}. Merge with contract_addresses."""

    vs_currencies: str = "usd"
    include_market_cap: str = "true"


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CoinGeckoMarketItem(_Row):
    """One row of /coins/markets."""

    id: str
    symbol: str
    name: str
    current_price: float = 0.0
    price_change_percentage_24h: float = 0.0
    market_cap: float = 0.0
    total_volume: float = 0.0
    image: str | None = None
    sparkline: tuple[float, ...] = Field(default=(), alias="sparkline_in_7d")

    @field_validator(
        "current_price",
        "price_change_percentage_24h",
        "market_cap",
        "total_volume",
        mode="before",
    )
    @classmethod
    def _number(cls, v: Any) -> float:
        return to_number(v)

    @field_validator("sparkline", mode="before")
    @classmethod
    def _sparkline(cls, v: Any) -> tuple[float, ...]:
        if isinstance(v, dict):
            return to_price_series(v.get("price"))
        return ()

    def to_asset(self) -> Asset:
        return Asset(
            id=self.id,
            symbol=self.symbol.upper(),
            name=self.name,
            current_price=self.current_price,
            price_change_percentage_24h=self.price_change_percentage_24h,
            market_cap=self.market_cap,
            volume=self.total_volume,
            image_url=self.image or "",
            sparkline=self.sparkline,
            asset_class=AssetClass.CRYPTO,
        )


class CoinGeckoTrendingData(_Row):
    """Nested ``data`` block of a trending coin; prices may be currency strings."""

    price: float = 0.0
    market_cap: float = 0.0
    price_change_percentage_24h: float = 0.0

    @field_validator("price", "market_cap", mode="before")
    @classmethod
    def _currency(cls, v: Any) -> float:
        return parse_currency(v)

    @field_validator("price_change_percentage_24h", mode="before")
    @classmethod
    def _change_usd(cls, v: Any) -> float:
        if isinstance(v, dict):
            return to_number(v.get("usd"))
        return 0.0


class CoinGeckoTrendingItem(_Row):
    """``coins[].item`` of /search/trending."""

    id: str
    symbol: str
    name: str
    large: str | None = None
    thumb: str | None = None
    data: CoinGeckoTrendingData = Field(default_factory=CoinGeckoTrendingData)

    @field_validator("data", mode="before")
    @classmethod
    def _data(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    def to_asset(self) -> Asset:
        return Asset(
            id=self.id,
            symbol=self.symbol.upper(),
            name=self.name,
            current_price=self.data.price,
            price_change_percentage_24h=self.data.price_change_percentage_24h,
            market_cap=self.data.market_cap,
            volume=0.0,  # trending rows carry no clean volume
            image_url=self.large or self.thumb or "",
            asset_class=AssetClass.CRYPTO,
        )


class CoinGeckoTrendingCoin(_Row):
    item: CoinGeckoTrendingItem


class CoinGeckoTrendingResponse(_Row):
    coins: list[CoinGeckoTrendingCoin]


class CoinGeckoPriceRow(_Row):
    """Value of /simple/price and /simple/token_price mappings."""

    usd: float = 0.0
    usd_market_cap: float = 0.0

    @field_validator("usd", "usd_market_cap", mode="before")
    @classmethod
    def _number(cls, v: Any) -> float:
        return to_number(v)

    def to_price(self) -> TokenPrice:
        return TokenPrice(price=self.usd, market_cap=self.usd_market_cap)


class CoinGeckoNewsItem(_Row):
    """One row of the /news ``data`` list."""

    title: str = ""
    url: str = ""
    thumb_2x: str | None = None
    news_site_long: str | None = None
    description: str | None = None
    updated_at: float | None = None

    @field_validator("updated_at", mode="before")
    @classmethod
    def _epoch(cls, v: Any) -> float | None:
        number = to_number(v)
        return number or None

    def to_article(self) -> NewsArticle:
        published = datetime.now(timezone.utc)
        if self.updated_at is not None:
            try:
                published = datetime.fromtimestamp(self.updated_at, tz=timezone.utc)
            except (OverflowError, ValueError, OSError):
                pass  # out-of-range epoch keeps the fetch time
        return NewsArticle(
            title=self.title,
            image_url=self.thumb_2x or FALLBACK_NEWS_IMAGE,
            site=self.news_site_long or "Crypto News",
            body=self.description or "",
            url=self.url,
            published_at=published.isoformat(),
            related_symbol="CRYPTO",
        )
