"""Models for the Financial Modeling Prep provider (quote and news rows)."""
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from market_pulse.providers.core.normalize import to_number
from market_pulse.schemas import Asset, AssetClass, NewsArticle

IMAGE_URL_TEMPLATE = "https://financialmodelingprep.com/image-stock/{symbol}.png"


class FMPQuote(BaseModel):
    """One row of /quote/{symbols}."""

    model_config = ConfigDict(extra="ignore")

    symbol: str
    name: str | None = None
    price: float = 0.0
    changesPercentage: float = 0.0
    marketCap: float = 0.0
    volume: float = 0.0

    @field_validator("price", "changesPercentage", "marketCap", "volume", mode="before")
    @classmethod
    def _number(cls, v: Any) -> float:
        return to_number(v)

    def to_asset(self) -> Asset:
        symbol = self.symbol.upper()
        return Asset(
            id=symbol,
            symbol=symbol,
            name=self.name or symbol,
            current_price=self.price,
            price_change_percentage_24h=self.changesPercentage,
            market_cap=self.marketCap,
            volume=self.volume,
            image_url=IMAGE_URL_TEMPLATE.format(symbol=symbol),
            asset_class=AssetClass.STOCK,
        )


class FMPNewsItem(BaseModel):
    """One row of /stock_news."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    image: str | None = None
    site: str | None = None
    text: str | None = None
    url: str = ""
    publishedDate: str | None = None
    symbol: str | None = None

    def to_article(self) -> NewsArticle:
        return NewsArticle(
            title=self.title,
            image_url=self.image or "",
            site=self.site or "",
            body=self.text or "",
            url=self.url,
            published_at=self.publishedDate or "",
            related_symbol=self.symbol or "",
        )
