"""Pydantic schemas for API and runtime use. Market data is never persisted."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class AssetClass(str, Enum):
    """Kind of tradable instrument."""

    CRYPTO = "CRYPTO"
    STOCK = "STOCK"


class Asset(BaseModel):
    """Canonical record for any tradable instrument, whatever the provider."""

    model_config = ConfigDict(frozen=True)

    id: str  # provider slug for crypto, ticker for equities
    symbol: str
    name: str
    current_price: float = 0.0
    price_change_percentage_24h: float = 0.0
    market_cap: float = 0.0
    volume: float = 0.0
    image_url: str = ""
    sparkline: tuple[float, ...] = ()  # oldest -> newest
    asset_class: AssetClass


class TokenPrice(BaseModel):
    """Spot price and market cap in USD; zeros when the provider has no entry."""

    model_config = ConfigDict(frozen=True)

    price: float = 0.0
    market_cap: float = 0.0


class WalletAsset(BaseModel):
    """A single ERC20 or native-currency holding."""

    model_config = ConfigDict(frozen=True)

    contract_address: str
    name: str
    symbol: str
    decimals: int
    balance: str  # human units, 4 decimal places
    logo: str | None = None
    possible_spam: bool = False
    price_usd: float = 0.0
    value_usd: float = 0.0
    market_cap_usd: float = 0.0

    @property
    def is_native(self) -> bool:
        return self.contract_address == ZERO_ADDRESS


class WalletPortfolio(BaseModel):
    """One wallet's holdings snapshot."""

    model_config = ConfigDict(frozen=True)

    address: str
    native_balance_raw: str  # wei
    native_balance_formatted: float  # ETH
    total_net_worth_usd: float = 0.0
    assets: tuple[WalletAsset, ...] = ()


class NewsArticle(BaseModel):
    """A news headline from the stock or crypto news feed."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    image_url: str = ""
    site: str = ""
    body: str = ""
    url: str = ""
    published_at: str = ""
    related_symbol: str = ""


class SeriesSource(str, Enum):
    """Where an indicator's price series came from."""

    SPARKLINE = "sparkline"
    HISTORY = "history"
    SYNTHETIC = "synthetic"  # random-walk filler, no analytical value


class TechnicalIndicators(BaseModel):
    """RSI(14) and SMA(14) at full precision; rounding is left to the client."""

    rsi: float
    sma: float
    series_source: SeriesSource = SeriesSource.SPARKLINE
    points: int = 0


class MarketSnapshot(BaseModel):
    """Named datasets as of the latest completed refresh cycle."""

    model_config = ConfigDict(frozen=True)

    cycle: int = 0
    datasets: dict[str, tuple[Asset, ...]] = Field(default_factory=dict)
    updated_at: datetime | None = None
    loading: bool = False

    def get(self, name: str) -> tuple[Asset, ...]:
        return self.datasets.get(name, ())


__all__ = [
    "Asset",
    "AssetClass",
    "MarketSnapshot",
    "NewsArticle",
    "SeriesSource",
    "TechnicalIndicators",
    "TokenPrice",
    "WalletAsset",
    "WalletPortfolio",
    "ZERO_ADDRESS",
]
