"""Models for the Yapi Kredi BIST stock list (shape assumed, not documented)."""
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from market_pulse.providers.core.normalize import to_number
from market_pulse.schemas import Asset, AssetClass


def _first_number(row: dict[str, Any], *keys: str) -> float:
    """First non-zero numeric value among keys, else 0."""
    for key in keys:
        if number := to_number(row.get(key)):
            return number
    return 0.0


class BistStockRow(BaseModel):
    """One stock row; accepts either ``symbol`` or ``code`` as the ticker."""

    model_config = ConfigDict(extra="ignore")

    symbol: str
    name: str
    last_price: float = 0.0
    change_percent: float = 0.0
    market_cap: float = 0.0
    volume: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _from_raw(cls, row: Any) -> Any:
        if not isinstance(row, dict):
            return row
        symbol = row.get("symbol") or row.get("code")
        return {
            "symbol": symbol,
            "name": row.get("name") or row.get("description") or symbol,
            "last_price": _first_number(row, "lastPrice", "price"),
            "change_percent": _first_number(row, "changePercent", "dailyChange"),
            "market_cap": to_number(row.get("marketCap")),
            "volume": to_number(row.get("volume")),
        }

    def to_asset(self) -> Asset:
        symbol = self.symbol.upper()
        return Asset(
            id=symbol,
            symbol=symbol,
            name=self.name,
            current_price=self.last_price,
            price_change_percentage_24h=self.change_percent,
            market_cap=self.market_cap,
            volume=self.volume,
            image_url="",  # no logos from the bank API
            asset_class=AssetClass.STOCK,
        )
