"""Models for YFinance provider (history bars)."""
from datetime import datetime

from pydantic import BaseModel


class YFinanceBar(BaseModel):
    """A single daily OHLC bar."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    provider: str = "yfinance"
