"""Yahoo Finance history provider for equities."""
import asyncio
import logging
from datetime import datetime, timedelta

import yfinance as yf

from market_pulse.providers.core import PROVIDER_EXCEPTIONS
from market_pulse.providers.stocks.yfinance.models import YFinanceBar

logger = logging.getLogger(__name__)


class YFinanceProvider:
    """Daily close history for stocks via Yahoo Finance.

    Quotes carry no inline series, so this feeds the indicator calculator
    for equities. No API key required. BIST tickers use Yahoo's ``.IS``
    suffix and work unchanged.
    """

    name = "yfinance"

    def __init__(self, days: int = 30) -> None:
        """Initialize the YFinance provider.

        Args:
            days: Default length of the history window.
        """
        self._days = days

    def _fetch_history_sync(
        self, symbol: str, start: datetime, end: datetime
    ) -> list[YFinanceBar]:
        """Fetch daily bars synchronously (run in thread)."""
        try:
            df = yf.Ticker(symbol).history(start=start, end=end, interval="1d")
        except Exception as e:
            raise ValueError(f"Failed to fetch history for '{symbol}': {e}") from e
        if df.empty:
            return []
        return [
            YFinanceBar(
                timestamp=ts.to_pydatetime(),
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=float(row["Close"]),
            )
            for ts, row in df.iterrows()
            if not row[["Open", "High", "Low", "Close"]].isna().any()
        ]

    async def get_history(self, symbol: str, days: int | None = None) -> list[YFinanceBar]:
        """Fetch daily bars for the last ``days`` days, oldest first; empty on failure."""
        sym = symbol.upper()
        end = datetime.utcnow()
        start = end - timedelta(days=days or self._days)
        try:
            return await asyncio.to_thread(self._fetch_history_sync, sym, start, end)
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("yfinance history fetch failed for %s: %s", sym, exc)
            return []

    async def get_closes(self, symbol: str, days: int | None = None) -> list[float]:
        """Closing prices only, oldest first."""
        return [bar.close for bar in await self.get_history(symbol, days)]
