"""Stock market data providers."""
from market_pulse.providers.stocks.bist.bist_provider import BistProvider
from market_pulse.providers.stocks.fmp.fmp_provider import FMPProvider
from market_pulse.providers.stocks.yfinance.y_finance_provider import \
    YFinanceProvider

__all__ = ["BistProvider", "FMPProvider", "YFinanceProvider"]
