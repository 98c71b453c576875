"""Cryptocurrency market data providers."""
from market_pulse.providers.crypto.coingecko.coin_gecko_provider import \
    CoinGeckoProvider

__all__ = ["CoinGeckoProvider"]
