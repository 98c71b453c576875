"""Market data providers for crypto, equities and wallet balances.

- CoinGeckoProvider: crypto markets, trending coins, ETH/ERC20 prices, crypto news
- FMPProvider: batch equity quotes and stock news
- BistProvider: Borsa Istanbul via Yapi Kredi, falling back to FMP
- YFinanceProvider: daily equity history for indicators
- MoralisProvider: native and ERC20 wallet balances

Fetchers never raise on provider trouble; they log and return an empty
result so the aggregator can publish whatever did succeed.

Example:
    async with CoinGeckoProvider() as provider:
        coins = await provider.get_assets("bitcoin,ethereum")
        print([(c.symbol, c.current_price) for c in coins])
"""
from market_pulse.providers.core import MarketProviderABC
from market_pulse.providers.crypto import CoinGeckoProvider
from market_pulse.providers.stocks import (BistProvider, FMPProvider,
                                           YFinanceProvider)
from market_pulse.providers.wallet import MoralisProvider

__all__ = [
    "BistProvider",
    "CoinGeckoProvider",
    "FMPProvider",
    "MarketProviderABC",
    "MoralisProvider",
    "YFinanceProvider",
]
