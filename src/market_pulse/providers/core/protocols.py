"""Protocols for market data providers."""
from typing import Protocol

from market_pulse.schemas import Asset, TokenPrice


class AssetLookup(Protocol):
    """Anything that resolves a comma-joined symbol list to Assets."""

    async def get_assets(self, symbols: str | None = None) -> list[Asset]:
        """Fetch assets; empty list on failure."""
        ...


class PriceSource(Protocol):
    """Spot prices for the native currency and ERC20 contracts."""

    async def get_native_price(self) -> TokenPrice:
        """Native currency (ETH) price; zeros on failure."""
        ...

    async def get_token_prices(self, addresses: list[str]) -> dict[str, TokenPrice]:
        """Prices keyed by lowercase contract address; empty on failure."""
        ...
