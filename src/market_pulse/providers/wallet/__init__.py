"""Wallet balance providers."""
from market_pulse.providers.wallet.moralis.moralis_provider import \
    MoralisProvider

__all__ = ["MoralisProvider"]
