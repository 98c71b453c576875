"""Core provider abstractions."""
from market_pulse.providers.core.error_mapper import ErrorMapper
from market_pulse.providers.core.exceptions import (PROVIDER_EXCEPTIONS,
                                                    AlertNotFoundError,
                                                    AssetNotFoundError,
                                                    InvalidAlertPriceError,
                                                    InvalidWalletAddressError,
                                                    MarketPulseError,
                                                    UnknownDatasetError)
from market_pulse.providers.core.market_provider_abc import (MarketProviderABC,
                                                             get_json)
from market_pulse.providers.core.normalize import (format_units,
                                                   parse_currency,
                                                   to_number, to_price_series)

__all__ = [
    "AlertNotFoundError",
    "AssetNotFoundError",
    "ErrorMapper",
    "InvalidAlertPriceError",
    "InvalidWalletAddressError",
    "MarketProviderABC",
    "MarketPulseError",
    "PROVIDER_EXCEPTIONS",
    "UnknownDatasetError",
    "format_units",
    "get_json",
    "parse_currency",
    "to_number",
    "to_price_series",
]
