"""Domain exceptions and the provider failure set caught at fetcher boundaries."""
import asyncio

import httpx

# Transport failures, non-2xx statuses (via raise_for_status), JSON decode and
# pydantic validation errors (both ValueError), numeric overflow and decimal
# errors (ArithmeticError) and malformed payload access.
# Anything else is a bug and propagates.
PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    ValueError,
    KeyError,
    TypeError,
    ArithmeticError,
    OSError,
    TimeoutError,
    asyncio.TimeoutError,
)


class MarketPulseError(Exception):
    """Base class for errors surfaced to API clients."""


class InvalidWalletAddressError(MarketPulseError, ValueError):
    """The submitted wallet address is not a 0x-prefixed 40-hex-digit address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid Ethereum address: '{address}'")
        self.address = address


class UnknownDatasetError(MarketPulseError, KeyError):
    """No dataset with the requested name is published by the aggregator."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown dataset: '{self.name}'"


class AssetNotFoundError(MarketPulseError, LookupError):
    """No loaded dataset contains an asset with the requested id."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(f"Asset '{asset_id}' not found")
        self.asset_id = asset_id


class InvalidAlertPriceError(MarketPulseError, ValueError):
    """The submitted alert price is not a finite number."""

    def __init__(self, price: object) -> None:
        super().__init__(f"Invalid alert price: '{price}'")
        self.price = price


class AlertNotFoundError(MarketPulseError, LookupError):
    """No alert at the requested position for the asset."""

    def __init__(self, asset_id: str, index: int) -> None:
        super().__init__(f"No alert #{index} for asset '{asset_id}'")
        self.asset_id = asset_id
        self.index = index
