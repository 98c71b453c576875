"""Domain concept for mapping service exceptions to HTTP responses."""
from dataclasses import dataclass

from fastapi import HTTPException

from market_pulse.providers.core.exceptions import (AlertNotFoundError,
                                                    AssetNotFoundError,
                                                    InvalidAlertPriceError,
                                                    InvalidWalletAddressError,
                                                    UnknownDatasetError)


@dataclass(frozen=True)
class ErrorMapper:
    """Maps domain exceptions to HTTP (status_code, detail).

    Provider failures never reach this point (fetchers degrade to empty
    results), so only user-input and lookup errors are mapped here.
    """

    resource_name: str = "Resource"

    def to_http(self, exc: Exception) -> tuple[int, str]:
        """Map a domain exception to (status_code, detail) for HTTP responses."""
        if isinstance(exc, (InvalidWalletAddressError, InvalidAlertPriceError)):
            return (422, str(exc))
        if isinstance(exc, UnknownDatasetError):
            return (404, str(exc))
        if isinstance(exc, (AssetNotFoundError, AlertNotFoundError)):
            return (404, str(exc))
        if isinstance(exc, ValueError):
            return (422, str(exc) or f"Invalid {self.resource_name.lower()}")
        return (500, "Internal server error")

    def raise_http(self, exc: Exception) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc)
        raise HTTPException(status_code=status_code, detail=detail) from exc
