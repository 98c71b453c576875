"""Abstract base class for market data providers."""
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from market_pulse.schemas import Asset

logger = logging.getLogger(__name__)


class MarketProviderABC(ABC):
    """Base interface for providers that return canonical Assets.

    Implementations never raise on provider trouble: transport errors,
    non-2xx responses and unexpected payloads are logged and an empty list
    is returned so one failing source cannot block the others.
    """

    name: str = "provider"

    @abstractmethod
    async def get_assets(self, symbols: str | None = None) -> list[Asset]:
        """Fetch assets for a comma-joined symbol/id list.

        Args:
            symbols: Provider-specific identifiers joined with commas. None
                means the provider's default set (e.g. top coins by market cap).

        Returns:
            Normalized assets; empty on any failure.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "MarketProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()


async def get_json(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """GET path and decode JSON; raises httpx.HTTPStatusError on non-2xx."""
    response = await client.get(path, params=params)
    response.raise_for_status()
    return response.json()
