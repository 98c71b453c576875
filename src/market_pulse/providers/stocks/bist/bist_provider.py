"""Borsa Istanbul provider: Yapi Kredi stock list with an FMP fallback."""
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from market_pulse.config import Settings, get_settings
from market_pulse.constants import BIST_SYMBOLS
from market_pulse.providers.core import (PROVIDER_EXCEPTIONS,
                                         MarketProviderABC, get_json)
from market_pulse.providers.core.protocols import AssetLookup
from market_pulse.providers.stocks.bist.models import BistStockRow
from market_pulse.schemas import Asset

logger = logging.getLogger(__name__)

_ROWS = TypeAdapter(list[BistStockRow])


def _extract_rows(body: Any) -> list:
    """Rows live under ``data`` when the body is an envelope, else at the top level."""
    rows = body.get("data", body) if isinstance(body, dict) else body
    if not isinstance(rows, list):
        raise ValueError("BIST stock list is not an array")
    return rows


class BistProvider(MarketProviderABC):
    """BIST equities with a two-step fallback chain.

    The Yapi Kredi endpoint is tried first. Any failure (transport error,
    non-2xx status, body that is not a row list) substitutes the whole result
    with the fallback lookup over the fixed BIST symbol list. A successful
    response with zero rows is accepted as-is.
    """

    name = "bist"

    def __init__(
        self,
        fallback: AssetLookup,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        fallback_symbols: str = BIST_SYMBOLS,
    ) -> None:
        """Initialize the BIST provider.

        Args:
            fallback: Generic equity lookup used when the primary fails (FMP).
            settings: Application settings; defaults to get_settings().
            client: Preconfigured HTTP client for the primary endpoint.
            fallback_symbols: Symbols requested from the fallback.
        """
        settings = settings or get_settings()
        self._fallback = fallback
        self._fallback_symbols = fallback_symbols
        self._client = client or httpx.AsyncClient(
            base_url=settings.yapikredi_base_url,
            headers={"Accept": "application/json"},
            timeout=settings.http_timeout_seconds,
        )

    async def _fetch_primary(self) -> list[Asset]:
        body = await get_json(self._client, "/stocks/list")
        return [row.to_asset() for row in _ROWS.validate_python(_extract_rows(body))]

    async def get_assets(self, symbols: str | None = None) -> list[Asset]:
        """Fetch BIST stocks; ``symbols`` overrides the fallback symbol list."""
        try:
            return await self._fetch_primary()
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("Yapi Kredi API failed, falling back to FMP: %s", exc)
        return await self._fallback.get_assets(symbols or self._fallback_symbols)

    async def close(self) -> None:
        """Close the primary HTTP client; the fallback is owned elsewhere."""
        await self._client.aclose()
