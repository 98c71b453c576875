"""Moralis wallet-data provider (native and ERC20 balances on Ethereum mainnet)."""
import asyncio
import logging
from decimal import Decimal

import httpx
from pydantic import TypeAdapter

from market_pulse.config import Settings, get_settings
from market_pulse.providers.core import PROVIDER_EXCEPTIONS, get_json
from market_pulse.providers.wallet.moralis.models import (MoralisErc20Params,
                                                          MoralisNativeBalance,
                                                          MoralisParams,
                                                          MoralisTokenBalance)
from market_pulse.schemas import WalletPortfolio

logger = logging.getLogger(__name__)

_TOKEN_ROWS = TypeAdapter(list[MoralisTokenBalance])
_WEI_PER_ETH = Decimal(10) ** 18


def _wei_to_eth(raw: str) -> float:
    try:
        return float(Decimal(raw) / _WEI_PER_ETH)
    except (ArithmeticError, ValueError):
        return 0.0


class MoralisProvider:
    """Wallet balances via the Moralis deep-index API.

    Returns an unpriced WalletPortfolio: the native currency first as a
    zero-address pseudo-token, then ERC20 holdings. Pricing is the
    portfolio valuator's job.
    """

    name = "moralis"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Moralis provider.

        Args:
            api_key: Moralis API key. Defaults to settings.moralis_api_key.
            settings: Application settings; defaults to get_settings().
            client: Preconfigured HTTP client (tests inject a mock transport).
        """
        settings = settings or get_settings()
        headers = {"accept": "application/json"}
        api_key = api_key or settings.moralis_api_key
        if api_key:
            headers["X-API-Key"] = api_key
        self._client = client or httpx.AsyncClient(
            base_url=settings.moralis_base_url,
            headers=headers,
            timeout=settings.http_timeout_seconds,
        )

    async def get_wallet(self, address: str) -> WalletPortfolio | None:
        """Fetch native and ERC20 balances; None on any provider failure."""
        try:
            native_data, token_data = await asyncio.gather(
                get_json(
                    self._client,
                    f"/{address}/balance",
                    params=MoralisParams().model_dump(),
                ),
                get_json(
                    self._client,
                    f"/{address}/erc20",
                    params=MoralisErc20Params().model_dump(),
                ),
            )
            native = MoralisNativeBalance.model_validate(native_data)
            tokens = _TOKEN_ROWS.validate_python(token_data or [])
            return WalletPortfolio(
                address=address,
                native_balance_raw=native.balance,
                native_balance_formatted=_wei_to_eth(native.balance),
                assets=(native.to_asset(), *(token.to_asset() for token in tokens)),
            )
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("Moralis wallet fetch failed for %s: %s", address, exc)
            return None

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
