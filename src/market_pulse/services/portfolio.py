"""Portfolio valuator: joins wallet balances with spot prices."""
import asyncio
import logging
import math
import re

from market_pulse.providers.core import InvalidWalletAddressError
from market_pulse.providers.core.protocols import PriceSource
from market_pulse.providers.wallet import MoralisProvider
from market_pulse.schemas import (TokenPrice, WalletAsset,
                                  WalletPortfolio)
from market_pulse.services.state_store import WALLET_ADDRESS, StateStore

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
NATIVE_SYMBOL = "ETH"


def validate_address(address: str) -> str:
    """Return the stripped address or raise InvalidWalletAddressError."""
    candidate = address.strip()
    if not ADDRESS_PATTERN.match(candidate):
        raise InvalidWalletAddressError(address)
    return candidate


def is_native(asset: WalletAsset) -> bool:
    return asset.is_native or asset.symbol.upper() == NATIVE_SYMBOL


def token_addresses(portfolio: WalletPortfolio) -> list[str]:
    """Contract addresses that need a token price lookup."""
    return [
        a.contract_address
        for a in portfolio.assets
        if a.contract_address and not is_native(a)
    ]


def _asset_value(asset: WalletAsset, price: float) -> float:
    try:
        return float(asset.balance) * price
    except ValueError:
        return math.nan


def value_portfolio(
    portfolio: WalletPortfolio,
    native_price: TokenPrice,
    token_prices: dict[str, TokenPrice],
) -> WalletPortfolio:
    """Price every holding and total them.

    A holding without a price entry is valued at 0 but still listed. A value
    that is not a finite number adds nothing to the total and is shown as 0.
    Holdings are ordered by value, highest first.
    """
    priced: list[WalletAsset] = []
    total = 0.0
    for asset in portfolio.assets:
        if is_native(asset):
            quote = native_price
        else:
            quote = token_prices.get(asset.contract_address.lower(), TokenPrice())
        value = _asset_value(asset, quote.price)
        if math.isfinite(value):
            total += value
        else:
            value = 0.0
        priced.append(
            asset.model_copy(
                update={
                    "price_usd": quote.price,
                    "value_usd": value,
                    "market_cap_usd": quote.market_cap,
                }
            )
        )
    priced.sort(key=lambda a: a.value_usd, reverse=True)
    return portfolio.model_copy(
        update={"total_net_worth_usd": total, "assets": tuple(priced)}
    )


class PortfolioService:
    """Tracks one connected wallet and remembers its address locally."""

    def __init__(
        self,
        wallet: MoralisProvider,
        prices: PriceSource,
        store: StateStore,
    ) -> None:
        self._wallet = wallet
        self._prices = prices
        self._store = store
        self._portfolio: WalletPortfolio | None = None

    @property
    def portfolio(self) -> WalletPortfolio | None:
        return self._portfolio

    @property
    def saved_address(self) -> str | None:
        return self._store.get(WALLET_ADDRESS)

    async def connect(self, address: str) -> WalletPortfolio | None:
        """Load and value a wallet; None if the balance provider failed.

        Raises:
            InvalidWalletAddressError: before any request is made.
        """
        address = validate_address(address)
        balances = await self._wallet.get_wallet(address)
        if balances is None:
            logger.warning("No wallet data for %s", address)
            return None

        native_price, token_prices = await asyncio.gather(
            self._prices.get_native_price(),
            self._prices.get_token_prices(token_addresses(balances)),
        )
        self._portfolio = value_portfolio(balances, native_price, token_prices)
        self._store.set(WALLET_ADDRESS, address)
        return self._portfolio

    async def reload(self) -> WalletPortfolio | None:
        """Reconnect the last used address, if any."""
        address = self.saved_address
        if not address:
            return None
        try:
            return await self.connect(address)
        except InvalidWalletAddressError:
            logger.warning("Forgetting invalid saved wallet address %r", address)
            self._store.delete(WALLET_ADDRESS)
            return None

    def disconnect(self) -> None:
        """Forget both the saved address and the in-memory portfolio."""
        self._portfolio = None
        self._store.delete(WALLET_ADDRESS)
