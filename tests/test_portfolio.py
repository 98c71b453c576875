import pytest

from market_pulse.providers.core import InvalidWalletAddressError
from market_pulse.schemas import (ZERO_ADDRESS, TokenPrice, WalletAsset,
                                  WalletPortfolio)
from market_pulse.services import PortfolioService
from market_pulse.services.portfolio import (token_addresses, validate_address,
                                             value_portfolio)
from market_pulse.services.state_store import WALLET_ADDRESS

ADDRESS = "0x" + "1f" * 20
TOKEN_A = "0x" + "aa" * 20
TOKEN_B = "0x" + "BB" * 20


def _eth(balance="2.0000"):
    return WalletAsset(contract_address=ZERO_ADDRESS, name="Ethereum",
                       symbol="ETH", decimals=18, balance=balance)


def _token(address, symbol, balance):
    return WalletAsset(contract_address=address, name=symbol, symbol=symbol,
                       decimals=18, balance=balance)


def _wallet(*assets):
    return WalletPortfolio(address=ADDRESS, native_balance_raw="0",
                           native_balance_formatted=0.0, assets=assets)


class FakeWallet:
    def __init__(self, portfolio):
        self.portfolio = portfolio
        self.calls = []

    async def get_wallet(self, address):
        self.calls.append(address)
        return self.portfolio


class FakePrices:
    def __init__(self, native=TokenPrice(), tokens=None):
        self.native = native
        self.tokens = tokens or {}
        self.requested = []

    async def get_native_price(self):
        return self.native

    async def get_token_prices(self, addresses):
        self.requested.append(list(addresses))
        return self.tokens


def test_native_eth_valued_at_native_price():
    valued = value_portfolio(_wallet(_eth()), TokenPrice(price=1000.0), {})

    [eth] = valued.assets
    assert eth.price_usd == 1000.0
    assert eth.value_usd == 2000.0
    assert valued.total_net_worth_usd == 2000.0


def test_unpriced_token_is_zero_and_last():
    wallet = _wallet(_token(TOKEN_A, "AAA", "100.0000"), _eth("1.0000"),
                     _token(TOKEN_B, "BBB", "6.0000"))
    prices = {TOKEN_B.lower(): TokenPrice(price=2.0, market_cap=99.0)}

    valued = value_portfolio(wallet, TokenPrice(price=10.0), prices)

    assert [a.symbol for a in valued.assets] == ["BBB", "ETH", "AAA"]
    assert valued.assets[0].market_cap_usd == 99.0
    assert valued.assets[-1].value_usd == 0
    assert valued.total_net_worth_usd == 22.0


def test_total_is_sum_of_values():
    wallet = _wallet(_eth("0.5000"), _token(TOKEN_A, "AAA", "3.0000"))
    valued = value_portfolio(wallet, TokenPrice(price=4.0),
                             {TOKEN_A: TokenPrice(price=1.5)})

    assert valued.total_net_worth_usd == pytest.approx(
        sum(a.value_usd for a in valued.assets)
    )


def test_unparseable_balance_counts_as_zero():
    valued = value_portfolio(_wallet(_token(TOKEN_A, "AAA", "n/a")), TokenPrice(),
                             {TOKEN_A: TokenPrice(price=3.0)})
    assert valued.assets[0].value_usd == 0
    assert valued.total_net_worth_usd == 0


def test_symbol_eth_without_zero_address_is_native():
    wrapped = _token(TOKEN_A, "ETH", "1.0000")
    assert token_addresses(_wallet(wrapped, _token(TOKEN_B, "BBB", "1"))) == [TOKEN_B]


@pytest.mark.parametrize(
    "address",
    ["", "0x123", "1f" * 21, "0x" + "g1" * 20, "0x" + "1f" * 21],
)
def test_validate_address_rejects(address):
    with pytest.raises(InvalidWalletAddressError):
        validate_address(address)


def test_validate_address_accepts_mixed_case():
    mixed = "0x" + "aB" * 20
    assert validate_address(f" {mixed} ") == mixed


@pytest.mark.asyncio
async def test_connect_values_and_remembers(store):
    wallet = FakeWallet(_wallet(_eth(), _token(TOKEN_A, "AAA", "10.0000")))
    prices = FakePrices(TokenPrice(price=1000.0), {TOKEN_A: TokenPrice(price=1.0)})
    service = PortfolioService(wallet, prices, store)

    portfolio = await service.connect(ADDRESS)

    assert portfolio.total_net_worth_usd == 2010.0
    assert prices.requested == [[TOKEN_A]]
    assert service.portfolio is portfolio
    assert store.get(WALLET_ADDRESS) == ADDRESS


@pytest.mark.asyncio
async def test_invalid_address_makes_no_request(store):
    wallet = FakeWallet(_wallet(_eth()))
    service = PortfolioService(wallet, FakePrices(), store)

    with pytest.raises(InvalidWalletAddressError):
        await service.connect("0xnope")

    assert wallet.calls == []
    assert store.get(WALLET_ADDRESS) is None


@pytest.mark.asyncio
async def test_failed_wallet_fetch_returns_none(store):
    prices = FakePrices()
    service = PortfolioService(FakeWallet(None), prices, store)

    assert await service.connect(ADDRESS) is None
    assert prices.requested == []
    assert store.get(WALLET_ADDRESS) is None


@pytest.mark.asyncio
async def test_reload_and_disconnect(store):
    store.set(WALLET_ADDRESS, ADDRESS)
    wallet = FakeWallet(_wallet(_eth()))
    service = PortfolioService(wallet, FakePrices(TokenPrice(price=5.0)), store)

    portfolio = await service.reload()
    assert wallet.calls == [ADDRESS]
    assert portfolio.total_net_worth_usd == 10.0

    service.disconnect()
    assert service.portfolio is None
    assert service.saved_address is None


@pytest.mark.asyncio
async def test_reload_forgets_invalid_saved_address(store):
    store.set(WALLET_ADDRESS, "not-an-address")
    wallet = FakeWallet(_wallet(_eth()))
    service = PortfolioService(wallet, FakePrices(), store)

    assert await service.reload() is None
    assert wallet.calls == []
    assert store.get(WALLET_ADDRESS) is None
