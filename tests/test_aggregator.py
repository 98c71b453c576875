import asyncio

import pytest
from conftest import make_asset

from market_pulse.constants import BIST, CRYPTO, NASDAQ, TRENDING
from market_pulse.providers.core import AssetNotFoundError, UnknownDatasetError
from market_pulse.schemas import AssetClass
from market_pulse.services import MarketAggregator

BTC = make_asset("bitcoin", "BTC", asset_class=AssetClass.CRYPTO)
AAPL = make_asset("AAPL")


def returning(*assets):
    async def fetch():
        return list(assets)

    return fetch


async def failing():
    raise RuntimeError("provider exploded")


class Sequenced:
    """Fetcher returning a different list on each call."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self.results.pop(0)


@pytest.mark.asyncio
async def test_refresh_publishes_every_dataset():
    aggregator = MarketAggregator({CRYPTO: returning(BTC), NASDAQ: returning(AAPL)})

    snapshot = await aggregator.refresh()

    assert snapshot.cycle == 1
    assert snapshot.get(CRYPTO) == (BTC,)
    assert snapshot.get(NASDAQ) == (AAPL,)
    assert snapshot.updated_at is not None
    assert snapshot.loading is False


@pytest.mark.asyncio
async def test_raising_fetcher_keeps_previous_snapshot():
    nasdaq = Sequenced([AAPL], [])
    crypto_calls = []

    async def crypto():
        crypto_calls.append(1)
        if len(crypto_calls) > 1:
            raise RuntimeError("down")
        return [BTC]

    aggregator = MarketAggregator({CRYPTO: crypto, NASDAQ: nasdaq})
    await aggregator.refresh()
    snapshot = await aggregator.refresh()

    assert snapshot.cycle == 2
    assert snapshot.get(CRYPTO) == (BTC,)
    assert snapshot.get(NASDAQ) == ()


@pytest.mark.asyncio
async def test_failure_is_isolated(caplog):
    aggregator = MarketAggregator({CRYPTO: failing, NASDAQ: returning(AAPL)})

    snapshot = await aggregator.refresh()

    assert snapshot.get(CRYPTO) == ()
    assert snapshot.get(NASDAQ) == (AAPL,)
    assert "provider exploded" in caplog.text


@pytest.mark.asyncio
async def test_stale_cycle_is_discarded():
    release_first = asyncio.Event()
    calls = []

    async def crypto():
        calls.append(len(calls) + 1)
        if len(calls) == 1:
            await release_first.wait()
            return [make_asset("stale", asset_class=AssetClass.CRYPTO)]
        return [BTC]

    aggregator = MarketAggregator({CRYPTO: crypto})
    first = asyncio.create_task(aggregator.refresh())
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    second = await aggregator.refresh()
    release_first.set()
    await first

    assert second.cycle == 2
    assert aggregator.snapshot.cycle == 2
    assert aggregator.snapshot.get(CRYPTO) == (BTC,)


@pytest.mark.asyncio
async def test_loading_only_until_first_primary_data():
    gate = asyncio.Event()

    async def crypto():
        await gate.wait()
        return [BTC]

    aggregator = MarketAggregator({CRYPTO: crypto})
    task = asyncio.create_task(aggregator.refresh())
    await asyncio.sleep(0)
    assert aggregator.snapshot.loading is True

    gate.set()
    await task
    assert aggregator.snapshot.loading is False

    gate.clear()
    task = asyncio.create_task(aggregator.refresh())
    await asyncio.sleep(0)
    assert aggregator.snapshot.loading is False
    gate.set()
    await task


@pytest.mark.asyncio
async def test_subscribers_receive_published_snapshots():
    aggregator = MarketAggregator({CRYPTO: returning(BTC)})
    received = []
    unsubscribe = aggregator.subscribe(received.append)

    await aggregator.refresh()
    unsubscribe()
    await aggregator.refresh()

    assert [s.cycle for s in received] == [1]


@pytest.mark.asyncio
async def test_lookup_helpers():
    eth = make_asset("ethereum", "ETH", asset_class=AssetClass.CRYPTO)
    trending_btc = make_asset("bitcoin", "BTC", current_price=99.0,
                              asset_class=AssetClass.CRYPTO)
    aggregator = MarketAggregator({
        CRYPTO: returning(BTC),
        NASDAQ: returning(AAPL),
        BIST: returning(),
        TRENDING: returning(trending_btc, eth),
    })
    await aggregator.refresh()
    searched = make_asset("ZZ")

    assert aggregator.dataset(NASDAQ) == (AAPL,)
    assert [a.id for a in aggregator.searchable_assets()] == ["bitcoin", "AAPL"]
    assert [a.id for a in aggregator.all_assets([searched])] == [
        "bitcoin", "AAPL", "ZZ", "ethereum",
    ]
    assert aggregator.find_asset("bitcoin").current_price == BTC.current_price
    assert aggregator.find_asset("ZZ", [searched]) == searched
    with pytest.raises(AssetNotFoundError):
        aggregator.find_asset("ZZ")
    with pytest.raises(UnknownDatasetError):
        aggregator.dataset("forex")


@pytest.mark.asyncio
async def test_from_providers_wires_symbol_lists():
    class FakeCrypto:
        async def get_assets(self, symbols=None):
            return [BTC]

        async def get_trending(self):
            return []

    class FakeStocks:
        def __init__(self):
            self.requested = []

        async def get_assets(self, symbols=None):
            self.requested.append(symbols)
            return []

    stocks = FakeStocks()
    bist = FakeStocks()
    aggregator = MarketAggregator.from_providers(FakeCrypto(), stocks, bist)

    snapshot = await aggregator.refresh()

    assert set(snapshot.datasets) == {
        "crypto", "nasdaq", "nyse", "bist", "penny_stocks", "trending",
    }
    assert len(stocks.requested) == 3
    assert all(stocks.requested)
    assert bist.requested == [None]
