import asyncio

import pytest
from conftest import RecordingLookup, make_asset

from market_pulse.schemas import AssetClass
from market_pulse.services import SearchResolver
from market_pulse.services.search import filter_assets, looks_like_ticker

LOADED = [
    make_asset("AAPL", name="Apple Inc."),
    make_asset("bitcoin", "BTC", "Bitcoin", asset_class=AssetClass.CRYPTO),
    make_asset("MSFT", name="Microsoft"),
]


def _resolver(lookup, debounce=0.0):
    return SearchResolver(lookup, lambda: LOADED, debounce_seconds=debounce)


def test_filter_matches_symbol_or_name_case_insensitively():
    assert [a.id for a in filter_assets("apple", LOADED)] == ["AAPL"]
    assert [a.id for a in filter_assets("btc", LOADED)] == ["bitcoin"]
    assert [a.id for a in filter_assets("o", LOADED)] == ["bitcoin", "MSFT"]


@pytest.mark.parametrize(
    "query, expected",
    [("a", False), ("zz", True), ("GOOGL", True), ("abcdef", True),
     ("abcdefg", False), ("a b", False)],
)
def test_looks_like_ticker(query, expected):
    assert looks_like_ticker(query) is expected


@pytest.mark.asyncio
async def test_exact_local_symbol_skips_remote_lookup():
    lookup = RecordingLookup()
    results = await _resolver(lookup).resolve("AAPL")

    assert [a.id for a in results] == ["AAPL"]
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_unknown_ticker_is_looked_up():
    remote = make_asset("ZZ", name="Zz Corp")
    lookup = RecordingLookup({"ZZ": [remote]})

    results = await _resolver(lookup).resolve("zz")

    assert lookup.calls == ["ZZ"]
    assert results == [remote]


@pytest.mark.asyncio
async def test_remote_result_appended_after_partial_matches():
    remote = make_asset("MS", name="Morgan Stanley")
    lookup = RecordingLookup({"MS": [remote]})

    results = await _resolver(lookup).resolve("ms")

    assert [a.id for a in results] == ["MSFT", "MS"]


@pytest.mark.asyncio
async def test_remote_duplicate_symbol_not_appended():
    lookup = RecordingLookup({"APPL": [make_asset("AAPL")]})
    resolver = SearchResolver(lookup, lambda: [make_asset("X", "AAPL", "Appl Fund")])

    results = await resolver.resolve("appl")

    assert lookup.calls == ["APPL"]
    assert [a.id for a in results] == ["X"]


@pytest.mark.asyncio
async def test_long_query_is_local_only():
    lookup = RecordingLookup()
    assert [a.id for a in await _resolver(lookup).resolve("Microsoft")] == ["MSFT"]
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_blank_query_is_inactive():
    resolver = _resolver(RecordingLookup())
    assert await resolver.search("   ") == []
    assert resolver.active is False


@pytest.mark.asyncio
async def test_search_publishes_results():
    resolver = _resolver(RecordingLookup())
    await resolver.search("bit")

    assert resolver.active
    assert [a.id for a in resolver.results] == ["bitcoin"]

    resolver.clear()
    assert resolver.query == ""
    assert resolver.results == []


@pytest.mark.asyncio
async def test_newer_query_cancels_pending_one():
    lookup = RecordingLookup()
    resolver = _resolver(lookup, debounce=0.05)

    first = resolver.submit("zz")
    second = resolver.submit("apple")
    results = await second

    await asyncio.sleep(0)
    assert first.cancelled()
    assert [a.id for a in results] == ["AAPL"]
    assert resolver.results == results
    assert lookup.calls == []


@pytest.mark.asyncio
async def test_clear_cancels_pending_query():
    resolver = _resolver(RecordingLookup(), debounce=0.05)
    pending = resolver.submit("apple")

    resolver.clear()
    with pytest.raises(asyncio.CancelledError):
        await pending
    assert resolver.results == []
