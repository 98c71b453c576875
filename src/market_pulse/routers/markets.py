"""Market snapshot, search and asset detail routes."""
import asyncio

from fastapi import APIRouter, Query
from pydantic import BaseModel

from market_pulse.deps import (AggregatorDep, IndicatorsDep, SearchDep,
                               WatchlistDep)
from market_pulse.providers.core import ErrorMapper, MarketPulseError
from market_pulse.schemas import Asset, TechnicalIndicators
from market_pulse.services import SortDirection, SortField, sort_assets

router = APIRouter(tags=["markets"])
_errors = ErrorMapper(resource_name="Asset")


class SnapshotSummary(BaseModel):
    """Dataset sizes and freshness of the latest published cycle."""

    cycle: int
    loading: bool
    updated_at: str | None
    datasets: dict[str, int]


class SearchResponse(BaseModel):
    query: str
    results: list[Asset]
    superseded: bool = False  # a newer debounced query replaced this one


class AssetDetail(BaseModel):
    asset: Asset
    watched: bool


@router.get("/markets", response_model=SnapshotSummary)
async def get_markets(aggregator: AggregatorDep) -> SnapshotSummary:
    """Summary of every dataset in the latest snapshot."""
    snapshot = aggregator.snapshot
    return SnapshotSummary(
        cycle=snapshot.cycle,
        loading=snapshot.loading,
        updated_at=snapshot.updated_at.isoformat() if snapshot.updated_at else None,
        datasets={name: len(assets) for name, assets in snapshot.datasets.items()},
    )


@router.post("/markets/refresh", response_model=SnapshotSummary)
async def refresh_markets(aggregator: AggregatorDep) -> SnapshotSummary:
    """Run a refresh cycle now, outside the timer."""
    await aggregator.refresh()
    return await get_markets(aggregator)


@router.get("/markets/{dataset}", response_model=list[Asset])
async def get_dataset(
    dataset: str,
    aggregator: AggregatorDep,
    search: SearchDep,
    sort: SortField | None = Query(default=None, description="name, price, change or mcap"),
    direction: SortDirection = Query(default=SortDirection.DESC),
) -> list[Asset]:
    """Assets of one dataset (crypto, nasdaq, nyse, bist, penny_stocks, trending).

    Switching to a dataset view ends any active search.
    """
    search.clear()
    try:
        assets = aggregator.dataset(dataset)
    except MarketPulseError as e:
        _errors.raise_http(e)
    return sort_assets(assets, sort, direction)


@router.get("/search", response_model=SearchResponse)
async def search_assets(
    search: SearchDep,
    q: str = Query(default="", description="Symbol or name fragment"),
    debounce: bool = Query(default=False, description="Wait for the quiet period first"),
) -> SearchResponse:
    """Search loaded assets; unknown tickers are looked up remotely.

    With ``debounce`` the query is evaluated after the quiet period, and a
    newer debounced query supersedes it (empty results, ``superseded`` set).
    """
    if not debounce:
        return SearchResponse(query=q, results=await search.search(q))
    task = search.submit(q)
    await asyncio.wait({task})
    if task.cancelled():
        return SearchResponse(query=q, results=[], superseded=True)
    return SearchResponse(query=q, results=task.result())


@router.get("/assets/{asset_id}", response_model=AssetDetail)
async def get_asset(
    asset_id: str,
    aggregator: AggregatorDep,
    search: SearchDep,
    watchlist: WatchlistDep,
) -> AssetDetail:
    try:
        asset = aggregator.find_asset(asset_id, search.results)
    except MarketPulseError as e:
        _errors.raise_http(e)
    return AssetDetail(asset=asset, watched=asset_id in watchlist)


@router.get("/assets/{asset_id}/indicators", response_model=TechnicalIndicators | None)
async def get_asset_indicators(
    asset_id: str,
    aggregator: AggregatorDep,
    search: SearchDep,
    indicators: IndicatorsDep,
) -> TechnicalIndicators | None:
    """RSI(14) and SMA(14); null when the series is too short."""
    try:
        asset = aggregator.find_asset(asset_id, search.results)
    except MarketPulseError as e:
        _errors.raise_http(e)
    return await indicators.for_asset(asset)
