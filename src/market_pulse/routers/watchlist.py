"""Watchlist routes."""
from fastapi import APIRouter
from pydantic import BaseModel

from market_pulse.deps import AggregatorDep, SearchDep, WatchlistDep
from market_pulse.schemas import Asset

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


class WatchToggle(BaseModel):
    asset_id: str
    watched: bool


@router.get("", response_model=list[Asset])
async def get_watchlist(
    watchlist: WatchlistDep,
    aggregator: AggregatorDep,
    search: SearchDep,
) -> list[Asset]:
    """Watched assets among everything currently loaded."""
    return watchlist.assets(aggregator.all_assets(search.results))


@router.post("/{asset_id}", response_model=WatchToggle)
async def toggle_watchlist(asset_id: str, watchlist: WatchlistDep) -> WatchToggle:
    return WatchToggle(asset_id=asset_id, watched=watchlist.toggle(asset_id))
