"""Per-asset price alert routes."""
from fastapi import APIRouter
from pydantic import BaseModel

from market_pulse.deps import AggregatorDep, AlertsDep, SearchDep
from market_pulse.providers.core import ErrorMapper, MarketPulseError

router = APIRouter(prefix="/assets/{asset_id}/alerts", tags=["alerts"])
_errors = ErrorMapper(resource_name="Alert")


class AlertCreate(BaseModel):
    """Target price as entered; validated by the alert service."""

    price: str | float


class AlertList(BaseModel):
    asset_id: str
    prices: list[float]


@router.get("", response_model=AlertList)
async def get_alerts(asset_id: str, alerts: AlertsDep) -> AlertList:
    return AlertList(asset_id=asset_id, prices=alerts.alerts(asset_id))


@router.post("", response_model=AlertList, status_code=201)
async def add_alert(
    asset_id: str,
    body: AlertCreate,
    alerts: AlertsDep,
    aggregator: AggregatorDep,
    search: SearchDep,
) -> AlertList:
    """Add a target price for a loaded asset; non-numeric prices are rejected."""
    try:
        aggregator.find_asset(asset_id, search.results)
        prices = alerts.add(asset_id, body.price)
    except MarketPulseError as e:
        _errors.raise_http(e)
    return AlertList(asset_id=asset_id, prices=prices)


@router.delete("/{index}", response_model=AlertList)
async def remove_alert(asset_id: str, index: int, alerts: AlertsDep) -> AlertList:
    """Remove the alert at ``index`` (0-based, in the order added)."""
    try:
        prices = alerts.remove(asset_id, index)
    except MarketPulseError as e:
        _errors.raise_http(e)
    return AlertList(asset_id=asset_id, prices=prices)
