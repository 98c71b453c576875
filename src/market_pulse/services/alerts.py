"""Per-asset price alerts kept in the state store."""
import math
from typing import Any

from market_pulse.providers.core import AlertNotFoundError, InvalidAlertPriceError
from market_pulse.services.state_store import ALERTS, StateStore


def parse_alert_price(value: Any) -> float:
    """Return value as a finite float or raise InvalidAlertPriceError."""
    if isinstance(value, bool):
        raise InvalidAlertPriceError(value)
    try:
        price = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidAlertPriceError(value) from e
    if not math.isfinite(price):
        raise InvalidAlertPriceError(value)
    return price


class AlertService:
    """Target prices per asset id, in the order they were added.

    Alerts are only recorded; nothing is evaluated against live prices.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def _all(self) -> dict[str, list[float]]:
        raw = self._store.get(ALERTS, {})
        return {k: list(v) for k, v in raw.items()} if isinstance(raw, dict) else {}

    def alerts(self, asset_id: str) -> list[float]:
        return self._all().get(asset_id, [])

    def add(self, asset_id: str, price: Any) -> list[float]:
        """Validate and append a target price; nothing is stored on failure."""
        target = parse_alert_price(price)
        alerts = self._all()
        alerts.setdefault(asset_id, []).append(target)
        self._store.set(ALERTS, alerts)
        return alerts[asset_id]

    def remove(self, asset_id: str, index: int) -> list[float]:
        """Drop the alert at index (0-based) for asset_id."""
        alerts = self._all()
        prices = alerts.get(asset_id, [])
        if not 0 <= index < len(prices):
            raise AlertNotFoundError(asset_id, index)
        del prices[index]
        if prices:
            alerts[asset_id] = prices
        else:
            alerts.pop(asset_id)
        self._store.set(ALERTS, alerts)
        return prices
