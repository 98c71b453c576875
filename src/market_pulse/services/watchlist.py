"""Watchlist bookkeeping: a persisted set of asset ids."""
from collections.abc import Sequence

from market_pulse.schemas import Asset
from market_pulse.services.state_store import WATCHLIST, StateStore


class WatchlistService:
    """Toggles asset ids in the stored watchlist and resolves them to assets."""

    def __init__(self, store: StateStore) -> None:
        self._store = store

    @property
    def ids(self) -> list[str]:
        raw = self._store.get(WATCHLIST, [])
        return [str(i) for i in raw] if isinstance(raw, list) else []

    def __contains__(self, asset_id: str) -> bool:
        return asset_id in self.ids

    def toggle(self, asset_id: str) -> bool:
        """Add or remove asset_id; returns True if it is now watched."""
        ids = self.ids
        if asset_id in ids:
            ids.remove(asset_id)
            watched = False
        else:
            ids.append(asset_id)
            watched = True
        self._store.set(WATCHLIST, ids)
        return watched

    def assets(self, known: Sequence[Asset]) -> list[Asset]:
        """Known assets whose id is watched, in lookup-table order."""
        watched = set(self.ids)
        return [a for a in known if a.id in watched]
