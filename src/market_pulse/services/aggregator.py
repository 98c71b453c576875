"""Aggregation orchestrator: one refresh cycle fans out to every source.

Each fetch runs behind its own failure boundary, so a source that raises
keeps its previous snapshot while every other dataset is still replaced.
Cycles are numbered; a cycle that finishes after a newer one has started is
discarded.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from datetime import datetime

from market_pulse.constants import (BIST, CRYPTO, NASDAQ, NASDAQ_SYMBOLS, NYSE,
                                    NYSE_SYMBOLS, PENNY, PENNY_STOCKS,
                                    SEARCHABLE_DATASETS, TRENDING)
from market_pulse.providers import CoinGeckoProvider, MarketProviderABC
from market_pulse.providers.core import AssetNotFoundError, UnknownDatasetError
from market_pulse.schemas import Asset, MarketSnapshot
from market_pulse.services.merge import merge_assets

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[list[Asset]]]
SnapshotListener = Callable[[MarketSnapshot], None]

# Dataset whose emptiness means "nothing loaded yet".
PRIMARY_DATASET = CRYPTO


class MarketAggregator:
    """Owns the named market snapshots and runs refresh cycles."""

    def __init__(self, fetchers: Mapping[str, Fetcher]) -> None:
        """Initialize with one zero-argument fetcher per dataset name."""
        self._fetchers = dict(fetchers)
        self._snapshot = MarketSnapshot(
            datasets={name: () for name in self._fetchers}
        )
        self._latest_cycle = 0
        self._loading = False
        self._listeners: list[SnapshotListener] = []

    @classmethod
    def from_providers(
        cls,
        crypto: CoinGeckoProvider,
        stocks: MarketProviderABC,
        bist: MarketProviderABC,
    ) -> "MarketAggregator":
        """Wire the standard dataset set from provider instances."""
        return cls(
            {
                CRYPTO: crypto.get_assets,
                NASDAQ: lambda: stocks.get_assets(NASDAQ_SYMBOLS),
                NYSE: lambda: stocks.get_assets(NYSE_SYMBOLS),
                BIST: bist.get_assets,
                PENNY: lambda: stocks.get_assets(PENNY_STOCKS),
                TRENDING: crypto.get_trending,
            }
        )

    @property
    def snapshot(self) -> MarketSnapshot:
        """Latest published snapshot; ``loading`` only during the first cycle."""
        return self._snapshot.model_copy(update={"loading": self._loading})

    @property
    def latest_cycle(self) -> int:
        return self._latest_cycle

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call listener with each newly published snapshot. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _run_isolated(self, name: str, fetch: Fetcher) -> list[Asset] | None:
        """Run one fetch; None means it raised and the old snapshot is kept."""
        try:
            return list(await fetch())
        except Exception:  # pylint: disable=broad-except
            logger.exception("Fetcher for dataset %s raised; keeping previous snapshot", name)
            return None

    async def refresh(self) -> MarketSnapshot:
        """Run one refresh cycle and publish the result unless a newer cycle started."""
        self._latest_cycle += 1
        cycle = self._latest_cycle
        if not self._snapshot.get(PRIMARY_DATASET):
            self._loading = True

        names = list(self._fetchers)
        results = await asyncio.gather(
            *(self._run_isolated(name, self._fetchers[name]) for name in names)
        )

        if cycle < self._latest_cycle:
            logger.info(
                "Discarding results of cycle %d; cycle %d already started",
                cycle,
                self._latest_cycle,
            )
            return self.snapshot

        datasets = dict(self._snapshot.datasets)
        for name, result in zip(names, results):
            if result is not None:
                datasets[name] = tuple(result)
        self._snapshot = MarketSnapshot(
            cycle=cycle,
            datasets=datasets,
            updated_at=datetime.utcnow(),
        )
        self._loading = False
        logger.debug(
            "Published cycle %d: %s",
            cycle,
            ", ".join(f"{n}={len(datasets[n])}" for n in names),
        )
        published = self.snapshot
        for listener in list(self._listeners):
            listener(published)
        return published

    def dataset(self, name: str) -> tuple[Asset, ...]:
        """Assets of one named dataset."""
        if name not in self._snapshot.datasets:
            raise UnknownDatasetError(name)
        return self._snapshot.datasets[name]

    def searchable_assets(self) -> list[Asset]:
        """Every asset of the market datasets, in lookup order (may repeat ids)."""
        return [
            asset
            for name in SEARCHABLE_DATASETS
            for asset in self._snapshot.get(name)
        ]

    def all_assets(self, search_results: Iterable[Asset] = ()) -> list[Asset]:
        """Deduplicated lookup table: market datasets, then search results, then trending."""
        return merge_assets(
            *(self._snapshot.get(name) for name in SEARCHABLE_DATASETS),
            search_results,
            self._snapshot.get(TRENDING),
        )

    def find_asset(self, asset_id: str, search_results: Iterable[Asset] = ()) -> Asset:
        for asset in self.all_assets(search_results):
            if asset.id == asset_id:
                return asset
        raise AssetNotFoundError(asset_id)

