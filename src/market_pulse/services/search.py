"""Search resolver: local substring filter plus a remote ticker lookup."""
import asyncio
import logging
from collections.abc import Callable, Sequence

from market_pulse.providers.core import PROVIDER_EXCEPTIONS
from market_pulse.providers.core.protocols import AssetLookup
from market_pulse.schemas import Asset

logger = logging.getLogger(__name__)

MIN_TICKER_LENGTH = 2
MAX_TICKER_LENGTH = 6


def filter_assets(query: str, assets: Sequence[Asset]) -> list[Asset]:
    """Case-insensitive substring match on symbol or name."""
    needle = query.lower()
    return [
        a for a in assets if needle in a.symbol.lower() or needle in a.name.lower()
    ]


def looks_like_ticker(query: str) -> bool:
    return (
        MIN_TICKER_LENGTH <= len(query) <= MAX_TICKER_LENGTH
        and not any(ch.isspace() for ch in query)
    )


class SearchResolver:
    """Resolves queries against loaded assets, asking the equity provider when needed.

    ``submit`` debounces: evaluation starts only after ``debounce_seconds`` of
    quiet, and a newer query cancels the pending one, including a remote
    lookup already in flight.
    """

    def __init__(
        self,
        lookup: AssetLookup,
        loaded_assets: Callable[[], Sequence[Asset]],
        debounce_seconds: float = 0.5,
    ) -> None:
        self._lookup = lookup
        self._loaded_assets = loaded_assets
        self._debounce = debounce_seconds
        self._task: asyncio.Task | None = None
        self.query = ""
        self.results: list[Asset] = []

    @property
    def active(self) -> bool:
        """A non-blank query replaces the current view with search results."""
        return bool(self.query.strip())

    async def resolve(self, query: str) -> list[Asset]:
        """Evaluate a query immediately."""
        if not query.strip():
            return []
        matches = filter_assets(query, self._loaded_assets())
        if not looks_like_ticker(query):
            return matches

        needle = query.lower()
        if any(a.symbol.lower() == needle for a in matches):
            return matches

        try:
            remote = await self._lookup.get_assets(query.upper())
        except PROVIDER_EXCEPTIONS as exc:
            logger.warning("Search lookup failed for %s: %s", query, exc)
            return matches
        if remote and all(a.symbol != remote[0].symbol for a in matches):
            matches.append(remote[0])
        return matches

    def submit(self, query: str) -> asyncio.Task:
        """Schedule evaluation of query after the quiet period."""
        self._cancel()
        self.query = query
        self._task = asyncio.create_task(self._evaluate_later(query))
        return self._task

    async def search(self, query: str) -> list[Asset]:
        """Evaluate now and publish, superseding any pending debounced query."""
        self._cancel()
        self.query = query
        self.results = await self.resolve(query)
        return self.results

    async def _evaluate_later(self, query: str) -> list[Asset]:
        await asyncio.sleep(self._debounce)
        self.results = await self.resolve(query)
        return self.results

    def clear(self) -> None:
        """Drop the query and its results (e.g. on navigation)."""
        self._cancel()
        self.query = ""
        self.results = []

    def _cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
