"""Service layer: aggregation, search, portfolio valuation, indicators and local state."""
from market_pulse.services.aggregator import MarketAggregator
from market_pulse.services.alerts import AlertService
from market_pulse.services.indicators import IndicatorService
from market_pulse.services.merge import merge_assets
from market_pulse.services.news import NewsCategory, NewsService
from market_pulse.services.portfolio import PortfolioService
from market_pulse.services.preferences import Preferences, User
from market_pulse.services.scheduler import RefreshScheduler
from market_pulse.services.search import SearchResolver
from market_pulse.services.sorting import SortDirection, SortField, sort_assets
from market_pulse.services.state_store import StateStore
from market_pulse.services.watchlist import WatchlistService

__all__ = [
    "AlertService",
    "IndicatorService",
    "MarketAggregator",
    "NewsCategory",
    "NewsService",
    "PortfolioService",
    "Preferences",
    "RefreshScheduler",
    "SearchResolver",
    "SortDirection",
    "SortField",
    "StateStore",
    "User",
    "WatchlistService",
    "merge_assets",
    "sort_assets",
]
