"""Composition root: build providers and services from settings."""
from dataclasses import dataclass, field

from sqlalchemy.engine import Engine

from market_pulse.config import Settings
from market_pulse.db.sessions import build_engine
from market_pulse.providers import (BistProvider, CoinGeckoProvider,
                                    FMPProvider, MoralisProvider,
                                    YFinanceProvider)
from market_pulse.services import (AlertService, IndicatorService,
                                   MarketAggregator, NewsService,
                                   PortfolioService, Preferences,
                                   RefreshScheduler, SearchResolver,
                                   StateStore, WatchlistService)


@dataclass
class AppServices:
    """Everything the routers need, plus the providers to close on shutdown."""

    aggregator: MarketAggregator
    scheduler: RefreshScheduler
    search: SearchResolver
    portfolio: PortfolioService
    watchlist: WatchlistService
    indicators: IndicatorService
    news: NewsService
    preferences: Preferences
    store: StateStore
    alerts: AlertService
    providers_to_close: list = field(default_factory=list)


def create_services(settings: Settings, engine: Engine | None = None) -> AppServices:
    """Create providers (one HTTP client each) and wire the services around them."""
    crypto = CoinGeckoProvider(settings=settings)
    fmp = FMPProvider(settings=settings)
    bist = BistProvider(fmp, settings=settings)
    moralis = MoralisProvider(settings=settings)
    history = YFinanceProvider(days=settings.history_days)

    store = StateStore(
        engine or build_engine(settings.database_url, echo=settings.sql_echo)
    )
    preferences = Preferences(store, settings.default_refresh_interval_ms)
    aggregator = MarketAggregator.from_providers(crypto, fmp, bist)

    return AppServices(
        aggregator=aggregator,
        scheduler=RefreshScheduler(aggregator.refresh, preferences.refresh_interval_ms),
        search=SearchResolver(
            fmp,
            aggregator.searchable_assets,
            debounce_seconds=settings.search_debounce_seconds,
        ),
        portfolio=PortfolioService(moralis, crypto, store),
        watchlist=WatchlistService(store),
        indicators=IndicatorService(history),
        news=NewsService(fmp, crypto),
        preferences=preferences,
        store=store,
        alerts=AlertService(store),
        providers_to_close=[crypto, fmp, bist, moralis],
    )
