"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

Lifespan (main.py) creates providers and services once and attaches them to
app.state; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from market_pulse.services import (AlertService, IndicatorService,
                                   MarketAggregator, NewsService,
                                   PortfolioService, Preferences,
                                   RefreshScheduler, SearchResolver,
                                   WatchlistService)


def get_aggregator(request: Request) -> MarketAggregator:
    """Resolve the market aggregator from app.state (created at startup)."""
    return request.app.state.aggregator


def get_search(request: Request) -> SearchResolver:
    return request.app.state.search


def get_portfolio(request: Request) -> PortfolioService:
    return request.app.state.portfolio


def get_watchlist(request: Request) -> WatchlistService:
    return request.app.state.watchlist


def get_indicators(request: Request) -> IndicatorService:
    return request.app.state.indicators


def get_news(request: Request) -> NewsService:
    return request.app.state.news


def get_preferences(request: Request) -> Preferences:
    return request.app.state.preferences


def get_scheduler(request: Request) -> RefreshScheduler:
    return request.app.state.scheduler


def get_alerts(request: Request) -> AlertService:
    return request.app.state.alerts


# Type aliases for route injection
AggregatorDep = Annotated[MarketAggregator, Depends(get_aggregator)]
SearchDep = Annotated[SearchResolver, Depends(get_search)]
PortfolioDep = Annotated[PortfolioService, Depends(get_portfolio)]
WatchlistDep = Annotated[WatchlistService, Depends(get_watchlist)]
IndicatorsDep = Annotated[IndicatorService, Depends(get_indicators)]
NewsDep = Annotated[NewsService, Depends(get_news)]
PreferencesDep = Annotated[Preferences, Depends(get_preferences)]
SchedulerDep = Annotated[RefreshScheduler, Depends(get_scheduler)]
AlertsDep = Annotated[AlertService, Depends(get_alerts)]
