"""Main module for the market pulse service."""
import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from market_pulse.config import get_settings
from market_pulse.factory import AppServices, create_services
from market_pulse.routers import (alerts_router, markets_router,
                                  news_router, settings_router,
                                  wallet_router, watchlist_router)

logger = logging.getLogger(__name__)


def attach_services(fastapi_app: FastAPI, services: AppServices) -> None:
    """Expose services on app.state for the Depends() getters in deps.py."""
    fastapi_app.state.services = services
    fastapi_app.state.aggregator = services.aggregator
    fastapi_app.state.scheduler = services.scheduler
    fastapi_app.state.search = services.search
    fastapi_app.state.portfolio = services.portfolio
    fastapi_app.state.watchlist = services.watchlist
    fastapi_app.state.indicators = services.indicators
    fastapi_app.state.news = services.news
    fastapi_app.state.preferences = services.preferences
    fastapi_app.state.alerts = services.alerts


async def _warm_up(services: AppServices) -> None:
    """Initial market load, timer start and saved-wallet reload."""
    await asyncio.gather(services.scheduler.start(), services.portfolio.reload())


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create providers and services at startup; close providers on shutdown."""
    services = create_services(get_settings())
    attach_services(fastapi_app, services)

    # Serve requests while the first cycle loads; /markets reports loading=true.
    warm_up = asyncio.create_task(_warm_up(services))

    yield

    warm_up.cancel()
    await services.scheduler.stop()
    for provider in services.providers_to_close:
        try:
            await provider.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the FastAPI application with all routers included."""
    fastapi_app = FastAPI(
        title="Market Pulse",
        description="Aggregated crypto, equity and wallet data with simple indicators",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )
    fastapi_app.include_router(markets_router)
    fastapi_app.include_router(alerts_router)
    fastapi_app.include_router(watchlist_router)
    fastapi_app.include_router(wallet_router)
    fastapi_app.include_router(news_router)
    fastapi_app.include_router(settings_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn)."""
    logging.basicConfig(level=logging.INFO)
    uvicorn.run("market_pulse.main:app", host="127.0.0.1", port=8001)
