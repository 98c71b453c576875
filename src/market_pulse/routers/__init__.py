"""API routers for the market pulse service.

Includes routes for:
- /markets, /search, /assets - Snapshots, search and asset detail
- /assets/{asset_id}/alerts - Per-asset price alerts
- /watchlist - Locally persisted watchlist
- /wallet - Wallet portfolio valuation
- /news - Stock and crypto headlines
- /settings, /session - Preferences and mock login
"""
from market_pulse.routers.alerts import router as alerts_router
from market_pulse.routers.markets import router as markets_router
from market_pulse.routers.news import router as news_router
from market_pulse.routers.settings import router as settings_router
from market_pulse.routers.wallet import router as wallet_router
from market_pulse.routers.watchlist import router as watchlist_router

__all__ = [
    "alerts_router",
    "markets_router",
    "news_router",
    "settings_router",
    "wallet_router",
    "watchlist_router",
]
