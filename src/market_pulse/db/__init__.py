"""Database package: models and session management."""
from market_pulse.db.models import StateEntry
from market_pulse.db.sessions import build_engine, get_session, init_db

__all__ = ["StateEntry", "build_engine", "get_session", "init_db"]
