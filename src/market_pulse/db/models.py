"""Database models for the market pulse service.

Only user/application state is persisted, as JSON values under string keys.
Market data is fetched on every refresh cycle and never stored.
"""
from datetime import datetime

from sqlmodel import Field, SQLModel


class StateEntry(SQLModel, table=True):
    """One key of the local key-value state (watchlist, theme, wallet, ...)."""

    __tablename__ = "state_entry"

    key: str = Field(primary_key=True)
    value: str  # JSON-encoded
    updated_at: datetime = Field(default_factory=datetime.utcnow)
