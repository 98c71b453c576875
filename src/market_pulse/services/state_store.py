"""Local key-value state with an explicit persistence boundary.

All entries are loaded once when the store is created and every change is
written through immediately. Subscribers are notified after the write.
"""
import json
import logging
from collections import defaultdict
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sqlalchemy.engine import Engine
from sqlmodel import select

from market_pulse.db import StateEntry, get_session, init_db

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]

# Keys of the persisted state.
USER = "user"
THEME = "theme"
REFRESH_INTERVAL = "refresh_interval"  # milliseconds
WATCHLIST = "watchlist"
TUTORIAL_COMPLETED = "tutorial_completed"
WALLET_ADDRESS = "wallet_address"
ALERTS = "alerts"  # asset id -> target prices


class StateStore:
    """get/set/delete/subscribe over JSON values persisted with SQLModel."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._values: dict[str, Any] = {}
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        init_db(engine)
        self._load()

    def _load(self) -> None:
        with get_session(self._engine) as session:
            for entry in session.exec(select(StateEntry)).all():
                try:
                    self._values[entry.key] = json.loads(entry.value)
                except ValueError:
                    logger.warning("Dropping unreadable state entry %r", entry.key)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Persist value under key and notify subscribers."""
        encoded = json.dumps(value)
        with get_session(self._engine) as session:
            entry = session.get(StateEntry, key)
            if entry is None:
                entry = StateEntry(key=key, value=encoded)
            else:
                entry.value = encoded
                entry.updated_at = datetime.utcnow()
            session.add(entry)
        self._values[key] = json.loads(encoded)
        self._notify(key, self._values[key])

    def delete(self, key: str) -> None:
        """Remove key if present; subscribers receive None."""
        with get_session(self._engine) as session:
            entry = session.get(StateEntry, key)
            if entry is not None:
                session.delete(entry)
        if self._values.pop(key, None) is not None:
            self._notify(key, None)

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """Call listener(key, value) after every change to key. Returns an unsubscribe."""
        self._listeners[key].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[key]:
                self._listeners[key].remove(listener)

        return unsubscribe

    def _notify(self, key: str, value: Any) -> None:
        for listener in list(self._listeners[key]):
            listener(key, value)
