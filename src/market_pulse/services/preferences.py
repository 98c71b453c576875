"""Typed accessors over the state store: theme, refresh interval, mock session."""
from typing import Any, Literal

from pydantic import BaseModel

from market_pulse.services.state_store import (REFRESH_INTERVAL, THEME,
                                              TUTORIAL_COMPLETED, USER,
                                              StateStore)

Theme = Literal["dark", "light"]


class User(BaseModel):
    """Locally stored user record. There is no credential check."""

    email: str
    name: str


class Preferences:
    """UI and refresh preferences backed by a StateStore."""

    def __init__(self, store: StateStore, default_refresh_interval_ms: int = 60_000) -> None:
        self._store = store
        self._default_interval = default_refresh_interval_ms

    @property
    def theme(self) -> Theme:
        return "light" if self._store.get(THEME) == "light" else "dark"

    @theme.setter
    def theme(self, value: Theme) -> None:
        if value not in ("dark", "light"):
            raise ValueError(f"Unknown theme: '{value}'")
        self._store.set(THEME, value)

    @property
    def refresh_interval_ms(self) -> int:
        raw = self._store.get(REFRESH_INTERVAL)
        try:
            return int(raw) if raw is not None else self._default_interval
        except (TypeError, ValueError):
            return self._default_interval

    @refresh_interval_ms.setter
    def refresh_interval_ms(self, value: int) -> None:
        self._store.set(REFRESH_INTERVAL, int(value))

    @property
    def tutorial_completed(self) -> bool:
        return bool(self._store.get(TUTORIAL_COMPLETED, False))

    def complete_tutorial(self) -> None:
        self._store.set(TUTORIAL_COMPLETED, True)

    @property
    def user(self) -> User | None:
        raw: Any = self._store.get(USER)
        return User.model_validate(raw) if isinstance(raw, dict) else None

    def login(self, user: User) -> None:
        """Mock login: remember the user record locally."""
        self._store.set(USER, user.model_dump())

    def logout(self) -> None:
        self._store.delete(USER)
