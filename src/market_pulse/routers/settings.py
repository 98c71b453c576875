"""Preference and mock session routes."""
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from market_pulse.deps import PreferencesDep, SchedulerDep, SearchDep
from market_pulse.services import User

router = APIRouter(tags=["settings"])


class SettingsView(BaseModel):
    theme: Literal["dark", "light"]
    refresh_interval_ms: int
    tutorial_completed: bool
    user: User | None


class SettingsUpdate(BaseModel):
    theme: Literal["dark", "light"] | None = None
    refresh_interval_ms: int | None = None
    tutorial_completed: bool | None = None


def _view(preferences) -> SettingsView:  # noqa: ANN001
    return SettingsView(
        theme=preferences.theme,
        refresh_interval_ms=preferences.refresh_interval_ms,
        tutorial_completed=preferences.tutorial_completed,
        user=preferences.user,
    )


@router.get("/settings", response_model=SettingsView)
async def get_settings_view(preferences: PreferencesDep) -> SettingsView:
    return _view(preferences)


@router.put("/settings", response_model=SettingsView)
async def update_settings(
    update: SettingsUpdate,
    preferences: PreferencesDep,
    scheduler: SchedulerDep,
) -> SettingsView:
    """Apply changes; a new refresh interval reschedules the timer immediately."""
    if update.theme is not None:
        preferences.theme = update.theme
    if update.tutorial_completed:
        preferences.complete_tutorial()
    if update.refresh_interval_ms is not None:
        preferences.refresh_interval_ms = update.refresh_interval_ms
        scheduler.set_interval(update.refresh_interval_ms)
    return _view(preferences)


@router.post("/session/login", response_model=SettingsView)
async def login(user: User, preferences: PreferencesDep) -> SettingsView:
    """Mock login: the user record is stored locally, nothing is verified."""
    preferences.login(user)
    return _view(preferences)


@router.post("/session/logout", status_code=204)
async def logout(preferences: PreferencesDep, search: SearchDep) -> None:
    preferences.logout()
    search.clear()
