from collections.abc import Callable

import httpx
import pytest

from market_pulse.config import Settings
from market_pulse.db import build_engine
from market_pulse.schemas import Asset, AssetClass
from market_pulse.services import StateStore

BASE_URL = "https://provider.test"


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler."""
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


def make_asset(
    asset_id: str,
    symbol: str | None = None,
    name: str | None = None,
    asset_class: AssetClass = AssetClass.STOCK,
    **fields,
) -> Asset:
    return Asset(
        id=asset_id,
        symbol=symbol or asset_id.upper(),
        name=name or asset_id.title(),
        asset_class=asset_class,
        **fields,
    )


class RecordingLookup:
    """AssetLookup test double that records requested symbol lists."""

    def __init__(self, results: dict[str, list[Asset]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[str | None] = []

    async def get_assets(self, symbols: str | None = None) -> list[Asset]:
        self.calls.append(symbols)
        return list(self.results.get(symbols or "", []))


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, database_url="sqlite://")


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> StateStore:
    return StateStore(engine)
