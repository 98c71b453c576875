"""Technical indicators (RSI and SMA) over a short price series."""
import random
from collections.abc import Sequence

from market_pulse.providers import YFinanceProvider
from market_pulse.schemas import (Asset, AssetClass, SeriesSource,
                                  TechnicalIndicators)

PERIOD = 14
SYNTHETIC_POINTS = 24


def calculate_rsi(prices: Sequence[float], period: int = PERIOD) -> float | None:
    """Relative Strength Index over the most recent one-step differences.

    Uses the last ``period`` differences (fewer when the series has exactly
    ``period`` points) and always averages over ``period``. A zero average
    loss is replaced by 1, so a rising series stays below 100.

    Returns:
        RSI at full precision, or None if the series is shorter than ``period``.
    """
    if len(prices) < period:
        return None
    window = prices[-(period + 1):]
    gains = 0.0
    losses = 0.0
    for prev, curr in zip(window, window[1:]):
        diff = curr - prev
        if diff >= 0:
            gains += diff
        else:
            losses -= diff
    avg_gain = gains / period
    avg_loss = losses / period
    rs = avg_gain / (avg_loss or 1)
    return 100 - 100 / (1 + rs)


def calculate_sma(prices: Sequence[float], period: int = PERIOD) -> float | None:
    """Mean of the ``period`` most recent prices; None if too few points."""
    if len(prices) < period:
        return None
    return sum(prices[-period:]) / period


def compute_indicators(
    prices: Sequence[float],
    source: SeriesSource = SeriesSource.SPARKLINE,
) -> TechnicalIndicators | None:
    rsi = calculate_rsi(prices)
    sma = calculate_sma(prices)
    if rsi is None or sma is None:
        return None
    return TechnicalIndicators(rsi=rsi, sma=sma, series_source=source, points=len(prices))


def synthesize_series(
    current_price: float,
    points: int = SYNTHETIC_POINTS,
    rng: random.Random | None = None,
) -> list[float]:
    """Random walk ending at the current price, oldest first.

    Chart filler for assets without history. It carries no information
    about the asset and is always labelled ``synthetic``.
    """
    rng = rng or random.Random()
    price = current_price or 10.0
    series = []
    for _ in range(points):
        series.append(price)
        price *= 1 - (rng.random() * 0.02 - 0.01)
    series.reverse()
    return series


class IndicatorService:
    """Picks the best available series for an asset and computes indicators."""

    def __init__(self, history: YFinanceProvider | None = None, rng: random.Random | None = None) -> None:
        self._history = history
        self._rng = rng

    async def series_for(self, asset: Asset) -> tuple[list[float], SeriesSource]:
        if asset.sparkline:
            return list(asset.sparkline), SeriesSource.SPARKLINE
        if self._history is not None and asset.asset_class is AssetClass.STOCK:
            closes = await self._history.get_closes(asset.symbol)
            if len(closes) >= PERIOD:
                return closes, SeriesSource.HISTORY
        return synthesize_series(asset.current_price, rng=self._rng), SeriesSource.SYNTHETIC

    async def for_asset(self, asset: Asset) -> TechnicalIndicators | None:
        prices, source = await self.series_for(asset)
        return compute_indicators(prices, source)
