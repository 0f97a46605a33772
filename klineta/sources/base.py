"""Base candle source interface for klineta."""

from abc import ABC, abstractmethod
from typing import Optional

from klineta.models import Candlestick, CandlestickSeries, TimePeriod, TradingPair

MAX_CANDLESTICKS = 1000

# Hourly candles spanning 24 hours, plus the reference candle
_DAY_OF_HOURS = 25


class BaseCandleSource(ABC):
    """Abstract base class for candlestick data sources.

    Sources hand validated, ascending series to the indicator engine.
    Subclasses implement ``_fetch``; the public helpers cap and check the
    requested limit.
    """

    max_candlesticks = MAX_CANDLESTICKS

    @abstractmethod
    def _fetch(self, pair: TradingPair, period: TimePeriod, limit: int) -> CandlestickSeries:
        """Return up to ``limit`` of the most recent candles, ascending."""
        pass

    def get_candlesticks(
        self, pair: TradingPair, period: TimePeriod, limit: int = 100
    ) -> CandlestickSeries:
        """Get historical candlesticks.

        Args:
            pair: Trading pair.
            period: Candle period.
            limit: Number of most recent candles, capped at ``max_candlesticks``.

        Returns:
            Series in ascending timestamp order (possibly shorter than limit).

        Raises:
            ValueError: If limit is less than 1.
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        return self._fetch(pair, period, min(limit, self.max_candlesticks))

    def get_latest(self, pair: TradingPair, period: TimePeriod) -> Optional[Candlestick]:
        """Get the most recent candlestick, if any."""
        series = self.get_candlesticks(pair, period, 1)
        return series[-1] if len(series) else None

    def get_price(self, pair: TradingPair) -> Optional[float]:
        """Get the latest hourly close."""
        latest = self.get_latest(pair, TimePeriod.ONE_HOUR)
        return latest.close if latest else None

    def get_24h_change(self, pair: TradingPair) -> Optional[tuple[float, float]]:
        """Get the 24h price change from hourly candles.

        Returns:
            Tuple of (change, change_percent), or None if fewer than 25
            hourly candles are available or the reference close is zero.
        """
        series = self.get_candlesticks(pair, TimePeriod.ONE_HOUR, _DAY_OF_HOURS)
        if len(series) < _DAY_OF_HOURS or series[0].close == 0:
            return None

        change = series[-1].close - series[0].close
        return change, change / series[0].close * 100
