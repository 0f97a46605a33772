"""Volatility indicators: Bollinger Bands and Average True Range."""

from typing import Optional, Sequence

from klineta.indicators.moving_average import calculate_sma
from klineta.models import AtrData, BollingerBands, Candlestick

HIGH_VOLATILITY_RATIO = 0.03
MEDIUM_VOLATILITY_RATIO = 0.01


def calculate_bollinger_bands(
    candles: Sequence[Candlestick],
    period: int = 20,
    std_dev: float = 2.0,
) -> Optional[BollingerBands]:
    """Calculate Bollinger Bands over the most recent window.

    Args:
        candles: Candlesticks in ascending timestamp order.
        period: SMA period (default 20)
        std_dev: Standard deviation multiplier (default 2.0)

    Returns:
        Bands around the last SMA value using the population standard
        deviation of the last ``period`` closes, or None if there are
        fewer than ``period`` candles.
    """
    sma = calculate_sma(candles, period)
    if not sma:
        return None

    middle = sma[-1].value
    window = candles[len(candles) - period:]

    variance = sum((c.close - middle) ** 2 for c in window) / period
    std = variance ** 0.5

    upper = middle + std_dev * std
    lower = middle - std_dev * std

    # All-zero closes leave a zero-width band
    bandwidth = (upper - lower) / middle * 100 if middle else 0.0

    return BollingerBands(upper=upper, middle=middle, lower=lower, bandwidth=bandwidth)


def true_range(candle: Candlestick, prev_close: float) -> float:
    return max(
        candle.high - candle.low,
        abs(candle.high - prev_close),
        abs(candle.low - prev_close),
    )


def classify_volatility(atr: float, close: float) -> str:
    """Bucket an ATR value relative to a reference close."""
    if atr > close * HIGH_VOLATILITY_RATIO:
        return "high"
    elif atr > close * MEDIUM_VOLATILITY_RATIO:
        return "medium"
    return "low"


def calculate_atr(candles: Sequence[Candlestick], period: int = 14) -> Optional[AtrData]:
    """Calculate Average True Range.

    Args:
        candles: Candlesticks in ascending timestamp order.
        period: ATR period (default 14)

    Returns:
        The final Wilder-smoothed ATR with the last candle's high, low and
        a volatility bucket, or None if there are fewer than ``period + 1``
        candles.
    """
    if period < 1 or len(candles) < period + 1:
        return None

    true_ranges = [true_range(curr, prev.close) for prev, curr in zip(candles, candles[1:])]

    # First ATR is SMA of first `period` true ranges
    atr = sum(true_ranges[:period]) / period

    # Subsequent ATRs using Wilder's smoothing
    for tr in true_ranges[period:]:
        atr = ((period - 1) * atr + tr) / period

    last = candles[-1]
    return AtrData(
        value=atr,
        high=last.high,
        low=last.low,
        volatility=classify_volatility(atr, last.close),
    )
