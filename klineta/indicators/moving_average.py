"""Simple and exponential moving averages over candle closes."""

from typing import Sequence

from klineta.models import Candlestick, MovingAverage


def calculate_sma(candles: Sequence[Candlestick], period: int) -> list[MovingAverage]:
    """Calculate Simple Moving Average.

    Args:
        candles: Candlesticks in ascending timestamp order.
        period: Number of closes in each window.

    Returns:
        One value per full window, stamped with the window's last candle.
        Empty if there are fewer than ``period`` candles.
    """
    if period < 1 or len(candles) < period:
        return []

    closes = [c.close for c in candles]
    result = []

    for i in range(period - 1, len(candles)):
        window = closes[i - period + 1:i + 1]
        result.append(
            MovingAverage(period=period, value=sum(window) / period, timestamp=candles[i].timestamp)
        )

    return result


def calculate_ema(candles: Sequence[Candlestick], period: int) -> list[MovingAverage]:
    """Calculate Exponential Moving Average.

    The first value is the SMA of the first ``period`` closes; each later
    value applies the smoothing factor ``2 / (period + 1)``.

    Args:
        candles: Candlesticks in ascending timestamp order.
        period: Number of periods for the EMA.

    Returns:
        EMA values from the ``period``-th candle onwards, or an empty list
        if there are fewer than ``period`` candles.
    """
    if period < 1 or len(candles) < period:
        return []

    multiplier = 2 / (period + 1)

    # First EMA is SMA
    first_sma = sum(c.close for c in candles[:period]) / period
    result = [MovingAverage(period=period, value=first_sma, timestamp=candles[period - 1].timestamp)]

    for candle in candles[period:]:
        prev = result[-1].value
        ema = (candle.close - prev) * multiplier + prev
        result.append(MovingAverage(period=period, value=ema, timestamp=candle.timestamp))

    return result
