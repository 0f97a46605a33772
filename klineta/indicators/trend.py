"""MACD (Moving Average Convergence Divergence)."""

from typing import Optional, Sequence

from klineta.indicators.moving_average import calculate_ema
from klineta.models import Candlestick, MacdData

FAST_PERIOD = 12
SLOW_PERIOD = 26
SIGNAL_PERIOD = 9
MIN_CANDLES = 34


def calculate_macd(candles: Sequence[Candlestick]) -> Optional[MacdData]:
    """Calculate MACD with a simple-average signal line.

    The MACD line pairs the 12- and 26-period EMA sequences by position,
    so it is as long as the shorter (26-period) sequence. The signal line
    is the plain mean of the last 9 MACD line values.

    Args:
        candles: Candlesticks in ascending timestamp order.

    Returns:
        MACD reading, or None if there are fewer than 34 candles.
    """
    if len(candles) < MIN_CANDLES:
        return None

    fast_ema = calculate_ema(candles, FAST_PERIOD)
    slow_ema = calculate_ema(candles, SLOW_PERIOD)

    if not fast_ema or not slow_ema:
        return None

    macd_line = [f.value - s.value for f, s in zip(fast_ema, slow_ema)]

    if len(macd_line) < SIGNAL_PERIOD:
        return None

    signal = sum(macd_line[-SIGNAL_PERIOD:]) / SIGNAL_PERIOD
    macd = macd_line[-1]

    return MacdData(macd=macd, signal=signal, histogram=macd - signal)
