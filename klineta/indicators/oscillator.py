"""Relative Strength Index."""

from typing import Optional, Sequence

from klineta.models import Candlestick, RsiData

OVERBOUGHT = 70.0
OVERSOLD = 30.0


def calculate_rsi(candles: Sequence[Candlestick], period: int = 14) -> Optional[RsiData]:
    """Calculate a single-shot RSI over the whole series.

    Gains and losses are summed over every close-to-close change in the
    input, then divided by ``period`` (not by the number of changes).

    Args:
        candles: Candlesticks in ascending timestamp order.
        period: RSI period (default 14).

    Returns:
        RSI reading, or None if there are fewer than ``period + 1`` candles.
        A series with no losses saturates at 100.
    """
    if period < 1 or len(candles) < period + 1:
        return None

    gains = 0.0
    losses = 0.0

    for prev, curr in zip(candles, candles[1:]):
        change = curr.close - prev.close
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return RsiData(value=100.0, overbought=True, oversold=False)

    rs = avg_gain / avg_loss
    rsi = 100 - (100 / (1 + rs))

    return RsiData(value=rsi, overbought=rsi >= OVERBOUGHT, oversold=rsi <= OVERSOLD)
