"""Full technical analysis over one candlestick series.

Runs every calculator with fixed default windows and derives a single
trend and signal verdict from their outputs.
"""

import logging
from typing import Optional, Sequence

from klineta.indicators.moving_average import calculate_sma
from klineta.indicators.oscillator import calculate_rsi
from klineta.indicators.trend import calculate_macd
from klineta.indicators.volatility import calculate_atr, calculate_bollinger_bands
from klineta.indicators.volume import calculate_vwap
from klineta.models import (
    Candlestick,
    MacdData,
    MovingAverage,
    RsiData,
    TechnicalAnalysis,
)

logger = logging.getLogger(__name__)

MA_PERIODS = (5, 20, 50)
RSI_PERIOD = 14
ATR_PERIOD = 14
BOLLINGER_PERIOD = 20
BOLLINGER_STD_DEV = 2.0


def determine_trend(ma_short: Sequence[MovingAverage], ma_long: Sequence[MovingAverage]) -> str:
    """Compare the latest short and long moving averages.

    Returns:
        "bullish" if the short average is above the long one, "bearish"
        otherwise, and "neutral" if either sequence is empty.
    """
    if not ma_short or not ma_long:
        return "neutral"
    return "bullish" if ma_short[-1].value > ma_long[-1].value else "bearish"


def determine_signal(rsi: Optional[RsiData], macd: Optional[MacdData]) -> str:
    """Derive a trading signal, RSI extremes first, then MACD direction.

    The MACD histogram only decides the signal when RSI has not already
    set one.
    """
    signal = "neutral"

    if rsi is not None:
        if rsi.oversold:
            signal = "strong_buy"
        elif rsi.overbought:
            signal = "strong_sell"

    if macd is not None and signal == "neutral":
        if macd.histogram > 0:
            signal = "buy"
        elif macd.histogram < 0:
            signal = "sell"

    return signal


def analyze(candles: Sequence[Candlestick]) -> TechnicalAnalysis:
    """Run all indicators over a series and combine them.

    Indicators whose minimum history is not met are left as None (or
    contribute no moving-average values); this is never an error.

    Args:
        candles: Candlesticks in ascending timestamp order.

    Returns:
        TechnicalAnalysis with SMA 5/20/50 values, RSI(14), MACD,
        Bollinger(20, 2.0), VWAP, ATR(14), trend and signal.
    """
    ma5, ma20, ma50 = (calculate_sma(candles, period) for period in MA_PERIODS)

    rsi = calculate_rsi(candles, RSI_PERIOD)
    macd = calculate_macd(candles)

    result = TechnicalAnalysis(
        ma=tuple(ma5 + ma20 + ma50),
        rsi=rsi,
        macd=macd,
        bollinger=calculate_bollinger_bands(candles, BOLLINGER_PERIOD, BOLLINGER_STD_DEV),
        vwap=calculate_vwap(candles),
        atr=calculate_atr(candles, ATR_PERIOD),
        trend=determine_trend(ma5, ma20),
        signal=determine_signal(rsi, macd),
    )

    logger.debug(
        "Analyzed %d candles: trend=%s signal=%s", len(candles), result.trend, result.signal
    )
    return result
