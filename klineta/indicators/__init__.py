"""Technical indicators module."""

from klineta.indicators.analysis import analyze, determine_signal, determine_trend
from klineta.indicators.moving_average import calculate_ema, calculate_sma
from klineta.indicators.oscillator import calculate_rsi
from klineta.indicators.trend import calculate_macd
from klineta.indicators.volatility import calculate_atr, calculate_bollinger_bands
from klineta.indicators.volume import calculate_vwap

__all__ = [
    "analyze",
    "calculate_atr",
    "calculate_bollinger_bands",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "calculate_vwap",
    "determine_signal",
    "determine_trend",
]
