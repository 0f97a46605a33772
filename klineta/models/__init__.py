"""Data models for klineta."""

from klineta.models.candle import Candlestick, CandlestickSeries
from klineta.models.indicators import (
    AtrData,
    BollingerBands,
    MacdData,
    MovingAverage,
    RsiData,
    TechnicalAnalysis,
    VwapData,
)
from klineta.models.market import TimePeriod, TradingPair

__all__ = [
    "Candlestick",
    "CandlestickSeries",
    "TimePeriod",
    "TradingPair",
    "MovingAverage",
    "RsiData",
    "MacdData",
    "BollingerBands",
    "VwapData",
    "AtrData",
    "TechnicalAnalysis",
]
