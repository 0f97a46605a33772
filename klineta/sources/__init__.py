"""Candlestick data sources."""

from klineta.sources.base import MAX_CANDLESTICKS, BaseCandleSource
from klineta.sources.file import read_candle_file
from klineta.sources.memory import MemoryCandleSource
from klineta.sources.store import StoreCandleSource

__all__ = [
    "MAX_CANDLESTICKS",
    "BaseCandleSource",
    "MemoryCandleSource",
    "StoreCandleSource",
    "read_candle_file",
]
