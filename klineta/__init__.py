"""klineta - technical analysis for OHLCV candlestick series."""

from klineta.indicators import analyze
from klineta.models import Candlestick, CandlestickSeries, TechnicalAnalysis

__version__ = "0.1.0"

__all__ = ["analyze", "Candlestick", "CandlestickSeries", "TechnicalAnalysis", "__version__"]
