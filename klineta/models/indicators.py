"""Indicator result models.

Every result is an immutable value with no reference back to the
series it was computed from.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

Volatility = Literal["high", "medium", "low"]
Trend = Literal["bullish", "bearish", "neutral"]
Signal = Literal["strong_buy", "buy", "neutral", "sell", "strong_sell"]


class MovingAverage(BaseModel):
    """One moving-average value at the end of a window."""

    period: int = Field(..., gt=0, description="Window length")
    value: float = Field(..., description="Average close over the window")
    timestamp: int = Field(..., description="Timestamp of the window's last candle")

    model_config = {"frozen": True}


class RsiData(BaseModel):
    """Relative Strength Index reading."""

    value: float = Field(..., ge=0, le=100, description="RSI value (0-100)")
    overbought: bool = Field(..., description="RSI >= 70")
    oversold: bool = Field(..., description="RSI <= 30")

    model_config = {"frozen": True}


class MacdData(BaseModel):
    """MACD reading at the end of the series."""

    macd: float = Field(..., description="Last MACD line value")
    signal: float = Field(..., description="Mean of the last 9 MACD line values")
    histogram: float = Field(..., description="MACD minus signal")

    model_config = {"frozen": True}


class BollingerBands(BaseModel):
    """Bollinger Bands over the most recent window."""

    upper: float
    middle: float
    lower: float
    bandwidth: float = Field(..., description="Band width as a percentage of the middle band")

    model_config = {"frozen": True}


class VwapData(BaseModel):
    """Volume Weighted Average Price over the whole series."""

    value: float = Field(..., description="VWAP")
    typical_price: float = Field(..., description="Typical price of the last candle")
    volume: float = Field(..., ge=0, description="Cumulative volume used")

    model_config = {"frozen": True}


class AtrData(BaseModel):
    """Average True Range with a volatility classification."""

    value: float = Field(..., ge=0, description="Wilder-smoothed ATR")
    high: float = Field(..., description="High of the last candle")
    low: float = Field(..., description="Low of the last candle")
    volatility: Volatility = Field(..., description="ATR relative to the last close")

    model_config = {"frozen": True}


class TechnicalAnalysis(BaseModel):
    """Combined indicator output with a trend and signal verdict."""

    ma: tuple[MovingAverage, ...] = Field(default=(), description="SMA 5, 20 and 50 values")
    rsi: Optional[RsiData] = None
    macd: Optional[MacdData] = None
    bollinger: Optional[BollingerBands] = None
    vwap: Optional[VwapData] = None
    atr: Optional[AtrData] = None
    trend: Trend = "neutral"
    signal: Signal = "neutral"

    model_config = {"frozen": True}
