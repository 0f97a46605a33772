"""Volume Weighted Average Price."""

from typing import Optional, Sequence

from klineta.models import Candlestick, VwapData


def calculate_vwap(candles: Sequence[Candlestick]) -> Optional[VwapData]:
    """Calculate cumulative VWAP from the start of the data.

    Args:
        candles: Candlesticks in ascending timestamp order.

    Returns:
        VWAP with the last candle's typical price and the total volume,
        or None if the series is empty or carries no volume.
    """
    cumulative_tp_vol = 0.0
    cumulative_vol = 0.0

    for candle in candles:
        cumulative_tp_vol += candle.typical_price * candle.volume
        cumulative_vol += candle.volume

    if cumulative_vol == 0:
        return None

    return VwapData(
        value=cumulative_tp_vol / cumulative_vol,
        typical_price=candles[-1].typical_price,
        volume=cumulative_vol,
    )
