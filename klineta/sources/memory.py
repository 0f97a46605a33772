"""In-memory candle source."""

from klineta.errors import UnknownPairError
from klineta.models import CandlestickSeries, TimePeriod, TradingPair
from klineta.sources.base import BaseCandleSource


class MemoryCandleSource(BaseCandleSource):
    """Serves series registered in process memory."""

    def __init__(self) -> None:
        self._series: dict[tuple[str, TimePeriod], CandlestickSeries] = {}

    def add_series(
        self, pair: TradingPair, period: TimePeriod, series: CandlestickSeries
    ) -> None:
        """Register (or replace) the series for a pair and period."""
        self._series[(pair.symbol, period)] = series

    def _fetch(self, pair: TradingPair, period: TimePeriod, limit: int) -> CandlestickSeries:
        try:
            series = self._series[(pair.symbol, period)]
        except KeyError:
            raise UnknownPairError(pair.symbol, period.value) from None
        return CandlestickSeries(series.root[-limit:])
