"""Candle source backed by the SQLite candle store."""

import logging

from klineta.db.store import CandleStore
from klineta.errors import UnknownPairError
from klineta.models import CandlestickSeries, TimePeriod, TradingPair
from klineta.sources.base import BaseCandleSource

logger = logging.getLogger(__name__)


class StoreCandleSource(BaseCandleSource):
    """Serves candles previously imported into a CandleStore."""

    def __init__(self, store: CandleStore) -> None:
        self.store = store

    def _fetch(self, pair: TradingPair, period: TimePeriod, limit: int) -> CandlestickSeries:
        series = self.store.get_candles(pair, period, limit)
        if not len(series):
            raise UnknownPairError(pair.symbol, period.value)
        logger.debug("Loaded %d %s candles for %s", len(series), period.value, pair.symbol)
        return series
