"""Errors raised at the boundaries of klineta.

Calculators never raise for short history or zero denominators; these
errors are reserved for malformed input and missing data at the edges.
"""


class KlinetaError(Exception):
    """Base error for klineta."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidCandleError(KlinetaError, ValueError):
    """Raised when candle data violates the OHLCV invariants."""


class UnknownPairError(KlinetaError, LookupError):
    """Raised when a source holds no candles for a pair and period."""

    def __init__(self, symbol: str, period: str) -> None:
        super().__init__(f"No candles for {symbol} ({period})")
        self.symbol = symbol
        self.period = period
