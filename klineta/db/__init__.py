"""Persistence for imported candles."""

from klineta.db.store import CandleStore

__all__ = ["CandleStore"]
