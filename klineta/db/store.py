"""SQLite candle store for klineta."""

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from klineta.models import Candlestick, CandlestickSeries, TimePeriod, TradingPair

logger = logging.getLogger(__name__)


class CandleStore:
    """SQLite-based store of candlesticks keyed by pair and period."""

    REQUIRED_TABLES = ["candles"]

    def __init__(self, db_path: Path):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS candles (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    pair TEXT NOT NULL,
                    period TEXT NOT NULL,
                    timestamp INTEGER NOT NULL,
                    open REAL NOT NULL,
                    high REAL NOT NULL,
                    low REAL NOT NULL,
                    close REAL NOT NULL,
                    volume REAL NOT NULL,
                    quote_volume REAL NOT NULL DEFAULT 0,
                    UNIQUE(pair, period, timestamp)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def save_candles(
        self, pair: TradingPair, period: TimePeriod, candles: Iterable[Candlestick]
    ) -> int:
        """Save candles, replacing any stored candle with the same timestamp.

        Args:
            pair: Trading pair.
            period: Candle period.
            candles: Candles to save.

        Returns:
            Number of candles written.
        """
        rows = [
            (
                pair.symbol,
                period.value,
                candle.timestamp,
                candle.open,
                candle.high,
                candle.low,
                candle.close,
                candle.volume,
                candle.quote_volume,
            )
            for candle in candles
        ]
        conn = self._get_connection()
        try:
            conn.executemany(
                """
                INSERT OR REPLACE INTO candles
                (pair, period, timestamp, open, high, low, close, volume, quote_volume)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
        finally:
            conn.close()

        logger.info("Saved %d %s candles for %s", len(rows), period.value, pair.symbol)
        return len(rows)

    def get_candles(
        self, pair: TradingPair, period: TimePeriod, limit: Optional[int] = None
    ) -> CandlestickSeries:
        """Get the most recent candles in ascending timestamp order.

        Args:
            pair: Trading pair.
            period: Candle period.
            limit: Maximum number of candles. If None, returns all.

        Returns:
            Series of stored candles (possibly empty).
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """
                SELECT timestamp, open, high, low, close, volume, quote_volume
                FROM candles
                WHERE pair = ? AND period = ?
                ORDER BY timestamp DESC
                LIMIT ?
                """,
                (pair.symbol, period.value, -1 if limit is None else limit),
            )
            rows = cursor.fetchall()
        finally:
            conn.close()

        return CandlestickSeries(
            tuple(
                Candlestick(
                    timestamp=row["timestamp"],
                    open=row["open"],
                    high=row["high"],
                    low=row["low"],
                    close=row["close"],
                    volume=row["volume"],
                    quote_volume=row["quote_volume"],
                )
                for row in reversed(rows)
            )
        )

    def count_candles(self, pair: TradingPair, period: TimePeriod) -> int:
        """Count stored candles for a pair and period."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT COUNT(*) AS n FROM candles WHERE pair = ? AND period = ?",
                (pair.symbol, period.value),
            )
            return cursor.fetchone()["n"]
        finally:
            conn.close()

    def delete_candles(self, pair: TradingPair, period: Optional[TimePeriod] = None) -> int:
        """Delete stored candles for a pair.

        Args:
            pair: Trading pair.
            period: Only delete this period. If None, deletes every period.

        Returns:
            Number of candles deleted.
        """
        conn = self._get_connection()
        try:
            if period is None:
                cursor = conn.execute("DELETE FROM candles WHERE pair = ?", (pair.symbol,))
            else:
                cursor = conn.execute(
                    "DELETE FROM candles WHERE pair = ? AND period = ?",
                    (pair.symbol, period.value),
                )
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    def list_pairs(self) -> list[tuple[str, str, int]]:
        """List stored (pair, period, candle count) combinations."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """
                SELECT pair, period, COUNT(*) AS n
                FROM candles
                GROUP BY pair, period
                ORDER BY pair, period
                """
            )
            return [(row["pair"], row["period"], row["n"]) for row in cursor.fetchall()]
        finally:
            conn.close()
