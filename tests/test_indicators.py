"""Property-based tests for the technical indicator calculators.

SMA and Bollinger Bands are checked against pandas rolling windows as an
independent reference implementation.
"""

import math

import pandas as pd
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from klineta.indicators import (
    calculate_atr,
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_vwap,
)
from klineta.indicators.volatility import classify_volatility
from klineta.models import Candlestick


def make_candle(timestamp: int, close: float, open_: float | None = None,
                spread: float = 1.0, volume: float = 1000.0) -> Candlestick:
    """Build a valid candle around an open/close pair."""
    open_ = close if open_ is None else open_
    return Candlestick(
        timestamp=timestamp,
        open=open_,
        high=max(open_, close) + spread,
        low=max(0.0, min(open_, close) - spread),
        close=close,
        volume=volume,
    )


def candles_from_closes(closes: list[float], spread: float = 1.0) -> list[Candlestick]:
    candles = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i else close
        candles.append(make_candle(i * 3600, close, open_=open_, spread=spread))
    return candles


@st.composite
def candle_series(draw, min_length: int = 1, max_length: int = 120):
    """Generate a realistic candle series with positive prices and varied moves."""
    length = draw(st.integers(min_value=min_length, max_value=max_length))
    base_price = draw(st.floats(min_value=1.0, max_value=5000.0))

    changes = draw(st.lists(
        st.sampled_from([-0.05, -0.03, -0.01, -0.005, 0.0, 0.005, 0.01, 0.03, 0.05]),
        min_size=length,
        max_size=length,
    ))
    wicks = draw(st.lists(
        st.floats(min_value=0.0, max_value=0.03), min_size=length, max_size=length,
    ))
    volumes = draw(st.lists(
        st.one_of(st.just(0.0), st.floats(min_value=1.0, max_value=1e6)),
        min_size=length,
        max_size=length,
    ))

    candles = []
    prev_close = base_price
    for i in range(length):
        close = max(0.01, prev_close * (1 + changes[i]))
        open_ = prev_close
        candles.append(Candlestick(
            timestamp=1_700_000_000 + i * 60,
            open=open_,
            high=max(open_, close) * (1 + wicks[i]),
            low=min(open_, close) * (1 - wicks[i]),
            close=close,
            volume=volumes[i],
        ))
        prev_close = close

    return candles


class TestMovingAverages:
    """Worked examples for SMA and EMA."""

    def test_sma_sliding_windows(self):
        candles = candles_from_closes([1, 2, 3, 4, 5])
        sma = calculate_sma(candles, 3)

        assert [ma.value for ma in sma] == [2.0, 3.0, 4.0]
        assert [ma.timestamp for ma in sma] == [c.timestamp for c in candles[2:]]
        assert all(ma.period == 3 for ma in sma)

    def test_ema_seeded_with_sma(self):
        candles = candles_from_closes([1, 2, 3, 4, 5])
        ema = calculate_ema(candles, 3)

        assert ema[0].value == 2.0
        assert ema[0].timestamp == candles[2].timestamp
        assert ema[1].value == (4 - 2.0) * 0.5 + 2.0
        assert [ma.value for ma in ema] == [2.0, 3.0, 4.0]

    def test_invalid_period_returns_empty(self):
        candles = candles_from_closes([1, 2, 3])
        assert calculate_sma(candles, 0) == []
        assert calculate_ema(candles, 0) == []


class TestMovingAverageLength:
    """
    **Property 1: Moving Average Output Length**

    *For any* series of length n, SMA and EMA return nothing when n < period
    and exactly n - period + 1 values otherwise.
    """

    @given(candles=candle_series(min_length=1, max_length=60),
           period=st.integers(min_value=1, max_value=60))
    @settings(max_examples=100, deadline=None)
    def test_length(self, candles: list[Candlestick], period: int):
        expected = max(0, len(candles) - period + 1)

        assert len(calculate_sma(candles, period)) == expected
        assert len(calculate_ema(candles, period)) == expected

    @given(candles=candle_series(min_length=1, max_length=60))
    @settings(max_examples=50, deadline=None)
    def test_period_equal_to_length_gives_one_value(self, candles: list[Candlestick]):
        period = len(candles)
        assert len(calculate_sma(candles, period)) == 1
        assert len(calculate_ema(candles, period)) == 1


class TestSMAAccuracy:
    """
    **Property 2: SMA Matches pandas Rolling Mean**
    """

    @given(candles=candle_series(min_length=20, max_length=120),
           period=st.sampled_from([5, 10, 20]))
    @settings(max_examples=100, deadline=None)
    def test_sma_matches_pandas(self, candles: list[Candlestick], period: int):
        ours = [ma.value for ma in calculate_sma(candles, period)]
        closes = pd.Series([c.close for c in candles])
        ref = closes.rolling(window=period).mean().dropna().tolist()

        assert ours == pytest.approx(ref, rel=1e-7, abs=1e-9)


class TestRSI:
    """RSI over the whole supplied series."""

    def test_known_value(self):
        # gains 2, losses 1, period 2 -> rs = 2
        rsi = calculate_rsi(candles_from_closes([10, 12, 11]), period=2)

        assert rsi.value == pytest.approx(100 - 100 / 3)
        assert not rsi.overbought
        assert not rsi.oversold

    def test_requires_period_plus_one(self):
        assert calculate_rsi(candles_from_closes(list(range(1, 15))), period=14) is None
        assert calculate_rsi(candles_from_closes(list(range(1, 16))), period=14) is not None

    def test_all_increasing_saturates(self):
        rsi = calculate_rsi(candles_from_closes([float(i) for i in range(1, 31)]), period=14)

        assert rsi.value == 100.0
        assert rsi.overbought is True
        assert rsi.oversold is False

    def test_all_decreasing_is_oversold(self):
        rsi = calculate_rsi(candles_from_closes([float(i) for i in range(60, 30, -1)]), period=14)

        assert rsi.value == 0.0
        assert rsi.oversold is True
        assert rsi.overbought is False

    @given(candles=candle_series(min_length=15, max_length=120))
    @settings(max_examples=100, deadline=None)
    def test_bounds_and_flags(self, candles: list[Candlestick]):
        rsi = calculate_rsi(candles, 14)

        assert 0 <= rsi.value <= 100
        assert rsi.overbought == (rsi.value >= 70)
        assert rsi.oversold == (rsi.value <= 30)
        assert not (rsi.overbought and rsi.oversold)


class TestMACD:
    """MACD with a positional EMA pairing and a simple-average signal."""

    def test_requires_34_candles(self):
        assert calculate_macd(candles_from_closes([100.0 + i for i in range(33)])) is None
        assert calculate_macd(candles_from_closes([100.0 + i for i in range(34)])) is not None

    def test_flat_series_has_zero_histogram(self):
        macd = calculate_macd(candles_from_closes([50.0] * 40))

        assert macd.macd == 0.0
        assert macd.signal == 0.0
        assert macd.histogram == 0.0

    @given(candles=candle_series(min_length=34, max_length=120))
    @settings(max_examples=50, deadline=None)
    def test_matches_positional_ema_difference(self, candles: list[Candlestick]):
        fast = calculate_ema(candles, 12)
        slow = calculate_ema(candles, 26)
        line = [f.value - s.value for f, s in zip(fast, slow)]

        macd = calculate_macd(candles)

        assert len(line) == len(candles) - 25
        assert macd.macd == line[-1]
        assert macd.signal == sum(line[-9:]) / 9
        assert macd.histogram == macd.macd - macd.signal


class TestBollingerBands:
    """
    **Property 3: Bollinger Band Symmetry and Accuracy**
    """

    def test_requires_period(self):
        assert calculate_bollinger_bands(candles_from_closes([1.0] * 19), 20) is None

    def test_flat_series_collapses(self):
        bb = calculate_bollinger_bands(candles_from_closes([10.0] * 20), 20, 2.0)

        assert bb.upper == bb.middle == bb.lower == 10.0
        assert bb.bandwidth == 0.0

    @given(candles=candle_series(min_length=20, max_length=120),
           multiplier=st.floats(min_value=0.5, max_value=3.0))
    @settings(max_examples=100, deadline=None)
    def test_symmetry(self, candles: list[Candlestick], multiplier: float):
        bb = calculate_bollinger_bands(candles, 20, multiplier)

        assert bb.upper - bb.middle == pytest.approx(bb.middle - bb.lower, rel=1e-9, abs=1e-9)
        assert bb.lower <= bb.middle <= bb.upper

    @given(candles=candle_series(min_length=20, max_length=120))
    @settings(max_examples=100, deadline=None)
    def test_matches_pandas_population_std(self, candles: list[Candlestick]):
        bb = calculate_bollinger_bands(candles, 20, 2.0)
        closes = pd.Series([c.close for c in candles])
        mean = closes.rolling(window=20).mean().iloc[-1]
        std = closes.rolling(window=20).std(ddof=0).iloc[-1]

        assert bb.middle == pytest.approx(mean, rel=1e-7)
        assert bb.upper == pytest.approx(mean + 2.0 * std, rel=1e-6, abs=1e-6)
        assert bb.lower == pytest.approx(mean - 2.0 * std, rel=1e-6, abs=1e-6)


class TestATR:
    """
    **Property 4: ATR Non-negativity**
    """

    def test_constant_range(self):
        candles = candles_from_closes([100.0] * 20, spread=1.0)
        atr = calculate_atr(candles, 14)

        assert atr.value == pytest.approx(2.0)
        assert atr.high == candles[-1].high
        assert atr.low == candles[-1].low
        assert atr.volatility == "medium"

    def test_requires_period_plus_one(self):
        assert calculate_atr(candles_from_closes([100.0] * 14), 14) is None
        assert calculate_atr(candles_from_closes([100.0] * 15), 14) is not None

    def test_wilder_smoothing(self):
        closes = [100.0, 100.0, 100.0, 100.0]
        candles = [make_candle(i, c, spread=s) for i, (c, s) in enumerate(zip(closes, [1, 1, 1, 3]))]
        atr = calculate_atr(candles, 2)

        # true ranges 2, 2, 6; seed (2 + 2) / 2 = 2; then (1 * 2 + 6) / 2
        assert atr.value == 4.0

    @pytest.mark.parametrize(
        "atr, close, expected",
        [(3.5, 100.0, "high"), (2.0, 100.0, "medium"), (0.5, 100.0, "low"), (0.0, 100.0, "low")],
    )
    def test_volatility_classification(self, atr: float, close: float, expected: str):
        assert classify_volatility(atr, close) == expected

    @given(candles=candle_series(min_length=15, max_length=120))
    @settings(max_examples=100, deadline=None)
    def test_non_negative(self, candles: list[Candlestick]):
        atr = calculate_atr(candles, 14)
        assert atr.value >= 0
        assert atr.volatility in ("high", "medium", "low")


class TestVWAP:
    """
    **Property 5: VWAP Lies Within Typical Price Range**
    """

    def test_known_value(self):
        candles = [
            Candlestick(timestamp=1, open=10, high=10, low=10, close=10, volume=1),
            Candlestick(timestamp=2, open=20, high=20, low=20, close=20, volume=3),
        ]
        vwap = calculate_vwap(candles)

        assert vwap.value == 17.5
        assert vwap.typical_price == 20.0
        assert vwap.volume == 4.0

    def test_zero_volume_has_no_result(self):
        candles = [make_candle(i, 10.0, volume=0.0) for i in range(5)]
        assert calculate_vwap(candles) is None

    def test_empty_series_has_no_result(self):
        assert calculate_vwap([]) is None

    @given(candles=candle_series(min_length=1, max_length=120))
    @settings(max_examples=100, deadline=None)
    def test_bounded_by_typical_prices(self, candles: list[Candlestick]):
        vwap = calculate_vwap(candles)
        if vwap is None:
            assert sum(c.volume for c in candles) == 0
            return

        traded = [c.typical_price for c in candles if c.volume > 0]
        tolerance = 1e-9 * max(traded)
        assert min(traded) - tolerance <= vwap.value <= max(traded) + tolerance


class TestIdempotence:
    """
    **Property 6: Calculator Idempotence**

    *For any* series, calling a calculator twice yields identical results.
    """

    @given(candles=candle_series(min_length=1, max_length=120))
    @settings(max_examples=50, deadline=None)
    def test_repeat_calls_identical(self, candles: list[Candlestick]):
        for calculate in (
            lambda c: calculate_sma(c, 5),
            lambda c: calculate_ema(c, 5),
            lambda c: calculate_rsi(c, 14),
            calculate_macd,
            lambda c: calculate_bollinger_bands(c, 20, 2.0),
            lambda c: calculate_atr(c, 14),
            calculate_vwap,
        ):
            first = calculate(candles)
            second = calculate(candles)
            assert first == second
            if first:
                for value in (first if isinstance(first, list) else [first]):
                    assert all(
                        not isinstance(v, float) or math.isfinite(v)
                        for v in value.model_dump().values()
                    )
