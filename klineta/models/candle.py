"""Candlestick (OHLCV) data models."""

from typing import Any, Iterable, Iterator, Mapping

from pydantic import BaseModel, Field, RootModel, ValidationError, model_validator

from klineta.errors import InvalidCandleError


class Candlestick(BaseModel):
    """Represents a single OHLCV candlestick."""

    timestamp: int = Field(..., ge=0, description="Candle open time (unix seconds)")
    open: float = Field(..., ge=0, description="Opening price")
    high: float = Field(..., ge=0, description="High price")
    low: float = Field(..., ge=0, description="Low price")
    close: float = Field(..., ge=0, description="Closing price")
    volume: float = Field(..., ge=0, description="Base asset volume")
    quote_volume: float = Field(default=0.0, ge=0, description="Quote asset volume")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @model_validator(mode="after")
    def _check_price_order(self) -> "Candlestick":
        if not self.low <= min(self.open, self.close):
            raise ValueError(f"low {self.low} is above open/close")
        if not max(self.open, self.close) <= self.high:
            raise ValueError(f"high {self.high} is below open/close")
        return self

    @property
    def typical_price(self) -> float:
        return (self.high + self.low + self.close) / 3


class CandlestickSeries(RootModel[tuple[Candlestick, ...]]):
    """Candlesticks in strictly ascending timestamp order."""

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_ordering(self) -> "CandlestickSeries":
        for prev, curr in zip(self.root, self.root[1:]):
            if curr.timestamp <= prev.timestamp:
                raise ValueError(
                    f"timestamps must be strictly ascending: {curr.timestamp} after {prev.timestamp}"
                )
        return self

    def __iter__(self) -> Iterator[Candlestick]:
        return iter(self.root)

    def __getitem__(self, item):
        return self.root[item]

    def __len__(self) -> int:
        return len(self.root)

    @property
    def closes(self) -> list[float]:
        return [c.close for c in self.root]

    @property
    def highs(self) -> list[float]:
        return [c.high for c in self.root]

    @property
    def lows(self) -> list[float]:
        return [c.low for c in self.root]

    @property
    def volumes(self) -> list[float]:
        return [c.volume for c in self.root]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CandlestickSeries":
        """Validate raw candle records into a series.

        Args:
            records: Mappings with timestamp, open, high, low, close, volume
                and optionally quote_volume.

        Returns:
            The validated series.

        Raises:
            InvalidCandleError: If any record is malformed or the records
                are not in strictly ascending timestamp order.
        """
        try:
            return cls.model_validate(tuple(records))
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise InvalidCandleError(
                f"Invalid candle data at {location or 'series'}: {first['msg']}"
            ) from e
