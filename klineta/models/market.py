"""Trading pair and candle period models."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TimePeriod(str, Enum):
    """Candlestick period."""

    ONE_MINUTE = "1m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    ONE_HOUR = "1h"
    FOUR_HOURS = "4h"
    ONE_DAY = "1d"
    ONE_WEEK = "1w"

    @property
    def seconds(self) -> int:
        """Length of one candle in seconds."""
        return _PERIOD_SECONDS[self]

    @classmethod
    def parse(cls, text: str) -> "TimePeriod":
        """Parse a period label such as ``"1h"``.

        Raises:
            ValueError: If the label is not a known period.
        """
        try:
            return cls(text.strip())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid period: {text!r}. Must be one of {valid}") from None


_PERIOD_SECONDS = {
    TimePeriod.ONE_MINUTE: 60,
    TimePeriod.FIVE_MINUTES: 300,
    TimePeriod.FIFTEEN_MINUTES: 900,
    TimePeriod.ONE_HOUR: 3600,
    TimePeriod.FOUR_HOURS: 14400,
    TimePeriod.ONE_DAY: 86400,
    TimePeriod.ONE_WEEK: 604800,
}


class TradingPair(BaseModel):
    """A base/quote market such as ETH/USDC."""

    base: str = Field(..., min_length=1, description="Base asset symbol")
    quote: str = Field(..., min_length=1, description="Quote asset symbol")
    address: Optional[str] = Field(default=None, description="Pool or token contract address")
    chain: str = Field(default="ethereum", description="Chain the pair trades on")

    model_config = {"frozen": True}

    @property
    def symbol(self) -> str:
        return f"{self.base}/{self.quote}"

    @classmethod
    def parse(cls, text: str, chain: str = "ethereum") -> "TradingPair":
        """Parse ``"eth/usdc"`` or ``"ETH-USDC"`` into a pair.

        Raises:
            ValueError: If the text does not name exactly two assets.
        """
        parts = [p for p in re.split(r"[/\-]", text.strip().upper()) if p]
        if len(parts) != 2:
            raise ValueError(f"Invalid trading pair: {text!r}. Expected BASE/QUOTE")
        return cls(base=parts[0], quote=parts[1], chain=chain)

    def __str__(self) -> str:
        return self.symbol
