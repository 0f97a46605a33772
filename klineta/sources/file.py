"""Read candlesticks from CSV or JSON files."""

from pathlib import Path

import pandas as pd

from klineta.errors import InvalidCandleError
from klineta.models import CandlestickSeries

REQUIRED_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]
OPTIONAL_COLUMNS = ["quote_volume"]


def read_candle_file(path: Path) -> CandlestickSeries:
    """Load and validate candles from a ``.csv`` or ``.json`` file.

    JSON files hold a list of candle objects. Rows are sorted by
    timestamp before validation; duplicates are still rejected.

    Args:
        path: File to read.

    Returns:
        Validated candlestick series.

    Raises:
        InvalidCandleError: If columns are missing or any candle is invalid.
        ValueError: If the file extension is not supported.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        frame = pd.read_csv(path)
    elif suffix == ".json":
        frame = pd.read_json(path, orient="records", convert_dates=False)
    else:
        raise ValueError(f"Unsupported file type: {suffix or path.name}. Use .csv or .json")

    frame.columns = [str(c).strip().lower() for c in frame.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise InvalidCandleError(f"Missing columns in {path.name}: {', '.join(missing)}")

    columns = REQUIRED_COLUMNS + [c for c in OPTIONAL_COLUMNS if c in frame.columns]
    try:
        frame = frame[columns].astype(float).sort_values("timestamp", kind="stable")
    except ValueError as e:
        raise InvalidCandleError(f"Non-numeric candle data in {path.name}: {e}") from e

    return CandlestickSeries.from_records(frame.to_dict("records"))
