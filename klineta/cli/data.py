"""Data commands for klineta CLI.

Handles importing candle files into the local store and displaying
stored OHLCV data.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from klineta.cli.common import (
    PERIOD_CHOICES,
    console,
    fail,
    get_store,
    parse_pair,
    resolve_limit,
    resolve_period,
)
from klineta.errors import UnknownPairError
from klineta.sources import StoreCandleSource, read_candle_file


def _format_timestamp(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


@click.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--pair", "pair_text", required=True, help="Trading pair, e.g. ETH/USDC")
@click.option(
    "-p", "--period",
    type=click.Choice(PERIOD_CHOICES),
    default=None,
    help="Candle period (default: [analysis] period in config)",
)
@click.pass_context
def import_candles(ctx: click.Context, file: Path, pair_text: str, period: Optional[str]) -> None:
    """Import candles from a CSV or JSON FILE.

    FILE must provide timestamp (unix seconds), open, high, low, close
    and volume columns; quote_volume is optional.

    \b
    Examples:
      klineta import eth_1h.csv --pair ETH/USDC --period 1h
      klineta import btc_daily.json --pair BTC/USDT -p 1d
    """
    pair = parse_pair(pair_text)
    time_period = resolve_period(ctx, period)

    try:
        series = read_candle_file(file)
    except ValueError as e:
        fail(str(e), title="Invalid Candle Data")

    saved = get_store(ctx).save_candles(pair, time_period, series)
    console.print(
        f"[green]Imported {saved} {time_period.value} candles for {pair.symbol}[/green]"
    )


@click.command()
@click.argument("pair_text", metavar="PAIR")
@click.option(
    "-p", "--period",
    type=click.Choice(PERIOD_CHOICES),
    default=None,
    help="Candle period (default: [analysis] period in config)",
)
@click.option("-l", "--limit", type=click.IntRange(min=1), default=None, help="Number of candles")
@click.pass_context
def kline(ctx: click.Context, pair_text: str, period: Optional[str], limit: Optional[int]) -> None:
    """Display stored candlesticks for PAIR (e.g. ETH/USDC)."""
    pair = parse_pair(pair_text)
    time_period = resolve_period(ctx, period)
    source = StoreCandleSource(get_store(ctx))

    try:
        series = source.get_candlesticks(pair, time_period, resolve_limit(ctx, limit))
    except UnknownPairError:
        fail(
            f"No {time_period.value} candles stored for {pair.symbol}.\n\n"
            f"Import some with: klineta import FILE --pair {pair.symbol} -p {time_period.value}",
            title="No Data",
        )

    table = Table(title=f"{pair.symbol} ({time_period.value})")
    table.add_column("Time (UTC)", style="cyan")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right", style="green")
    table.add_column("Low", justify="right", style="red")
    table.add_column("Close", justify="right", style="bold")
    table.add_column("Volume", justify="right", style="dim")

    for candle in series:
        table.add_row(
            _format_timestamp(candle.timestamp),
            f"{candle.open:.4f}",
            f"{candle.high:.4f}",
            f"{candle.low:.4f}",
            f"{candle.close:.4f}",
            f"{candle.volume:,.2f}",
        )

    console.print(table)


@click.command()
@click.pass_context
def pairs(ctx: click.Context) -> None:
    """List stored pairs and periods with candle counts."""
    rows = get_store(ctx).list_pairs()

    if not rows:
        console.print("[dim]No candles stored yet.[/dim]")
        return

    table = Table(title="Stored Candles")
    table.add_column("Pair", style="cyan")
    table.add_column("Period")
    table.add_column("Candles", justify="right")

    for pair_symbol, period, count in rows:
        table.add_row(pair_symbol, period, str(count))

    console.print(table)
