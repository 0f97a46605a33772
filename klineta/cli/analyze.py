"""Indicators command for klineta CLI.

Runs the full technical analysis over stored candles and displays it.
"""

from typing import Optional

import click
from rich.panel import Panel

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
from klineta.indicators import analyze
from klineta.models import TechnicalAnalysis
from klineta.sources import StoreCandleSource

SIGNAL_COLORS = {
    "strong_buy": "bold green",
    "buy": "green",
    "neutral": "dim",
    "sell": "red",
    "strong_sell": "bold red",
}

TREND_COLORS = {"bullish": "green", "bearish": "red", "neutral": "dim"}

VOLATILITY_COLORS = {"high": "red", "medium": "yellow", "low": "green"}


def _latest_ma(result: TechnicalAnalysis, period: int) -> Optional[float]:
    values = [ma.value for ma in result.ma if ma.period == period]
    return values[-1] if values else None


def _interpret_rsi(value: float, overbought: bool, oversold: bool) -> tuple[str, str]:
    """Interpret an RSI reading and return signal and color."""
    if oversold:
        return "Oversold", "green"
    elif overbought:
        return "Overbought", "red"
    elif value < 40:
        return "Approaching Oversold", "yellow"
    elif value > 60:
        return "Approaching Overbought", "yellow"
    return "Neutral", "dim"


def render_analysis(symbol: str, period: str, last_close: float, count: int,
                    result: TechnicalAnalysis) -> list[str]:
    """Build rich markup lines describing an analysis."""
    lines = [
        f"[bold]{symbol}[/bold] - {last_close:.4f}",
        f"[dim]Based on {count} {period} candles[/dim]\n",
    ]

    ma_parts = []
    for ma_period in (5, 20, 50):
        value = _latest_ma(result, ma_period)
        ma_parts.append(f"{ma_period}: {value:.4f}" if value is not None else f"{ma_period}: N/A")
    lines.append(f"[bold]SMA:[/bold] {' | '.join(ma_parts)}")

    if result.rsi:
        signal, color = _interpret_rsi(result.rsi.value, result.rsi.overbought, result.rsi.oversold)
        lines.append(f"[bold]RSI (14):[/bold] {result.rsi.value:.2f} [{color}]→ {signal}[/{color}]")

    if result.macd:
        lines.append(
            f"[bold]MACD:[/bold] {result.macd.macd:.4f} | Signal: {result.macd.signal:.4f} | "
            f"Hist: {result.macd.histogram:.4f}"
        )

    if result.bollinger:
        bb = result.bollinger
        lines.append(
            f"[bold]Bollinger Bands:[/bold] Upper: {bb.upper:.4f} | Middle: {bb.middle:.4f} | "
            f"Lower: {bb.lower:.4f} | Width: {bb.bandwidth:.2f}%"
        )

    if result.vwap:
        lines.append(
            f"[bold]VWAP:[/bold] {result.vwap.value:.4f} "
            f"[dim](volume {result.vwap.volume:,.2f})[/dim]"
        )

    if result.atr:
        color = VOLATILITY_COLORS[result.atr.volatility]
        lines.append(
            f"[bold]ATR (14):[/bold] {result.atr.value:.4f} "
            f"[{color}]→ {result.atr.volatility.title()} Volatility[/{color}]"
        )

    trend_color = TREND_COLORS[result.trend]
    signal_color = SIGNAL_COLORS[result.signal]
    lines.append("")
    lines.append(f"[bold]Trend:[/bold] [{trend_color}]{result.trend.upper()}[/{trend_color}]")
    lines.append(
        f"[bold]Signal:[/bold] [{signal_color}]"
        f"{result.signal.replace('_', ' ').upper()}[/{signal_color}]"
    )

    return lines


@click.command()
@click.argument("pair_text", metavar="PAIR")
@click.option(
    "-p", "--period",
    type=click.Choice(PERIOD_CHOICES),
    default=None,
    help="Candle period (default: [analysis] period in config)",
)
@click.option(
    "-l", "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Number of most recent candles to analyze (max 1000)",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw analysis as JSON")
@click.pass_context
def indicators(ctx: click.Context, pair_text: str, period: Optional[str],
               limit: Optional[int], as_json: bool) -> None:
    """Calculate technical indicators for PAIR (e.g. ETH/USDC).

    \b
    Indicators:
      SMA 5/20/50, RSI (14), MACD (12/26, 9-value signal),
      Bollinger Bands (20, 2.0), VWAP, ATR (14)

    \b
    Examples:
      klineta indicators ETH/USDC
      klineta indicators BTC/USDT -p 4h -l 200
      klineta indicators ETH/USDC --json
    """
    pair = parse_pair(pair_text)
    time_period = resolve_period(ctx, period)
    source = StoreCandleSource(get_store(ctx))

    try:
        series = source.get_candlesticks(pair, time_period, resolve_limit(ctx, limit))
    except UnknownPairError as e:
        fail(
            f"{e.message}.\n\n"
            f"Import some with: klineta import FILE --pair {pair.symbol} -p {time_period.value}",
            title="No Data",
        )

    result = analyze(series)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return

    console.print(Panel(
        "\n".join(render_analysis(pair.symbol, time_period.value, series[-1].close, len(series), result)),
        title="[bold]Technical Analysis[/bold]",
        border_style="blue",
    ))
