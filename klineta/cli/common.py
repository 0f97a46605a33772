"""Helpers shared by klineta CLI commands."""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from klineta.config import get_db_path
from klineta.db.store import CandleStore
from klineta.models import TimePeriod, TradingPair

console = Console()

PERIOD_CHOICES = [p.value for p in TimePeriod]


def get_store(ctx: click.Context) -> CandleStore:
    """Open the candle store named in the loaded config."""
    return CandleStore(get_db_path(ctx.obj["config"]))


def resolve_period(ctx: click.Context, period: Optional[str]) -> TimePeriod:
    """Use the given period or the configured default."""
    return TimePeriod.parse(period or ctx.obj["config"]["analysis"]["period"])


def resolve_limit(ctx: click.Context, limit: Optional[int]) -> int:
    """Use the given limit or the configured default, exiting if it is below 1."""
    if limit is None:
        limit = int(ctx.obj["config"]["analysis"]["limit"])
    if limit < 1:
        fail(f"Candle limit must be at least 1, got {limit}", title="Invalid Config")
    return limit


def parse_pair(text: str) -> TradingPair:
    """Parse a pair argument, exiting with an error panel if invalid."""
    try:
        return TradingPair.parse(text)
    except ValueError as e:
        fail(str(e))


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
