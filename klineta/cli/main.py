"""Main CLI entry point for klineta.

This module provides the main click group and lazy loading
of command modules.
"""

import importlib
from pathlib import Path
from typing import Optional

import click

from klineta.config import configure_logging, load_config


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules (and pandas behind them) are only imported
    when a command is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        attr = getattr(module, cmd_name, None)
        if isinstance(attr, click.Command):
            cmd = attr
        else:
            # Commands named after keywords (e.g. "import") live under another attribute
            cmd = next(
                (
                    value
                    for value in vars(module).values()
                    if isinstance(value, click.Command) and value.name == cmd_name
                ),
                None,
            )

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "import": "klineta.cli.data",
    "kline": "klineta.cli.data",
    "pairs": "klineta.cli.data",
    "indicators": "klineta.cli.analyze",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="klineta")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/klineta/config.toml)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (overrides [logging] level in config)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], log_level: Optional[str]) -> None:
    """klineta - technical analysis for OHLCV candlestick data.

    Import candles for a trading pair, then compute moving averages,
    RSI, MACD, Bollinger Bands, VWAP and ATR with a trend and signal verdict.

    \b
    Quick Start:
      klineta import eth_1h.csv --pair ETH/USDC --period 1h
      klineta kline ETH/USDC -p 1h
      klineta indicators ETH/USDC -p 1h
    """
    config = load_config(config_path)
    configure_logging(log_level or config["logging"]["level"])

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
