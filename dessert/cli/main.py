"""Main CLI entry point for dessert."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from ..adapters.io.enhanced_logging import LoggerManager, setup_enhanced_logging
from ..adapters.io.rich_cli import DESSERT_THEME, RichCliComponents
from ..config.loader import ConfigLoader, ConfigurationError
from ..config.models import DessertConfig
from .commands import detect, env, generate, resolve


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.config: DessertConfig | None = None
        self.config_path: Path | None = None
        self.console: Console | None = None
        self.rich_cli: RichCliComponents | None = None
        self.verbose: bool = False
        self.quiet: bool = False


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING and hide INFO",
)
@click.pass_context
def app(ctx: click.Context, config: Path | None, verbose: bool, quiet: bool) -> None:
    """dessert - turn a paused debugger frame into a unit test."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet
    ctx.obj.config_path = config

    console = Console(theme=DESSERT_THEME)
    ctx.obj.console = console
    ctx.obj.rich_cli = RichCliComponents(console)

    # Logs go to stderr so command output stays parseable
    logger = setup_enhanced_logging(Console(theme=DESSERT_THEME, stderr=True))
    LoggerManager.set_log_mode(verbose=verbose, quiet=quiet)

    try:
        loader = ConfigLoader(config)
        ctx.obj.config = loader.load_config()
    except ConfigurationError as e:
        ctx.obj.rich_cli.display_error(f"Configuration error: {e}")
        sys.exit(1)

    LoggerManager.set_log_mode(
        verbose=verbose,
        quiet=quiet,
        default_level=getattr(logging, ctx.obj.config.logging.level),
        suppress_modules=ctx.obj.config.logging.suppress_modules,
    )
    logger.debug("Debug mode enabled - verbose logging active")


app.add_command(detect)
app.add_command(resolve)
app.add_command(generate)
app.add_command(env)


if __name__ == "__main__":
    app()
