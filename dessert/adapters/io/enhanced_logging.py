"""
Logging setup with Rich integration.

This module provides:
- One RichHandler on the root logger, installed idempotently
- Verbose/quiet level selection
- Suppression of chatty third-party loggers outside verbose mode
"""

import logging
import os
import threading

from rich.console import Console
from rich.logging import RichHandler

from .rich_cli import DESSERT_THEME

NOISY_MODULES = ("httpx", "httpcore", "openai", "anthropic")


class LoggerManager:
    """Configures the root logger once per process."""

    _console: Console | None = None
    _handler: RichHandler | None = None
    _explicit_level: int | None = None
    _setup_complete: bool = False
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls, console: Console | None = None, level: int = logging.INFO
    ) -> None:
        """Set up global logging configuration with thread safety."""
        with cls._setup_lock:
            root_logger = logging.getLogger()

            if cls._setup_complete and cls._handler in root_logger.handlers:
                root_logger.setLevel(level)
                cls._explicit_level = level
                return

            cls._console = console or Console(theme=DESSERT_THEME, stderr=True)

            # Replace foreign RichHandlers, keep every other handler
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            rich_handler = RichHandler(
                console=cls._console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))

            root_logger.addHandler(rich_handler)
            root_logger.setLevel(level)
            cls._handler = rich_handler
            cls._explicit_level = level
            cls._setup_complete = True

    @classmethod
    def set_log_mode(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        default_level: int = logging.INFO,
        suppress_modules: tuple[str, ...] | list[str] = NOISY_MODULES,
    ) -> int:
        """Pick the root level: quiet > verbose > configured default."""
        if quiet or os.getenv("DESSERT_QUIET", "").lower() in {"1", "true", "yes"}:
            level = logging.WARNING
        elif verbose:
            level = logging.DEBUG
        else:
            level = default_level

        logging.getLogger().setLevel(level)
        cls._explicit_level = level

        for module in suppress_modules:
            logging.getLogger(module).setLevel(logging.NOTSET if verbose else logging.WARNING)

        return level

    @classmethod
    def reset(cls) -> None:
        """Remove the installed handler (used by tests)."""
        with cls._setup_lock:
            if cls._handler is not None:
                logging.getLogger().removeHandler(cls._handler)
            cls._handler = None
            cls._console = None
            cls._explicit_level = None
            cls._setup_complete = False


def setup_enhanced_logging(
    console: Console | None = None, level: int = logging.INFO
) -> logging.Logger:
    """Set up enhanced logging system."""
    LoggerManager.setup_global_logging(console, level)
    return logging.getLogger("dessert.main")
