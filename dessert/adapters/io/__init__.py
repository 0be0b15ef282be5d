from .enhanced_logging import LoggerManager, setup_enhanced_logging
from .rich_cli import DESSERT_THEME, RichCliComponents, RichProgressReporter
from .writer_overwrite import TestFileWriter

__all__ = [
    "DESSERT_THEME",
    "LoggerManager",
    "RichCliComponents",
    "RichProgressReporter",
    "TestFileWriter",
    "setup_enhanced_logging",
]
