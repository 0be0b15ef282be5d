"""
Rich components for the dessert CLI.

A small palette, one-line messages and a progress reporter that plugs
into the pipeline's progress port.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskID, TextColumn
from rich.table import Table
from rich.theme import Theme

# Restricted palette: one accent, three states, muted detail text
DESSERT_THEME = Theme(
    {
        "primary": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
    }
)


def get_theme() -> Theme:
    return DESSERT_THEME


class RichCliComponents:
    """Console helpers shared by the CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(theme=DESSERT_THEME)

    def display_error(self, message: str, title: str = "Error") -> None:
        """Print a single-line error, never a traceback."""
        self.console.print(f"[error]{title}:[/] {escape(message)}", soft_wrap=True, highlight=False)

    def display_warning(self, message: str, title: str = "Warning") -> None:
        self.console.print(f"[warning]{title}:[/] {escape(message)}", soft_wrap=True, highlight=False)

    def display_info(self, message: str, title: str = "Info") -> None:
        self.console.print(f"[primary]{title}:[/] {escape(message)}", soft_wrap=True, highlight=False)

    def display_success(self, message: str, title: str = "Success") -> None:
        self.console.print(f"[success]{title}:[/] {escape(message)}", soft_wrap=True, highlight=False)

    def display_key_values(self, title: str, values: dict[str, Any]) -> None:
        """Render a two-column table of settings or detection results."""
        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Key", style="muted")
        table.add_column("Value", style="primary")
        for key, value in values.items():
            table.add_row(key, escape(str(value)))
        self.console.print(table)


class RichProgressReporter:
    """Progress port implementation backed by a rich progress bar."""

    def __init__(self, console: Console | None = None, total: int = 100) -> None:
        self.console = console or Console(theme=DESSERT_THEME)
        self.total = total
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressReporter":
        self._progress = Progress(
            TextColumn("[primary]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task = self._progress.add_task("Starting", total=self.total)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None

    def update(self, message: str, fraction: float) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(
            self._task,
            description=message,
            completed=max(0.0, min(fraction, 1.0)) * self.total,
        )
