"""Generate command implementation."""

import logging
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from pathlib import Path

import click

from ...adapters.debugger.snapshot_frame import load_snapshot
from ...adapters.io.rich_cli import RichProgressReporter
from ...application.cancellation import GenerationCancelled
from ...application.generate_usecase import GenerateTestUseCase
from ...domain.models import DessertError

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.2
EXIT_CANCELLED = 130


def _await_run(future: Future, use_case: GenerateTestUseCase) -> Path:
    """Wait for the pipeline, turning Ctrl-C into a cancellation request."""
    while True:
        try:
            return future.result(timeout=POLL_INTERVAL_SECONDS)
        except FuturesTimeoutError:
            continue
        except KeyboardInterrupt:
            logger.warning("Cancellation requested, waiting for the current stage to finish")
            use_case.cancel()


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--project",
    "-p",
    "project_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Project root directory",
)
@click.pass_context
def generate(ctx: click.Context, snapshot: Path, project_path: Path) -> None:
    """Generate a unit test from a frame SNAPSHOT (JSON)."""
    try:
        frame, session, project = load_snapshot(snapshot, project_path)
    except DessertError as e:
        ctx.obj.rich_cli.display_error(str(e))
        sys.exit(1)

    with RichProgressReporter(ctx.obj.console) as progress:
        use_case = GenerateTestUseCase(
            config=ctx.obj.config,
            progress=None if ctx.obj.quiet else progress,
        )
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="dessert-generate") as executor:
            future = executor.submit(use_case.run, frame, session, project)
            try:
                written = _await_run(future, use_case)
            except GenerationCancelled:
                sys.exit(EXIT_CANCELLED)
            except DessertError as e:
                ctx.obj.rich_cli.display_error(str(e))
                sys.exit(1)
            except Exception as e:
                logger.debug("Generation failed with an unexpected error", exc_info=True)
                ctx.obj.rich_cli.display_error(f"Unexpected error during generation: {e}")
                sys.exit(1)

    ctx.obj.rich_cli.display_success(str(written), "Test written")
