"""Project inspection commands: build detection and test path resolution."""

import sys
from pathlib import Path

import click

from ...application.generation.services.path_resolver import PathResolver
from ...application.generation.services.project_inspector import ProjectInspector
from ...application.generation.services.source_inspector import SourceInspector
from ...domain.models import DessertError


@click.command()
@click.argument(
    "project_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    required=False,
)
@click.pass_context
def detect(ctx: click.Context, project_path: Path) -> None:
    """Detect the build system and layout of a project."""
    root = project_path.resolve()
    build_system = ProjectInspector.detect_build_system(root)
    descriptor = ProjectInspector.read_build_descriptor(root, build_system)

    ctx.obj.rich_cli.display_key_values(
        "Project",
        {
            "Root": root,
            "Build system": build_system.label,
            "Multiplatform": "yes" if ProjectInspector.is_multiplatform(root) else "no",
            "Build descriptor": (
                f"{len(descriptor.splitlines())} lines" if descriptor else "not found"
            ),
        },
    )


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--project",
    "-p",
    "project_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Project root directory",
)
@click.pass_context
def resolve(ctx: click.Context, source: Path, project_path: Path) -> None:
    """Show where the generated test for SOURCE goes (creates the directory)."""
    root = project_path.resolve()
    source = source.resolve()
    try:
        language = SourceInspector.detect_language(source.name)
        build_system = ProjectInspector.detect_build_system(root)
        target = PathResolver().resolve(
            source,
            root,
            language,
            build_system,
            ProjectInspector.is_multiplatform(root),
        )
    except DessertError as e:
        ctx.obj.rich_cli.display_error(str(e))
        sys.exit(1)

    details = target.describe()
    ctx.obj.console.print(f"Test file: {details['path']}", soft_wrap=True, markup=False, highlight=False)
    ctx.obj.console.print(f"Mode: {details['mode']}", markup=False, highlight=False)
