"""
Capture formatting service.

Renders a captured frame and the project context into the single text
block embedded in the prompt. Output depends only on its inputs: no clock,
no unordered iteration.
"""

from __future__ import annotations

from ....domain.models import BuildSystem, CapturedFrame, ProjectContext

BUILD_EXCERPT_LINES = 50
SOURCE_EXCERPT_LINES = 100

NO_VARIABLES = "<none captured>"

_BUILD_SECTION_LABELS = {
    BuildSystem.GRADLE: "BUILD GRADLE CONTENT",
    BuildSystem.MAVEN: "POM.XML CONTENT",
    BuildSystem.SBT: "BUILD.SBT CONTENT",
    BuildSystem.BAZEL: "BAZEL BUILD CONTENT",
    BuildSystem.UNKNOWN: "BUILD CONTENT",
}


class CaptureFormatter:
    """Formats debugger captures for the prompt."""

    def format(self, frame: CapturedFrame, context: ProjectContext) -> str:
        """
        Render the capture block.

        Sections, in order: header, build descriptor excerpt (when there is
        descriptor text), execution info with the variables, source excerpt
        (when there is file content).
        """
        language = frame.language
        location = f"{frame.source_file_name}:{frame.source_line}"

        lines: list[str] = [
            "=== DEBUGGER CAPTURE ===",
            f"Current Location: {location}",
            f"Source Language: {language.name if language else 'UNKNOWN'}",
            f"Build System: {context.build_system.label}",
            "",
        ]

        if context.build_descriptor_text:
            lines.append(f"{_BUILD_SECTION_LABELS[context.build_system]}:")
            lines.append("=" * 20)
            lines.extend(_head(context.build_descriptor_text, BUILD_EXCERPT_LINES))
            lines.append("")

        lines.extend(
            [
                "EXECUTION INFO:",
                "=" * 15,
                "Frame 0:",
                f"  File: {location}",
                f"  Method: {frame.method_signature}",
            ]
        )
        lines.extend(self._variable_lines(frame))

        if frame.file_content:
            lines.append("  File Content:")
            lines.append("  " + "=" * 50)
            lines.extend(_head(frame.file_content, SOURCE_EXCERPT_LINES))
            lines.append("  " + "=" * 50)

        return "\n".join(lines) + "\n"

    @staticmethod
    def _variable_lines(frame: CapturedFrame) -> list[str]:
        if frame.variables:
            return ["  Variables:"] + [
                f"    {name} = {value}" for name, value in frame.variables.items()
            ]
        if frame.variables_error:
            return [f"  Variables: <could not extract - {frame.variables_error}>"]
        return [f"  Variables: {NO_VARIABLES}"]


def _head(text: str, limit: int) -> list[str]:
    return text.splitlines()[:limit]


def format_capture(frame: CapturedFrame, context: ProjectContext) -> str:
    """Module-level shortcut for ``CaptureFormatter().format``."""
    return CaptureFormatter().format(frame, context)
