"""
Prompt builder with versioned templates.

Combines the formatted debugger capture, the build-system testing hint and
any existing test content into one provider-neutral instruction. Exactly one
of two templates is used: "extend" when there is existing test content,
"create" otherwise.
"""

from __future__ import annotations

import logging
import re

from ..domain.models import BuildSystem, DessertError, SourceLanguage
from .templates.v1.user import user_prompt_create_test_v1, user_prompt_extend_test_v1

logger = logging.getLogger(__name__)


class PromptError(DessertError):
    """Raised when prompt generation fails."""


BUILD_SYSTEM_INSTRUCTIONS: dict[BuildSystem, str] = {
    BuildSystem.GRADLE: "This is a Gradle project. Use appropriate Gradle test configurations.",
    BuildSystem.MAVEN: "This is a Maven project. Use appropriate Maven test configurations.",
    BuildSystem.SBT: "This is an SBT project. Use appropriate SBT test configurations.",
    BuildSystem.BAZEL: (
        "This is a Bazel project. Use appropriate Bazel test targets and BUILD file configurations."
    ),
    BuildSystem.UNKNOWN: "Build system not detected. Use standard testing practices.",
}


def sanitize_code(code: str) -> str:
    """
    Apply minimal sanitization to embedded code and captures.

    Removes control characters that could break formatting while keeping
    every identifier and line break intact.
    """
    return re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F]", "", code)


class PromptBuilder:
    """Builds the create/extend test instruction."""

    SUPPORTED_VERSIONS = {"v1"}

    def __init__(self, version: str = "v1") -> None:
        if version not in self.SUPPORTED_VERSIONS:
            raise PromptError(f"Unsupported prompt version: {version}")
        self.version = version
        self._templates = {
            "v1": {
                "create": user_prompt_create_test_v1(),
                "extend": user_prompt_extend_test_v1(),
            }
        }

    def build(
        self,
        capture_block: str,
        language: SourceLanguage,
        build_system: BuildSystem,
        package_name: str = "",
        existing_test_content: str | None = None,
    ) -> str:
        """
        Build the instruction for one run.

        Args:
            capture_block: Output of the capture formatter
            language: Language the test must be written in
            build_system: Build system of the host project
            package_name: Package the generated file must declare ("" for default)
            existing_test_content: Current content of the generated test file

        Returns:
            The prompt text
        """
        template_key = self.select_template(existing_test_content)
        template = self._templates[self.version][template_key]

        prompt = template.format(
            language=language.name,
            capture_block=sanitize_code(capture_block),
            existing_test_content=sanitize_code(existing_test_content or ""),
            build_instructions=BUILD_SYSTEM_INSTRUCTIONS[build_system],
            package_name=package_name,
        )
        logger.debug(
            "Built '%s' prompt (%s, %s, %d chars)",
            template_key,
            language.name,
            build_system.label,
            len(prompt),
        )
        return prompt

    @staticmethod
    def select_template(existing_test_content: str | None) -> str:
        """Return "extend" for non-empty existing content, else "create"."""
        return "extend" if existing_test_content else "create"
