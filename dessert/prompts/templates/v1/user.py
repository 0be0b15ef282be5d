"""
User prompt templates for v1 prompts.

This module contains the two instructions sent to providers: create a new
test for the paused method, or extend an existing generated test file.
Templates are ``str.format`` strings; embedded blocks are passed as values
so braces inside captured code are left alone.
"""

from __future__ import annotations

NOTICE = (
    "NOTICE:\n"
    "====================\n"
    "Please keep test(s) as simple, short, and clear as possible - use Arrange-Act-Assert template.\n"
    "Do not rely on IDE auto-imports - import all required dependencies explicitly.\n"
    "Tests should succeed to compile.\n"
    "===================="
)

OUTPUT_RULES = (
    "IMPORTANT: Output only plain text. Do not use markdown formatting. "
    "Do not use code blocks with triple backticks (```). Do not use any markdown syntax. "
    "Return only the raw code without any formatting or explanation.\n"
    "ALWAYS start the file with the exact package declaration: package {package_name}"
)


def user_prompt_create_test_v1() -> str:
    """User prompt template for a new test file."""
    return (
        "Please create unit test(s) in {language} for the method shown in Frame 0\n"
        "\n"
        "Debugger Output:\n"
        "{capture_block}\n"
        "\n"
        "BUILD SYSTEM CONTEXT:\n"
        "{build_instructions}\n"
        "\n"
        f"{NOTICE}\n"
        f"{OUTPUT_RULES}"
    )


def user_prompt_extend_test_v1() -> str:
    """User prompt template for extending an existing test file."""
    return (
        "Please extend the existing test class with new unit test(s) in {language} "
        "for the method shown in Frame 0\n"
        "\n"
        "EXISTING TEST FILE CONTENT:\n"
        "{existing_test_content}\n"
        "\n"
        "NEW DEBUGGER OUTPUT TO ADD:\n"
        "{capture_block}\n"
        "\n"
        "BUILD SYSTEM CONTEXT:\n"
        "{build_instructions}\n"
        "\n"
        f"{NOTICE}\n"
        f"{OUTPUT_RULES}"
    )
