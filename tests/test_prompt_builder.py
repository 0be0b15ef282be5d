"""Tests for the versioned create/extend prompt builder."""

import pytest

from dessert.prompts.builder import (
    BUILD_SYSTEM_INSTRUCTIONS,
    PromptBuilder,
    PromptError,
    sanitize_code,
)
from dessert.domain.models import BuildSystem, DessertError, SourceLanguage

CAPTURE = "=== DEBUGGER CAPTURE ===\nCurrent Location: Foo.kt:5\n"


class TestTemplateSelection:
    """Test create/extend selection."""

    @pytest.mark.parametrize(
        "existing,expected",
        [(None, "create"), ("", "create"), ("class FooTest", "extend"), ("   ", "extend")],
    )
    def test_select_template(self, existing, expected):
        """Any non-empty existing content, whitespace included, selects extend."""
        assert PromptBuilder.select_template(existing) == expected


class TestPromptBuilder:
    """Test prompt content."""

    def test_create_prompt(self):
        prompt = PromptBuilder().build(
            CAPTURE, SourceLanguage.KOTLIN, BuildSystem.GRADLE, package_name="com.example"
        )

        assert prompt.startswith("Please create unit test(s) in KOTLIN for the method shown in Frame 0")
        assert CAPTURE in prompt
        assert BUILD_SYSTEM_INSTRUCTIONS[BuildSystem.GRADLE] in prompt
        assert "Arrange-Act-Assert" in prompt
        assert "import all required dependencies explicitly" in prompt
        assert "Tests should succeed to compile." in prompt
        assert "Do not use code blocks with triple backticks" in prompt
        assert prompt.endswith("ALWAYS start the file with the exact package declaration: package com.example")
        assert "EXISTING TEST FILE CONTENT" not in prompt

    def test_extend_prompt(self):
        prompt = PromptBuilder().build(
            CAPTURE,
            SourceLanguage.JAVA,
            BuildSystem.MAVEN,
            package_name="libs.foo",
            existing_test_content="class BarTest {}",
        )

        assert prompt.startswith("Please extend the existing test class with new unit test(s) in JAVA")
        assert "EXISTING TEST FILE CONTENT:\nclass BarTest {}\n" in prompt
        assert f"NEW DEBUGGER OUTPUT TO ADD:\n{CAPTURE}" in prompt
        assert BUILD_SYSTEM_INSTRUCTIONS[BuildSystem.MAVEN] in prompt
        assert "package libs.foo" in prompt

    def test_empty_package_keeps_declaration_line(self):
        prompt = PromptBuilder().build(CAPTURE, SourceLanguage.SCALA, BuildSystem.SBT)

        assert prompt.endswith("ALWAYS start the file with the exact package declaration: package ")

    def test_braces_in_capture_are_preserved(self):
        """Code with braces is embedded as-is, not treated as template fields."""
        capture = "fun f() { val m = mapOf(1 to {x}) }"

        prompt = PromptBuilder().build(capture, SourceLanguage.KOTLIN, BuildSystem.UNKNOWN)

        assert capture in prompt
        assert BUILD_SYSTEM_INSTRUCTIONS[BuildSystem.UNKNOWN] in prompt

    @pytest.mark.parametrize("build_system", list(BuildSystem))
    def test_every_build_system_has_a_hint(self, build_system):
        prompt = PromptBuilder().build(CAPTURE, SourceLanguage.KOTLIN, build_system)

        assert BUILD_SYSTEM_INSTRUCTIONS[build_system] in prompt

    def test_control_characters_are_stripped(self):
        prompt = PromptBuilder().build("a\x00b\x07c\n", SourceLanguage.KOTLIN, BuildSystem.GRADLE)

        assert "abc\n" in prompt

    def test_unsupported_version(self):
        with pytest.raises(PromptError):
            PromptBuilder(version="v9")

    def test_prompt_error_is_dessert_error(self):
        assert issubclass(PromptError, DessertError)


class TestSanitizeCode:
    def test_keeps_newlines_and_tabs(self):
        assert sanitize_code("a\n\tb\r\n") == "a\n\tb\r\n"
