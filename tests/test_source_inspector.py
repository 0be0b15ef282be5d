"""Tests for SourceInspector language, package and method detection."""

from textwrap import dedent

import pytest

from dessert.application.generation.services.source_inspector import (
    UNKNOWN_METHOD,
    SourceInspector,
)
from dessert.domain.models import SourceLanguage, UnsupportedLanguageError


class TestDetectLanguage:
    """Test language detection by file extension."""

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("Foo.kt", SourceLanguage.KOTLIN),
            ("Bar.java", SourceLanguage.JAVA),
            ("Baz.scala", SourceLanguage.SCALA),
        ],
    )
    def test_supported(self, file_name, expected):
        assert SourceInspector.detect_language(file_name) == expected

    @pytest.mark.parametrize("file_name", ["script.kts", "Main.groovy", "README.md", "Foo"])
    def test_unsupported(self, file_name):
        """Anything but .kt, .java and .scala is rejected."""
        with pytest.raises(UnsupportedLanguageError, match="Only Kotlin"):
            SourceInspector.detect_language(file_name)


class TestExtractPackageName:
    """Test package declaration extraction."""

    def test_kotlin_package(self):
        assert SourceInspector.extract_package_name("package com.example.app\n\nclass A") == "com.example.app"

    def test_java_package_with_semicolon(self):
        assert SourceInspector.extract_package_name("package libs.foo;\npublic class Bar {}") == "libs.foo"

    def test_no_package(self):
        assert SourceInspector.extract_package_name("class Foo {}") == ""


class TestFindMethodSignature:
    """Test upward scan for the enclosing method declaration."""

    def test_kotlin_function(self):
        source = dedent(
            """\
            package com.example

            class Foo {
                fun add(a: Int, b: Int): Int {
                    val sum = a + b
                    return sum
                }
            }
            """
        )

        signature = SourceInspector.find_method_signature(source, 5, SourceLanguage.KOTLIN)

        assert signature == "fun add(a: Int, b: Int): Int"

    def test_kotlin_private_function(self):
        source = "class A {\n    private fun secret(x: String) {\n        println(x)\n    }\n}\n"

        signature = SourceInspector.find_method_signature(source, 3, SourceLanguage.KOTLIN)

        assert signature == "private fun secret(x: String)"

    def test_java_method(self):
        source = dedent(
            """\
            public class Calc {
                public static int add(int a, int b) {
                    int sum = a + b;
                    return add2(sum, 0);
                }
            }
            """
        )

        signature = SourceInspector.find_method_signature(source, 4, SourceLanguage.JAVA)

        assert signature == "public static int add(int a, int b)"

    def test_java_ignores_return_statement(self):
        """A ``return call(...)`` line is not mistaken for a declaration."""
        source = "class A {\n    void run() {\n        return compute(1);\n    }\n}\n"

        signature = SourceInspector.find_method_signature(source, 3, SourceLanguage.JAVA)

        assert signature == "void run()"

    def test_scala_def(self):
        source = "object Main {\n  def greet(name: String): String = {\n    s\"hi $name\"\n  }\n}\n"

        signature = SourceInspector.find_method_signature(source, 3, SourceLanguage.SCALA)

        assert signature == "def greet(name: String): String"

    def test_search_window_is_limited(self):
        """Declarations more than 30 lines above the paused line are not found."""
        body = "\n".join("    val x = 1" for _ in range(40))
        source = f"fun far() {{\n{body}\n}}\n"

        signature = SourceInspector.find_method_signature(source, 40, SourceLanguage.KOTLIN)

        assert signature == UNKNOWN_METHOD

    def test_empty_source(self):
        assert SourceInspector.find_method_signature("", 1, SourceLanguage.KOTLIN) == UNKNOWN_METHOD

    def test_line_past_end_is_clamped(self):
        source = "fun only() {\n}\n"

        assert SourceInspector.find_method_signature(source, 99, SourceLanguage.KOTLIN) == "fun only()"


class TestReadSource:
    def test_reads_text(self, tmp_path):
        path = tmp_path / "Foo.kt"
        path.write_text("package a\n", encoding="utf-8")

        assert SourceInspector.read_source(path) == "package a\n"

    def test_missing_file_degrades_to_empty(self, tmp_path):
        assert SourceInspector.read_source(tmp_path / "Missing.kt") == ""

    def test_none_path(self):
        assert SourceInspector.read_source(None) == ""
