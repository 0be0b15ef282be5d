"""Global fixtures and utilities for the dessert test suite.

Provides in-memory debugger host doubles (frames, sessions, projects) and
builders for throwaway Gradle/Maven/Bazel project trees.
"""

import threading
from pathlib import Path
from textwrap import dedent

import pytest

from dessert.adapters.io.enhanced_logging import LoggerManager
from dessert.application.cancellation import CancellationToken
from dessert.config.models import DessertConfig


# ================================================================================
# Debugger host doubles
# ================================================================================


class FakeValue:
    """Value handle returning a fixed value or raising a fixed error."""

    def __init__(self, value=None, error: Exception | None = None):
        self.value = value
        self.error = error

    def compute_value(self):
        if self.error is not None:
            raise self.error
        return self.value


class FakeFrame:
    """Frame that replays scripted callback events on ``compute_children``.

    ``events`` is a list of tuples: ("batch", [(name, handle), ...], last),
    ("too_many", remaining) or ("error", message). With ``block`` set the
    frame never finishes until the event is released.
    """

    def __init__(self, source_file=None, line=1, events=None, block: threading.Event | None = None):
        self._source_file = Path(source_file) if source_file else None
        self._line = line
        self.events = events or []
        self.block = block

    @property
    def source_file(self):
        return self._source_file

    @property
    def line(self):
        return self._line

    def compute_children(self, node):
        for event in self.events:
            kind = event[0]
            if kind == "batch":
                node.add_children(event[1], event[2])
            elif kind == "too_many":
                node.too_many_children(event[1])
            elif kind == "error":
                node.set_error_message(event[1])
        if self.block is not None:
            self.block.wait(5)


class FakeSession:
    def __init__(self, paused: bool = True):
        self._paused = paused

    @property
    def is_paused(self):
        return self._paused


class FakeProject:
    def __init__(self, base_path):
        self._base_path = Path(base_path) if base_path else None

    @property
    def base_path(self):
        return self._base_path


class FakeLLM:
    """Records prompts and returns a canned answer."""

    provider = "gemini"

    def __init__(self, answer: str = "package com.example\n\nclass FooTest\n", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[dict] = []
        self.on_call = None

    def generate(self, prompt, model, api_key, cancellation=None):
        if cancellation is not None:
            cancellation.raise_if_cancelled("request")
        self.calls.append({"prompt": prompt, "model": model, "api_key": api_key})
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        if cancellation is not None:
            cancellation.raise_if_cancelled("response")
        return self.answer


def batch(*pairs, last=True):
    """Build a ("batch", ...) event from (name, value) pairs."""
    return ("batch", [(name, value if isinstance(value, FakeValue) else FakeValue(value)) for name, value in pairs], last)


# ================================================================================
# Project tree builders
# ================================================================================

KOTLIN_SOURCE = dedent(
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


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def gradle_project(tmp_path):
    """Gradle project with ``moduleA/src/main/kotlin/com/example/Foo.kt``."""
    write_file(tmp_path / "build.gradle.kts", 'plugins {\n    kotlin("jvm") version "1.9.0"\n}\n')
    source = write_file(
        tmp_path / "moduleA" / "src" / "main" / "kotlin" / "com" / "example" / "Foo.kt",
        KOTLIN_SOURCE,
    )
    return tmp_path, source


@pytest.fixture
def bazel_project(tmp_path):
    """Bazel workspace with ``libs/foo/Bar.java``."""
    write_file(tmp_path / "WORKSPACE", 'workspace(name = "demo")\n')
    write_file(tmp_path / "BUILD", 'java_library(name = "root")\n')
    source = write_file(
        tmp_path / "libs" / "foo" / "Bar.java",
        "package libs.foo;\n\npublic class Bar {\n    public int twice(int x) {\n        return x * 2;\n    }\n}\n",
    )
    return tmp_path, source


# ================================================================================
# Environment and config
# ================================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep provider variables from the developer's shell out of every test."""
    for name in ("AI_PROVIDER", "MODEL_NAME", "API_KEY", "DESSERT_QUIET"):
        monkeypatch.delenv(name, raising=False)
    import os

    for name in list(os.environ):
        if name.startswith("DESSERT_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    LoggerManager.reset()


@pytest.fixture
def config():
    return DessertConfig()


@pytest.fixture
def token():
    return CancellationToken()
