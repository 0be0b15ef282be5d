"""
Tests for GenerateTestUseCase, the capture-to-write pipeline.

The debugger host, the provider and the API key are doubles; the project
tree, the resolver and the writer are real and work on ``tmp_path``.
"""

import threading

import pytest

from dessert.adapters.debugger.variable_extractor import VariableExtractor
from dessert.application.cancellation import GenerationCancelled
from dessert.application.generate_usecase import GenerateTestUseCase
from dessert.config.credentials import CredentialError, CredentialManager
from dessert.config.models import DessertConfig
from dessert.domain.models import DebugSessionError, UnsupportedLanguageError
from dessert.ports.llm_error import ProviderError
from tests.conftest import FakeFrame, FakeLLM, FakeProject, FakeSession, batch, write_file


class RecordingProgress:
    def __init__(self):
        self.updates: list[tuple[str, float]] = []

    def update(self, message, fraction):
        self.updates.append((message, fraction))


def make_use_case(llm=None, config=None, **kwargs):
    return GenerateTestUseCase(
        config=config or DessertConfig(),
        llm_port=llm or FakeLLM(),
        credential_manager=CredentialManager(),
        **kwargs,
    )


@pytest.fixture(autouse=True)
def api_key(clean_env, monkeypatch):
    monkeypatch.setenv("API_KEY", "test-key")


def expected_test_file(root):
    return root / "moduleA" / "src" / "test" / "kotlin" / "generated" / "FooTest.kt"


@pytest.fixture
def kotlin_frame(gradle_project):
    root, source = gradle_project
    frame = FakeFrame(
        source_file=source,
        line=5,
        events=[batch(("this", "Foo@1a2b"), ("a", 1), ("b", 2))],
    )
    return root, frame


class TestGenerateTestUseCase:
    """Test the full pipeline."""

    def test_creates_test_file(self, kotlin_frame):
        root, frame = kotlin_frame
        llm = FakeLLM(answer="package com.example\n\nclass FooTest\n")
        progress = RecordingProgress()

        written = make_use_case(llm, progress=progress).run(frame, FakeSession(), FakeProject(root))

        assert written == expected_test_file(root).absolute()
        assert written.read_text(encoding="utf-8") == "package com.example\n\nclass FooTest\n"

        call = llm.calls[0]
        assert call["model"] == "gemini-2.5-flash"
        assert call["api_key"] == "test-key"
        prompt = call["prompt"]
        assert prompt.startswith("Please create unit test(s) in KOTLIN")
        assert "Current Location: Foo.kt:5" in prompt
        assert "Build System: Gradle" in prompt
        assert "  Method: fun add(a: Int, b: Int): Int" in prompt
        assert '    a = "1"' in prompt
        assert "this =" not in prompt
        assert prompt.endswith("package com.example")

        assert [fraction for _, fraction in progress.updates] == [0.1, 0.2, 0.4, 0.8, 1.0]
        assert progress.updates[2][0] == "Sending request to AI provider (gemini)..."

    def test_extends_existing_test_file(self, kotlin_frame):
        root, frame = kotlin_frame
        write_file(expected_test_file(root), "class FooTest { fun old() {} }\n")
        llm = FakeLLM(answer="class FooTest { fun old() {}\n fun new() {} }\n")

        written = make_use_case(llm).run(frame, FakeSession(), FakeProject(root))

        prompt = llm.calls[0]["prompt"]
        assert prompt.startswith("Please extend the existing test class")
        assert "class FooTest { fun old() {} }" in prompt
        assert written.read_text(encoding="utf-8") == "class FooTest { fun old() {}\n fun new() {} }\n"

    def test_extraction_timeout_still_generates(self, gradle_project):
        """A host that never reports variables yields a capture with none."""
        root, source = gradle_project
        block = threading.Event()
        frame = FakeFrame(source_file=source, line=5, block=block)
        llm = FakeLLM()
        try:
            written = make_use_case(llm, extractor=VariableExtractor(timeout=0.05)).run(
                frame, FakeSession(), FakeProject(root)
            )
        finally:
            block.set()

        assert "  Variables: <none captured>" in llm.calls[0]["prompt"]
        assert written.exists()

    def test_enumeration_error_is_reported_in_capture(self, gradle_project):
        root, source = gradle_project
        frame = FakeFrame(source_file=source, line=5, events=[("error", "frame is gone")])
        llm = FakeLLM()

        make_use_case(llm).run(frame, FakeSession(), FakeProject(root))

        assert "  Variables: <could not extract - frame is gone>" in llm.calls[0]["prompt"]

    def test_configured_model_is_used(self, kotlin_frame):
        root, frame = kotlin_frame
        llm = FakeLLM()
        config = DessertConfig(llm={"provider": "openai", "model": "gpt-4.1"})

        make_use_case(llm, config=config).run(frame, FakeSession(), FakeProject(root))

        assert llm.calls[0]["model"] == "gpt-4.1"

    def test_bazel_project(self, bazel_project):
        root, source = bazel_project
        frame = FakeFrame(source_file=source, line=5, events=[batch(("x", 21))])
        llm = FakeLLM(answer="package libs.foo;\n")

        written = make_use_case(llm).run(frame, FakeSession(), FakeProject(root))

        assert written == (root / "libs" / "foo" / "generated" / "BarTest.java").absolute()
        prompt = llm.calls[0]["prompt"]
        assert "in JAVA" in prompt
        assert "BAZEL BUILD CONTENT:" in prompt
        assert "  Method: public int twice(int x)" in prompt


class TestPreconditions:
    """Test failures raised before any provider call."""

    def test_session_not_paused(self, kotlin_frame):
        root, frame = kotlin_frame
        llm = FakeLLM()

        with pytest.raises(DebugSessionError):
            make_use_case(llm).run(frame, FakeSession(paused=False), FakeProject(root))

        assert llm.calls == []

    def test_frame_without_source(self, tmp_path):
        with pytest.raises(DebugSessionError, match="No source file"):
            make_use_case().run(FakeFrame(), FakeSession(), FakeProject(tmp_path))

    def test_project_without_base_path(self, kotlin_frame):
        _, frame = kotlin_frame

        with pytest.raises(DebugSessionError):
            make_use_case().run(frame, FakeSession(), FakeProject(None))

    def test_unsupported_language(self, tmp_path):
        source = write_file(tmp_path / "tool.py", "print('hi')\n")
        llm = FakeLLM()

        with pytest.raises(UnsupportedLanguageError):
            make_use_case(llm).run(FakeFrame(source_file=source), FakeSession(), FakeProject(tmp_path))

        assert llm.calls == []

    def test_missing_api_key(self, kotlin_frame, monkeypatch):
        """No API key fails before the provider is called and writes nothing."""
        root, frame = kotlin_frame
        llm = FakeLLM()
        monkeypatch.delenv("API_KEY")

        with pytest.raises(CredentialError, match="API_KEY"):
            make_use_case(llm).run(frame, FakeSession(), FakeProject(root))

        assert llm.calls == []
        assert not expected_test_file(root).exists()

    def test_api_key_from_environment(self, kotlin_frame, monkeypatch):
        root, frame = kotlin_frame
        monkeypatch.setenv("API_KEY", "env-key")
        llm = FakeLLM()

        make_use_case(llm).run(frame, FakeSession(), FakeProject(root))

        assert llm.calls[0]["api_key"] == "env-key"


class TestFailuresAndCancellation:
    """Test provider failures and cancellation."""

    def test_provider_error_writes_nothing(self, kotlin_frame):
        root, frame = kotlin_frame
        llm = FakeLLM(error=ProviderError("boom", provider="claude", status_code=500, body="oops"))

        with pytest.raises(ProviderError) as exc_info:
            make_use_case(llm).run(frame, FakeSession(), FakeProject(root))

        assert exc_info.value.status_code == 500
        assert not expected_test_file(root).exists()

    def test_cancel_before_run(self, kotlin_frame):
        root, frame = kotlin_frame
        llm = FakeLLM()
        use_case = make_use_case(llm)
        use_case.cancel()

        with pytest.raises(GenerationCancelled):
            use_case.run(frame, FakeSession(), FakeProject(root))

        assert llm.calls == []
        assert not expected_test_file(root).exists()

    def test_cancel_during_provider_call(self, kotlin_frame):
        root, frame = kotlin_frame
        llm = FakeLLM()
        use_case = make_use_case(llm)
        llm.on_call = use_case.cancel

        with pytest.raises(GenerationCancelled):
            use_case.run(frame, FakeSession(), FakeProject(root))

        assert len(llm.calls) == 1
        assert not expected_test_file(root).exists()

    def test_cancelled_is_not_a_dessert_error(self):
        from dessert.domain.models import DessertError

        assert not issubclass(GenerationCancelled, DessertError)
