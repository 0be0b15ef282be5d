"""
Generate Use Case - capture a paused frame and write an AI-generated test.

This module implements the single pipeline dessert runs per user action.
It is a thin orchestrator over focused services:
- SourceInspector: language, package and enclosing method of the frame
- ProjectInspector: build system, build descriptor, multiplatform layout
- VariableExtractor: bounded, time-limited snapshot of frame locals
- PathResolver: destination test file and its existing content
- CaptureFormatter + PromptBuilder: the provider-neutral instruction
- LLMPort: one request to the configured provider
- TestFileWriter: verbatim overwrite of the destination
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..adapters.debugger.variable_extractor import VariableExtractor
from ..adapters.io.writer_overwrite import TestFileWriter
from ..adapters.llm.router import LLMRouter
from ..config.credentials import CredentialManager
from ..config.models import DessertConfig
from ..domain.models import CapturedFrame, DebugSessionError
from ..ports.debugger_port import FramePort, ProjectPort, SessionPort
from ..ports.llm_port import LLMPort
from ..ports.progress_port import NullProgress, ProgressPort
from ..prompts.builder import PromptBuilder
from .cancellation import CancellationToken
from .generation.services.capture_formatter import CaptureFormatter
from .generation.services.path_resolver import PathResolver
from .generation.services.project_inspector import ProjectInspector
from .generation.services.source_inspector import SourceInspector

logger = logging.getLogger(__name__)


class GenerateTestUseCase:
    """
    Core use case for debugger-driven test generation.

    One instance serves one run: ``cancel()`` flips the run's cancellation
    token, which the pipeline polls between stages and around the provider
    call. A cancelled run raises ``GenerationCancelled`` and writes nothing.
    """

    def __init__(
        self,
        config: DessertConfig | None = None,
        llm_port: LLMPort | None = None,
        credential_manager: CredentialManager | None = None,
        extractor: VariableExtractor | None = None,
        resolver: PathResolver | None = None,
        writer: TestFileWriter | None = None,
        prompt_builder: PromptBuilder | None = None,
        progress: ProgressPort | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """
        Initialize the use case.

        Args:
            config: Effective configuration (defaults when None)
            llm_port: Provider adapter; built from ``config.llm`` when None
            credential_manager: API key source (reads ``API_KEY``)
            extractor: Variable extractor; uses the configured timeout when None
            resolver: Test path resolver
            writer: Test file writer
            prompt_builder: Prompt builder
            progress: Progress sink for stage updates
            cancellation: Shared cancellation token
        """
        self._config = config or DessertConfig()
        self._llm = llm_port
        self._credentials = credential_manager or CredentialManager()
        self._extractor = extractor or VariableExtractor(
            timeout=self._config.capture.variable_timeout_seconds
        )
        self._resolver = resolver or PathResolver()
        self._writer = writer or TestFileWriter()
        self._formatter = CaptureFormatter()
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._progress = progress or NullProgress()
        self.cancellation = cancellation or CancellationToken()

    def cancel(self) -> None:
        """Request cancellation of the running pipeline."""
        self.cancellation.cancel()

    def run(self, frame: FramePort, session: SessionPort, project: ProjectPort) -> Path:
        """
        Capture ``frame``, generate a test and write it.

        Returns:
            Absolute path of the written test file

        Raises:
            DebugSessionError: No paused session, source file or project root
            UnsupportedLanguageError: The frame's file is not Kotlin, Java or Scala
            ConfigurationError: Unknown provider or missing API key
            ProviderError: The provider call failed
            FilesystemError: The test directory or file could not be written
            GenerationCancelled: ``cancel()`` was called before the write
        """
        # 1. Preconditions
        self._progress.update("Preparing debugger data...", 0.1)
        source_path, project_root = self._preconditions(frame, session, project)
        language = SourceInspector.detect_language(source_path.name)
        logger.debug("Detected source language: %s", language.name)

        # 2. Provider and credentials, before any network call
        llm = self._llm or LLMRouter.from_config(self._config.llm)
        api_key = self._credentials.get_api_key(llm.provider)
        model = self._config.llm.resolved_model
        self.cancellation.raise_if_cancelled("inspection")

        # 3. Project facts and frame snapshot
        source_text = SourceInspector.read_source(source_path)
        context = ProjectInspector.inspect(project_root, source_text)
        method_signature = SourceInspector.find_method_signature(
            source_text, frame.line, language
        )
        self.cancellation.raise_if_cancelled("capture")

        self._progress.update("Capturing debugger state...", 0.2)
        snapshot = self._extractor.snapshot(frame)
        captured = CapturedFrame(
            source_file_name=source_path.name,
            source_line=frame.line,
            method_signature=method_signature,
            variables=snapshot.variables,
            file_content=source_text,
            variables_error=None if snapshot.variables else snapshot.error,
        )
        self.cancellation.raise_if_cancelled("prompt assembly")

        # 4. Destination and prompt
        target = self._resolver.resolve(
            source_path,
            project_root,
            language,
            context.build_system,
            context.is_multi_target,
        )
        capture_block = self._formatter.format(captured, context)
        prompt = self._prompt_builder.build(
            capture_block,
            language,
            context.build_system,
            package_name=context.package_name,
            existing_test_content=target.existing_content,
        )
        logger.info(
            "%s test at %s",
            "Extending" if target.is_merge else "Creating",
            target.absolute_path,
        )

        # 5. Generate and write
        self._progress.update(f"Sending request to AI provider ({llm.provider})...", 0.4)
        generated = llm.generate(prompt, model, api_key, self.cancellation)
        self.cancellation.raise_if_cancelled("write")

        self._progress.update("Creating test file...", 0.8)
        written = self._writer.write(target, generated)

        self._progress.update("Done", 1.0)
        return written

    @staticmethod
    def _preconditions(
        frame: FramePort | None, session: SessionPort | None, project: ProjectPort | None
    ) -> tuple[Path, Path]:
        if session is None or not session.is_paused:
            raise DebugSessionError("No active debug session. Start debugging and pause at a breakpoint.")
        if frame is None:
            raise DebugSessionError("No stack frame available")
        source_file = frame.source_file
        if source_file is None:
            raise DebugSessionError("No source file for the current stack frame")
        base_path = project.base_path if project is not None else None
        if base_path is None:
            raise DebugSessionError("Project base path not available")
        return Path(source_file), Path(base_path)
