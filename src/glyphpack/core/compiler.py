"""Compile pipeline orchestration.

This module sequences the stages of one font compile and runs batches of
independent compiles on a thread pool.

Pipeline per request:
1. Resolve the font path against the project root
2. Resolve the character selection to code points
3. Rasterize with otf2bdf
4. Park the bitmap in the intermediate file and pack it with bdfconv
5. Hand the packed artifact to the emitter
"""

import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from glyphpack.config import GlyphpackSettings
from glyphpack.core.packer import FontPacker
from glyphpack.core.rasterizer import Rasterizer
from glyphpack.domain import (
    CodePointSet,
    FontRequest,
    PackedFontArtifact,
    PipelineStage,
    resolve_selection,
    selector_for,
)
from glyphpack.emit import FontEmitter
from glyphpack.exceptions import GlyphpackError
from glyphpack.io import (
    intermediate_file,
    intermediate_path_for,
    missing_code_points,
    resolve_font_path,
)
from glyphpack.utils import CompileLogger, CompileStats, get_logger


@dataclass
class BatchResult:
    """Outcome of compiling several requests.

    Attributes:
        artifacts: Packed artifacts, in request order
        errors: Failures keyed by artifact name
        stats: Run statistics
    """

    artifacts: list[PackedFontArtifact] = field(default_factory=list)
    errors: dict[str, GlyphpackError] = field(default_factory=dict)
    stats: CompileStats = field(default_factory=CompileStats)

    @property
    def ok(self) -> bool:
        return not self.errors


class FontCompiler:
    """Compiles font requests into packed artifacts.

    Paths and tool locations come from the settings passed in; the compiler
    itself reads no environment. The rasterizer and packer can be replaced,
    which is how tests substitute stub tools.

    Example:
        compiler = FontCompiler(settings, emitter=RustFontEmitter())
        artifact = compiler.compile(
            FontRequest("fonts/x.ttf", "Body12", 12, CharacterSelection.of(NamedSet.NUMBERS))
        )
    """

    def __init__(
        self,
        settings: GlyphpackSettings,
        emitter: FontEmitter | None = None,
        rasterizer: Rasterizer | None = None,
        packer: FontPacker | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.settings = settings
        self.emitter = emitter
        self.rasterizer = rasterizer or Rasterizer.from_config(settings.toolchain)
        self.packer = packer or FontPacker.from_config(settings.toolchain)
        self.logger = logger or get_logger()
        self.compile_logger = CompileLogger(self.logger)

    @property
    def stats(self) -> CompileStats:
        return self.compile_logger.stats

    def compile(self, request: FontRequest) -> PackedFontArtifact:
        """Compile one font request.

        Args:
            request: Font, size, selection and artifact name

        Returns:
            The packed artifact, already handed to the emitter if there is one

        Raises:
            FontNotFoundError: If the font file does not exist or is unreadable
            EmptySelectionError: If the selection contains no characters
            ConversionServiceUnavailableError: If a tool cannot be started
            ConversionServiceFailedError: If a tool reports failure
            IntermediateWriteError: If the bitmap file cannot be written
            IntermediateCleanupError: If the bitmap file cannot be removed
        """
        return self._compile(request, self.compile_logger)

    def _compile(self, request: FontRequest, compile_logger: CompileLogger) -> PackedFontArtifact:
        name = request.artifact_name
        start_time = time.perf_counter()
        compile_logger.log_stage(name, PipelineStage.START, source=request.source_path)

        try:
            artifact = self._run(request, compile_logger)
        except GlyphpackError as e:
            compile_logger.log_font_error(name, e)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        compile_logger.log_font_complete(name, artifact.size, duration_ms)
        return artifact

    def _run(self, request: FontRequest, compile_logger: CompileLogger) -> PackedFontArtifact:
        name = request.artifact_name
        toolchain = self.settings.toolchain

        font_path = resolve_font_path(self.settings.paths.project_root, request.source_path)
        compile_logger.log_stage(name, PipelineStage.PATH_RESOLVED, path=str(font_path))

        code_points: CodePointSet | None = None
        if request.selection is not None:
            code_points = resolve_selection(request.selection)
        compile_logger.log_stage(
            name,
            PipelineStage.CHARS_RESOLVED,
            code_points=len(code_points) if code_points is not None else None,
        )

        if code_points is not None and self.settings.compile.check_coverage:
            self._check_coverage(name, font_path, code_points, compile_logger)

        bitmap = self.rasterizer.rasterize(
            font_path,
            request.pixel_size,
            selector_for(code_points, toolchain.rasterizer_default_range),
        )
        compile_logger.log_stage(name, PipelineStage.RASTERIZED, bytes=len(bitmap))

        with intermediate_file(font_path, bitmap, toolchain.intermediate_suffix) as bitmap_path:
            data = self.packer.pack(
                bitmap_path,
                selector_for(code_points, toolchain.packer_default_range),
            )
        compile_logger.log_stage(name, PipelineStage.PACKED, bytes=len(data))

        artifact = PackedFontArtifact(name=name, data=data)
        if self.emitter is not None:
            self.emitter.emit(artifact)
            compile_logger.log_stage(name, PipelineStage.EMITTED)

        return artifact

    def _check_coverage(
        self,
        name: str,
        font_path: Path,
        code_points: CodePointSet,
        compile_logger: CompileLogger,
    ) -> None:
        """Warn about requested code points the font does not map."""
        try:
            missing = missing_code_points(font_path, code_points)
        except Exception as e:
            self.logger.warning(
                "Coverage check skipped",
                artifact=name,
                font=str(font_path),
                error=str(e),
            )
            return

        if missing:
            compile_logger.log_missing_glyphs(name, str(font_path), missing)

    def compile_many(
        self,
        requests: Sequence[FontRequest],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> BatchResult:
        """Compile independent requests in parallel.

        A failing request does not stop the others. Requests whose fonts map
        to the same intermediate path (x.ttf and x.otf, or the same font twice)
        run one at a time. Each batch gets its own statistics; the compiler's
        ``stats`` only cover single ``compile`` calls.

        Args:
            requests: Requests to compile
            max_workers: Worker threads (None uses settings, then the executor default)
            progress_callback: Called with (completed, total) after each request

        Returns:
            Artifacts in request order, errors by artifact name, and statistics
        """
        workers = max_workers or self.settings.compile.max_workers
        root = self.settings.paths.project_root
        suffix = self.settings.toolchain.intermediate_suffix
        batch_logger = CompileLogger(self.logger)
        locks: dict[Path, threading.Lock] = {}
        locks_guard = threading.Lock()

        def run(request: FontRequest) -> PackedFontArtifact:
            try:
                font_path = resolve_font_path(root, request.source_path)
            except GlyphpackError:
                # Fails again inside _compile, which records the error
                return self._compile(request, batch_logger)

            with locks_guard:
                lock = locks.setdefault(intermediate_path_for(font_path, suffix), threading.Lock())
            with lock:
                return self._compile(request, batch_logger)

        stats = batch_logger.stats
        stats.start_time = time.time()
        results: dict[int, PackedFontArtifact] = {}
        errors: dict[str, GlyphpackError] = {}

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(run, request): index for index, request in enumerate(requests)}
            completed = 0
            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except GlyphpackError as e:
                    errors[requests[index].artifact_name] = e
                completed += 1
                if progress_callback is not None:
                    progress_callback(completed, len(requests))

        stats.end_time = time.time()
        return BatchResult(
            artifacts=[results[index] for index in sorted(results)],
            errors=errors,
            stats=stats,
        )
