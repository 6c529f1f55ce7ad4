"""Logging utilities for glyphpack."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from glyphpack.domain.request import PipelineStage

_HANDLER_MARKER = "_glyphpack_handler"


@dataclass
class CompileStats:
    """Statistics from a compile run."""

    compiled_count: int = 0
    failed_count: int = 0
    total_bytes: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    durations_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_font_time_ms(self) -> float | None:
        """Average per-font compile time."""
        if not self.durations_ms:
            return None
        return sum(self.durations_ms) / len(self.durations_ms)


def _tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and, optionally, a file.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(_tag(file_handler))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(_tag(console_handler))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphpack")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


def get_logger(name: str = "glyphpack") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger without reconfiguring logging."""
    return structlog.get_logger(name)


class CompileLogger:
    """Logger for tracking compile progress and statistics.

    Safe to share between the worker threads of a batch compile.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = CompileStats()
        self._lock = threading.Lock()

    def log_stage(self, artifact: str, stage: PipelineStage, **details: object) -> None:
        """Log a pipeline stage transition."""
        self._logger.debug("Stage reached", artifact=artifact, stage=stage.value, **details)

    def log_font_complete(self, artifact: str, size_bytes: int, duration_ms: float) -> None:
        """Log a successful compile."""
        self._logger.info(
            "Font compiled",
            artifact=artifact,
            bytes=size_bytes,
            duration_ms=round(duration_ms, 2),
        )
        with self._lock:
            self._stats.compiled_count += 1
            self._stats.total_bytes += size_bytes
            self._stats.durations_ms.append(duration_ms)

    def log_font_error(self, artifact: str, error: Exception) -> None:
        """Log a failed compile."""
        self._logger.error(
            "Font compile failed",
            artifact=artifact,
            stage=PipelineStage.FAILED.value,
            error=str(error),
            error_type=type(error).__name__,
        )
        with self._lock:
            self._stats.failed_count += 1
            self._stats.errors.append((artifact, str(error)))

    def log_missing_glyphs(self, artifact: str, font_path: str, missing: list[int]) -> None:
        """Log requested code points the font does not map."""
        self._logger.warning(
            "Font lacks requested glyphs",
            artifact=artifact,
            font=font_path,
            missing=[f"U+{value:04X}" for value in missing[:20]],
            missing_count=len(missing),
        )

    @property
    def stats(self) -> CompileStats:
        """Get current compile statistics."""
        return self._stats
