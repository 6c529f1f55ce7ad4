"""Exception hierarchy for glyphpack."""


class GlyphpackError(Exception):
    """Base exception for all glyphpack errors."""

    pass


class FontNotFoundError(GlyphpackError):
    """Font source does not exist at the resolved path."""

    detail = "does not exist"

    def __init__(self, path: str, root: str | None = None) -> None:
        self.path = path
        self.root = root
        if root is not None:
            message = f"Font file {self.detail} (relative to {root}): {path}"
        else:
            message = f"Font file {self.detail}: {path}"
        super().__init__(message)


class FontUnreadableError(FontNotFoundError):
    """Font source exists but cannot be opened for reading."""

    detail = "is not readable"


class SelectionError(GlyphpackError):
    """Errors related to character selection."""

    pass


class EmptySelectionError(SelectionError):
    """Character selection resolved to no code points."""

    def __init__(self) -> None:
        super().__init__("Character selection resolved to an empty code point set")


class UnknownCharacterSetError(SelectionError):
    """Named character set does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown character set '{name}'")


class ConversionServiceError(GlyphpackError):
    """Errors raised at the boundary of an external conversion tool."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(message)


class ConversionServiceUnavailableError(ConversionServiceError):
    """Conversion tool executable could not be started."""

    def __init__(self, stage: str, executable: str, reason: str) -> None:
        self.executable = executable
        self.reason = reason
        super().__init__(
            stage, f"{stage} tool '{executable}' could not be started: {reason}"
        )


class ConversionServiceFailedError(ConversionServiceError):
    """Conversion tool ran and exited with a non-zero status."""

    def __init__(self, stage: str, exit_code: int, stderr: str) -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"{stage} tool exited with code {exit_code}"
        if stderr:
            message += f": {stderr}"
        super().__init__(stage, message)


class IntermediateError(GlyphpackError):
    """Errors around the transient bitmap file."""

    def __init__(self, path: str, reason: str, message: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(message)


class IntermediateWriteError(IntermediateError):
    """Intermediate bitmap file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            path, reason, f"Failed to write intermediate file '{path}': {reason}"
        )


class IntermediateCleanupError(IntermediateError):
    """Intermediate bitmap file could not be removed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            path, reason, f"Failed to remove intermediate file '{path}': {reason}"
        )


class ManifestError(GlyphpackError):
    """Font manifest could not be loaded or validated."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid font manifest '{path}': {reason}")


class ToolchainBuildError(GlyphpackError):
    """Packer tool could not be built."""

    def __init__(self, tool_dir: str, reason: str) -> None:
        self.tool_dir = tool_dir
        self.reason = reason
        super().__init__(f"Failed to build tools in '{tool_dir}': {reason}")
