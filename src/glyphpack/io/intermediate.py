"""Transient bitmap file between the rasterizer and the packer.

The rasterizer writes to stdout but the packer only reads files, so its
output is parked next to the font source with the bitmap extension and
removed as soon as the packer is done with it, whatever the outcome.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

import structlog

from glyphpack.exceptions import IntermediateCleanupError, IntermediateWriteError

T = TypeVar("T")

logger = structlog.get_logger("glyphpack.intermediate")


def intermediate_path_for(base_path: Path, suffix: str = ".bdf") -> Path:
    """Derive the intermediate path by swapping the extension.

    Converts: fonts/Inter.ttf -> fonts/Inter.bdf
    """
    return base_path.with_suffix(suffix)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise IntermediateCleanupError(str(path), str(e)) from e


@contextmanager
def intermediate_file(
    base_path: Path,
    data: bytes,
    suffix: str = ".bdf",
) -> Iterator[Path]:
    """Write ``data`` to the intermediate path for the duration of the block.

    The file is created exclusively, so an existing file at the derived path
    is never touched. Once created it is removed on every exit path. A
    cleanup failure is raised as IntermediateCleanupError only when the block
    itself succeeded; otherwise it is logged and the block's error propagates.

    Args:
        base_path: Font source path the intermediate name derives from
        data: Bytes to write
        suffix: Intermediate extension

    Yields:
        Path of the written file

    Raises:
        IntermediateWriteError: If the file already exists or cannot be written
        IntermediateCleanupError: If the file cannot be removed
    """
    path = intermediate_path_for(base_path, suffix)
    if path == base_path:
        raise IntermediateWriteError(
            str(path), "intermediate path would overwrite the font source"
        )
    try:
        f = path.open("xb")
    except FileExistsError as e:
        raise IntermediateWriteError(str(path), "file already exists") from e
    except OSError as e:
        raise IntermediateWriteError(str(path), str(e)) from e

    try:
        with f:
            f.write(data)
    except OSError as e:
        try:
            _remove(path)
        except IntermediateCleanupError as cleanup_error:
            logger.error("Intermediate cleanup failed", path=str(path), error=str(cleanup_error))
        raise IntermediateWriteError(str(path), str(e)) from e

    logger.debug("Intermediate written", path=str(path), bytes=len(data))

    try:
        yield path
    except BaseException:
        try:
            _remove(path)
        except IntermediateCleanupError as cleanup_error:
            logger.error("Intermediate cleanup failed", path=str(path), error=str(cleanup_error))
        raise

    _remove(path)
    logger.debug("Intermediate removed", path=str(path))


def with_intermediate(
    base_path: Path,
    data: bytes,
    fn: Callable[[Path], T],
    suffix: str = ".bdf",
) -> T:
    """Run ``fn`` on the intermediate file written from ``data``.

    See ``intermediate_file`` for the cleanup guarantees.
    """
    with intermediate_file(base_path, data, suffix) as path:
        return fn(path)
