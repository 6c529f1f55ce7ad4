"""CLI application entry point for glyphpack.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from glyphpack import __version__
from glyphpack.cli.output import (
    console,
    create_progress,
    print_artifact,
    print_batch_errors,
    print_error,
    print_header,
    print_named_sets,
    print_request_info,
    print_step,
    print_success,
)
from glyphpack.config import (
    CompileConfig,
    GlyphpackSettings,
    LoggingConfig,
    PathConfig,
    settings_from_environment,
)
from glyphpack.core import FontCompiler, build_toolchain, ensure_packer
from glyphpack.domain import CharacterSelection, FontRequest, derive_artifact_name
from glyphpack.emit import RustFontEmitter
from glyphpack.exceptions import GlyphpackError
from glyphpack.io import load_requests
from glyphpack.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphpack",
    help="Compile outline fonts into subsetted, packed u8g2 bitmap fonts.",
    add_completion=False,
    no_args_is_help=True,
)

RootOption = Annotated[
    Path | None,
    typer.Option(
        "--root",
        "-r",
        help="Project root for font paths (default: $GLYPHPACK_PROJECT_ROOT or cwd)",
    ),
]
ToolDirOption = Annotated[
    Path | None,
    typer.Option(
        "--tool-dir",
        help="Directory containing bdfconv (default: $GLYPHPACK_TOOL_DIR)",
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write generated Rust source here (default: stdout)",
    ),
]
BuildToolsOption = Annotated[
    bool,
    typer.Option(
        "--build-tools",
        help="Run make in the tool directory if bdfconv is missing",
    ),
]
CoverageOption = Annotated[
    bool,
    typer.Option(
        "--coverage/--no-coverage",
        help="Warn about requested characters the font does not contain",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphpack[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compile outline fonts into subsetted, packed u8g2 bitmap fonts."""


def _build_settings(
    root: Path | None,
    tool_dir: Path | None,
    coverage: bool,
    jobs: int | None,
    log_file: Path | None,
    log_level: str,
) -> GlyphpackSettings:
    """Layer CLI options over the environment-derived settings."""
    base = settings_from_environment()
    toolchain = base.toolchain
    if tool_dir is not None:
        toolchain = toolchain.model_copy(update={"tool_dir": tool_dir.resolve()})

    return GlyphpackSettings(
        toolchain=toolchain,
        paths=base.paths if root is None else PathConfig(project_root=root),
        compile=CompileConfig(check_coverage=coverage, max_workers=jobs),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )


def _write_output(emitter: RustFontEmitter, output: Path | None) -> None:
    source = emitter.render()
    if output is None:
        typer.echo(source, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(source, encoding="utf-8")


def _setup(settings: GlyphpackSettings, quiet: bool, build_tools: bool) -> None:
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    if build_tools:
        if not quiet:
            print_step("Checking tools")
        ensure_packer(settings.toolchain)


@app.command("compile")
def compile_font(
    font: Annotated[
        str,
        typer.Argument(
            help="Font file, relative to the project root",
            show_default=False,
        ),
    ],
    name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Artifact name",
        ),
    ],
    size: Annotated[
        int,
        typer.Option(
            "--size",
            "-s",
            help="Pixel size",
            min=1,
        ),
    ],
    weight: Annotated[
        str | None,
        typer.Option(
            "--weight",
            "-w",
            help="Weight; the artifact becomes {name}{weight}{size}",
        ),
    ] = None,
    chars: Annotated[
        list[str] | None,
        typer.Option(
            "--chars",
            "-c",
            help="Literal characters to include (repeatable)",
        ),
    ] = None,
    sets: Annotated[
        list[str] | None,
        typer.Option(
            "--set",
            help="Named character set to include (repeatable, see 'glyphpack sets')",
        ),
    ] = None,
    output: OutputOption = None,
    binary: Annotated[
        Path | None,
        typer.Option(
            "--binary",
            "-b",
            help="Also write the raw packed bytes to this file",
        ),
    ] = None,
    root: RootOption = None,
    tool_dir: ToolDirOption = None,
    build_tools: BuildToolsOption = False,
    coverage: CoverageOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Compile one font into a u8g2_fonts::Font binding.

    Without --chars or --set, the tools' default ranges are used.

    Example:
        glyphpack compile fonts/Inter.ttf --name Body --size 12 --set numbers
    """
    settings = _build_settings(root, tool_dir, coverage, None, log_file, log_level)

    try:
        selection = None
        if chars or sets:
            selection = CharacterSelection.from_parts(chars=chars or [], sets=sets or [])

        artifact_name = name if weight is None else derive_artifact_name(name, size, weight)
        try:
            request = FontRequest(
                source_path=font,
                artifact_name=artifact_name,
                pixel_size=size,
                selection=selection,
            )
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(code=2) from None

        if not quiet:
            print_header(__version__)
        _setup(settings, quiet, build_tools)

        if not quiet:
            print_step("Compiling")
            print_request_info(request)

        start = time.time()
        emitter = RustFontEmitter()
        compiler = FontCompiler(settings, emitter=emitter)
        artifact = compiler.compile(request)

        if binary is not None:
            binary.parent.mkdir(parents=True, exist_ok=True)
            binary.write_bytes(artifact.data)
        _write_output(emitter, output)

        if not quiet:
            print_artifact(artifact)
            print_success(
                output_path=str(output) if output else None,
                total_time_s=time.time() - start,
                compiled=1,
                total_bytes=artifact.size,
            )

    except GlyphpackError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command("manifest")
def compile_manifest(
    manifest: Annotated[
        Path,
        typer.Argument(
            help="YAML manifest listing the fonts to compile",
            show_default=False,
        ),
    ],
    output: OutputOption = None,
    jobs: Annotated[
        int | None,
        typer.Option(
            "--jobs",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    root: RootOption = None,
    tool_dir: ToolDirOption = None,
    build_tools: BuildToolsOption = False,
    coverage: CoverageOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Compile every font in a manifest into one Rust module.

    Nothing is written if any font fails.
    """
    settings = _build_settings(root, tool_dir, coverage, jobs, log_file, log_level)

    try:
        requests = load_requests(manifest)

        if not quiet:
            print_header(__version__)
        _setup(settings, quiet, build_tools)

        emitter = RustFontEmitter()
        compiler = FontCompiler(settings, emitter=emitter)

        if not quiet:
            print_step(f"Compiling {len(requests)} fonts")
            with create_progress() as progress:
                task_id = progress.add_task("Compiling", total=len(requests))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                result = compiler.compile_many(requests, progress_callback=update_progress)
        else:
            result = compiler.compile_many(requests)

        if not result.ok:
            print_error(f"{len(result.errors)} of {len(requests)} fonts failed")
            print_batch_errors(result.errors)
            raise typer.Exit(code=1)

        _write_output(emitter, output)

        if not quiet:
            for artifact in result.artifacts:
                print_artifact(artifact)
            print_success(
                output_path=str(output) if output else None,
                total_time_s=result.stats.duration_seconds,
                compiled=result.stats.compiled_count,
                total_bytes=result.stats.total_bytes,
            )

    except GlyphpackError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command("build-tools")
def build_tools_command(
    tool_dir: ToolDirOption = None,
) -> None:
    """Build bdfconv by running make in the tool directory."""
    settings = _build_settings(None, tool_dir, True, None, None, "WARNING")
    try:
        print_step(f"Building tools in {settings.toolchain.tool_dir}")
        build_toolchain(settings.toolchain.tool_dir)
    except GlyphpackError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    console.print("  [green]done[/green]")


@app.command("sets")
def list_sets() -> None:
    """List the predefined character sets."""
    print_named_sets()


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
