# topmark:header:start
#
#   project      : Rewriter
#   file         : run.py
#   file_relpath : src/rewriter/cli/commands/run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter `run` command.

Loads a pipeline description from TOML, assembles it with the default stage
registry, streams the input document into the generator and finishes the
pipeline. Serialized output goes to ``--output`` or stdout. An output file is
staged next to its target as ``<name>.part`` and only replaces the target
once the pipeline finished; a failed run leaves the target untouched.

Input:
  - ``INPUT`` is a file path, or ``-`` (the default) for STDIN.

Exit codes:
  - 78 (config), 70 (unknown stage or rejected stage configuration),
    66 (input not found), 65 (malformed input), 74 (other I/O errors).
"""

from __future__ import annotations

import os
import shutil
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click

from rewriter.cli.errors import cli_error_for
from rewriter.config.io import load_pipeline_toml
from rewriter.config.logging import get_logger
from rewriter.constants import AUDIT_ATTRIBUTE
from rewriter.pipeline.context import ProcessingContext
from rewriter.pipeline.errors import ConfigError, InitializationError, ResolutionError
from rewriter.pipeline.runner import Pipeline
from rewriter.registry import get_default_registry

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO

    from rewriter.cli_shared.console_api import ConsoleLike
    from rewriter.config.io import PipelineConfig
    from rewriter.config.logging import RewriterLogger

logger: RewriterLogger = get_logger(__name__)

STDIN_MARKER: str = "-"
PART_SUFFIX: str = ".part"


def _open_input(stack: ExitStack, input_name: str, encoding: str) -> TextIO:
    if input_name == STDIN_MARKER:
        return click.get_text_stream("stdin", encoding=encoding)
    return stack.enter_context(Path(input_name).open(encoding=encoding))


@contextmanager
def _staged_output(target: Path, encoding: str) -> Iterator[TextIO]:
    """Write into ``<target>.part`` and move it over ``target`` on success."""
    part: Path = target.with_name(target.name + PART_SUFFIX)
    try:
        with part.open("w", encoding=encoding, newline="") as stream:
            yield stream
    except BaseException:
        part.unlink(missing_ok=True)
        raise
    os.replace(part, target)


def _open_output(stack: ExitStack, output: Path | None, encoding: str) -> TextIO:
    if output is None:
        return click.get_text_stream("stdout", encoding=encoding)
    return stack.enter_context(_staged_output(output, encoding))


def _report(
    console: ConsoleLike, pipeline: Pipeline, ctx: ProcessingContext, *, color: bool
) -> None:
    state: str = pipeline.state.colored() if color else pipeline.state.value
    console.info(f"Pipeline {state} ({ctx.source})")
    if not ctx.options.debug:
        return
    audit: dict[str, int] | None = ctx.attributes.get(AUDIT_ATTRIBUTE)
    if audit:
        for key, value in audit.items():
            console.info(f"  {key}: {console.styled(str(value), bold=True)}")


@click.command(
    name="run",
    help="Run a document through the pipeline described in a TOML file.",
)
@click.option(
    "--pipeline",
    "pipeline_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="TOML file describing the generator, transformers and serializer.",
)
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the serialized document to this file instead of stdout.",
)
@click.argument("input_name", metavar="[INPUT]", default=STDIN_MARKER, required=False)
def run_command(*, pipeline_path: Path, output: Path | None, input_name: str) -> None:
    """Run a document through a pipeline.

    Args:
        pipeline_path (Path): The pipeline description file.
        output (Path | None): Output file; stdout when omitted.
        input_name (str): Input file path, or ``-`` for STDIN.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    try:
        config: PipelineConfig = load_pipeline_toml(pipeline_path)
    except ConfigError as exc:
        raise cli_error_for(exc) from exc

    encoding: str = config.options.encoding
    source: str = "<stdin>" if input_name == STDIN_MARKER else input_name
    pipeline = Pipeline(get_default_registry())
    try:
        with ExitStack() as stack:
            src: TextIO = _open_input(stack, input_name, encoding)
            out: TextIO = _open_output(stack, output, encoding)
            processing = ProcessingContext(out=out, options=config.options, source=source)
            with pipeline:
                pipeline.init(processing, config.description)
                shutil.copyfileobj(src, pipeline.get_writer())
            out.flush()
    except (ResolutionError, InitializationError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Run of %s failed: %r", source, exc)
        raise cli_error_for(exc) from exc

    if vlevel > 0:
        _report(console, pipeline, processing, color=bool(ctx.obj.get("color_enabled")))
