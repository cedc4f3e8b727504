# topmark:header:start
#
#   project      : Rewriter
#   file         : errors.py
#   file_relpath : src/rewriter/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Rewriter CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes; `cli_error_for()` maps core exceptions onto them.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from rewriter.cli_shared.exit_codes import ExitCode
from rewriter.pipeline.errors import (
    ConfigError,
    InitializationError,
    PipelineIOError,
    ResolutionError,
)


class RewriterCliError(click.ClickException):
    """Base class for all Rewriter CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()` when possible)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class RewriterUsageError(RewriterCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class RewriterConfigError(RewriterCliError):
    """Error for configuration errors (missing/invalid/malformed pipeline file)."""

    exit_code = ExitCode.CONFIG_ERROR


class RewriterFileNotFoundError(RewriterCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class RewriterIOError(RewriterCliError):
    """Error for I/O errors reading input or writing output."""

    exit_code = ExitCode.IO_ERROR


class RewriterDataError(RewriterCliError):
    """Error for input the pipeline could not process (e.g. malformed markup)."""

    exit_code = ExitCode.DATA_ERROR


class RewriterPipelineError(RewriterCliError):
    """Error for pipeline assembly failures (unknown stage, rejected configuration)."""

    exit_code = ExitCode.PIPELINE_ERROR


def cli_error_for(exc: Exception) -> RewriterCliError:
    """Map a core exception onto the matching CLI error.

    Args:
        exc (Exception): The exception raised by the configuration or pipeline layer.

    Returns:
        RewriterCliError: The CLI error carrying the right exit code.
    """
    message: str = str(exc)
    if isinstance(exc, ConfigError):
        return RewriterConfigError(message)
    if isinstance(exc, (ResolutionError, InitializationError)):
        return RewriterPipelineError(message)
    if isinstance(exc, PipelineIOError):
        cause: BaseException | None = exc.__cause__
        return RewriterDataError(f"{message} {cause}" if cause is not None else message)
    if isinstance(exc, UnicodeError):
        return RewriterDataError(f"Cannot decode input: {message}")
    if isinstance(exc, (FileNotFoundError, IsADirectoryError)):
        return RewriterFileNotFoundError(message)
    if isinstance(exc, OSError):
        return RewriterIOError(message)
    return RewriterCliError(message)
