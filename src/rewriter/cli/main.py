# topmark:header:start
#
#   project      : Rewriter
#   file         : main.py
#   file_relpath : src/rewriter/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point of the Rewriter CLI.

Key ideas:
- Group-level options are initialized once, placed into ``ctx.obj``.
- Program output goes through the console in ``ctx.obj["console"]``;
  internal logging is configured from ``REWRITER_LOG_LEVEL``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rewriter.cli.commands.run import run_command
from rewriter.cli.commands.stages import stages_command
from rewriter.cli.commands.version import version_command
from rewriter.cli.console import ClickConsole
from rewriter.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from rewriter.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from rewriter.cli_shared.console_api import ConsoleLike
    from rewriter.config.logging import RewriterLogger

logger: RewriterLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Program-output verbosity:
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging via env:
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Rewriter CLI: run markup documents through generator/transformer/serializer pipelines.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Rewriter CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'rewriter run --pipeline PIPELINE.toml [INPUT]'.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(stages_command)

cli.add_command(run_command)

if __name__ == "__main__":
    cli()
