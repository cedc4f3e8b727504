# topmark:header:start
#
#   project      : Rewriter
#   file         : version.py
#   file_relpath : src/rewriter/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter `version` command.

Prints the current Rewriter version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rewriter.constants import REWRITER_VERSION

if TYPE_CHECKING:
    from rewriter.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of Rewriter.",
)
def version_command() -> None:
    """Show the current version of Rewriter."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if int(ctx.obj.get("verbosity_level", 0)) > 0:
        console.print(console.styled("Rewriter version:", bold=True, underline=True))
        console.print(f"    {console.styled(REWRITER_VERSION, bold=True)}")
    else:
        console.print(console.styled(REWRITER_VERSION, bold=True))
