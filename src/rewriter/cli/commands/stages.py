# topmark:header:start
#
#   project      : Rewriter
#   file         : stages.py
#   file_relpath : src/rewriter/cli/commands/stages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter `stages` command.

Lists the stage types registered in the default registry, grouped by role,
followed by the injected transformers (pre and post sets).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rewriter.registry import StageRole, get_default_registry

if TYPE_CHECKING:
    from rewriter.cli_shared.console_api import ConsoleLike
    from rewriter.registry import StageMeta, StageRegistry


@click.command(
    name="stages",
    help="List registered generators, transformers, serializers and injected transformers.",
)
@click.option(
    "--long",
    "show_details",
    is_flag=True,
    help="Show the implementing class and description of each stage.",
)
def stages_command(*, show_details: bool = False) -> None:
    """List the registered stages.

    Args:
        show_details (bool): If True, include class names and descriptions.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    registry: StageRegistry = get_default_registry()
    metas: list[StageMeta] = list(registry.iter_meta())

    def _line(meta: StageMeta) -> str:
        label: str = console.styled(meta.name, bold=True)
        if meta.injected is not None:
            label = f"{label} (ranking {meta.ranking})"
        if show_details:
            label = f"{label:<28} {meta.class_name}"
            if meta.description:
                label = f"{label} - {meta.description}"
        return f"  {label}"

    for role in StageRole:
        console.print(console.styled(f"{role.value.capitalize()}s:", underline=True))
        registered: list[StageMeta] = [m for m in metas if m.role == role and m.injected is None]
        if not registered:
            console.print("  (none)")
        for meta in registered:
            console.print(_line(meta))

    for position in ("pre", "post"):
        injected: list[StageMeta] = [m for m in metas if m.injected == position]
        console.print(console.styled(f"Injected transformers ({position}):", underline=True))
        if not injected:
            console.print("  (none)")
        for meta in injected:
            console.print(_line(meta))
