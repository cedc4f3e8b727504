# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter command line interface.

    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        rewriter = "rewriter.cli.main:cli"

All subcommands live in [`rewriter.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
