# topmark:header:start
#
#   project      : Rewriter
#   file         : __main__.py
#   file_relpath : src/rewriter/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for ``python -m rewriter``.

Delegates to the Click group in [`rewriter.cli.main`][rewriter.cli.main] so the
console script and the module interface behave identically.

Examples:
    Run a pipeline using the module interface::

        python -m rewriter run --pipeline pipeline.toml page.html
"""

from __future__ import annotations

from rewriter.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
