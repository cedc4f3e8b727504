# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter CLI subcommands (``run``, ``stages``, ``version``)."""
