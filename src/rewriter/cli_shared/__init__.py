# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic CLI helpers (console protocol, exit codes)."""
