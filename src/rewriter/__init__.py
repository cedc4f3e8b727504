# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter package.

Rewriter assembles and drives streaming markup rewriting pipelines: a
generator turns raw text into SAX events, an ordered chain of transformers
rewrites those events, and a serializer turns them into output. The package
exposes both a CLI and a small typed API for embedding.
"""

from __future__ import annotations
