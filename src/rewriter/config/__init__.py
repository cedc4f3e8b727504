# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for Rewriter.

This package holds the immutable pipeline description model
([`rewriter.config.descriptors`][rewriter.config.descriptors]), the processing
options normalization utility ([`rewriter.config.options`][rewriter.config.options]),
the TOML loader ([`rewriter.config.io`][rewriter.config.io]) and the logging
setup ([`rewriter.config.logging`][rewriter.config.logging]).
"""

from __future__ import annotations

from rewriter.config.descriptors import EMPTY_DESCRIPTOR, PipelineDescription, StageDescriptor
from rewriter.config.options import ProcessingOptions

__all__: list[str] = [
    "EMPTY_DESCRIPTOR",
    "PipelineDescription",
    "ProcessingOptions",
    "StageDescriptor",
]
