# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter pipeline core.

This package contains the components that assemble and drive a pipeline:

- Stage contracts and the stage factory protocol
- The assembler merging injected and explicit transformers and wiring the chain
- The runner exposing the entry point and normalizing faults on ``finish()``
- The error vocabulary and lifecycle states

The public API is composed of [`Pipeline`][rewriter.pipeline.runner.Pipeline],
[`assemble`][rewriter.pipeline.assembler.assemble] and the shared context model in
[`rewriter.pipeline.context`][rewriter.pipeline.context].
"""

from __future__ import annotations

from rewriter.pipeline.assembler import AssembledPipeline, assemble
from rewriter.pipeline.context import ProcessingContext
from rewriter.pipeline.factory import InjectedTransformers, StageFactory
from rewriter.pipeline.runner import Pipeline
from rewriter.pipeline.status import PipelineState

__all__: list[str] = [
    "AssembledPipeline",
    "InjectedTransformers",
    "Pipeline",
    "PipelineState",
    "ProcessingContext",
    "StageFactory",
    "assemble",
]
