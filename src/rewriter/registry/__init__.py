# topmark:header:start
#
#   project      : Rewriter
#   file         : __init__.py
#   file_relpath : src/rewriter/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stage registries.

[`StageRegistry`][rewriter.registry.stages.StageRegistry] is the default
[`StageFactory`][rewriter.pipeline.factory.StageFactory];
[`get_default_registry`][rewriter.registry.instances.get_default_registry]
returns one populated with the built-in and plugin stages.
"""

from __future__ import annotations

from rewriter.registry.instances import get_default_registry, register_builtin_stages
from rewriter.registry.stages import (
    StageMeta,
    StageRegistry,
    StageRole,
    register_generator,
    register_serializer,
    register_transformer,
)

__all__: list[str] = [
    "StageMeta",
    "StageRegistry",
    "StageRole",
    "get_default_registry",
    "register_builtin_stages",
    "register_generator",
    "register_serializer",
    "register_transformer",
]
