# topmark:header:start
#
#   project      : Rewriter
#   file         : factory.py
#   file_relpath : src/rewriter/pipeline/factory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stage factory contract consumed by the pipeline assembler.

The factory resolves an opaque type name into a fresh, uninitialized stage.
There is one method per role so the assembler never dispatches on classes;
an unknown name yields ``None``, which the assembler turns into a
[`ResolutionError`][rewriter.pipeline.errors.ResolutionError].

The default implementation is
[`StageRegistry`][rewriter.registry.stages.StageRegistry].
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol

if TYPE_CHECKING:
    from rewriter.pipeline.contracts import Generator, Serializer, Transformer


class InjectedTransformers(NamedTuple):
    """Transformers injected around the explicitly configured ones.

    Attributes:
        pre (tuple[Transformer, ...]): Run before all explicit transformers.
        post (tuple[Transformer, ...]): Run after all explicit transformers.
    """

    pre: tuple[Transformer, ...] = ()
    post: tuple[Transformer, ...] = ()


NO_INJECTED_TRANSFORMERS = InjectedTransformers()


class StageFactory(Protocol):
    """Resolves stage type names into fresh stage instances."""

    def resolve_generator(self, type_name: str) -> Generator | None:
        """Return a new generator of type ``type_name`` or ``None`` if unknown."""
        ...

    def resolve_transformer(self, type_name: str) -> Transformer | None:
        """Return a new transformer of type ``type_name`` or ``None`` if unknown."""
        ...

    def resolve_serializer(self, type_name: str) -> Serializer | None:
        """Return a new serializer of type ``type_name`` or ``None`` if unknown."""
        ...

    def injected_transformers(self) -> InjectedTransformers:
        """Return the pre/post transformers to inject into every pipeline."""
        ...
