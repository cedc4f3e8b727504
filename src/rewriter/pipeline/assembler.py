# topmark:header:start
#
#   project      : Rewriter
#   file         : assembler.py
#   file_relpath : src/rewriter/pipeline/assembler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pipeline assembly: resolve, initialize and wire stages into one chain.

Assembly is a pure function of its inputs: the processing context, the
pipeline description, the injected transformers and the stage factory. It
never consults process-wide registries itself.

Merged transformer order
------------------------
```text
pre[0] .. pre[p-1] | explicit[0] .. explicit[k-1] | post[0] .. post[q-1]
```

Injected transformers bracket the explicitly configured ones and never
interleave with them. They are initialized with
[`EMPTY_DESCRIPTOR`][rewriter.config.descriptors.EMPTY_DESCRIPTOR].

Wiring
------
The chain is wired back to front: the serializer is the first downstream
target, each transformer (last to first) is pointed at the current target and
becomes the new target, and the generator is finally pointed at the head.

```mermaid
flowchart LR
  G[generator] --> P[pre...] --> E[explicit...] --> Q[post...] --> S[serializer]
```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rewriter.config.descriptors import EMPTY_DESCRIPTOR
from rewriter.config.logging import get_logger
from rewriter.constants import ROLE_GENERATOR, ROLE_SERIALIZER, ROLE_TRANSFORMER
from rewriter.pipeline.errors import ResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from xml.sax.handler import ContentHandler

    from rewriter.config.descriptors import PipelineDescription, StageDescriptor
    from rewriter.config.logging import RewriterLogger
    from rewriter.pipeline.context import ProcessingContext
    from rewriter.pipeline.contracts import Generator, Serializer, Stage, Transformer
    from rewriter.pipeline.factory import InjectedTransformers, StageFactory

logger: RewriterLogger = get_logger(__name__)

_EMPTY_TRANSFORMERS: tuple[Transformer, ...] = ()


@dataclass(frozen=True)
class AssembledPipeline:
    """A fully initialized and wired chain of stages for one invocation.

    Attributes:
        generator (Generator): The entry stage.
        transformers (tuple[Transformer, ...]): Merged transformers in chain order.
        serializer (Serializer): The terminal stage.
        chain_head (ContentHandler): The generator's direct downstream: the first
            transformer, or the serializer when there are no transformers.
    """

    generator: Generator
    transformers: tuple[Transformer, ...]
    serializer: Serializer
    chain_head: ContentHandler

    def stages(self) -> Iterator[Stage]:
        """Iterate over all stages in chain order (generator first, serializer last)."""
        yield self.generator
        yield from self.transformers
        yield self.serializer


def _resolve_generator(factory: StageFactory, descriptor: StageDescriptor) -> Generator:
    generator: Generator | None = factory.resolve_generator(descriptor.type_name)
    if generator is None:
        raise ResolutionError(ROLE_GENERATOR, descriptor.type_name)
    return generator


def _resolve_transformer(factory: StageFactory, descriptor: StageDescriptor) -> Transformer:
    transformer: Transformer | None = factory.resolve_transformer(descriptor.type_name)
    if transformer is None:
        raise ResolutionError(ROLE_TRANSFORMER, descriptor.type_name)
    return transformer


def _resolve_serializer(factory: StageFactory, descriptor: StageDescriptor) -> Serializer:
    serializer: Serializer | None = factory.resolve_serializer(descriptor.type_name)
    if serializer is None:
        raise ResolutionError(ROLE_SERIALIZER, descriptor.type_name)
    return serializer


def merge_transformers(
    ctx: ProcessingContext,
    explicit: tuple[StageDescriptor, ...],
    injected: InjectedTransformers,
    factory: StageFactory,
) -> tuple[Transformer, ...]:
    """Resolve and initialize the merged transformer sequence.

    Args:
        ctx (ProcessingContext): Context passed to every ``init()``.
        explicit (tuple[StageDescriptor, ...]): Explicit transformer descriptors.
        injected (InjectedTransformers): Pre/post injected transformer instances.
        factory (StageFactory): Factory resolving the explicit descriptors.

    Returns:
        tuple[Transformer, ...]: ``pre + explicit + post``, each initialized once.

    Raises:
        ResolutionError: If an explicit transformer type cannot be resolved.
    """
    total: int = len(injected.pre) + len(explicit) + len(injected.post)
    if total == 0:
        return _EMPTY_TRANSFORMERS

    merged: list[Transformer] = []
    for transformer in injected.pre:
        transformer.init(ctx, EMPTY_DESCRIPTOR)
        merged.append(transformer)
    for descriptor in explicit:
        transformer = _resolve_transformer(factory, descriptor)
        logger.debug("Resolved transformer '%s': %r", descriptor.type_name, transformer)
        transformer.init(ctx, descriptor)
        merged.append(transformer)
    for transformer in injected.post:
        transformer.init(ctx, EMPTY_DESCRIPTOR)
        merged.append(transformer)
    return tuple(merged)


def wire(
    generator: Generator,
    transformers: tuple[Transformer, ...],
    serializer: Serializer,
) -> ContentHandler:
    """Link the stages back to front and return the chain head.

    Args:
        generator (Generator): The entry stage.
        transformers (tuple[Transformer, ...]): The merged transformers, in chain order.
        serializer (Serializer): The terminal stage.

    Returns:
        ContentHandler: The generator's downstream (first transformer or serializer).
    """
    target: ContentHandler = serializer  # type: ignore[assignment]
    for transformer in reversed(transformers):
        logger.trace("Wiring %r -> %r", transformer, target)
        transformer.set_content_handler(target)
        target = transformer  # type: ignore[assignment]
    logger.trace("Wiring %r -> %r", generator, target)
    generator.set_content_handler(target)
    return target


def assemble(
    ctx: ProcessingContext,
    description: PipelineDescription,
    injected: InjectedTransformers,
    factory: StageFactory,
) -> AssembledPipeline:
    """Resolve, initialize and wire all stages of a pipeline.

    Stages are initialized in chain order: generator, pre-injected, explicit,
    post-injected, serializer. Assembly is all-or-nothing: any error aborts
    it and nothing is returned.

    Args:
        ctx (ProcessingContext): Context passed through to every stage's ``init()``.
        description (PipelineDescription): The pipeline to build.
        injected (InjectedTransformers): Transformers bracketing the explicit ones.
        factory (StageFactory): Resolves stage type names.

    Returns:
        AssembledPipeline: The initialized and wired chain.

    Raises:
        ResolutionError: If any stage type cannot be resolved.
        InitializationError: Propagated unchanged from a stage's ``init()``.
    """
    logger.debug(
        "Assembling pipeline: generator=%s, transformers=%s, serializer=%s "
        "(%d pre, %d post injected)",
        description.generator.type_name,
        [d.type_name for d in description.transformers],
        description.serializer.type_name,
        len(injected.pre),
        len(injected.post),
    )

    generator: Generator = _resolve_generator(factory, description.generator)
    logger.debug("Resolved generator '%s': %r", description.generator.type_name, generator)
    generator.init(ctx, description.generator)

    transformers: tuple[Transformer, ...] = merge_transformers(
        ctx, description.transformers, injected, factory
    )

    serializer: Serializer = _resolve_serializer(factory, description.serializer)
    logger.debug("Resolved serializer '%s': %r", description.serializer.type_name, serializer)
    serializer.init(ctx, description.serializer)

    chain_head: ContentHandler = wire(generator, transformers, serializer)

    return AssembledPipeline(
        generator=generator,
        transformers=transformers,
        serializer=serializer,
        chain_head=chain_head,
    )
