# topmark:header:start
#
#   project      : Rewriter
#   file         : descriptors.py
#   file_relpath : src/rewriter/config/descriptors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable pipeline description model.

A pipeline is described by one generator descriptor, an ordered sequence of
transformer descriptors and one serializer descriptor. Descriptors name the
stage type to resolve through the stage factory and carry the stage's
free-form parameters.

Descriptors are produced by the configuration loader
([`rewriter.config.io`][rewriter.config.io]) or built directly in code, and are
consumed once by the pipeline assembler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def _freeze_params(params: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(params or {}))


@dataclass(frozen=True)
class StageDescriptor:
    """Configuration record naming a stage type and its parameters.

    Attributes:
        type_name (str): Role-specific type name resolved through the stage factory.
        params (Mapping[str, Any]): Read-only stage parameters.
    """

    type_name: str
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        # Always store a private read-only copy, whatever the caller passed in.
        object.__setattr__(self, "params", _freeze_params(self.params))

    @classmethod
    def of(cls, type_name: str, **params: Any) -> StageDescriptor:
        """Convenience constructor: ``StageDescriptor.of("rename", map={"b": "strong"})``."""
        return cls(type_name=type_name, params=params)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the parameter ``key`` or ``default`` when it is not configured."""
        return self.params.get(key, default)

    def __repr__(self) -> str:
        return f"StageDescriptor({self.type_name!r}, {dict(self.params)!r})"


# Descriptor handed to injected transformers: they are not configured per pipeline.
EMPTY_DESCRIPTOR: Final[StageDescriptor] = StageDescriptor(type_name="")


@dataclass(frozen=True)
class PipelineDescription:
    """Declarative description of one pipeline.

    Attributes:
        generator (StageDescriptor): The single generator.
        serializer (StageDescriptor): The single serializer.
        transformers (tuple[StageDescriptor, ...]): Explicit transformers, in
            execution order. May be empty.

    Raises:
        ValueError: If the generator or serializer descriptor has no type name.
    """

    generator: StageDescriptor
    serializer: StageDescriptor
    transformers: tuple[StageDescriptor, ...] = ()

    def __post_init__(self) -> None:
        if not self.generator.type_name:
            raise ValueError("A pipeline requires a generator type")
        if not self.serializer.type_name:
            raise ValueError("A pipeline requires a serializer type")
        # Accept any iterable of descriptors but keep the order immutable.
        object.__setattr__(self, "transformers", tuple(self.transformers))

    @classmethod
    def build(
        cls,
        generator: str | StageDescriptor,
        serializer: str | StageDescriptor,
        transformers: Iterable[str | StageDescriptor] = (),
    ) -> PipelineDescription:
        """Build a description, accepting bare type names for parameterless stages.

        Args:
            generator (str | StageDescriptor): Generator type name or descriptor.
            serializer (str | StageDescriptor): Serializer type name or descriptor.
            transformers (Iterable[str | StageDescriptor]): Transformer type names or
                descriptors, in execution order.

        Returns:
            PipelineDescription: The immutable description.
        """

        def _coerce(item: str | StageDescriptor) -> StageDescriptor:
            return item if isinstance(item, StageDescriptor) else StageDescriptor(item)

        return cls(
            generator=_coerce(generator),
            serializer=_coerce(serializer),
            transformers=tuple(_coerce(t) for t in transformers),
        )
