# topmark:header:start
#
#   project      : Rewriter
#   file         : conftest.py
#   file_relpath : tests/pipeline/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stage test doubles shared by the pipeline tests.

Key utilities:
  * RecordingGenerator / RecordingTransformer / RecordingSerializer: stages
    that append ``init:<label>`` and event entries to a shared trace list, so
    tests can assert initialization order and event flow.
  * StubFactory: a dict-backed `StageFactory` counting
    ``injected_transformers()`` calls.
  * walk_chain(generator): follows the downstream edges from the generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable
from xml.sax.xmlreader import AttributesImpl

from rewriter.pipeline.context import ProcessingContext
from rewriter.pipeline.factory import NO_INJECTED_TRANSFORMERS, InjectedTransformers
from rewriter.pipeline.stages.base import BaseGenerator, BaseSerializer, BaseTransformer
from tests.conftest import fixture

if TYPE_CHECKING:
    from xml.sax.handler import ContentHandler

    from rewriter.config.descriptors import StageDescriptor


class RecordingGenerator(BaseGenerator):
    """Generator turning whitespace-separated words into empty elements.

    Args:
        label (str): Name used in trace entries.
        log (list[str] | None): Shared trace list.
        fault (BaseException | None): Raised by ``finished()`` instead of parsing.
    """

    def __init__(
        self, label: str = "gen", log: list[str] | None = None, fault: BaseException | None = None
    ) -> None:
        super().__init__()
        self.label = label
        self.log: list[str] = log if log is not None else []
        self.fault = fault
        self.finished_calls: int = 0

    def __repr__(self) -> str:
        return f"RecordingGenerator({self.label!r})"

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        self.log.append(f"init:{self.label}")

    def finished(self) -> None:
        self.finished_calls += 1
        if self.fault is not None:
            raise self.fault
        super().finished()

    def parse(self, text: str) -> None:
        sink: ContentHandler = self.downstream
        sink.startDocument()
        for word in text.split():
            sink.startElement(word, AttributesImpl({}))
            sink.endElement(word)
        sink.endDocument()


class RecordingTransformer(BaseTransformer):
    """Transformer tracing its init and every element it forwards."""

    def __init__(self, label: str = "t", log: list[str] | None = None) -> None:
        super().__init__()
        self.label = label
        self.log: list[str] = log if log is not None else []

    def __repr__(self) -> str:
        return f"RecordingTransformer({self.label!r})"

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        self.log.append(f"init:{self.label}")

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        self.log.append(f"{self.label}:{name}")
        super().startElement(name, attrs)


class RecordingSerializer(BaseSerializer):
    """Serializer writing ``<name/>`` for each element into ``ctx.out``."""

    def __init__(self, label: str = "ser", log: list[str] | None = None) -> None:
        super().__init__()
        self.label = label
        self.log: list[str] = log if log is not None else []
        self.received: list[str] = []

    def __repr__(self) -> str:
        return f"RecordingSerializer({self.label!r})"

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        self.log.append(f"init:{self.label}")

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        self.log.append(f"{self.label}:{name}")
        self.received.append(name)
        self.write(f"<{name}/>")


@dataclass
class StubFactory:
    """Dict-backed stage factory; values are zero-argument stage constructors."""

    generators: dict[str, Callable[[], Any]] = field(default_factory=dict)
    transformers: dict[str, Callable[[], Any]] = field(default_factory=dict)
    serializers: dict[str, Callable[[], Any]] = field(default_factory=dict)
    injected: Callable[[], InjectedTransformers] = lambda: NO_INJECTED_TRANSFORMERS
    injected_calls: int = 0

    def resolve_generator(self, type_name: str) -> Any:
        make: Callable[[], Any] | None = self.generators.get(type_name)
        return make() if make else None

    def resolve_transformer(self, type_name: str) -> Any:
        make: Callable[[], Any] | None = self.transformers.get(type_name)
        return make() if make else None

    def resolve_serializer(self, type_name: str) -> Any:
        make: Callable[[], Any] | None = self.serializers.get(type_name)
        return make() if make else None

    def injected_transformers(self) -> InjectedTransformers:
        self.injected_calls += 1
        return self.injected()


def walk_chain(generator: Any) -> list[Any]:
    """Return the stages reachable from ``generator`` by following downstream edges."""
    chain: list[Any] = []
    stage: Any = generator.downstream
    while True:
        chain.append(stage)
        if not isinstance(stage, BaseTransformer):
            return chain
        stage = stage.downstream


@fixture()
def trace_log() -> list[str]:
    """Return an empty shared trace list."""
    return []


@fixture()
def ctx() -> ProcessingContext:
    """Return a processing context writing into an in-memory buffer."""
    return ProcessingContext()


@fixture()
def stub_factory(trace_log: list[str]) -> StubFactory:
    """Return a factory knowing ``gen``, ``t1``, ``t2`` and ``ser``, all tracing into ``trace_log``."""
    return StubFactory(
        generators={"gen": lambda: RecordingGenerator("gen", trace_log)},
        transformers={
            "t1": lambda: RecordingTransformer("t1", trace_log),
            "t2": lambda: RecordingTransformer("t2", trace_log),
        },
        serializers={"ser": lambda: RecordingSerializer("ser", trace_log)},
    )
