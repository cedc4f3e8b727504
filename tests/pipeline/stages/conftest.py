# topmark:header:start
#
#   project      : Rewriter
#   file         : conftest.py
#   file_relpath : tests/pipeline/stages/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for exercising built-in stages in isolation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from xml.sax.handler import ContentHandler

from rewriter.config.descriptors import StageDescriptor
from rewriter.config.options import ProcessingOptions
from rewriter.pipeline.context import ProcessingContext

if TYPE_CHECKING:
    from xml.sax.xmlreader import AttributesImpl

    from rewriter.pipeline.stages.base import BaseGenerator, BaseSerializer, BaseTransformer

Event = tuple[Any, ...]


class EventLog(ContentHandler):
    """Terminal consumer recording events; adjacent character chunks are merged."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Event] = []

    def startDocument(self) -> None:  # noqa: N802
        self.events.append(("start-document",))

    def endDocument(self) -> None:  # noqa: N802
        self.events.append(("end-document",))

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        self.events.append(("start", name, dict(attrs.items())))

    def endElement(self, name: str) -> None:  # noqa: N802
        self.events.append(("end", name))

    def characters(self, content: str) -> None:
        if self.events and self.events[-1][0] == "chars":
            self.events[-1] = ("chars", self.events[-1][1] + content)
        else:
            self.events.append(("chars", content))


def run_generator(
    generator: BaseGenerator, text: str, descriptor: StageDescriptor | None = None
) -> list[Event]:
    """Initialize ``generator``, feed it ``text`` and return the recorded events."""
    sink = EventLog()
    generator.init(ProcessingContext(), descriptor or StageDescriptor("test"))
    generator.set_content_handler(sink)
    generator.get_writer().write(text)
    generator.finished()
    return sink.events


def init_transformer(
    transformer: BaseTransformer, descriptor: StageDescriptor, ctx: ProcessingContext | None = None
) -> EventLog:
    """Initialize ``transformer`` and wire it to a fresh `EventLog`."""
    sink = EventLog()
    transformer.init(ctx or ProcessingContext(), descriptor)
    transformer.set_content_handler(sink)
    return sink


def init_serializer(
    serializer: BaseSerializer, descriptor: StageDescriptor | None = None, **options: Any
) -> ProcessingContext:
    """Initialize ``serializer`` on an in-memory context and return the context."""
    ctx = ProcessingContext(options=ProcessingOptions.from_mapping(options))
    serializer.init(ctx, descriptor or StageDescriptor("test"))
    return ctx
