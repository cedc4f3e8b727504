# topmark:header:start
#
#   project      : Rewriter
#   file         : contracts.py
#   file_relpath : src/rewriter/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline stages (engine-facing).

This module defines the minimal protocols that pipeline stages implement. The
event model is SAX: every event-consuming stage exposes the
`xml.sax.handler.ContentHandler` surface, which the core treats as opaque.

Lifecycle
---------
1) The assembler resolves each stage through the stage factory.
2) It calls ``stage.init(ctx, descriptor)`` exactly once per stage.
3) It wires each stage to its single downstream consumer with
   ``set_content_handler()``, back to front.
4) The caller writes raw input into ``generator.get_writer()``.
5) ``generator.finished()`` parses the input and pushes events down the chain.

Roles
-----
Generator
    Entry stage; owns the raw input writer and the completion hook.
Transformer
    Middle link; consumes and re-produces events.
Serializer
    Terminal stage; consumes events only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import TextIO
    from xml.sax.handler import ContentHandler
    from xml.sax.xmlreader import AttributesImpl

    from rewriter.config.descriptors import StageDescriptor
    from rewriter.pipeline.context import ProcessingContext


@runtime_checkable
class Stage(Protocol):
    """Protocol shared by all pipeline stages."""

    def init(self, ctx: "ProcessingContext", descriptor: "StageDescriptor") -> None:
        """Initialize the stage for one invocation.

        Called exactly once, before any event flows.

        Args:
            ctx (ProcessingContext): The processing context of the invocation.
            descriptor (StageDescriptor): The stage's configuration.

        Raises:
            InitializationError: If the stage rejects its context or descriptor.
        """
        ...


@runtime_checkable
class EventConsumer(Protocol):
    """The SAX event surface consumed by transformers and serializers.

    Any `xml.sax.handler.ContentHandler` satisfies this protocol.
    """

    def startDocument(self) -> None: ...  # noqa: N802

    def endDocument(self) -> None: ...  # noqa: N802

    def startElement(self, name: str, attrs: "AttributesImpl") -> None: ...  # noqa: N802

    def endElement(self, name: str) -> None: ...  # noqa: N802

    def characters(self, content: str) -> None: ...


@runtime_checkable
class Transformer(Stage, EventConsumer, Protocol):
    """Middle stage: consumes events and forwards (possibly rewritten) events."""

    def set_content_handler(self, handler: "ContentHandler") -> None:
        """Set the single downstream consumer. Called once per invocation."""
        ...


@runtime_checkable
class Serializer(Stage, EventConsumer, Protocol):
    """Terminal stage: consumes events and produces the final output."""


@runtime_checkable
class Generator(Stage, Protocol):
    """Entry stage: turns raw input into events."""

    def set_content_handler(self, handler: "ContentHandler") -> None:
        """Set the single downstream consumer. Called once per invocation."""
        ...

    def get_writer(self) -> "TextIO":
        """Return the text stream the caller writes raw input into."""
        ...

    def finished(self) -> None:
        """Complete the invocation: parse buffered input, push events, release the writer.

        Raises:
            xml.sax.SAXException: On any processing fault in the chain.
        """
        ...
