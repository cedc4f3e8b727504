# topmark:header:start
#
#   project      : Rewriter
#   file         : base.py
#   file_relpath : src/rewriter/pipeline/stages/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base classes for built-in and plugin stages.

The pipeline core only relies on the protocols in
[`rewriter.pipeline.contracts`][rewriter.pipeline.contracts]; these classes
implement the common lifecycle so concrete stages only override what they
transform:

    transformer.init(ctx, descriptor)   # once: stores ctx/descriptor, calls configure()
    transformer.set_content_handler(h)  # once: single downstream edge
    transformer.startElement(...)       # events: forwarded downstream by default

Design goals
------------
- Single place for per-stage bookkeeping (single init, single downstream).
- Event forwarding in `BaseTransformer` so subclasses override only the
  events they rewrite.
- Output I/O errors surface as processing faults wrapping the `OSError`.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from typing import TYPE_CHECKING
from xml.sax.handler import ContentHandler

from rewriter.config.logging import get_logger
from rewriter.pipeline.errors import PipelineStateError, ProcessingFault

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO
    from xml.sax.xmlreader import AttributesImpl, AttributesNSImpl, Locator

    from rewriter.config.descriptors import StageDescriptor
    from rewriter.config.logging import RewriterLogger
    from rewriter.pipeline.context import ProcessingContext

logger: RewriterLogger = get_logger(__name__)


class BaseStage:
    """Reusable foundation for pipeline stages.

    Subclass this (through one of the role bases below) and override
    ``configure()`` to validate the descriptor. Do not override ``init()``
    unless you need custom lifecycle behavior.

    Attributes:
        name (str): Registered type name; set by the registry decorators.
    """

    name: str = ""

    def __init__(self) -> None:
        super().__init__()
        self._ctx: ProcessingContext | None = None
        self._descriptor: StageDescriptor | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"

    @property
    def ctx(self) -> ProcessingContext:
        """Return the processing context this stage was initialized with.

        Raises:
            PipelineStateError: If the stage was not initialized.
        """
        if self._ctx is None:
            raise PipelineStateError(f"Stage {self!r} is not initialized")
        return self._ctx

    @property
    def descriptor(self) -> StageDescriptor:
        """Return the descriptor this stage was initialized with.

        Raises:
            PipelineStateError: If the stage was not initialized.
        """
        if self._descriptor is None:
            raise PipelineStateError(f"Stage {self!r} is not initialized")
        return self._descriptor

    def init(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        """Initialize the stage once for an invocation.

        Args:
            ctx (ProcessingContext): The processing context.
            descriptor (StageDescriptor): The stage configuration.

        Raises:
            PipelineStateError: If the stage was already initialized.
            InitializationError: Raised by ``configure()`` on invalid configuration.
        """
        if self._ctx is not None:
            raise PipelineStateError(f"Stage {self!r} is already initialized")
        self._ctx = ctx
        self._descriptor = descriptor
        logger.trace("Initializing %r with %r", self, descriptor)
        self.configure(ctx, descriptor)

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        """Validate and apply the descriptor (hook; default: nothing to configure).

        Args:
            ctx (ProcessingContext): The processing context.
            descriptor (StageDescriptor): The stage configuration.
        """
        pass


class _DownstreamMixin:
    """Holds the single outgoing wiring edge of a generator or transformer."""

    _downstream: ContentHandler | None = None

    def set_content_handler(self, handler: ContentHandler) -> None:
        """Set the downstream consumer.

        Raises:
            PipelineStateError: If a downstream consumer was already set.
        """
        if self._downstream is not None:
            raise PipelineStateError(f"Downstream of {self!r} is already set")
        self._downstream = handler

    @property
    def downstream(self) -> ContentHandler:
        """Return the downstream consumer.

        Raises:
            PipelineStateError: If the stage was not wired.
        """
        if self._downstream is None:
            raise PipelineStateError(f"Stage {self!r} has no downstream consumer")
        return self._downstream


class BaseTransformer(_DownstreamMixin, BaseStage, ContentHandler):
    """Transformer that forwards every SAX event to its downstream consumer."""

    def setDocumentLocator(self, locator: Locator) -> None:  # noqa: N802
        super().setDocumentLocator(locator)
        self.downstream.setDocumentLocator(locator)

    def startDocument(self) -> None:  # noqa: N802
        self.downstream.startDocument()

    def endDocument(self) -> None:  # noqa: N802
        self.downstream.endDocument()

    def startPrefixMapping(self, prefix: str | None, uri: str) -> None:  # noqa: N802
        self.downstream.startPrefixMapping(prefix, uri)

    def endPrefixMapping(self, prefix: str | None) -> None:  # noqa: N802
        self.downstream.endPrefixMapping(prefix)

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        self.downstream.startElement(name, attrs)

    def endElement(self, name: str) -> None:  # noqa: N802
        self.downstream.endElement(name)

    def startElementNS(  # noqa: N802
        self, name: tuple[str | None, str], qname: str | None, attrs: AttributesNSImpl
    ) -> None:
        self.downstream.startElementNS(name, qname, attrs)

    def endElementNS(self, name: tuple[str | None, str], qname: str | None) -> None:  # noqa: N802
        self.downstream.endElementNS(name, qname)

    def characters(self, content: str) -> None:
        self.downstream.characters(content)

    def ignorableWhitespace(self, whitespace: str) -> None:  # noqa: N802
        self.downstream.ignorableWhitespace(whitespace)

    def processingInstruction(self, target: str, data: str) -> None:  # noqa: N802
        self.downstream.processingInstruction(target, data)

    def skippedEntity(self, name: str) -> None:  # noqa: N802
        self.downstream.skippedEntity(name)


class BaseSerializer(BaseStage, ContentHandler):
    """Terminal stage writing to ``ctx.out``.

    Subclasses write through ``write()`` so that an `OSError` on the output
    stream becomes a `ProcessingFault` wrapping it.
    """

    @contextmanager
    def output_guard(self) -> Iterator[None]:
        """Turn an `OSError` raised while writing output into a `ProcessingFault`.

        Raises:
            ProcessingFault: Wrapping any `OSError` raised in the block.
        """
        try:
            yield
        except OSError as exc:
            raise ProcessingFault.wrap(exc, f"Output error in {self!r}: {exc}") from exc

    def write(self, text: str) -> None:
        """Write ``text`` to the context's output stream.

        Raises:
            ProcessingFault: Wrapping any `OSError` raised by the stream.
        """
        with self.output_guard():
            self.ctx.out.write(text)


class BaseGenerator(_DownstreamMixin, BaseStage):
    """Generator buffering raw input until ``finished()``.

    The caller writes raw text into ``get_writer()``; ``finished()`` closes
    the writer, hands the buffered text to ``parse()`` and thereby pushes the
    events down the chain. ``finished()`` is the writer's release point.
    """

    def __init__(self) -> None:
        super().__init__()
        self._writer: io.StringIO = io.StringIO()

    def get_writer(self) -> TextIO:
        """Return the raw input writer.

        Raises:
            PipelineStateError: If the generator already finished.
        """
        if self._writer.closed:
            raise PipelineStateError(f"Writer of {self!r} is closed")
        return self._writer

    def finished(self) -> None:
        """Parse the buffered input and push events downstream.

        Raises:
            PipelineStateError: If the generator already finished.
            xml.sax.SAXException: On any processing fault.
        """
        if self._writer.closed:
            raise PipelineStateError(f"Generator {self!r} already finished")
        text: str = self._writer.getvalue()
        self._writer.close()
        logger.debug("%r parsing %d characters", self, len(text))
        self.parse(text)

    def parse(self, text: str) -> None:
        """Turn ``text`` into SAX events sent to ``self.downstream``.

        Subclasses must implement this method.
        """
        raise NotImplementedError
