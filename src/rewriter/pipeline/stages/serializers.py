# topmark:header:start
#
#   project      : Rewriter
#   file         : serializers.py
#   file_relpath : src/rewriter/pipeline/stages/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in serializers.

- ``xml``: markup output through `xml.sax.saxutils.XMLGenerator`, using the
  output encoding and version from the processing options. Parameter
  ``declaration`` (default ``True``) controls the XML declaration.
- ``text``: character data only, markup dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax.saxutils import XMLGenerator

from rewriter.pipeline.errors import InitializationError, PipelineStateError
from rewriter.pipeline.stages.base import BaseSerializer
from rewriter.registry.stages import register_serializer

if TYPE_CHECKING:
    from typing import TextIO
    from xml.sax.xmlreader import AttributesImpl, AttributesNSImpl

    from rewriter.config.descriptors import StageDescriptor
    from rewriter.pipeline.context import ProcessingContext


class _VersionedXMLGenerator(XMLGenerator):
    """`XMLGenerator` whose declaration carries a configurable version."""

    def __init__(self, out: TextIO, encoding: str, version: str) -> None:
        super().__init__(out, encoding=encoding, short_empty_elements=True)
        self.out: TextIO = out
        self.encoding: str = encoding
        self.version: str = version

    def startDocument(self) -> None:  # noqa: N802
        self.out.write(f'<?xml version="{self.version}" encoding="{self.encoding}"?>\n')


@register_serializer("xml")
class XmlSerializer(BaseSerializer):
    """Serialize events as markup."""

    def __init__(self) -> None:
        super().__init__()
        self.declaration: bool = True
        self._markup: XMLGenerator | None = None

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        declaration = descriptor.get("declaration", True)
        if not isinstance(declaration, bool):
            raise InitializationError(
                f"'declaration' must be a boolean, got {declaration!r}", stage=self.name
            )
        self.declaration = declaration
        self._markup = _VersionedXMLGenerator(
            ctx.out, encoding=ctx.options.encoding, version=ctx.options.version
        )

    @property
    def markup(self) -> XMLGenerator:
        """Return the underlying `XMLGenerator`.

        Raises:
            PipelineStateError: If the serializer was not initialized.
        """
        if self._markup is None:
            raise PipelineStateError(f"Serializer {self!r} is not initialized")
        return self._markup

    def startDocument(self) -> None:  # noqa: N802
        if self.declaration:
            with self.output_guard():
                self.markup.startDocument()

    def endDocument(self) -> None:  # noqa: N802
        with self.output_guard():
            self.markup.endDocument()

    def startPrefixMapping(self, prefix: str | None, uri: str) -> None:  # noqa: N802
        self.markup.startPrefixMapping(prefix, uri)

    def endPrefixMapping(self, prefix: str | None) -> None:  # noqa: N802
        self.markup.endPrefixMapping(prefix)

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        with self.output_guard():
            self.markup.startElement(name, attrs)

    def endElement(self, name: str) -> None:  # noqa: N802
        with self.output_guard():
            self.markup.endElement(name)

    def startElementNS(  # noqa: N802
        self, name: tuple[str | None, str], qname: str | None, attrs: AttributesNSImpl
    ) -> None:
        with self.output_guard():
            self.markup.startElementNS(name, qname, attrs)

    def endElementNS(self, name: tuple[str | None, str], qname: str | None) -> None:  # noqa: N802
        with self.output_guard():
            self.markup.endElementNS(name, qname)

    def characters(self, content: str) -> None:
        with self.output_guard():
            self.markup.characters(content)

    def ignorableWhitespace(self, whitespace: str) -> None:  # noqa: N802
        with self.output_guard():
            self.markup.ignorableWhitespace(whitespace)

    def processingInstruction(self, target: str, data: str) -> None:  # noqa: N802
        with self.output_guard():
            self.markup.processingInstruction(target, data)


@register_serializer("text")
class TextSerializer(BaseSerializer):
    """Write character data only."""

    def characters(self, content: str) -> None:
        self.write(content)

    def ignorableWhitespace(self, whitespace: str) -> None:  # noqa: N802
        self.write(whitespace)
