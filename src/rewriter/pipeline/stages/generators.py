# topmark:header:start
#
#   project      : Rewriter
#   file         : generators.py
#   file_relpath : src/rewriter/pipeline/stages/generators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in generators.

- ``xml``: well-formed XML parsed with the stdlib SAX (expat) reader.
- ``html``: tag soup parsed with `html.parser.HTMLParser` and bridged to SAX
  events; void elements are closed immediately and elements left open at the
  end of the input are closed in reverse order.
"""

from __future__ import annotations

from html.parser import HTMLParser
from typing import TYPE_CHECKING, Final
from xml.sax import handler as sax_handler
from xml.sax import make_parser
from xml.sax.xmlreader import AttributesImpl

from rewriter.config.logging import get_logger
from rewriter.pipeline.errors import InitializationError
from rewriter.pipeline.stages.base import BaseGenerator
from rewriter.registry.stages import register_generator

if TYPE_CHECKING:
    from xml.sax.handler import ContentHandler
    from xml.sax.xmlreader import XMLReader

    from rewriter.config.descriptors import StageDescriptor
    from rewriter.config.logging import RewriterLogger
    from rewriter.pipeline.context import ProcessingContext

logger: RewriterLogger = get_logger(__name__)

HTML_VOID_ELEMENTS: Final[frozenset[str]] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@register_generator("xml")
class XmlGenerator(BaseGenerator):
    """Parse well-formed XML into SAX events.

    Parameters:
        namespaces (bool): Report namespace-aware events (default ``False``).
    """

    namespaces: bool = False

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        namespaces = descriptor.get("namespaces", False)
        if not isinstance(namespaces, bool):
            raise InitializationError(
                f"'namespaces' must be a boolean, got {namespaces!r}", stage=self.name
            )
        self.namespaces = namespaces

    def parse(self, text: str) -> None:
        reader: XMLReader = make_parser()
        reader.setFeature(sax_handler.feature_namespaces, self.namespaces)
        reader.setFeature(sax_handler.feature_external_ges, False)
        reader.setContentHandler(self.downstream)
        # Incremental feed: expat accepts str input directly.
        reader.feed(text)  # type: ignore[attr-defined]
        reader.close()  # type: ignore[attr-defined]


class _SaxBridge(HTMLParser):
    """`HTMLParser` pushing SAX events into a content handler."""

    def __init__(self, target: ContentHandler) -> None:
        super().__init__(convert_charrefs=True)
        self.target = target
        self.open_elements: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.target.startElement(tag, AttributesImpl({k: v or "" for k, v in attrs}))
        if tag in HTML_VOID_ELEMENTS:
            self.target.endElement(tag)
        else:
            self.open_elements.append(tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.target.startElement(tag, AttributesImpl({k: v or "" for k, v in attrs}))
        self.target.endElement(tag)

    def handle_endtag(self, tag: str) -> None:
        if tag not in self.open_elements:
            logger.debug("Ignoring unmatched end tag </%s>", tag)
            return
        # Implicitly close everything opened after the matching start tag.
        while self.open_elements:
            name: str = self.open_elements.pop()
            self.target.endElement(name)
            if name == tag:
                break

    def handle_data(self, data: str) -> None:
        self.target.characters(data)

    def close(self) -> None:
        super().close()
        while self.open_elements:
            self.target.endElement(self.open_elements.pop())


@register_generator("html")
class HtmlGenerator(BaseGenerator):
    """Parse HTML (not necessarily well-formed) into SAX events."""

    def parse(self, text: str) -> None:
        target: ContentHandler = self.downstream
        bridge = _SaxBridge(target)
        target.startDocument()
        bridge.feed(text)
        bridge.close()
        target.endDocument()
