# topmark:header:start
#
#   project      : Rewriter
#   file         : transformers.py
#   file_relpath : src/rewriter/pipeline/stages/transformers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in transformers.

- ``identity``: forwards every event unchanged.
- ``rename``: renames elements (``map = { b = "strong" }``).
- ``drop``: removes elements together with their content
  (``elements = ["script", "style"]``).
- ``audit``: counts elements and characters and publishes the counters in
  ``ctx.attributes["audit"]`` at the end of the document. Suitable as an
  injected transformer: it takes no parameters.

Element names are matched on the local name, so ``rename``, ``drop`` and
``audit`` behave the same whether the generator reports plain or
namespace-aware (``startElementNS``) events.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from rewriter.constants import AUDIT_ATTRIBUTE
from rewriter.pipeline.errors import InitializationError
from rewriter.pipeline.stages.base import BaseTransformer
from rewriter.registry.stages import register_transformer

if TYPE_CHECKING:
    from xml.sax.xmlreader import AttributesImpl, AttributesNSImpl

    from rewriter.config.descriptors import StageDescriptor
    from rewriter.pipeline.context import ProcessingContext

# Namespace-aware element name: (uri, local name).
NSName = tuple[str | None, str]


@register_transformer("identity")
class IdentityTransformer(BaseTransformer):
    """Forward all events unchanged."""


@register_transformer("rename")
class RenameElementsTransformer(BaseTransformer):
    """Rename elements according to the ``map`` parameter."""

    def __init__(self) -> None:
        super().__init__()
        self.mapping: dict[str, str] = {}

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        raw: Any = descriptor.get("map")
        if not isinstance(raw, Mapping) or not raw:
            raise InitializationError(
                "'rename' requires a non-empty 'map' table", stage=self.name, value=raw
            )
        for old, new in raw.items():
            if not isinstance(old, str) or not isinstance(new, str) or not new:
                raise InitializationError(
                    f"Invalid rename entry {old!r} -> {new!r}", stage=self.name
                )
            self.mapping[old] = new

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        super().startElement(self.mapping.get(name, name), attrs)

    def endElement(self, name: str) -> None:  # noqa: N802
        super().endElement(self.mapping.get(name, name))

    def _rename_ns(self, name: NSName, qname: str | None) -> tuple[NSName, str | None]:
        local: str | None = self.mapping.get(name[1])
        if local is None:
            return name, qname
        if qname and ":" in qname:
            qname = f"{qname.partition(':')[0]}:{local}"
        elif qname:
            qname = local
        return (name[0], local), qname

    def startElementNS(  # noqa: N802
        self, name: NSName, qname: str | None, attrs: AttributesNSImpl
    ) -> None:
        super().startElementNS(*self._rename_ns(name, qname), attrs)

    def endElementNS(self, name: NSName, qname: str | None) -> None:  # noqa: N802
        super().endElementNS(*self._rename_ns(name, qname))


@register_transformer("drop")
class DropElementsTransformer(BaseTransformer):
    """Remove the elements named in ``elements``, including their content."""

    def __init__(self) -> None:
        super().__init__()
        self.elements: frozenset[str] = frozenset()
        self._depth: int = 0

    def configure(self, ctx: ProcessingContext, descriptor: StageDescriptor) -> None:
        raw: Any = descriptor.get("elements")
        if (
            isinstance(raw, str)
            or not isinstance(raw, Sequence)
            or not all(isinstance(e, str) for e in raw)
        ):
            raise InitializationError(
                "'drop' requires an 'elements' list of element names",
                stage=self.name,
                value=raw,
            )
        self.elements = frozenset(raw)

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        if self._depth or name in self.elements:
            self._depth += 1
            return
        super().startElement(name, attrs)

    def endElement(self, name: str) -> None:  # noqa: N802
        if self._depth:
            self._depth -= 1
            return
        super().endElement(name)

    def startElementNS(  # noqa: N802
        self, name: NSName, qname: str | None, attrs: AttributesNSImpl
    ) -> None:
        if self._depth or name[1] in self.elements:
            self._depth += 1
            return
        super().startElementNS(name, qname, attrs)

    def endElementNS(self, name: NSName, qname: str | None) -> None:  # noqa: N802
        if self._depth:
            self._depth -= 1
            return
        super().endElementNS(name, qname)

    def characters(self, content: str) -> None:
        if not self._depth:
            super().characters(content)

    def ignorableWhitespace(self, whitespace: str) -> None:  # noqa: N802
        if not self._depth:
            super().ignorableWhitespace(whitespace)

    def processingInstruction(self, target: str, data: str) -> None:  # noqa: N802
        if not self._depth:
            super().processingInstruction(target, data)


@register_transformer("audit")
class AuditTransformer(BaseTransformer):
    """Count elements and characters flowing through the chain."""

    def __init__(self) -> None:
        super().__init__()
        self.elements: int = 0
        self.characters_seen: int = 0

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802
        self.elements += 1
        super().startElement(name, attrs)

    def startElementNS(  # noqa: N802
        self, name: NSName, qname: str | None, attrs: AttributesNSImpl
    ) -> None:
        self.elements += 1
        super().startElementNS(name, qname, attrs)

    def characters(self, content: str) -> None:
        self.characters_seen += len(content)
        super().characters(content)

    def endDocument(self) -> None:  # noqa: N802
        self.ctx.attributes[AUDIT_ATTRIBUTE] = {
            "elements": self.elements,
            "characters": self.characters_seen,
        }
        super().endDocument()
