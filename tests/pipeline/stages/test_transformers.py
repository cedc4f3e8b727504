# topmark:header:start
#
#   project      : Rewriter
#   file         : test_transformers.py
#   file_relpath : tests/pipeline/stages/test_transformers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the built-in transformers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax.xmlreader import AttributesImpl, AttributesNSImpl

import pytest

from rewriter.config.descriptors import EMPTY_DESCRIPTOR, StageDescriptor
from rewriter.constants import AUDIT_ATTRIBUTE
from rewriter.pipeline.context import ProcessingContext
from rewriter.pipeline.errors import InitializationError, PipelineStateError
from rewriter.pipeline.stages.generators import XmlGenerator
from rewriter.pipeline.stages.serializers import XmlSerializer
from rewriter.pipeline.stages.transformers import (
    AuditTransformer,
    DropElementsTransformer,
    IdentityTransformer,
    RenameElementsTransformer,
)
from tests.conftest import parametrize
from tests.pipeline.stages.conftest import init_transformer

if TYPE_CHECKING:
    from rewriter.pipeline.stages.base import BaseTransformer

NO_ATTRS = AttributesImpl({})


def test_identity_forwards_everything() -> None:
    transformer = IdentityTransformer()
    sink = init_transformer(transformer, StageDescriptor("identity"))

    transformer.startDocument()
    transformer.startElement("a", AttributesImpl({"k": "v"}))
    transformer.characters("text")
    transformer.endElement("a")
    transformer.endDocument()

    assert sink.events == [
        ("start-document",),
        ("start", "a", {"k": "v"}),
        ("chars", "text"),
        ("end", "a"),
        ("end-document",),
    ]


def test_unwired_transformer_raises() -> None:
    transformer = IdentityTransformer()
    transformer.init(ProcessingContext(), EMPTY_DESCRIPTOR)
    with pytest.raises(PipelineStateError):
        transformer.startDocument()


def test_rename_maps_start_and_end_tags() -> None:
    transformer = RenameElementsTransformer()
    sink = init_transformer(transformer, StageDescriptor.of("rename", map={"b": "strong"}))

    transformer.startElement("b", NO_ATTRS)
    transformer.startElement("i", NO_ATTRS)
    transformer.endElement("i")
    transformer.endElement("b")

    assert sink.events == [
        ("start", "strong", {}),
        ("start", "i", {}),
        ("end", "i"),
        ("end", "strong"),
    ]


@parametrize("mapping", [None, {}, "b=strong", {"b": ""}, {"b": 3}])
def test_rename_rejects_invalid_map(mapping: object) -> None:
    with pytest.raises(InitializationError):
        RenameElementsTransformer().init(
            ProcessingContext(), StageDescriptor.of("rename", map=mapping)
        )


def test_drop_removes_elements_with_their_content() -> None:
    transformer = DropElementsTransformer()
    sink = init_transformer(transformer, StageDescriptor.of("drop", elements=["script"]))

    transformer.startElement("body", NO_ATTRS)
    transformer.characters("keep")
    transformer.startElement("script", NO_ATTRS)
    transformer.startElement("span", NO_ATTRS)
    transformer.characters("hidden")
    transformer.endElement("span")
    transformer.endElement("script")
    transformer.characters("!")
    transformer.endElement("body")

    assert sink.events == [
        ("start", "body", {}),
        ("chars", "keep!"),
        ("end", "body"),
    ]


@parametrize("elements", [None, "script", ["script", 3]])
def test_drop_rejects_invalid_elements(elements: object) -> None:
    with pytest.raises(InitializationError):
        DropElementsTransformer().init(
            ProcessingContext(), StageDescriptor.of("drop", elements=elements)
        )


def test_audit_publishes_counters_at_end_of_document() -> None:
    ctx = ProcessingContext()
    transformer = AuditTransformer()
    sink = init_transformer(transformer, EMPTY_DESCRIPTOR, ctx)

    transformer.startDocument()
    transformer.startElement("p", NO_ATTRS)
    transformer.characters("hello")
    transformer.startElement("br", NO_ATTRS)
    transformer.endElement("br")
    transformer.endElement("p")
    assert AUDIT_ATTRIBUTE not in ctx.attributes
    transformer.endDocument()

    assert ctx.attributes[AUDIT_ATTRIBUTE] == {"elements": 2, "characters": 5}
    assert sink.events[-1] == ("end-document",)


def _run_namespaced(
    transformer: BaseTransformer, descriptor: StageDescriptor, text: str
) -> ProcessingContext:
    """Run ``text`` through a namespace-aware xml generator, ``transformer`` and xml output."""
    ctx = ProcessingContext()
    generator = XmlGenerator()
    generator.init(ctx, StageDescriptor.of("xml", namespaces=True))
    serializer = XmlSerializer()
    serializer.init(ctx, StageDescriptor.of("xml", declaration=False))
    transformer.init(ctx, descriptor)
    transformer.set_content_handler(serializer)
    generator.set_content_handler(transformer)
    generator.get_writer().write(text)
    generator.finished()
    return ctx


NAMESPACED_DOC = "<a><script>x</script><b>y</b></a>"


@parametrize(
    "transformer_cls, descriptor, expected",
    [
        (
            RenameElementsTransformer,
            StageDescriptor.of("rename", map={"b": "strong"}),
            "<a><script>x</script><strong>y</strong></a>",
        ),
        (
            DropElementsTransformer,
            StageDescriptor.of("drop", elements=["script"]),
            "<a><b>y</b></a>",
        ),
    ],
)
def test_transformers_handle_namespace_aware_events(
    transformer_cls: type[BaseTransformer], descriptor: StageDescriptor, expected: str
) -> None:
    assert _run_namespaced(transformer_cls(), descriptor, NAMESPACED_DOC).getvalue() == expected


def test_rename_keeps_namespace_prefix() -> None:
    ctx = _run_namespaced(
        RenameElementsTransformer(),
        StageDescriptor.of("rename", map={"b": "strong"}),
        '<r:a xmlns:r="urn:r"><r:b>y</r:b></r:a>',
    )
    assert ctx.getvalue() == '<r:a xmlns:r="urn:r"><r:strong>y</r:strong></r:a>'


def test_drop_shares_depth_across_event_forms() -> None:
    transformer = DropElementsTransformer()
    sink = init_transformer(transformer, StageDescriptor.of("drop", elements=["script"]))

    transformer.startElementNS((None, "script"), None, AttributesNSImpl({}, {}))
    transformer.startElement("span", NO_ATTRS)
    transformer.endElement("span")
    transformer.endElementNS((None, "script"), None)
    transformer.characters("after")

    assert sink.events == [("chars", "after")]


def test_audit_counts_namespace_aware_elements() -> None:
    ctx = _run_namespaced(AuditTransformer(), EMPTY_DESCRIPTOR, NAMESPACED_DOC)
    assert ctx.attributes[AUDIT_ATTRIBUTE] == {"elements": 3, "characters": 2}
