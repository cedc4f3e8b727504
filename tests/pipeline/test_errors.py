# topmark:header:start
#
#   project      : Rewriter
#   file         : test_errors.py
#   file_relpath : tests/pipeline/test_errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the error vocabulary and the single-unwrap policy."""

from __future__ import annotations

import errno
from xml.sax import SAXException

from rewriter.pipeline.errors import (
    ConfigError,
    PipelineIOError,
    PipelineStateError,
    ProcessingFault,
    ResolutionError,
    RewriterError,
    io_cause,
    unwrap_fault,
)


def test_rewriter_error_keeps_message_and_context() -> None:
    error = ConfigError("Missing [pipeline] table", key="pipeline")
    assert isinstance(error, RewriterError)
    assert error.message == "Missing [pipeline] table"
    assert error.context == {"key": "pipeline"}
    assert str(error) == "Missing [pipeline] table"


def test_resolution_error_message_and_attributes() -> None:
    error = ResolutionError("serializer", "bogus-ser")
    assert str(error) == "Unable to get component of role 'serializer' with type 'bogus-ser'."
    assert (error.role, error.type_name) == ("serializer", "bogus-ser")
    assert error.context == {"role": "serializer", "type_name": "bogus-ser"}
    assert isinstance(error, LookupError)


def test_error_hierarchy() -> None:
    assert issubclass(PipelineIOError, OSError)
    assert issubclass(PipelineStateError, RuntimeError)
    assert issubclass(ProcessingFault, SAXException)


def test_processing_fault_wrap_keeps_exception() -> None:
    io_error = OSError(errno.EIO, "Input/output error")
    fault = ProcessingFault.wrap(io_error)
    assert fault.getException() is io_error
    assert str(io_error) in str(fault)

    labelled = ProcessingFault.wrap(io_error, "Output error")
    assert str(labelled) == "Output error"


def test_io_cause_prefers_sax_wrapped_exception() -> None:
    wrapped = OSError(errno.EIO, "wrapped")
    chained = OSError(errno.EPIPE, "chained")
    fault = SAXException("fault", wrapped)
    fault.__cause__ = chained
    assert io_cause(fault) is wrapped


def test_io_cause_falls_back_to_chained_cause() -> None:
    chained = OSError(errno.EPIPE, "Broken pipe")
    fault = ProcessingFault("fault")
    fault.__cause__ = chained
    assert io_cause(fault) is chained
    assert unwrap_fault(fault) is chained


def test_unwrap_returns_the_same_os_error() -> None:
    io_error = FileNotFoundError(errno.ENOENT, "No such file or directory")
    assert unwrap_fault(SAXException("fault", io_error)) is io_error


def test_unwrap_wraps_other_faults() -> None:
    fault = SAXException("not an I/O problem", ValueError("bad"))
    error = unwrap_fault(fault)
    assert isinstance(error, PipelineIOError)
    assert str(error) == "Pipeline exception."
    assert error.__cause__ is fault
    assert error.context["fault"] == "not an I/O problem"
