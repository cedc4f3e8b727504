# topmark:header:start
#
#   project      : Rewriter
#   file         : errors.py
#   file_relpath : src/rewriter/pipeline/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error vocabulary of the pipeline core.

Taxonomy:
    - `ResolutionError`: a stage type name could not be produced by the stage
      factory. Fatal; aborts assembly.
    - `InitializationError`: raised by a stage whose ``init()`` rejects its
      context or descriptor. Propagated unchanged by the assembler.
    - Processing faults: `xml.sax.SAXException` and subclasses (including the
      project's own `ProcessingFault`), raised while events flow or while the
      generator completes.
    - `PipelineIOError`: the generic I/O-style error reported by
      [`Pipeline.finish()`][rewriter.pipeline.runner.Pipeline.finish] when a
      fault carries no underlying `OSError`.
    - `PipelineStateError`: lifecycle misuse (single-use violations, access
      before assembly).

Callers of ``finish()`` only ever observe `OSError` instances; see `unwrap_fault`.
"""

from __future__ import annotations

from typing import Any
from xml.sax import SAXException


class RewriterError(Exception):
    """Base exception for all Rewriter errors.

    Args:
        message (str): Human readable message.
        **context (Any): Structured details kept for diagnostics.
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context


class ConfigError(RewriterError):
    """Pipeline configuration is missing, malformed or inconsistent."""


class ResolutionError(RewriterError, LookupError):
    """A stage type name could not be resolved for the given role.

    Attributes:
        role (str): The stage role (``generator``, ``transformer``, ``serializer``).
        type_name (str): The requested stage type name.
    """

    def __init__(self, role: str, type_name: str) -> None:
        super().__init__(
            f"Unable to get component of role '{role}' with type '{type_name}'.",
            role=role,
            type_name=type_name,
        )
        self.role = role
        self.type_name = type_name


class InitializationError(RewriterError):
    """A stage rejected its processing context or descriptor during ``init()``."""


class PipelineStateError(RewriterError, RuntimeError):
    """A pipeline or stage was used outside its single-use lifecycle."""


class PipelineIOError(RewriterError, OSError):
    """Generic I/O-style error reported when a processing fault has no I/O cause."""


class ProcessingFault(SAXException):
    """Fault raised by a stage while events flow.

    Behaves like any `SAXException`: ``getException()`` returns the wrapped
    exception, if any.
    """

    @classmethod
    def wrap(cls, exc: Exception, message: str | None = None) -> ProcessingFault:
        """Wrap ``exc`` (typically an `OSError`) into a processing fault.

        Args:
            exc (Exception): The underlying exception.
            message (str | None): Optional message; defaults to ``str(exc)``.

        Returns:
            ProcessingFault: The fault carrying ``exc``.
        """
        return cls(message or str(exc), exc)


def io_cause(fault: SAXException) -> OSError | None:
    """Return the `OSError` wrapped by ``fault``, or ``None``.

    Both the SAX-native wrapped exception and an explicit ``raise ... from``
    cause are considered; the SAX-native one wins.
    """
    wrapped: Exception | None = fault.getException()
    if isinstance(wrapped, OSError):
        return wrapped
    if isinstance(fault.__cause__, OSError):
        return fault.__cause__
    return None


def unwrap_fault(fault: SAXException) -> OSError:
    """Translate a processing fault into the single reported error.

    If the fault carries an underlying `OSError`, that exact error is returned
    so its specific meaning is preserved. Otherwise a new `PipelineIOError` is
    returned with the fault recorded as its ``__cause__``.

    Args:
        fault (SAXException): The fault raised by the generator's completion hook.

    Returns:
        OSError: The error to raise to the caller.
    """
    cause: OSError | None = io_cause(fault)
    if cause is not None:
        return cause
    error = PipelineIOError("Pipeline exception.", fault=str(fault))
    error.__cause__ = fault
    return error
