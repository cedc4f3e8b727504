# topmark:header:start
#
#   project      : Rewriter
#   file         : context.py
#   file_relpath : src/rewriter/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Processing context shared by all stages of one pipeline invocation.

The core passes the context through to every stage's ``init()`` untouched;
only stages read from or write to it.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rewriter.config.options import ProcessingOptions

if TYPE_CHECKING:
    from typing import TextIO


@dataclass
class ProcessingContext:
    """Mutable per-invocation context.

    Attributes:
        out (TextIO): Stream serializers write their output into.
        options (ProcessingOptions): Normalized processing options.
        source (str | None): Optional name of the input (file path, ``"<stdin>"``).
        attributes (dict[str, Any]): Free-form results published by stages
            (for instance the ``audit`` transformer's counters).
    """

    out: TextIO = field(default_factory=io.StringIO)
    options: ProcessingOptions = field(default_factory=ProcessingOptions)
    source: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def getvalue(self) -> str:
        """Return the output written so far when ``out`` is an in-memory buffer.

        Raises:
            TypeError: If ``out`` is not a `io.StringIO`.
        """
        if not isinstance(self.out, io.StringIO):
            raise TypeError("Output stream is not an in-memory buffer")
        return self.out.getvalue()
