# topmark:header:start
#
#   project      : Rewriter
#   file         : status.py
#   file_relpath : src/rewriter/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lifecycle states of a pipeline invocation.

```text
UNINITIALIZED -> ASSEMBLING -> READY -> RUNNING -> FINISHED
                     |                     |
                     +---------------------+--> FAILED
```

``FINISHED`` and ``FAILED`` are terminal: a pipeline is single-use.
Values are human-readable strings used in CLI output and logs; compare with
``==``, not ``is``.
"""

from __future__ import annotations

from typing import Final

from yachalk import chalk

from rewriter.rendering.colored_enum import ColoredStrEnum


class PipelineState(ColoredStrEnum):
    """State of one pipeline invocation."""

    UNINITIALIZED = ("uninitialized", chalk.gray)
    ASSEMBLING = ("assembling", chalk.blue)
    READY = ("ready", chalk.cyan)
    RUNNING = ("running", chalk.cyan)
    FINISHED = ("finished", chalk.green)
    FAILED = ("failed", chalk.red_bright)

    @property
    def is_terminal(self) -> bool:
        """Return True for states without outgoing transitions."""
        return self in (PipelineState.FINISHED, PipelineState.FAILED)


TRANSITIONS: Final[dict[PipelineState, frozenset[PipelineState]]] = {
    PipelineState.UNINITIALIZED: frozenset({PipelineState.ASSEMBLING}),
    PipelineState.ASSEMBLING: frozenset({PipelineState.READY, PipelineState.FAILED}),
    PipelineState.READY: frozenset({PipelineState.RUNNING}),
    PipelineState.RUNNING: frozenset({PipelineState.FINISHED, PipelineState.FAILED}),
    PipelineState.FINISHED: frozenset(),
    PipelineState.FAILED: frozenset(),
}


def can_transition(current: PipelineState, target: PipelineState) -> bool:
    """Return True if ``current -> target`` is an allowed lifecycle transition."""
    return target in TRANSITIONS[current]
