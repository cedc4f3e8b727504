# topmark:header:start
#
#   project      : Rewriter
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for invoking the Rewriter CLI in tests.

The CLI reconfigures the root logger on every invocation, so the TRACE test
logging set up in `pytest_configure` is restored after each CLI test.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from rewriter.cli.main import cli
from rewriter.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

HTML_TO_XML = """
[pipeline.generator]
type = "html"

[[pipeline.transformers]]
type = "rename"
map = { b = "strong" }

[pipeline.serializer]
type = "xml"
declaration = false
"""


@pytest.fixture(autouse=True)
def restore_test_logging() -> Iterator[None]:
    """Reinstate TRACE logging on a live stream after each CLI invocation."""
    yield
    setup_logging(level=TRACE_LEVEL)


def run_cli(argv: Sequence[str], *, input_text: str | bytes | IO[Any] | None = None) -> Result:
    """Invoke the CLI with ``argv`` and optional STDIN content.

    Args:
        argv (Sequence[str]): CLI argument vector, e.g. ``["run", "--pipeline", "p.toml"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    return CliRunner().invoke(cli, list(argv), input=input_text)


def write_pipeline(tmp_path: Path, text: str = HTML_TO_XML, name: str = "pipeline.toml") -> Path:
    """Write a pipeline TOML file into ``tmp_path`` and return its path."""
    path: Path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path
