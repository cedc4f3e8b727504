# topmark:header:start
#
#   project      : Rewriter
#   file         : options.py
#   file_relpath : src/rewriter/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Processing options normalization.

Turns a loosely-typed property mapping (typically the ``[options]`` table of a
pipeline TOML file) into a frozen `ProcessingOptions` value with defaults
filled in. This is independent from pipeline assembly: the options simply ride
along on the [`ProcessingContext`][rewriter.pipeline.context.ProcessingContext].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rewriter.constants import DEFAULT_ENCODING, DEFAULT_FORMAT_VERSION

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class ProcessingOptions:
    """Normalized processing options.

    Attributes:
        debug (bool): Include diagnostic counters (such as the ``audit``
            transformer's) in the verbose run report (default ``True``).
        version (str): Version written in the ``xml`` serializer's declaration
            (default ``DEFAULT_FORMAT_VERSION``).
        encoding (str): Output character encoding (default ``"utf-8"``).
    """

    debug: bool = True
    version: str = DEFAULT_FORMAT_VERSION
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_mapping(cls, props: Mapping[str, Any] | None) -> ProcessingOptions:
        """Create options from a property mapping.

        Missing keys fall back to defaults; empty strings count as missing for
        ``version`` and ``encoding``.

        Args:
            props (Mapping[str, Any] | None): Raw properties.

        Returns:
            ProcessingOptions: The normalized options.

        Raises:
            ConfigError: If ``debug`` is present but not a boolean.
        """
        props = props or {}

        debug: Any = props.get("debug")
        version: Any = props.get("version")
        encoding: Any = props.get("encoding")

        if debug is not None and not isinstance(debug, bool):
            from rewriter.pipeline.errors import ConfigError  # local to avoid cycles

            raise ConfigError(f"'debug' must be a boolean, got {debug!r}", key="debug")

        return cls(
            debug=debug if debug is not None else True,
            version=str(version) if version else DEFAULT_FORMAT_VERSION,
            encoding=str(encoding) if encoding else DEFAULT_ENCODING,
        )
