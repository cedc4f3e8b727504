# topmark:header:start
#
#   project      : Rewriter
#   file         : constants.py
#   file_relpath : src/rewriter/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewriter Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    REWRITER_VERSION: str = get_version("rewriter")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    REWRITER_VERSION = "0.0.0"

# Environment variable consulted for the internal log level:
LOG_LEVEL_ENV_VAR: str = "REWRITER_LOG_LEVEL"

# Defaults applied by `ProcessingOptions.from_mapping()`:
DEFAULT_ENCODING: str = "utf-8"
DEFAULT_FORMAT_VERSION: str = "1.0"

# Stage roles, as used in registry lookups and error messages:
ROLE_GENERATOR: str = "generator"
ROLE_TRANSFORMER: str = "transformer"
ROLE_SERIALIZER: str = "serializer"

# Key under which the `audit` transformer publishes its counters:
AUDIT_ATTRIBUTE: str = "audit"
