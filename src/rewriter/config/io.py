# topmark:header:start
#
#   project      : Rewriter
#   file         : io.py
#   file_relpath : src/rewriter/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load pipeline configuration from TOML.

Parsing is done with `tomlkit` and unwrapped into plain Python structures
before being validated into immutable descriptors.

Expected layout:

```toml
[options]
encoding = "utf-8"

[pipeline.generator]
type = "html"

[[pipeline.transformers]]
type = "rename"
map = { b = "strong" }

[pipeline.serializer]
type = "xml"
```

Every stage table requires a string ``type``; all other keys become the
stage's parameters. ``transformers`` is optional.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from rewriter.config.descriptors import PipelineDescription, StageDescriptor
from rewriter.config.logging import get_logger
from rewriter.config.options import ProcessingOptions
from rewriter.pipeline.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from rewriter.config.logging import RewriterLogger

logger: RewriterLogger = get_logger(__name__)

PIPELINE_KEY: Final[str] = "pipeline"
OPTIONS_KEY: Final[str] = "options"
TYPE_KEY: Final[str] = "type"


@dataclass(frozen=True)
class PipelineConfig:
    """A loaded pipeline configuration.

    Attributes:
        description (PipelineDescription): The pipeline to assemble.
        options (ProcessingOptions): Normalized processing options.
    """

    description: PipelineDescription
    options: ProcessingOptions = field(default_factory=ProcessingOptions)


def _stage_descriptor(table: Any, where: str) -> StageDescriptor:
    if not isinstance(table, dict):
        raise ConfigError(f"'{where}' must be a table", key=where)
    type_name: Any = table.get(TYPE_KEY)
    if not isinstance(type_name, str) or not type_name.strip():
        raise ConfigError(f"'{where}.{TYPE_KEY}' must be a non-empty string", key=where)
    params: dict[str, Any] = {k: v for k, v in table.items() if k != TYPE_KEY}
    return StageDescriptor(type_name=type_name.strip(), params=params)


def pipeline_config_from_dict(data: Mapping[str, Any]) -> PipelineConfig:
    """Validate a plain TOML-like mapping into a `PipelineConfig`.

    Args:
        data (Mapping[str, Any]): Plain (unwrapped) configuration data.

    Returns:
        PipelineConfig: The validated configuration.

    Raises:
        ConfigError: If a required table or key is missing or mistyped.
    """
    pipeline: Any = data.get(PIPELINE_KEY)
    if not isinstance(pipeline, dict):
        raise ConfigError(f"Missing [{PIPELINE_KEY}] table", key=PIPELINE_KEY)

    for required in ("generator", "serializer"):
        if required not in pipeline:
            raise ConfigError(
                f"Missing [{PIPELINE_KEY}.{required}] table", key=f"{PIPELINE_KEY}.{required}"
            )
    generator: StageDescriptor = _stage_descriptor(
        pipeline["generator"], f"{PIPELINE_KEY}.generator"
    )
    serializer: StageDescriptor = _stage_descriptor(
        pipeline["serializer"], f"{PIPELINE_KEY}.serializer"
    )

    raw_transformers: Any = pipeline.get("transformers", [])
    if not isinstance(raw_transformers, list):
        raise ConfigError(
            f"'{PIPELINE_KEY}.transformers' must be an array of tables",
            key=f"{PIPELINE_KEY}.transformers",
        )
    transformers: tuple[StageDescriptor, ...] = tuple(
        _stage_descriptor(t, f"{PIPELINE_KEY}.transformers[{i}]")
        for i, t in enumerate(raw_transformers)
    )

    raw_options: Any = data.get(OPTIONS_KEY, {})
    if not isinstance(raw_options, dict):
        raise ConfigError(f"'{OPTIONS_KEY}' must be a table", key=OPTIONS_KEY)

    return PipelineConfig(
        description=PipelineDescription(
            generator=generator, serializer=serializer, transformers=transformers
        ),
        options=ProcessingOptions.from_mapping(raw_options),
    )


def parse_pipeline_toml(text: str) -> PipelineConfig:
    """Parse TOML text into a `PipelineConfig`.

    Raises:
        ConfigError: On TOML syntax errors (the `tomlkit` error is the cause)
            or invalid structure.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"Error parsing TOML document: {exc}") from exc
    return pipeline_config_from_dict(doc.unwrap())


def load_pipeline_toml(path: Path) -> PipelineConfig:
    """Load a pipeline configuration file.

    Args:
        path (Path): Path to the TOML file.

    Returns:
        PipelineConfig: The validated configuration.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    logger.debug("Loading pipeline configuration from %s", path)
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Cannot read pipeline configuration {path}: {exc}", path=str(path)
        ) from exc
    try:
        return parse_pipeline_toml(text)
    except ConfigError as exc:
        exc.context.setdefault("path", str(path))
        logger.error("Invalid pipeline configuration %s: %s", path, exc)
        raise
