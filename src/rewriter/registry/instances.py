# topmark:header:start
#
#   project      : Rewriter
#   file         : instances.py
#   file_relpath : src/rewriter/registry/instances.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in and plugin stage discovery.

Built-in stage modules register their classes through the registry
decorators on import. Plugins are discovered via the ``rewriter.stages``
entry point group: each entry point must load a callable taking a
[`StageRegistry`][rewriter.registry.stages.StageRegistry] and registering
stages (including injected transformers) on it.

Notes:
    * The default registry is built once and cached; tests should build
      their own `StageRegistry` instead of mutating the cached one.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import import_module
from importlib.metadata import EntryPoints, entry_points
from typing import TYPE_CHECKING, Any, Final

from rewriter.config.logging import get_logger
from rewriter.registry.stages import StageRegistry

if TYPE_CHECKING:
    from rewriter.config.logging import RewriterLogger

logger: RewriterLogger = get_logger(__name__)

_BUILTIN_MODULES: Final[tuple[str, ...]] = (
    "rewriter.pipeline.stages.generators",
    "rewriter.pipeline.stages.transformers",
    "rewriter.pipeline.stages.serializers",
)

ENTRYPOINT_GROUP: Final[str] = "rewriter.stages"


def register_builtin_stages() -> None:
    """Import the built-in stage modules so their decorators run."""
    for modname in _BUILTIN_MODULES:
        import_module(modname)


def load_plugin_stages(registry: StageRegistry) -> int:
    """Let every ``rewriter.stages`` entry point register stages on ``registry``.

    A failing plugin is logged and skipped; it never prevents the others from loading.

    Returns:
        int: Number of plugins applied successfully.
    """
    try:
        eps = entry_points()
    except Exception:
        logger.exception("Failed to read entry points")
        return 0

    candidates: EntryPoints = eps.select(group=ENTRYPOINT_GROUP)
    loaded: int = 0
    for ep in candidates:
        try:
            provider: Any = ep.load()
            if not callable(provider):
                logger.warning("Entry point %s is not callable: %r", ep.name, provider)
                continue
            provider(registry)
            loaded += 1
        except Exception:
            logger.exception("Failed loading stages from entry point %s", ep.name)
    return loaded


@lru_cache(maxsize=1)
def get_default_registry() -> StageRegistry:
    """Return (and cache) the registry with built-in and plugin stages."""
    register_builtin_stages()
    registry: StageRegistry = StageRegistry.from_catalog()
    plugins: int = load_plugin_stages(registry)
    logger.debug("Default stage registry ready (%d plugin(s))", plugins)
    return registry
