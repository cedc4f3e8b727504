# topmark:header:start
#
#   project      : Rewriter
#   file         : stages.py
#   file_relpath : src/rewriter/registry/stages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stage registry: the default stage factory.

Stage classes are registered per role under a type name. Resolution always
instantiates a **fresh** stage, so no stage instance is ever shared between
pipeline invocations. Injected transformers are registered as classes too and
are instantiated anew on every
[`injected_transformers()`][rewriter.registry.stages.StageRegistry.injected_transformers]
call.

Two layers exist:

* Module-level decorators (`register_generator`, `register_transformer`,
  `register_serializer`) record classes in a process-wide catalog when the
  defining module is imported (built-ins and plugins).
* `StageRegistry` instances are built from that catalog (or empty, for
  tests) and may be mutated without touching the catalog.

Typical usage:
    ```python
    from rewriter.registry import get_default_registry

    registry = get_default_registry()
    registry.names(StageRole.TRANSFORMER)
    registry.register_injected("audit", AuditTransformer, ranking=-10)
    try:
        ...
    finally:
        registry.unregister_injected("audit")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from rewriter.config.logging import get_logger
from rewriter.constants import ROLE_GENERATOR, ROLE_SERIALIZER, ROLE_TRANSFORMER
from rewriter.pipeline.factory import InjectedTransformers

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rewriter.config.logging import RewriterLogger
    from rewriter.pipeline.contracts import Generator, Serializer, Transformer

logger: RewriterLogger = get_logger(__name__)

_C = TypeVar("_C", bound=type)


class StageRole(str, Enum):
    """Role of a stage within a pipeline."""

    GENERATOR = ROLE_GENERATOR
    TRANSFORMER = ROLE_TRANSFORMER
    SERIALIZER = ROLE_SERIALIZER


@dataclass(frozen=True)
class StageMeta:
    """Stable, serializable metadata about a registered stage.

    Attributes:
        role (StageRole): The stage role.
        name (str): Registered type name.
        class_name (str): Qualified name of the implementing class.
        description (str): First line of the class docstring.
        injected (str | None): ``"pre"`` or ``"post"`` for injected transformers.
        ranking (int | None): Ordering key of injected transformers.
    """

    role: StageRole
    name: str
    class_name: str
    description: str = ""
    injected: str | None = None
    ranking: int | None = None


@dataclass(frozen=True)
class _InjectedEntry:
    name: str
    cls: type
    ranking: int

    @property
    def position(self) -> str:
        return "pre" if self.ranking < 0 else "post"


def _describe(cls: type) -> str:
    doc: str = (cls.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else ""


# Process-wide catalog filled by the class decorators below.
_catalog: dict[StageRole, dict[str, type]] = {role: {} for role in StageRole}


def _register_in_catalog(role: StageRole, name: str) -> Callable[[_C], _C]:
    def decorator(cls: _C) -> _C:
        """Record ``cls`` under ``name`` and stamp the name on the class."""
        logger.debug("Registering %s %s as '%s'", role.value, cls.__name__, name)
        existing: type | None = _catalog[role].get(name)
        if existing is not None and existing is not cls:
            raise ValueError(f"A {role.value} named '{name}' is already registered.")
        cls.name = name  # type: ignore[attr-defined]
        _catalog[role][name] = cls
        return cls

    return decorator


def register_generator(name: str) -> Callable[[_C], _C]:
    """Class decorator registering a generator type.

    Args:
        name (str): The generator type name.

    Returns:
        Callable[[type], type]: The decorator.

    Raises:
        ValueError: If another class is already registered under ``name``.
    """
    return _register_in_catalog(StageRole.GENERATOR, name)


def register_transformer(name: str) -> Callable[[_C], _C]:
    """Class decorator registering a transformer type (see `register_generator`)."""
    return _register_in_catalog(StageRole.TRANSFORMER, name)


def register_serializer(name: str) -> Callable[[_C], _C]:
    """Class decorator registering a serializer type (see `register_generator`)."""
    return _register_in_catalog(StageRole.SERIALIZER, name)


def get_stage_catalog() -> dict[StageRole, dict[str, type]]:
    """Return a copy of the process-wide catalog of decorated stage classes."""
    return {role: dict(classes) for role, classes in _catalog.items()}


class StageRegistry:
    """Resolves stage type names into fresh stage instances.

    Implements the [`StageFactory`][rewriter.pipeline.factory.StageFactory]
    protocol.

    Args:
        classes (dict[StageRole, dict[str, type]] | None): Initial registrations;
            empty when omitted.

    Notes:
        - Thread safe via RLock. Registrations are per instance.
    """

    def __init__(self, classes: dict[StageRole, dict[str, type]] | None = None) -> None:
        self._lock = RLock()
        self._classes: dict[StageRole, dict[str, type]] = {role: {} for role in StageRole}
        for role, entries in (classes or {}).items():
            self._classes[StageRole(role)].update(entries)
        self._injected: dict[str, _InjectedEntry] = {}

    @classmethod
    def from_catalog(cls) -> StageRegistry:
        """Return a registry holding every class recorded by the decorators."""
        return cls(get_stage_catalog())

    # --- StageFactory protocol ---

    def _instantiate(self, role: StageRole, type_name: str) -> Any:
        with self._lock:
            stage_cls: type | None = self._classes[role].get(type_name)
        if stage_cls is None:
            logger.warning("No %s registered as '%s'", role.value, type_name)
            return None
        return stage_cls()

    def resolve_generator(self, type_name: str) -> Generator | None:
        """Return a new generator of type ``type_name`` or ``None`` if unknown."""
        return self._instantiate(StageRole.GENERATOR, type_name)

    def resolve_transformer(self, type_name: str) -> Transformer | None:
        """Return a new transformer of type ``type_name`` or ``None`` if unknown."""
        return self._instantiate(StageRole.TRANSFORMER, type_name)

    def resolve_serializer(self, type_name: str) -> Serializer | None:
        """Return a new serializer of type ``type_name`` or ``None`` if unknown."""
        return self._instantiate(StageRole.SERIALIZER, type_name)

    def injected_transformers(self) -> InjectedTransformers:
        """Instantiate the injected transformers.

        Entries with a negative ranking form the ``pre`` set, the others the
        ``post`` set; each set is ordered by ranking, then name.

        Returns:
            InjectedTransformers: Fresh instances, one per registered entry.
        """
        with self._lock:
            entries: list[_InjectedEntry] = sorted(
                self._injected.values(), key=lambda e: (e.ranking, e.name)
            )
        pre: tuple[Transformer, ...] = tuple(e.cls() for e in entries if e.position == "pre")
        post: tuple[Transformer, ...] = tuple(e.cls() for e in entries if e.position == "post")
        return InjectedTransformers(pre=pre, post=post)

    # --- Introspection ---

    def names(self, role: StageRole) -> tuple[str, ...]:
        """Return the registered type names for ``role`` (sorted)."""
        with self._lock:
            return tuple(sorted(self._classes[role]))

    def is_registered(self, role: StageRole, name: str) -> bool:
        """Return True if ``name`` is registered for ``role``."""
        with self._lock:
            return name in self._classes[role]

    def iter_meta(self) -> Iterator[StageMeta]:
        """Iterate over metadata for all registered stages, then injected transformers.

        Yields:
            StageMeta: Serializable metadata, grouped by role and sorted by name.
        """
        with self._lock:
            for role in StageRole:
                for name in sorted(self._classes[role]):
                    stage_cls: type = self._classes[role][name]
                    yield StageMeta(
                        role=role,
                        name=name,
                        class_name=stage_cls.__qualname__,
                        description=_describe(stage_cls),
                    )
            for entry in sorted(self._injected.values(), key=lambda e: (e.ranking, e.name)):
                yield StageMeta(
                    role=StageRole.TRANSFORMER,
                    name=entry.name,
                    class_name=entry.cls.__qualname__,
                    description=_describe(entry.cls),
                    injected=entry.position,
                    ranking=entry.ranking,
                )

    # --- Mutation ---

    def register(self, role: StageRole, name: str, stage_cls: type) -> None:
        """Register ``stage_cls`` under ``name`` for ``role``.

        Raises:
            ValueError: If ``name`` is already registered for ``role``.
        """
        with self._lock:
            if name in self._classes[role]:
                raise ValueError(f"A {role.value} named '{name}' is already registered.")
            self._classes[role][name] = stage_cls

    def unregister(self, role: StageRole, name: str) -> bool:
        """Unregister ``name`` for ``role``.

        Returns:
            bool: True if removed, else False.
        """
        with self._lock:
            return self._classes[role].pop(name, None) is not None

    def register_injected(self, name: str, stage_cls: type, *, ranking: int = 0) -> None:
        """Register a transformer class injected into every pipeline.

        Args:
            name (str): Identifier of the injected entry.
            stage_cls (type): Transformer class, instantiated without arguments.
            ranking (int): Negative: runs before the explicit transformers;
                zero or positive: runs after them. Lower rankings run first.

        Raises:
            ValueError: If ``name`` is already registered as injected.
        """
        with self._lock:
            if name in self._injected:
                raise ValueError(f"An injected transformer named '{name}' is already registered.")
            self._injected[name] = _InjectedEntry(name=name, cls=stage_cls, ranking=ranking)

    def unregister_injected(self, name: str) -> bool:
        """Unregister an injected transformer.

        Returns:
            bool: True if removed, else False.
        """
        with self._lock:
            return self._injected.pop(name, None) is not None
