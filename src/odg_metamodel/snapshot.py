"""Immutable schema snapshots and the copy-on-write store that publishes them."""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

    from odg_metamodel.models import AspectSchema, EntityDefinition, NamedType

logger = logging.getLogger(__name__)

T = TypeVar("T")


def entity_key(name: str) -> str:
    """Entity names are case-insensitive (``mlModelGroup`` == ``MlModelGroup``)."""
    return name.casefold()


class SchemaSnapshot:
    """The complete schema set at one version.

    Every mutator returns a new snapshot; the receiver is never changed,
    so a reader holding a snapshot sees a consistent schema set for as
    long as it keeps the reference.
    """

    __slots__ = ("_aspects", "_entities", "_named_types", "_version")

    def __init__(
        self,
        aspects: Mapping[str, AspectSchema] | None = None,
        entities: Mapping[str, EntityDefinition] | None = None,
        named_types: Mapping[str, NamedType] | None = None,
        version: int = 0,
    ):
        self._aspects = MappingProxyType(dict(aspects or {}))
        self._entities = MappingProxyType(dict(entities or {}))
        self._named_types = MappingProxyType(dict(named_types or {}))
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    @property
    def aspects(self) -> Mapping[str, AspectSchema]:
        """Aspects by name, in registration order."""
        return self._aspects

    @property
    def entities(self) -> Mapping[str, EntityDefinition]:
        """Entity definitions keyed by :func:`entity_key`, in definition order."""
        return self._entities

    @property
    def named_types(self) -> Mapping[str, NamedType]:
        """Enums and records by full name, across all registered aspects."""
        return self._named_types

    def entity(self, name: str) -> EntityDefinition | None:
        return self._entities.get(entity_key(name))

    def with_aspect(self, aspect: AspectSchema, named_types: Iterable[NamedType] = ()) -> SchemaSnapshot:
        aspects = dict(self._aspects)
        aspects[aspect.name] = aspect
        merged = dict(self._named_types)
        for named in named_types:
            merged.setdefault(named.full_name, named)
        return SchemaSnapshot(aspects, self._entities, merged, self._version + 1)

    def with_entity(self, entity: EntityDefinition) -> SchemaSnapshot:
        entities = dict(self._entities)
        entities[entity_key(entity.name)] = entity
        return SchemaSnapshot(self._aspects, entities, self._named_types, self._version + 1)

    def __repr__(self) -> str:
        return (
            f"SchemaSnapshot(version={self._version}, aspects={len(self._aspects)}, entities={len(self._entities)})"
        )


class SchemaStore:
    """Holds the current snapshot; one writer at a time, lock-free readers.

    Readers call :attr:`current` and get whichever snapshot was last
    published. Writers go through :meth:`update`, which computes the next
    snapshot from the current one under a lock and publishes it with a
    single reference assignment.
    """

    def __init__(self, snapshot: SchemaSnapshot | None = None):
        self._snapshot = snapshot or SchemaSnapshot()
        self._write_lock = threading.Lock()

    @property
    def current(self) -> SchemaSnapshot:
        return self._snapshot

    def update(self, mutate: Callable[[SchemaSnapshot], SchemaSnapshot]) -> SchemaSnapshot:
        """Apply ``mutate`` to the current snapshot and publish the result.

        If ``mutate`` raises, nothing is published.
        """
        with self._write_lock:
            new = mutate(self._snapshot)
            self._snapshot = new
        logger.debug("Published schema snapshot version %d", new.version)
        return new

    def replace(self, snapshot: SchemaSnapshot) -> SchemaSnapshot:
        """Publish ``snapshot`` wholesale, with a version above the current one."""

        def _swap(old: SchemaSnapshot) -> SchemaSnapshot:
            version = max(snapshot.version, old.version + 1)
            return SchemaSnapshot(snapshot.aspects, snapshot.entities, snapshot.named_types, version)

        return self.update(_swap)


class SnapshotView(Generic[T]):
    """Lazy, finite, restartable iteration over one mapping of a snapshot.

    The mapping belongs to a published snapshot and never changes, so
    every pass yields the same items in the same order even if the store
    has moved on.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, T]):
        self._items = items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"SnapshotView({list(self._items)})"
