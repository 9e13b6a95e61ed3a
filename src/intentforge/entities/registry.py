"""Shared entity type descriptors and their demotion."""

from __future__ import annotations

import logging
import threading

from intentforge.model.intents import EntityKind, EntityTypeDescriptor

logger = logging.getLogger(__name__)


class EntityTypeRegistry:
    """Owns the entity type descriptors of a model.

    One descriptor exists per entity type name, so a demotion made while
    compiling one intent is seen by every other parameter and intent bound
    to that type. ``demote_to_any`` is the single writer of
    ``EntityTypeDescriptor.kind`` and is safe to call from several threads.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, EntityTypeDescriptor] = {}
        self._demoted: list[str] = []
        self._lock = threading.Lock()

    def get_or_create(
        self,
        name: str,
        kind: EntityKind = EntityKind.BASE,
    ) -> EntityTypeDescriptor:
        """Return the shared descriptor for ``name``, creating it if needed.

        Args:
            name: Entity type name.
            kind: Kind used when the descriptor does not exist yet.

        Returns:
            The registered descriptor.

        Raises:
            ValueError: If ``name`` is already registered with another kind.
        """
        kind = EntityKind(kind)
        with self._lock:
            descriptor = self._descriptors.get(name)
            if descriptor is None:
                descriptor = EntityTypeDescriptor(name=name, kind=kind)
                self._descriptors[name] = descriptor
                return descriptor

            if descriptor.kind is not kind and name not in self._demoted:
                raise ValueError(
                    f"Entity type '{name}' is already registered as "
                    f"{descriptor.kind.value}, not {kind.value}"
                )
            return descriptor

    def get(self, name: str) -> EntityTypeDescriptor | None:
        return self._descriptors.get(name)

    def demote_to_any(self, descriptor: EntityTypeDescriptor) -> bool:
        """Demote a Base descriptor to Any.

        Args:
            descriptor: Descriptor without a native mapping.

        Returns:
            True if the descriptor changed, False for Custom or Any ones.
        """
        with self._lock:
            if descriptor.kind is not EntityKind.BASE:
                return False
            descriptor.kind = EntityKind.ANY
            self._demoted.append(descriptor.name)

        logger.info(
            "Entity type '%s' has no native mapping, degrading to any",
            descriptor.name,
        )
        return True

    def demoted(self) -> list[str]:
        """Return names of the entity types demoted so far."""
        with self._lock:
            return list(self._demoted)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors
