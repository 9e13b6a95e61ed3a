"""Mapping of abstract entity types to native engine entities."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from intentforge.model.intents import EntityKind, EntityTypeDescriptor

logger = logging.getLogger(__name__)

DEFAULT_NATIVE_ENTITIES: dict[str, str] = {
    # Contact
    "email": "email",
    "phone-number": "phonenumber",
    "url": "url",
    "ip": "ip",
    "hashtag": "hashtag",
    # Numbers and amounts
    "number": "number",
    "integer": "number",
    "ordinal": "ordinal",
    "percentage": "percentage",
    "age": "age",
    "currency": "currency",
    "dimension": "dimension",
    # Date and time
    "date": "date",
    "date-time": "datetime",
    "duration": "duration",
}


class NativeEntityResolver(Protocol):
    """Answers whether an entity type has a native engine name."""

    def resolve(self, entity: EntityTypeDescriptor) -> str | None:
        """Return the native entity name, or None if there is no mapping."""
        ...


class MappingEntityResolver:
    """Static lookup-table resolver.

    Base entities are looked up in the table. Custom entities resolve to
    their own name since they are registered under it. Any entities never
    have a native equivalent.
    """

    def __init__(
        self,
        mapping: Mapping[str, str] | None = None,
        custom_entities_native: bool = True,
    ) -> None:
        self._mapping = dict(DEFAULT_NATIVE_ENTITIES if mapping is None else mapping)
        self._custom_entities_native = custom_entities_native

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        custom_entities_native: bool = True,
    ) -> "MappingEntityResolver":
        """Load a JSON mapping file merged over the default table.

        Args:
            path: JSON file holding an object of entity name to native name.
            custom_entities_native: Whether custom entities map to their name.

        Returns:
            Resolver using the merged table.

        Raises:
            ValueError: If the file is not valid JSON or not a string mapping.
        """
        path = Path(path)
        try:
            overrides = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid entity mapping file {path}: {e}") from e

        if not isinstance(overrides, dict) or not all(
            isinstance(key, str) and isinstance(value, str)
            for key, value in overrides.items()
        ):
            raise ValueError(
                f"Entity mapping file {path} must contain an object of "
                "entity name to native name strings"
            )

        mapping = {**DEFAULT_NATIVE_ENTITIES, **overrides}
        logger.debug("Loaded %d entity mappings from %s", len(overrides), path)
        return cls(mapping, custom_entities_native=custom_entities_native)

    @property
    def mapping(self) -> dict[str, str]:
        return dict(self._mapping)

    def resolve(self, entity: EntityTypeDescriptor) -> str | None:
        if entity.kind is EntityKind.BASE:
            return self._mapping.get(entity.name)
        if entity.kind is EntityKind.CUSTOM:
            if self._custom_entities_native:
                return entity.name
            return self._mapping.get(entity.name)
        if entity.kind is EntityKind.ANY:
            return None
        raise ValueError(f"Unknown entity kind: {entity.kind!r}")
