"""Entity type resolution and registry."""

from intentforge.entities.registry import EntityTypeRegistry
from intentforge.entities.resolver import (
    DEFAULT_NATIVE_ENTITIES,
    MappingEntityResolver,
    NativeEntityResolver,
)

__all__ = [
    "DEFAULT_NATIVE_ENTITIES",
    "EntityTypeRegistry",
    "MappingEntityResolver",
    "NativeEntityResolver",
]
