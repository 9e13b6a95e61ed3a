"""Input model for intent definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntityKind(str, Enum):
    """Kind of an abstract entity type."""

    BASE = "base"  # Built-in type, may have a native engine equivalent
    CUSTOM = "custom"  # User-defined type, registered under its own name
    ANY = "any"  # Free-text catch-all


@dataclass(eq=False)
class EntityTypeDescriptor:
    """An abstract entity type referenced by parameters.

    Descriptors are shared by reference: every parameter bound to the same
    type holds the same instance. ``kind`` is only changed through
    ``EntityTypeRegistry.demote_to_any``.

    Attributes:
        name: Entity type identifier (e.g. ``number``, ``city``).
        kind: Whether the type is built-in, custom, or a catch-all.
    """

    name: str
    kind: EntityKind = EntityKind.BASE

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Entity type name cannot be empty")
        if isinstance(self.kind, str):
            self.kind = EntityKind(self.kind.lower())


@dataclass(frozen=True)
class ParameterSpec:
    """A named, typed slot of an intent.

    Attributes:
        name: Parameter name.
        entity: Entity type the parameter is bound to.
        text_fragments: Literal substrings marking the parameter in
            training sentences. Only the first one drives matching.
    """

    name: str | None
    entity: EntityTypeDescriptor | None
    text_fragments: tuple[str, ...] = ()

    @property
    def primary_fragment(self) -> str | None:
        return self.text_fragments[0] if self.text_fragments else None


@dataclass(frozen=True)
class IntentSpec:
    """An intent with its training sentences and parameters."""

    name: str | None
    training_sentences: tuple[str, ...] = ()
    parameters: tuple[ParameterSpec, ...] = field(default_factory=tuple)
