"""Synthesis of catch-all entities for degraded parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from intentforge.compiler.boundary import Boundaries
from intentforge.model.compiled import (
    BetweenCondition,
    SynthesizedEntity,
    SynthesizedKind,
)

logger = logging.getLogger(__name__)

# One-or-more: a pattern that can match the empty string makes the engine's
# matcher recurse forever.
MATCH_ANYTHING_PATTERN = "/.+/"
ANY_ENTITY_SUFFIX = "Any"


def any_entity_name(intent_name: str, parameter_name: str) -> str:
    """Return the synthesized entity name for a parameter."""
    return f"{intent_name}{parameter_name}{ANY_ENTITY_SUFFIX}"


@dataclass
class _EntityAccumulator:
    name: str
    kind: SynthesizedKind
    left_stops: list[str] = field(default_factory=list)
    right_stops: list[str] = field(default_factory=list)
    between_left: list[str] | None = None
    between_right: list[str] | None = None
    patterns: list[str] = field(default_factory=list)

    def build(self) -> SynthesizedEntity:
        between = None
        if self.between_left is not None and self.between_right is not None:
            between = BetweenCondition(
                left=tuple(self.between_left),
                right=tuple(self.between_right),
            )
        return SynthesizedEntity(
            name=self.name,
            kind=self.kind,
            left_stops=tuple(self.left_stops),
            right_stops=tuple(self.right_stops),
            between=between,
            patterns=tuple(self.patterns),
        )


class AnyEntitySynthesizer:
    """Builds catch-all entities for one intent.

    Entries are keyed by parameter name and accumulate over every training
    sentence where the parameter is degraded. An instance must not be shared
    between intents.
    """

    def __init__(self, intent_name: str) -> None:
        self._intent_name = intent_name
        self._entries: dict[str, _EntityAccumulator] = {}

    def record(self, parameter_name: str, boundaries: Boundaries) -> str:
        """Record one degraded occurrence of a parameter.

        Args:
            parameter_name: Name of the degraded parameter.
            boundaries: Tokens around the occurrence in the training sentence.

        Returns:
            Name of the synthesized entity, used as the slot identifier.
        """
        name = any_entity_name(self._intent_name, parameter_name)
        left, right = boundaries.left, boundaries.right
        existing = self._entries.get(parameter_name)

        if boundaries.is_whole_sentence:
            self._entries[parameter_name] = _EntityAccumulator(
                name=name,
                kind=SynthesizedKind.REGEX,
                patterns=[MATCH_ANYTHING_PATTERN],
            )
            return name

        if existing is not None and existing.kind is SynthesizedKind.REGEX:
            logger.debug(
                "Keeping regex entity %s, ignoring boundaries left=%r right=%r",
                name,
                left,
                right,
            )
            return name

        if existing is None:
            existing = _EntityAccumulator(name=name, kind=SynthesizedKind.TRIM)
            self._entries[parameter_name] = existing

        if left is not None and right is not None:
            if existing.between_left is None or existing.between_right is None:
                existing.between_left = []
                existing.between_right = []
            existing.between_left.append(left)
            existing.between_right.append(right)
        elif left is not None:
            existing.left_stops.append(left)
        else:
            existing.right_stops.append(right)

        return name

    def entities(self) -> list[SynthesizedEntity]:
        """Return the synthesized entities in creation order."""
        return [entry.build() for entry in self._entries.values()]

    def __len__(self) -> int:
        return len(self._entries)
