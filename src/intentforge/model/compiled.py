"""Output model handed to the training exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SynthesizedKind(str, Enum):
    """How a synthesized catch-all entity matches text."""

    TRIM = "trim"
    REGEX = "regex"


@dataclass(frozen=True)
class BetweenCondition:
    """Parallel left/right boundary tokens.

    ``left[i]`` and ``right[i]`` come from the same occurrence. Duplicates
    are kept.
    """

    left: tuple[str, ...] = ()
    right: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"left": list(self.left), "right": list(self.right)}


@dataclass(frozen=True)
class SynthesizedEntity:
    """A catch-all entity generated for a degraded parameter.

    Attributes:
        name: ``intentName + parameterName + "Any"``.
        kind: TRIM (boundary based) or REGEX.
        left_stops: Tokens seen right before the fragment with nothing after.
        right_stops: Tokens seen right after the fragment with nothing before.
        between: Tokens seen on both sides of the fragment.
        patterns: Regular expressions, only set for REGEX entities.
    """

    name: str
    kind: SynthesizedKind
    left_stops: tuple[str, ...] = ()
    right_stops: tuple[str, ...] = ()
    between: BetweenCondition | None = None
    patterns: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert to the engine's entity payload.

        The engine names its trim conditions after the matched value's
        position: ``afterLast`` holds the tokens preceding the value and
        ``beforeLast`` the tokens following it.

        Returns:
            Dictionary suitable for JSON serialization.
        """
        data: dict = {"entityName": self.name, "type": self.kind.value}
        if self.kind is SynthesizedKind.REGEX:
            data["regex"] = list(self.patterns)
            return data

        if self.left_stops:
            data["afterLast"] = list(self.left_stops)
        if self.right_stops:
            data["beforeLast"] = list(self.right_stops)
        if self.between is not None:
            data["between"] = self.between.to_dict()
        return data


@dataclass(frozen=True)
class CompiledIntent:
    """An intent flattened into annotated examples.

    Attributes:
        name: Intent name.
        examples: Training sentences with ``%slotId%`` markers.
        parameter_slots: Parameter name to slot identifier, in first-seen order.
    """

    name: str
    examples: tuple[str, ...] = ()
    parameter_slots: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "intentName": self.name,
            "examples": [{"userSays": example} for example in self.examples],
            "parameters": [
                {"name": name, "slot": slot}
                for name, slot in self.parameter_slots.items()
            ],
        }
