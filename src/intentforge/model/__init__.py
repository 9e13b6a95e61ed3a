"""Intent definitions and compiled training data."""

from intentforge.model.compiled import (
    BetweenCondition,
    CompiledIntent,
    SynthesizedEntity,
    SynthesizedKind,
)
from intentforge.model.intents import (
    EntityKind,
    EntityTypeDescriptor,
    IntentSpec,
    ParameterSpec,
)

__all__ = [
    "BetweenCondition",
    "CompiledIntent",
    "EntityKind",
    "EntityTypeDescriptor",
    "IntentSpec",
    "ParameterSpec",
    "SynthesizedEntity",
    "SynthesizedKind",
]
