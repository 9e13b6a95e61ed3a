"""Compile typed intent definitions into a flat NLU training corpus."""

from intentforge.compiler import (
    CompilationResult,
    IntentExampleCompiler,
    PreconditionViolation,
    compile_intents,
)
from intentforge.entities import EntityTypeRegistry, MappingEntityResolver
from intentforge.model import (
    CompiledIntent,
    EntityKind,
    EntityTypeDescriptor,
    IntentSpec,
    ParameterSpec,
    SynthesizedEntity,
)

__all__ = [
    "CompilationResult",
    "CompiledIntent",
    "EntityKind",
    "EntityTypeDescriptor",
    "EntityTypeRegistry",
    "IntentExampleCompiler",
    "IntentSpec",
    "MappingEntityResolver",
    "ParameterSpec",
    "PreconditionViolation",
    "SynthesizedEntity",
    "compile_intents",
]
