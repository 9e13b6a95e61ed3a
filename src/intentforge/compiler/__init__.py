"""Compilation of typed intents into the engine's flat training corpus."""

from intentforge.compiler.any_entity import (
    MATCH_ANYTHING_PATTERN,
    AnyEntitySynthesizer,
    any_entity_name,
)
from intentforge.compiler.batch import CompilationResult, compile_intents
from intentforge.compiler.boundary import Boundaries, extract_boundaries
from intentforge.compiler.errors import IntentCompilationError, PreconditionViolation
from intentforge.compiler.example_compiler import IntentExampleCompiler
from intentforge.compiler.slots import assign_slot

__all__ = [
    "MATCH_ANYTHING_PATTERN",
    "AnyEntitySynthesizer",
    "Boundaries",
    "CompilationResult",
    "IntentCompilationError",
    "IntentExampleCompiler",
    "PreconditionViolation",
    "any_entity_name",
    "assign_slot",
    "compile_intents",
    "extract_boundaries",
]
