"""Compile a batch of intents."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from intentforge.compiler.errors import PreconditionViolation
from intentforge.compiler.example_compiler import IntentExampleCompiler
from intentforge.model.compiled import CompiledIntent, SynthesizedEntity
from intentforge.model.intents import IntentSpec

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """Batch-wide compiler output.

    Attributes:
        intents: Compiled intents, in input order.
        entities: Synthesized entities of all intents, grouped by intent in
            input order.
        skipped: Names of intents rejected by a precondition violation when
            skipping is enabled.
    """

    intents: list[CompiledIntent] = field(default_factory=list)
    entities: list[SynthesizedEntity] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def example_count(self) -> int:
        return sum(len(intent.examples) for intent in self.intents)

    def to_dict(self) -> dict:
        return {
            "intents": [intent.to_dict() for intent in self.intents],
            "entities": [entity.to_dict() for entity in self.entities],
        }


class _ResultCollector:
    """Appends per-intent outputs to a shared result under a lock."""

    def __init__(self) -> None:
        self.result = CompilationResult()
        self._lock = threading.Lock()

    def add(self, compiled: CompiledIntent, entities: list[SynthesizedEntity]) -> None:
        with self._lock:
            self.result.intents.append(compiled)
            self.result.entities.extend(entities)

    def skip(self, intent_name: str | None) -> None:
        with self._lock:
            self.result.skipped.append(intent_name or "<unnamed>")


def _check_unique_names(intents: Sequence[IntentSpec]) -> None:
    seen: set[str] = set()
    for intent in intents:
        if not intent.name:
            continue
        if intent.name in seen:
            raise PreconditionViolation(
                "Intent names must be unique within a batch",
                intent_name=intent.name,
            )
        seen.add(intent.name)


def _compile_or_skip(
    compiler: IntentExampleCompiler,
    intent: IntentSpec,
    skip_invalid: bool,
) -> tuple[CompiledIntent, list[SynthesizedEntity]] | None:
    try:
        return compiler.compile_with_entities(intent)
    except PreconditionViolation as e:
        if not skip_invalid:
            raise
        logger.warning("Skipping intent %r: %s", intent.name, e)
        return None


def compile_intents(
    intents: Sequence[IntentSpec],
    compiler: IntentExampleCompiler,
    max_workers: int = 1,
    skip_invalid: bool = False,
) -> CompilationResult:
    """Compile several intents into one training corpus.

    Every intent gets its own synthesized-entity accumulator. Outputs are
    appended to the batch result in input order whatever the worker count.

    Args:
        intents: Intent definitions, names unique within the batch.
        compiler: Compiler holding the resolver and entity registry.
        max_workers: Number of worker threads; 1 compiles inline.
        skip_invalid: Skip intents failing a precondition instead of aborting.

    Returns:
        CompilationResult with compiled intents and synthesized entities.

    Raises:
        PreconditionViolation: On duplicate intent names, or on an invalid
            intent when ``skip_invalid`` is False.
        ValueError: If ``max_workers`` is lower than 1.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1 (got {max_workers})")

    _check_unique_names(intents)
    collector = _ResultCollector()

    if max_workers == 1:
        outputs = [
            _compile_or_skip(compiler, intent, skip_invalid) for intent in intents
        ]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outputs = list(
                executor.map(
                    lambda intent: _compile_or_skip(compiler, intent, skip_invalid),
                    intents,
                )
            )

    for intent, output in zip(intents, outputs):
        if output is None:
            collector.skip(intent.name)
        else:
            collector.add(*output)

    result = collector.result
    logger.info(
        "Compiled %d intents (%d examples, %d synthesized entities, %d skipped)",
        len(result.intents),
        result.example_count,
        len(result.entities),
        len(result.skipped),
    )
    return result
