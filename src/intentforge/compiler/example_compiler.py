"""Compile intent definitions into annotated training examples."""

from __future__ import annotations

import logging

from intentforge.compiler.any_entity import AnyEntitySynthesizer
from intentforge.compiler.boundary import extract_boundaries
from intentforge.compiler.errors import PreconditionViolation
from intentforge.compiler.slots import assign_slot
from intentforge.entities.registry import EntityTypeRegistry
from intentforge.entities.resolver import NativeEntityResolver
from intentforge.model.compiled import CompiledIntent, SynthesizedEntity
from intentforge.model.intents import EntityKind, IntentSpec, ParameterSpec

logger = logging.getLogger(__name__)

# Private-use code point, never produced by user-authored text.
FRAGMENT_DELIMITER = "\ue000"
SLOT_MARKER = "%"


class IntentExampleCompiler:
    """Flattens typed intents into the engine's slot-annotated corpus.

    Each parameter occurrence in a training sentence is replaced by a
    ``%slotId%`` marker. Parameters whose entity type has no native
    equivalent are degraded to synthesized catch-all entities.

    Attributes:
        resolver: Native entity lookup.
        registry: Owner of entity type demotions.
    """

    def __init__(
        self,
        resolver: NativeEntityResolver,
        registry: EntityTypeRegistry | None = None,
    ) -> None:
        self.resolver = resolver
        self.registry = registry or EntityTypeRegistry()

    def compile_intent(
        self,
        intent: IntentSpec,
        entities_collector: list[SynthesizedEntity] | None = None,
    ) -> CompiledIntent:
        """Compile one intent.

        Args:
            intent: Intent definition to compile.
            entities_collector: Optional list receiving the intent's
                synthesized entities once the whole intent compiled.

        Returns:
            The compiled intent.

        Raises:
            PreconditionViolation: If the intent or one of its parameters is
                missing required data. Nothing is added to the collector.
        """
        compiled, entities = self.compile_with_entities(intent)
        if entities_collector is not None:
            entities_collector.extend(entities)
        return compiled

    def compile_with_entities(
        self,
        intent: IntentSpec,
    ) -> tuple[CompiledIntent, list[SynthesizedEntity]]:
        """Compile one intent and return its synthesized entities."""
        if not intent.name:
            raise PreconditionViolation(
                "Cannot compile an intent without a name",
                intent_name=intent.name,
            )
        if SLOT_MARKER in intent.name:
            raise PreconditionViolation(
                f"Intent name cannot contain '{SLOT_MARKER}'",
                intent_name=intent.name,
            )

        if not intent.parameters:
            return CompiledIntent(
                name=intent.name,
                examples=tuple(intent.training_sentences),
            ), []

        synthesizer = AnyEntitySynthesizer(intent.name)
        parameter_slots: dict[str, str] = {}
        examples = tuple(
            self._compile_sentence(intent, sentence, synthesizer, parameter_slots)
            for sentence in intent.training_sentences
        )

        entities = synthesizer.entities()
        logger.debug(
            "Compiled intent %s: %d examples, %d slots, %d synthesized entities",
            intent.name,
            len(examples),
            len(parameter_slots),
            len(entities),
        )
        return CompiledIntent(
            name=intent.name,
            examples=examples,
            parameter_slots=parameter_slots,
        ), entities

    def _compile_sentence(
        self,
        intent: IntentSpec,
        sentence: str,
        synthesizer: AnyEntitySynthesizer,
        parameter_slots: dict[str, str],
    ) -> str:
        wrapped = sentence
        for parameter in intent.parameters:
            fragment = _require_fragment(intent, parameter, sentence)
            if fragment in wrapped:
                wrapped = wrapped.replace(
                    fragment, f"{FRAGMENT_DELIMITER}{fragment}{FRAGMENT_DELIMITER}"
                )
            else:
                logger.debug(
                    "Fragment %r of parameter %s not found in %r",
                    fragment,
                    parameter.name,
                    sentence,
                )

        parts = []
        for segment in wrapped.split(FRAGMENT_DELIMITER):
            parameter = _match_parameter(intent, segment)
            if parameter is None:
                parts.append(segment)
                continue

            slot = self._resolve_slot(intent, parameter, sentence, synthesizer)
            parts.append(f"{SLOT_MARKER}{slot}{SLOT_MARKER}")
            parameter_slots.setdefault(parameter.name, slot)

        return "".join(parts)

    def _resolve_slot(
        self,
        intent: IntentSpec,
        parameter: ParameterSpec,
        sentence: str,
        synthesizer: AnyEntitySynthesizer,
    ) -> str:
        fragment = parameter.primary_fragment
        if not parameter.name:
            raise PreconditionViolation(
                "The parameter for this fragment does not define a name",
                intent_name=intent.name,
                sentence=sentence,
                fragment=fragment,
            )
        entity = parameter.entity
        if entity is None:
            raise PreconditionViolation(
                f"Parameter '{parameter.name}' does not define an entity",
                intent_name=intent.name,
                sentence=sentence,
                fragment=fragment,
            )

        native_name = self.resolver.resolve(entity)
        if native_name is None and entity.kind is EntityKind.BASE:
            self.registry.demote_to_any(entity)

        if entity.kind is EntityKind.ANY:
            boundaries = extract_boundaries(sentence, fragment)
            logger.debug(
                "Degraded parameter %s.%s bounded by left=%r right=%r",
                intent.name,
                parameter.name,
                boundaries.left,
                boundaries.right,
            )
            slot = synthesizer.record(parameter.name, boundaries)
        elif native_name is None:
            raise PreconditionViolation(
                f"Entity type '{entity.name}' ({entity.kind.value}) has no "
                "native mapping and cannot be degraded",
                intent_name=intent.name,
                sentence=sentence,
                fragment=fragment,
            )
        else:
            slot = assign_slot(parameter, native_name, intent, self.resolver)

        if SLOT_MARKER in slot:
            raise PreconditionViolation(
                f"Slot identifier '{slot}' cannot contain '{SLOT_MARKER}'",
                intent_name=intent.name,
                sentence=sentence,
                fragment=fragment,
            )
        return slot


def _require_fragment(
    intent: IntentSpec,
    parameter: ParameterSpec,
    sentence: str,
) -> str:
    fragment = parameter.primary_fragment
    if not fragment:
        raise PreconditionViolation(
            f"Parameter '{parameter.name}' does not define a text fragment",
            intent_name=intent.name,
            sentence=sentence,
        )
    return fragment


def _match_parameter(intent: IntentSpec, segment: str) -> ParameterSpec | None:
    for parameter in intent.parameters:
        if parameter.primary_fragment == segment:
            return parameter
    return None
