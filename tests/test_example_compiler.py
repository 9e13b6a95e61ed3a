"""Tests for intent example compilation."""

import logging

import pytest

from intentforge.compiler.errors import PreconditionViolation
from intentforge.compiler.example_compiler import IntentExampleCompiler
from intentforge.entities.registry import EntityTypeRegistry
from intentforge.entities.resolver import MappingEntityResolver
from intentforge.model.compiled import (
    BetweenCondition,
    CompiledIntent,
    SynthesizedEntity,
    SynthesizedKind,
)
from intentforge.model.intents import EntityKind, IntentSpec, ParameterSpec


def test_intent_without_parameters_is_verbatim(compiler, make_intent) -> None:
    sentences = ["hi", "hello there", "good morning"]
    collector: list[SynthesizedEntity] = []

    compiled = compiler.compile_intent(make_intent("Hello", sentences), collector)

    assert compiled == CompiledIntent(name="Hello", examples=tuple(sentences))
    assert collector == []


def test_single_native_slot(compiler, make_intent, make_parameter) -> None:
    intent = make_intent(
        "Greet", ["Hello Bob"], [make_parameter("Name", "person", "Bob")]
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("Hello %sys.person%",)
    assert compiled.parameter_slots == {"Name": "sys.person"}


def test_shared_native_type_is_suffixed(compiler, make_intent, make_parameter) -> None:
    intent = make_intent(
        "Compare",
        ["3 vs 5"],
        [
            make_parameter("A", "number", "3"),
            make_parameter("B", "number", "5"),
        ],
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("%sys.number_0% vs %sys.number_1%",)
    assert compiled.parameter_slots == {"A": "sys.number_0", "B": "sys.number_1"}


def test_whole_sentence_degrades_to_regex(
    compiler, make_intent, make_parameter, registry
) -> None:
    intent = make_intent(
        "Free",
        ["anything goes"],
        [make_parameter("Text", "freeform", "anything goes")],
    )
    collector: list[SynthesizedEntity] = []

    compiled = compiler.compile_intent(intent, collector)

    assert compiled.examples == ("%FreeTextAny%",)
    assert compiled.parameter_slots == {"Text": "FreeTextAny"}
    assert collector == [
        SynthesizedEntity(
            name="FreeTextAny",
            kind=SynthesizedKind.REGEX,
            patterns=("/.+/",),
        )
    ]
    assert registry.get("freeform").kind is EntityKind.ANY


def test_boundaries_merge_across_sentences(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Order",
        ["I want a coffee please", "I want a coffee now"],
        [make_parameter("Drink", "drink", "coffee")],
    )
    collector: list[SynthesizedEntity] = []

    compiled = compiler.compile_intent(intent, collector)

    assert compiled.examples == (
        "I want a %OrderDrinkAny% please",
        "I want a %OrderDrinkAny% now",
    )
    (entity,) = collector
    assert entity.name == "OrderDrinkAny"
    assert entity.kind is SynthesizedKind.TRIM
    assert entity.between == BetweenCondition(left=("a", "a"), right=("please", "now"))


def test_question_mark_boundary_is_escaped(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Taste",
        ["Do you like coffee?"],
        [make_parameter("Drink", "drink", "coffee")],
    )
    collector: list[SynthesizedEntity] = []

    compiled = compiler.compile_intent(intent, collector)

    assert compiled.examples == ("Do you like %TasteDrinkAny%?",)
    assert collector[0].between == BetweenCondition(left=("like",), right=("\\?",))


def test_degraded_parameters_are_never_suffixed(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Trip",
        ["from Paris to Rome"],
        [
            make_parameter("From", "place", "Paris"),
            make_parameter("To", "place", "Rome"),
        ],
    )
    collector: list[SynthesizedEntity] = []

    compiled = compiler.compile_intent(intent, collector)

    assert compiled.examples == ("from %TripFromAny% to %TripToAny%",)
    assert collector == [
        SynthesizedEntity(
            name="TripFromAny",
            kind=SynthesizedKind.TRIM,
            between=BetweenCondition(left=("from",), right=("to",)),
        ),
        SynthesizedEntity(
            name="TripToAny",
            kind=SynthesizedKind.TRIM,
            left_stops=("to",),
        ),
    ]


def test_custom_entity_uses_its_own_name(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Order",
        ["a latte please"],
        [make_parameter("Drink", "drink", "latte", kind=EntityKind.CUSTOM)],
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("a %drink% please",)


def test_unmapped_custom_entity_is_rejected(registry, make_intent) -> None:
    compiler = IntentExampleCompiler(
        MappingEntityResolver({}, custom_entities_native=False), registry
    )
    parameter = ParameterSpec(
        name="Drink",
        entity=registry.get_or_create("drink", EntityKind.CUSTOM),
        text_fragments=("latte",),
    )

    with pytest.raises(PreconditionViolation) as exc_info:
        compiler.compile_intent(make_intent("Order", ["a latte"], [parameter]))

    assert exc_info.value.fragment == "latte"
    assert registry.get("drink").kind is EntityKind.CUSTOM


def test_sentence_without_fragment_passes_through(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Greet",
        ["Hello there", "Hello Bob"],
        [make_parameter("Name", "person", "Bob", "Robert")],
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("Hello there", "Hello %sys.person%")


def test_only_primary_fragment_is_matched(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Greet",
        ["Hello Robert"],
        [make_parameter("Name", "person", "Bob", "Robert")],
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("Hello Robert",)
    assert compiled.parameter_slots == {}


def test_every_occurrence_of_fragment_is_annotated(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Add", ["3 plus 3"], [make_parameter("Operand", "number", "3")]
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("%sys.number% plus %sys.number%",)


def test_first_slot_assignment_wins(compiler, make_intent, make_parameter) -> None:
    intent = make_intent(
        "Mixed",
        ["Bob 3"],
        [
            make_parameter("Who", "person", "Bob"),
            make_parameter("Who", "number", "3"),
        ],
    )

    compiled = compiler.compile_intent(intent)

    assert compiled.examples == ("%sys.person% %sys.number%",)
    assert compiled.parameter_slots == {"Who": "sys.person"}


def test_demotion_is_shared_across_intents(
    compiler, make_intent, make_parameter, registry
) -> None:
    first = make_intent(
        "Order", ["a coffee please"], [make_parameter("Drink", "drink", "coffee")]
    )
    second = make_intent(
        "Rate", ["rate tea"], [make_parameter("Item", "drink", "tea")]
    )

    compiler.compile_intent(first)

    assert registry.get("drink").kind is EntityKind.ANY
    assert registry.demoted() == ["drink"]

    compiled = compiler.compile_intent(second)

    assert compiled.examples == ("rate %RateItemAny%",)
    assert registry.demoted() == ["drink"]


def test_demotion_is_logged(compiler, make_intent, make_parameter, caplog) -> None:
    caplog.set_level(logging.INFO, logger="intentforge")
    intent = make_intent(
        "Order", ["a coffee"], [make_parameter("Drink", "drink", "coffee")]
    )

    compiler.compile_intent(intent)

    assert "Entity type 'drink' has no native mapping" in caplog.text


def test_recompiling_is_idempotent(
    resolver, registry, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Order",
        ["I want a coffee please", "coffee", "2 coffee for Bob"],
        [
            make_parameter("Drink", "drink", "coffee"),
            make_parameter("Count", "number", "2"),
            make_parameter("Name", "person", "Bob"),
        ],
    )

    first_entities: list[SynthesizedEntity] = []
    first = IntentExampleCompiler(resolver, registry).compile_intent(
        intent, first_entities
    )
    second_entities: list[SynthesizedEntity] = []
    second = IntentExampleCompiler(resolver, registry).compile_intent(
        intent, second_entities
    )

    assert first == second
    assert first_entities == second_entities
    assert first.to_dict() == second.to_dict()


def test_missing_intent_name_is_rejected(compiler, make_intent) -> None:
    collector: list[SynthesizedEntity] = []

    with pytest.raises(PreconditionViolation):
        compiler.compile_intent(make_intent(None, ["hi"]), collector)

    assert collector == []


def test_missing_parameter_name_is_rejected(registry, compiler, make_intent) -> None:
    parameter = ParameterSpec(
        name=None,
        entity=registry.get_or_create("person"),
        text_fragments=("Bob",),
    )

    with pytest.raises(PreconditionViolation) as exc_info:
        compiler.compile_intent(make_intent("Greet", ["Hello Bob"], [parameter]))

    error = exc_info.value
    assert error.intent_name == "Greet"
    assert error.sentence == "Hello Bob"
    assert error.fragment == "Bob"
    assert "Greet" in str(error)


def test_missing_entity_rejects_whole_intent(
    compiler, make_intent, make_parameter
) -> None:
    intent = make_intent(
        "Order",
        ["a coffee please", "tea for Bob"],
        [
            make_parameter("Drink", "drink", "coffee"),
            ParameterSpec(name="Name", entity=None, text_fragments=("Bob",)),
        ],
    )
    collector: list[SynthesizedEntity] = []

    with pytest.raises(PreconditionViolation) as exc_info:
        compiler.compile_intent(intent, collector)

    assert exc_info.value.sentence == "tea for Bob"
    assert collector == []


def test_missing_fragments_are_rejected(registry, compiler) -> None:
    intent = IntentSpec(
        name="Greet",
        training_sentences=("Hello",),
        parameters=(
            ParameterSpec(name="Name", entity=registry.get_or_create("person")),
        ),
    )

    with pytest.raises(PreconditionViolation, match="text fragment"):
        compiler.compile_intent(intent)


def test_slot_identifier_cannot_contain_percent(registry, make_intent) -> None:
    compiler = IntentExampleCompiler(
        MappingEntityResolver({"amount": "sys%amount"}), registry
    )
    parameter = ParameterSpec(
        name="Amount",
        entity=registry.get_or_create("amount"),
        text_fragments=("10",),
    )

    with pytest.raises(PreconditionViolation, match="cannot contain"):
        compiler.compile_intent(make_intent("Discount", ["take 10 off"], [parameter]))


def test_intent_name_with_percent_is_rejected_before_demotion(
    compiler, make_intent, make_parameter, registry
) -> None:
    intent = make_intent(
        "Discount%", ["take 10 off"], [make_parameter("Amount", "amount", "10")]
    )

    with pytest.raises(PreconditionViolation, match="Intent name cannot contain"):
        compiler.compile_intent(intent)

    assert registry.get("amount").kind is EntityKind.BASE
    assert registry.demoted() == []


def test_compiler_creates_registry_when_missing(resolver) -> None:
    compiler = IntentExampleCompiler(resolver)

    assert isinstance(compiler.registry, EntityTypeRegistry)
