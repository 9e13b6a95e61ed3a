"""Shared pytest fixtures for compiler tests."""

from collections.abc import Callable, Sequence

import pytest

from intentforge.compiler.example_compiler import IntentExampleCompiler
from intentforge.entities.registry import EntityTypeRegistry
from intentforge.entities.resolver import MappingEntityResolver
from intentforge.model.intents import EntityKind, IntentSpec, ParameterSpec

TEST_NATIVE_ENTITIES = {
    "person": "sys.person",
    "number": "sys.number",
    "city": "sys.city",
}

CONFIG_ENV_VARS = (
    "LOG_LEVEL",
    "INTENTFORGE_ENTITY_MAPPING",
    "INTENTFORGE_MAX_WORKERS",
    "INTENTFORGE_SKIP_INVALID",
)


@pytest.fixture
def resolver() -> MappingEntityResolver:
    """Provide a resolver with a small native entity table.

    ``person``, ``number`` and ``city`` have native names; every other base
    entity is unmapped and gets degraded.
    """
    return MappingEntityResolver(TEST_NATIVE_ENTITIES)


@pytest.fixture
def registry() -> EntityTypeRegistry:
    return EntityTypeRegistry()


@pytest.fixture
def compiler(
    resolver: MappingEntityResolver,
    registry: EntityTypeRegistry,
) -> IntentExampleCompiler:
    return IntentExampleCompiler(resolver, registry)


@pytest.fixture
def make_parameter(registry: EntityTypeRegistry) -> Callable[..., ParameterSpec]:
    """Provide a factory for parameters bound to registry descriptors.

    Example:
        def test_something(make_parameter):
            parameter = make_parameter("Name", "person", "Bob")
    """

    def _create(
        name: str,
        entity: str,
        *fragments: str,
        kind: EntityKind = EntityKind.BASE,
    ) -> ParameterSpec:
        return ParameterSpec(
            name=name,
            entity=registry.get_or_create(entity, kind),
            text_fragments=fragments,
        )

    return _create


@pytest.fixture
def make_intent() -> Callable[..., IntentSpec]:
    def _create(
        name: str | None,
        sentences: Sequence[str],
        parameters: Sequence[ParameterSpec] = (),
    ) -> IntentSpec:
        return IntentSpec(
            name=name,
            training_sentences=tuple(sentences),
            parameters=tuple(parameters),
        )

    return _create


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove compiler configuration variables for the duration of a test.

    Variables loaded from .env files during the test are removed afterwards.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
