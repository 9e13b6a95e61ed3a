"""Load intent definitions from JSON files.

Expected layout::

    {
      "entities": [{"name": "drink", "kind": "custom"}],
      "intents": [
        {
          "name": "Order",
          "trainingSentences": ["I want a coffee please"],
          "parameters": [
            {"name": "Drink", "entity": "drink", "textFragments": ["coffee"]}
          ]
        }
      ]
    }

Entity names that are not declared are registered as base entities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from intentforge.entities.registry import EntityTypeRegistry
from intentforge.model.intents import EntityKind, IntentSpec, ParameterSpec

logger = logging.getLogger(__name__)


class DefinitionError(ValueError):
    """Raised when a definitions file is malformed."""

    pass


def load_definitions(
    path: str | Path,
    registry: EntityTypeRegistry,
) -> list[IntentSpec]:
    """Read intent definitions from a JSON file.

    Args:
        path: JSON definitions file.
        registry: Registry owning the entity type descriptors.

    Returns:
        Intent definitions in file order.

    Raises:
        DefinitionError: If the file is not valid JSON or has the wrong shape.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DefinitionError(f"Invalid JSON in {path}: {e}") from e

    intents = parse_definitions(data, registry)
    logger.info(
        "Loaded %d intents and %d entity types from %s",
        len(intents),
        len(registry),
        path,
    )
    return intents


def parse_definitions(
    data: Any,
    registry: EntityTypeRegistry,
) -> list[IntentSpec]:
    """Build intent definitions from decoded JSON data."""
    if not isinstance(data, dict):
        raise DefinitionError("Definitions must be a JSON object")

    for entity in _list_field(data, "entities", "definitions"):
        if not isinstance(entity, dict) or not entity.get("name"):
            raise DefinitionError(f"Entity declaration needs a name: {entity!r}")
        _optional_str(entity, "name", "entity declaration")
        try:
            registry.get_or_create(
                entity["name"], EntityKind(str(entity.get("kind", "base")).lower())
            )
        except ValueError as e:
            raise DefinitionError(str(e)) from e

    return [
        _parse_intent(intent, registry)
        for intent in _list_field(data, "intents", "definitions")
    ]


def _parse_intent(data: Any, registry: EntityTypeRegistry) -> IntentSpec:
    if not isinstance(data, dict):
        raise DefinitionError(f"Intent must be an object: {data!r}")

    name = _optional_str(data, "name", "intent")
    sentences = _list_field(data, "trainingSentences", f"intent {name!r}")
    if not all(isinstance(sentence, str) for sentence in sentences):
        raise DefinitionError(f"Training sentences of {name!r} must be strings")

    parameters = tuple(
        _parse_parameter(parameter, name, registry)
        for parameter in _list_field(data, "parameters", f"intent {name!r}")
    )
    return IntentSpec(
        name=name,
        training_sentences=tuple(sentences),
        parameters=parameters,
    )


def _parse_parameter(
    data: Any,
    intent_name: str | None,
    registry: EntityTypeRegistry,
) -> ParameterSpec:
    if not isinstance(data, dict):
        raise DefinitionError(
            f"Parameter of intent {intent_name!r} must be an object: {data!r}"
        )

    owner = f"parameter of intent {intent_name!r}"
    entity_name = _optional_str(data, "entity", owner)
    entity = None
    if entity_name:
        entity = registry.get(entity_name) or registry.get_or_create(entity_name)

    fragments = _list_field(data, "textFragments", f"intent {intent_name!r}")
    if not all(isinstance(fragment, str) for fragment in fragments):
        raise DefinitionError(f"Text fragments of {intent_name!r} must be strings")

    return ParameterSpec(
        name=_optional_str(data, "name", owner),
        entity=entity,
        text_fragments=tuple(fragments),
    )


def _list_field(data: dict, key: str, owner: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise DefinitionError(f"'{key}' of {owner} must be a list")
    return value


def _optional_str(data: dict, key: str, owner: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DefinitionError(f"'{key}' of {owner} must be a string: {value!r}")
    return value
