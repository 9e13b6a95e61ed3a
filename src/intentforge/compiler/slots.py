"""Slot identifiers for natively mapped parameters."""

from __future__ import annotations

from intentforge.entities.resolver import NativeEntityResolver
from intentforge.model.intents import EntityKind, IntentSpec, ParameterSpec


def _native_name(
    parameter: ParameterSpec,
    resolver: NativeEntityResolver,
) -> str | None:
    if parameter.entity is None or parameter.entity.kind is EntityKind.ANY:
        return None
    return resolver.resolve(parameter.entity)


def count_native_references(
    native_name: str,
    intent: IntentSpec,
    resolver: NativeEntityResolver,
) -> int:
    """Count the parameters of ``intent`` resolving to ``native_name``."""
    return sum(
        1
        for parameter in intent.parameters
        if _native_name(parameter, resolver) == native_name
    )


def native_type_index(
    fragment: str,
    native_name: str,
    intent: IntentSpec,
    resolver: NativeEntityResolver,
) -> int:
    """Return the positional index of a native type occurrence.

    Parameters are walked in declared order, counting those resolving to
    ``native_name``; the count reached at the first parameter whose primary
    fragment equals ``fragment`` is the index.
    """
    index = 0
    for parameter in intent.parameters:
        if parameter.primary_fragment == fragment:
            break
        if _native_name(parameter, resolver) == native_name:
            index += 1
    return index


def assign_slot(
    parameter: ParameterSpec,
    native_name: str,
    intent: IntentSpec,
    resolver: NativeEntityResolver,
) -> str:
    """Compute the slot identifier of a natively mapped parameter.

    The native name is suffixed with ``_<index>`` only when more than one
    parameter of the intent resolves to it. Degraded parameters use their
    synthesized entity name instead and never reach this function.

    Args:
        parameter: Parameter occurring in the sentence.
        native_name: Native entity name of the parameter's type.
        intent: Intent declaring the parameter.
        resolver: Resolver used to compare the other parameters' types.

    Returns:
        Slot identifier to put between ``%`` markers.
    """
    if count_native_references(native_name, intent, resolver) <= 1:
        return native_name

    index = native_type_index(
        parameter.primary_fragment or "",
        native_name,
        intent,
        resolver,
    )
    return f"{native_name}_{index}"
