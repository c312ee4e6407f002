"""
Modifier resolution.

Order of application: filter by target and condition, sum additive
modifiers onto the base, apply multiplicative modifiers in list order,
then clamp.
"""

from __future__ import annotations

from ..engine_core.state import Modifier


def is_condition_met(modifier: Modifier, context: dict[str, float]) -> bool:
    condition = modifier.condition
    if condition is None:
        return True

    value = context.get(condition.attribute)
    if value is None:
        return False

    if condition.comparison == "lte":
        return value <= condition.value
    if condition.comparison == "gte":
        return value >= condition.value
    return False


def applicable_modifiers(
    target: str,
    modifiers: list[Modifier],
    context: dict[str, float] | None = None,
) -> list[Modifier]:
    context = context or {}
    return [m for m in modifiers if m.target == target and is_condition_met(m, context)]


def resolve_modifiers(
    base: float,
    target: str,
    modifiers: list[Modifier],
    clamp_min: float | None = None,
    clamp_max: float | None = None,
    context: dict[str, float] | None = None,
) -> float:
    """Resolve a base value against every modifier aimed at `target`."""
    applicable = applicable_modifiers(target, modifiers, context)

    adjusted = base + sum(m.value for m in applicable if m.operation == "add")
    for modifier in applicable:
        if modifier.operation == "multiply":
            adjusted *= modifier.value

    if clamp_min is not None:
        adjusted = max(clamp_min, adjusted)
    if clamp_max is not None:
        adjusted = min(clamp_max, adjusted)
    return adjusted


def modifier_breakdown(
    target: str,
    modifiers: list[Modifier],
    context: dict[str, float] | None = None,
) -> list[dict]:
    """Per-source contributions for display."""
    return [
        {"source": m.source_name, "operation": m.operation, "value": m.value}
        for m in applicable_modifiers(target, modifiers, context)
    ]
