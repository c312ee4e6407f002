"""
Colony attribute formulas.

All attributes except the growth delta are clamped to 0..10 after local
modifiers. Modifier targets use the attribute's camelCase name
("habitability", "qualityOfLife", ...).
"""

from __future__ import annotations
import math

from ..engine_core.state import Deposit, InfraDomain, Modifier
from ..data.resources import (
    DOMAIN_TO_EMPIRE_CAP_KEY,
    EXTRACTION_DOMAINS,
    RICHNESS_CAPS,
    matching_deposits,
)
from .modifiers import resolve_modifiers
from .production import base_infra_cap

ATTR_MIN = 0
ATTR_MAX = 10


def _clamped(base: float, target: str, modifiers: list[Modifier]) -> int:
    return math.floor(resolve_modifiers(base, target, modifiers, ATTR_MIN, ATTR_MAX))


def _habitability_malus(habitability: int) -> int:
    return max(0, 10 - habitability) // 3


def habitability(base_planet_habitability: int, modifiers: list[Modifier]) -> int:
    return _clamped(base_planet_habitability, "habitability", modifiers)


def accessibility(transport_levels: int, modifiers: list[Modifier]) -> int:
    return _clamped(3 + transport_levels // 2, "accessibility", modifiers)


def dynamism(
    accessibility_value: int,
    population_level: int,
    corporate_levels: int,
    modifiers: list[Modifier],
) -> int:
    corp_bonus = min(3, corporate_levels // 10)
    base = (accessibility_value + population_level) // 2 + corp_bonus
    return _clamped(base, "dynamism", modifiers)


def quality_of_life(habitability_value: int, modifiers: list[Modifier]) -> int:
    return _clamped(10 - _habitability_malus(habitability_value), "qualityOfLife", modifiers)


def stability(
    quality_of_life_value: int,
    military_levels: int,
    debt_tokens: int,
    modifiers: list[Modifier],
) -> int:
    qol_malus = max(0, 5 - quality_of_life_value)
    debt_malus = debt_tokens // 2
    military_bonus = min(3, military_levels // 3)
    return _clamped(10 - qol_malus - debt_malus + military_bonus, "stability", modifiers)


def growth_per_turn(
    quality_of_life_value: int,
    stability_value: int,
    accessibility_value: int,
    habitability_value: int,
    modifiers: list[Modifier],
) -> int:
    """Signed growth delta for this turn (not clamped)."""
    base = (
        (quality_of_life_value + stability_value + accessibility_value) // 3
        - 3
        - _habitability_malus(habitability_value)
    )
    return math.floor(resolve_modifiers(base, "growth", modifiers))


def best_deposit_cap(domain: InfraDomain, deposits: list[Deposit]) -> int | None:
    """Richness cap of the richest deposit this domain extracts, or None."""
    caps = [RICHNESS_CAPS[d.richness] for d in matching_deposits(domain, deposits)]
    return max(caps) if caps else None


def infra_cap(
    domain: InfraDomain,
    population_level: int,
    deposits: list[Deposit],
    empire_infra_caps: dict[str, int],
    modifiers: list[Modifier],
) -> int | None:
    """
    Current capacity ceiling for one domain of a colony.

    Civilian is uncapped (None). Extraction domains are capped by their
    best deposit (0 without one); everything else by population x 2.
    Empire bonuses and local "max<Domain>" modifiers apply on top.
    """
    if domain == InfraDomain.CIVILIAN:
        return None

    if domain in EXTRACTION_DOMAINS:
        deposit_cap = best_deposit_cap(domain, deposits)
        if deposit_cap is None:
            return 0
        base = deposit_cap
    else:
        base = base_infra_cap(population_level, domain)

    cap_key = DOMAIN_TO_EMPIRE_CAP_KEY.get(domain)
    if cap_key is not None:
        base += empire_infra_caps.get(cap_key, 0)

    target = cap_key if cap_key is not None else f"max{domain.label.replace(' ', '')}"
    return max(0, math.floor(resolve_modifiers(base, target, modifiers)))
