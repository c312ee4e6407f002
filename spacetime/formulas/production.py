"""
Production formulas - stateless arithmetic for the resource chain.
"""

from __future__ import annotations
import math

from ..engine_core.state import InfraDomain, RichnessLevel
from ..data.resources import RICHNESS_CAPS

FOOD_PER_POPULATION = 2


def extraction_output(level: int, modifier: float = 1.0) -> int:
    """Extraction yield; fractional modifier output is floored."""
    return math.floor(level * modifier)


def extraction_cap(richness: RichnessLevel) -> int:
    return RICHNESS_CAPS[richness]


def manufacturing_output(level: int, has_inputs: bool) -> int:
    """Full output with inputs, halved (floored) without."""
    if has_inputs:
        return level
    return level // 2


def industrial_input(level: int) -> int:
    """Units of each required input a manufacturing domain consumes."""
    return level


def food_consumption(population_level: int) -> int:
    return population_level * FOOD_PER_POPULATION


def consumer_goods_consumption(population_level: int) -> int:
    return population_level


def transport_consumption(population_level: int) -> int:
    return population_level


def base_infra_cap(population_level: int, domain: InfraDomain) -> int | None:
    """Cap before deposits, empire bonuses and modifiers. None means uncapped."""
    if domain == InfraDomain.CIVILIAN:
        return None
    return population_level * 2
