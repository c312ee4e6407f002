"""
Corporate growth formulas: capital, costs and ownership caps.
"""

from __future__ import annotations

from ..engine_core.random_source import RandomSource, random_int

LEVEL_UP_COST_PER_LEVEL = 3
ACQUISITION_COST_PER_LEVEL = 5
MAX_INFRA_PER_LEVEL = 4


def capital_gain(total_owned_infra: int, rng: RandomSource) -> int:
    """0 or 1 at random (one draw) plus 1 per 10 owned levels."""
    return random_int(rng, 0, 1) + total_owned_infra // 10


def level_up_cost(current_level: int) -> int:
    return current_level * LEVEL_UP_COST_PER_LEVEL


def acquisition_cost(target_level: int) -> int:
    return target_level * ACQUISITION_COST_PER_LEVEL


def max_infra_per_colony(corp_level: int) -> int:
    """Ownership cap of one corporation inside one colony."""
    return corp_level * MAX_INFRA_PER_LEVEL
