"""
Colony Simulation - resource flows, growth ticks and organic growth.

Resource flow order:
1. Extraction (Food, Common, Rare, Volatiles), gated by matching deposits
2. Tier-1 manufacturing (Low Industry, Heavy Industry) from extraction
3. Tier-2 manufacturing (High-Tech Industry from extraction, Space
   Industry from tier-1/tier-2 goods)
4. Transport capacity
5. Population consumption

Shortage cascades: a halved upstream output is the available input of
the next tier, which halves again when it cannot meet its own demand.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from enum import Enum

from ..engine_core.state import (
    Colony,
    Deposit,
    InfraDomain,
    ResourceFlow,
    ResourceType,
)
from ..engine_core.random_source import RandomSource, roll_percent
from ..data.resources import (
    DOMAIN_REQUIRED_INPUTS,
    DOMAIN_TO_RESOURCE,
    EXTRACTION_OUTPUT_TARGETS,
    matching_deposits,
)
from ..formulas.modifiers import resolve_modifiers
from ..formulas.production import (
    consumer_goods_consumption,
    extraction_output,
    food_consumption,
    industrial_input,
    manufacturing_output,
    transport_consumption,
)

logger = logging.getLogger(__name__)

GROWTH_LEVEL_UP_THRESHOLD = 10
GROWTH_LEVEL_DOWN_THRESHOLD = -1
GROWTH_AFTER_LEVEL_DOWN = 9
ORGANIC_CHANCE_PER_DYNAMISM = 5
SHORTAGE_WEIGHT = 3
NORMAL_WEIGHT = 1

TIER_1_DOMAINS = (InfraDomain.LOW_INDUSTRY, InfraDomain.HEAVY_INDUSTRY)


# =============================================================================
# Resource flow
# =============================================================================

def _input_demand(colony: Colony, domains: tuple[InfraDomain, ...]) -> dict[ResourceType, int]:
    """Aggregate demand of the given manufacturing domains, per input."""
    demand: dict[ResourceType, int] = {}
    for domain in domains:
        for resource in DOMAIN_REQUIRED_INPUTS[domain]:
            demand[resource] = demand.get(resource, 0) + industrial_input(colony.level(domain))
    return demand


def _inputs_available(
    domain: InfraDomain,
    produced: dict[ResourceType, int],
    demand: dict[ResourceType, int],
) -> bool:
    return all(produced.get(r, 0) >= demand.get(r, 0) for r in DOMAIN_REQUIRED_INPUTS[domain])


def calculate_resource_flow(
    colony: Colony,
    deposits: list[Deposit],
) -> dict[ResourceType, ResourceFlow]:
    """
    Full production/consumption network of one colony for one turn.

    Every resource type gets an entry; `imported` and `in_shortage` are
    always left at 0 / False for market resolution to fill in.
    """
    produced: dict[ResourceType, int] = {resource: 0 for resource in ResourceType}

    for domain, target in EXTRACTION_OUTPUT_TARGETS.items():
        if not matching_deposits(domain, deposits):
            continue
        modifier = resolve_modifiers(1.0, target, colony.modifiers)
        produced[DOMAIN_TO_RESOURCE[domain]] = extraction_output(colony.level(domain), modifier)

    # Raw inputs are shared by every manufacturing domain that draws on them.
    raw_demand = _input_demand(colony, TIER_1_DOMAINS + (InfraDomain.HIGH_TECH_INDUSTRY,))

    for domain in TIER_1_DOMAINS:
        has_inputs = _inputs_available(domain, produced, raw_demand)
        produced[DOMAIN_TO_RESOURCE[domain]] = manufacturing_output(colony.level(domain), has_inputs)

    high_tech = InfraDomain.HIGH_TECH_INDUSTRY
    produced[ResourceType.HIGH_TECH_GOODS] = manufacturing_output(
        colony.level(high_tech), _inputs_available(high_tech, produced, raw_demand)
    )

    space = InfraDomain.SPACE_INDUSTRY
    goods_demand = _input_demand(colony, (space,))
    produced[ResourceType.SHIP_PARTS] = manufacturing_output(
        colony.level(space), _inputs_available(space, produced, goods_demand)
    )

    produced[ResourceType.TRANSPORT_CAPACITY] = colony.level(InfraDomain.TRANSPORT)

    population = colony.population_level
    consumed: dict[ResourceType, int] = {resource: 0 for resource in ResourceType}
    consumed[ResourceType.FOOD] = food_consumption(population)
    consumed[ResourceType.CONSUMER_GOODS] = consumer_goods_consumption(population)
    consumed[ResourceType.TRANSPORT_CAPACITY] = transport_consumption(population)
    for resource, amount in list(raw_demand.items()) + list(goods_demand.items()):
        consumed[resource] += amount

    return {
        resource: ResourceFlow(
            resource=resource,
            produced=produced[resource],
            consumed=consumed[resource],
            surplus=produced[resource] - consumed[resource],
        )
        for resource in ResourceType
    }


# =============================================================================
# Growth tick
# =============================================================================

class GrowthChange(Enum):
    GROWING = "growing"
    LEVEL_UP = "level_up"
    LEVEL_DOWN = "level_down"


@dataclass
class GrowthTickResult:
    colony: Colony
    change: GrowthChange


def apply_growth_tick(colony: Colony, delta: int, max_population: int) -> GrowthTickResult:
    """
    Add this turn's growth delta and resolve a population change.

    The accumulator is never clamped: a colony blocked at its cap (or by
    civilian infrastructure) keeps accumulating past 10.
    """
    accumulator = colony.attributes.growth + delta
    population = colony.population_level

    if accumulator >= GROWTH_LEVEL_UP_THRESHOLD and population < max_population:
        civilian_needed = (population + 1) * 2
        if colony.level(InfraDomain.CIVILIAN) >= civilian_needed:
            return _tick(colony, population + 1, 0, GrowthChange.LEVEL_UP)

    if accumulator <= GROWTH_LEVEL_DOWN_THRESHOLD and population > 1:
        return _tick(colony, population - 1, GROWTH_AFTER_LEVEL_DOWN, GrowthChange.LEVEL_DOWN)

    return _tick(colony, population, accumulator, GrowthChange.GROWING)


def _tick(colony: Colony, population: int, growth: int, change: GrowthChange) -> GrowthTickResult:
    attributes = replace(colony.attributes, growth=growth)
    updated = colony._copy_with(population_level=population, attributes=attributes)
    return GrowthTickResult(colony=updated, change=change)


# =============================================================================
# Organic infrastructure growth
# =============================================================================

@dataclass
class OrganicGrowthResult:
    colony: Colony
    triggered: bool
    domain: InfraDomain | None = None


def organic_growth_candidates(
    colony: Colony,
    shortages: list[ResourceType],
) -> list[tuple[InfraDomain, int]]:
    """
    Eligible (domain, weight) pairs, rebuilt on every call.

    Eligible: not Civilian, at least one level, strictly below its cap.
    Domains producing a resource in shortage weigh 3x.
    """
    shortage_set = set(shortages)
    candidates: list[tuple[InfraDomain, int]] = []
    for domain in InfraDomain:
        if domain == InfraDomain.CIVILIAN:
            continue
        infra = colony.infra(domain)
        if infra.total_levels <= 0 or not infra.has_room:
            continue
        resource = DOMAIN_TO_RESOURCE.get(domain)
        weight = SHORTAGE_WEIGHT if resource in shortage_set else NORMAL_WEIGHT
        candidates.append((domain, weight))
    return candidates


def weighted_pick(candidates: list[tuple[InfraDomain, int]], rng: RandomSource) -> InfraDomain:
    """Exactly one draw over the cumulative weights."""
    total = sum(weight for _, weight in candidates)
    pick = rng() * total
    for domain, weight in candidates:
        pick -= weight
        if pick <= 0:
            return domain
    return candidates[-1][0]


def apply_organic_infra_growth(
    colony: Colony,
    dynamism: int,
    shortages: list[ResourceType],
    rng: RandomSource,
) -> OrganicGrowthResult:
    """
    Maybe grow one public infrastructure level.

    Draw 1: trigger check at dynamism x 5 %. Draw 2: weighted domain pick.
    No draws at all when the colony has no infrastructure or dynamism is 0.
    """
    not_triggered = OrganicGrowthResult(colony=colony, triggered=False)

    chance = dynamism * ORGANIC_CHANCE_PER_DYNAMISM
    if colony.total_infrastructure <= 0 or chance <= 0:
        return not_triggered

    if not roll_percent(rng, chance):
        return not_triggered

    candidates = organic_growth_candidates(colony, shortages)
    if not candidates:
        return not_triggered

    domain = weighted_pick(candidates, rng)
    updated = colony.with_infra(colony.infra(domain).with_public_levels(1))
    logger.debug("Organic growth on %s: %s", colony.colony_id, domain.value)
    return OrganicGrowthResult(colony=updated, triggered=True, domain=domain)
