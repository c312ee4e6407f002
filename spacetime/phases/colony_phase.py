"""
Colony phase - caps, attributes, population growth and organic growth.

Per colony (snapshot order), skipping colonies whose planet is unknown:
1. Recalculate infrastructure caps
2. Recompute attributes from infrastructure, planet and debt
3. Apply the growth tick with this turn's growth delta
4. Attempt organic infrastructure growth, weighted by sector deficits
"""

from __future__ import annotations
import logging
from dataclasses import replace

from ..engine_core.state import Colony, GameState, InfraDomain, Planet, ResourceType
from ..engine_core.events import EventPriority, GameEvent, PhaseResult, make_event
from ..engine_core.random_source import RandomSource
from ..data.resources import MAX_POPULATION_LEVEL
from ..formulas import attributes as attr
from ..simulation.colony_sim import (
    GrowthChange,
    apply_growth_tick,
    apply_organic_infra_growth,
)

logger = logging.getLogger(__name__)

LOW_STABILITY_THRESHOLD = 2
LOW_QOL_THRESHOLD = 2


def recalculate_caps(colony: Colony, planet: Planet, empire_infra_caps: dict[str, int]) -> Colony:
    infrastructure = {}
    for domain in InfraDomain:
        cap = attr.infra_cap(
            domain,
            colony.population_level,
            planet.deposits,
            empire_infra_caps,
            colony.modifiers,
        )
        infrastructure[domain] = colony.infra(domain).with_cap(cap)
    return colony._copy_with(infrastructure=infrastructure)


def recalculate_attributes(colony: Colony, planet: Planet, debt_tokens: int) -> tuple[Colony, int]:
    """New attributes (growth accumulator untouched) plus this turn's growth delta."""
    mods = colony.modifiers
    habitability = attr.habitability(planet.base_habitability, mods)
    accessibility = attr.accessibility(colony.level(InfraDomain.TRANSPORT), mods)
    dynamism = attr.dynamism(
        accessibility, colony.population_level, colony.total_corporate_infrastructure, mods
    )
    quality_of_life = attr.quality_of_life(habitability, mods)
    stability = attr.stability(quality_of_life, colony.level(InfraDomain.MILITARY), debt_tokens, mods)
    delta = attr.growth_per_turn(quality_of_life, stability, accessibility, habitability, mods)

    attributes = replace(
        colony.attributes,
        habitability=habitability,
        accessibility=accessibility,
        dynamism=dynamism,
        quality_of_life=quality_of_life,
        stability=stability,
    )
    return colony._copy_with(attributes=attributes), delta


def shortages_for(state: GameState, sector_id: str) -> list[ResourceType]:
    market = state.sector_markets.get(sector_id)
    return market.deficits() if market else []


def process_colony(
    colony: Colony,
    planet: Planet,
    state: GameState,
    rng: RandomSource,
) -> tuple[Colony, list[GameEvent]]:
    turn = state.turn
    events: list[GameEvent] = []

    colony = recalculate_caps(colony, planet, state.empire_bonuses.infra_caps)
    colony, delta = recalculate_attributes(colony, planet, state.debt_tokens)

    tick = apply_growth_tick(colony, delta, MAX_POPULATION_LEVEL[planet.size])
    colony = tick.colony
    if tick.change == GrowthChange.LEVEL_UP:
        events.append(make_event(
            turn, EventPriority.POSITIVE, "colony",
            f"Population Growth - {colony.name}",
            f"{colony.name} has grown to population level {colony.population_level}.",
            [colony.colony_id],
        ))
    elif tick.change == GrowthChange.LEVEL_DOWN:
        events.append(make_event(
            turn, EventPriority.WARNING, "colony",
            f"Population Decline - {colony.name}",
            f"{colony.name} has declined to population level {colony.population_level}.",
            [colony.colony_id],
        ))

    organic = apply_organic_infra_growth(
        colony, colony.attributes.dynamism, shortages_for(state, colony.sector_id), rng
    )
    colony = organic.colony
    if organic.triggered and organic.domain is not None:
        events.append(make_event(
            turn, EventPriority.INFO, "colony",
            f"Organic Growth - {colony.name}",
            f"Local enterprise added one {organic.domain.label} level on {colony.name}.",
            [colony.colony_id],
        ))

    if colony.attributes.stability <= LOW_STABILITY_THRESHOLD:
        events.append(make_event(
            turn, EventPriority.WARNING, "colony",
            f"Low Stability - {colony.name}",
            f"{colony.name} has critically low stability ({colony.attributes.stability}/10).",
            [colony.colony_id],
        ))
    if colony.attributes.quality_of_life <= LOW_QOL_THRESHOLD:
        events.append(make_event(
            turn, EventPriority.WARNING, "colony",
            f"Low Quality of Life - {colony.name}",
            f"{colony.name} has critically low quality of life "
            f"({colony.attributes.quality_of_life}/10).",
            [colony.colony_id],
        ))

    return colony, events


def resolve_colony_phase(state: GameState, rng: RandomSource) -> PhaseResult:
    colonies = dict(state.colonies)
    events: list[GameEvent] = []

    for colony_id, colony in state.colonies.items():
        planet = state.planets.get(colony.planet_id)
        if planet is None:
            logger.warning("Colony %s references unknown planet %s", colony_id, colony.planet_id)
            continue
        colonies[colony_id], colony_events = process_colony(colony, planet, state, rng)
        events.extend(colony_events)

    logger.debug("Colony phase: %d colonies, %d events", len(colonies), len(events))
    return PhaseResult(new_state=state._copy_with(colonies=colonies), events=events)
