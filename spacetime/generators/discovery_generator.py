"""
Discovery Generator - level-gated, once-per-empire unlocks.

The pool spans every science domain: a definition is available once its own
domain has reached its pool level and nobody in the empire has made it yet.

Roll procedure (two draws, only when the pool is non-empty):
1. Pick one definition uniformly from the available pool
2. Succeed when draw x 100 < chance, doubled if that definition's domain
   is focused
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..engine_core.state import (
    BonusEffect,
    Corporation,
    Discovery,
    EmpireBonuses,
    ScienceDomainState,
    ScienceSectorType,
)
from ..engine_core.events import EventPriority, GameEvent, make_event
from ..engine_core.random_source import RandomSource, pick_index, roll_percent
from ..data.science import DISCOVERY_DEFINITIONS, DiscoveryDefinition
from ..simulation.science_sim import corporation_science_infra

logger = logging.getLogger(__name__)

CHANCE_PER_CORP_LEVEL = 5
CHANCE_PER_SCIENCE_LEVEL = 2
FOCUS_CHANCE_MULTIPLIER = 2


def discovery_chance(corp_level: int, science_infra: int, focused: bool) -> int:
    """Percent chance; doubled when the domain is focused."""
    chance = corp_level * CHANCE_PER_CORP_LEVEL + science_infra * CHANCE_PER_SCIENCE_LEVEL
    return chance * FOCUS_CHANCE_MULTIPLIER if focused else chance


def available_discoveries(
    science_domains: dict[ScienceSectorType, ScienceDomainState],
    discovered_ids: set[str],
) -> list[DiscoveryDefinition]:
    """Empire-wide pool, in definition table order."""
    return [
        d for d in DISCOVERY_DEFINITIONS
        if d.domain in science_domains
        and d.pool_level <= science_domains[d.domain].level
        and d.definition_id not in discovered_ids
    ]


def apply_discovery_effects(
    bonuses: EmpireBonuses,
    effects: list[BonusEffect] | tuple[BonusEffect, ...],
) -> EmpireBonuses:
    for effect in effects:
        bonuses = bonuses.with_effect(effect.key, effect.amount)
    return bonuses


@dataclass
class DiscoveryRollResult:
    discovery: Discovery | None
    science_domains: dict[ScienceSectorType, ScienceDomainState]
    empire_bonuses: EmpireBonuses
    events: list[GameEvent] = field(default_factory=list)


def roll_for_discovery(
    corp: Corporation,
    science_domains: dict[ScienceSectorType, ScienceDomainState],
    discovered_ids: set[str],
    empire_bonuses: EmpireBonuses,
    turn: int,
    rng: RandomSource,
) -> DiscoveryRollResult:
    """One discovery attempt by a science corporation."""
    no_change = DiscoveryRollResult(None, science_domains, empire_bonuses)

    pool = available_discoveries(science_domains, discovered_ids)
    if not pool:
        return no_change

    definition = pool[pick_index(rng, len(pool))]
    domain_state = science_domains[definition.domain]
    chance = discovery_chance(
        corp.level, corporation_science_infra(corp), domain_state.focused
    )
    if not roll_percent(rng, chance):
        return no_change

    discovery = Discovery(
        discovery_id=f"dsc_{definition.definition_id}",
        definition_id=definition.definition_id,
        name=definition.name,
        domain=definition.domain,
        pool_level=definition.pool_level,
        discovered_by_corp_id=corp.corp_id,
        discovered_turn=turn,
        empire_bonus_effects=list(definition.empire_bonus_effects),
        unlocks_schematic_categories=list(definition.unlocks_schematic_categories),
    )

    unlocked = list(domain_state.unlocked_schematic_categories)
    for category in definition.unlocks_schematic_categories:
        if category not in unlocked:
            unlocked.append(category)

    new_domains = dict(science_domains)
    new_domains[definition.domain] = domain_state._copy_with(
        discovered_ids=domain_state.discovered_ids + [definition.definition_id],
        unlocked_schematic_categories=unlocked,
    )
    new_bonuses = apply_discovery_effects(empire_bonuses, definition.empire_bonus_effects)

    event = make_event(
        turn,
        EventPriority.POSITIVE,
        "science",
        f"Discovery: {definition.name}",
        f"{corp.name} made a breakthrough in {definition.domain.label}: {definition.description}",
        [corp.corp_id, discovery.discovery_id],
    )
    logger.debug("%s discovered %s", corp.corp_id, definition.definition_id)
    return DiscoveryRollResult(discovery, new_domains, new_bonuses, [event])
