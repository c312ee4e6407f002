"""
Corporation phase.

Corporations act in descending level order (ties keep snapshot order).
Each gains capital, then runs the investment AI against the working state,
so later corporations see earlier investments. Absorbed corporations are
removed immediately and skipped if they had not acted yet.

After every corporation has acted, thriving colonies may spawn a new
corporation organically.
"""

from __future__ import annotations
import logging
from dataclasses import replace

from ..engine_core.state import (
    Colony,
    CorpAssets,
    Corporation,
    CorpType,
    GameState,
    InfraDomain,
)
from ..engine_core.events import EventPriority, GameEvent, PhaseResult, make_event
from ..engine_core.random_source import RandomSource, roll_percent
from ..data.corporations import DOMAIN_TO_CORP_TYPE
from ..formulas.growth import capital_gain
from ..simulation.corp_ai import run_corp_ai

logger = logging.getLogger(__name__)

EMERGENCE_MIN_DYNAMISM = 6
EMERGENCE_CHANCE_PER_POINT = 10


def emergence_chance(dynamism: int) -> int:
    if dynamism < EMERGENCE_MIN_DYNAMISM:
        return 0
    return (dynamism - 5) * EMERGENCE_CHANCE_PER_POINT


def most_prominent_public_domain(colony: Colony) -> InfraDomain | None:
    """Non-Civilian domain with the most public levels (first wins ties)."""
    best_domain, best_levels = None, 0
    for domain in InfraDomain:
        if domain == InfraDomain.CIVILIAN:
            continue
        public = colony.infra(domain).public_levels
        if public > best_levels:
            best_domain, best_levels = domain, public
    return best_domain


def try_organic_emergence(
    colony: Colony,
    turn: int,
    rng: RandomSource,
) -> tuple[Corporation, Colony, GameEvent] | None:
    """
    One emergence attempt: a draw only when dynamism allows a chance.

    On success one public level of the colony's dominant domain becomes
    owned by the new level-1 corporation.
    """
    chance = emergence_chance(colony.attributes.dynamism)
    if chance == 0:
        return None
    if not roll_percent(rng, chance):
        return None

    domain = most_prominent_public_domain(colony)
    if domain is None:
        return None
    corp_type: CorpType = DOMAIN_TO_CORP_TYPE[domain]

    corp_id = f"corp_t{turn}_{colony.colony_id}"
    corp = Corporation(
        corp_id=corp_id,
        name=f"{colony.name} {corp_type.label} Co.",
        corp_type=corp_type,
        level=1,
        capital=0,
        home_planet_id=colony.planet_id,
        planets_present=[colony.planet_id],
        assets=CorpAssets(infrastructure_by_colony={colony.colony_id: {domain: 1}}),
        founded_turn=turn,
    )

    infra = colony.infra(domain).with_public_levels(-1).with_corporate_levels(corp_id, 1)
    updated = colony.with_infra(infra)._copy_with(
        corporations_present=colony.corporations_present + [corp_id]
    )

    event = make_event(
        turn,
        EventPriority.POSITIVE,
        "corporation",
        f"{corp.name} emerged on {colony.name}",
        f"A new {corp_type.label} corporation emerged from {colony.name}'s thriving "
        f"{domain.label} activity. One {domain.label} level moved to corporate ownership.",
        [corp_id, colony.colony_id],
    )
    return corp, updated, event


def resolve_corp_phase(state: GameState, rng: RandomSource) -> PhaseResult:
    events: list[GameEvent] = []
    corporations = dict(state.corporations)
    colonies = dict(state.colonies)
    schematics = dict(state.schematics)
    patents = dict(state.patents)
    absorbed: set[str] = set()

    order = [c.corp_id for c in sorted(state.corporations.values(), key=lambda c: -c.level)]

    for corp_id in order:
        if corp_id in absorbed or corp_id not in corporations:
            continue

        corp = corporations[corp_id]
        gain = capital_gain(corp.assets.total_owned_infrastructure, rng)
        corp = corp._copy_with(capital=corp.capital + gain)

        working = state._copy_with(
            corporations={**corporations, corp_id: corp},
            colonies=colonies,
        )
        result = run_corp_ai(corp, working)

        corporations[corp_id] = result.corp
        colonies.update(result.updated_colonies)
        events.extend(result.events)

        target_id = result.absorbed_corp_id
        if target_id is not None:
            absorbed.add(target_id)
            corporations.pop(target_id, None)
            for sid, schematic in schematics.items():
                if schematic.owner_corp_id == target_id:
                    schematics[sid] = replace(schematic, owner_corp_id=corp_id)
            for pid, patent in patents.items():
                if patent.owner_corp_id == target_id:
                    patents[pid] = replace(patent, owner_corp_id=corp_id)

    for colony_id in list(colonies):
        emerged = try_organic_emergence(colonies[colony_id], state.turn, rng)
        if emerged is None:
            continue
        corp, updated_colony, event = emerged
        corporations[corp.corp_id] = corp
        colonies[colony_id] = updated_colony
        events.append(event)

    logger.debug("Corporation phase: %d events, %d absorbed", len(events), len(absorbed))
    new_state = state._copy_with(
        corporations=corporations,
        colonies=colonies,
        schematics=schematics,
        patents=patents,
    )
    return PhaseResult(new_state=new_state, events=events)
