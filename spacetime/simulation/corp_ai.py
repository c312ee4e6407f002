"""
Corporate Investment AI - rule-based autonomous decisions per corporation.

Each turn a corporation:
1. Tries to invest: find a sector deficit it may build for, pick the most
   dynamic eligible colony, spend 2 capital for +1 corporate level there
2. Tries to acquire (level 6+): buy a corporation at least 3 levels below
   it, preferring the one holding the most infrastructure

Both paths are deterministic given the snapshot. Neither mutates the input
corporation or colonies; results carry new records.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..engine_core.state import (
    Colony,
    CorpAssets,
    Corporation,
    GameState,
    InfraDomain,
    ResourceType,
)
from ..engine_core.events import EventPriority, GameEvent, make_event
from ..data.corporations import PRIMARY_DOMAINS
from ..data.resources import (
    DOMAIN_REQUIRED_INPUTS,
    EXTRACTION_DOMAINS,
    RESOURCE_TO_DOMAIN,
    matching_deposits,
)
from ..formulas.growth import acquisition_cost, max_infra_per_colony

logger = logging.getLogger(__name__)

INVEST_CAPITAL_COST = 2
MIN_CAPITAL_TO_INVEST = 2
FREE_INVESTMENT_LEVEL = 3
MEGACORP_LEVEL = 6
ACQUISITION_LEVEL_GAP = 3
MAX_CORP_LEVEL = 10


@dataclass
class CorpAIResult:
    corp: Corporation
    updated_colonies: dict[str, Colony] = field(default_factory=dict)
    absorbed_corp_id: str | None = None
    events: list[GameEvent] = field(default_factory=list)


@dataclass
class InvestmentCandidate:
    colony: Colony
    domain: InfraDomain
    severity: int


def allowed_investment_domains(corp: Corporation) -> tuple[InfraDomain, ...]:
    """Any domain from level 3; below that, only the type's specialties."""
    if corp.level >= FREE_INVESTMENT_LEVEL:
        return tuple(InfraDomain)
    return PRIMARY_DOMAINS.get(corp.corp_type, ())


def _has_matching_deposit(state: GameState, colony: Colony, domain: InfraDomain) -> bool:
    planet = state.planets.get(colony.planet_id)
    if planet is None:
        return False
    return bool(matching_deposits(domain, planet.deposits))


def find_investment_candidates(corp: Corporation, state: GameState) -> list[InvestmentCandidate]:
    """
    Every eligible (colony, domain) pair, best first.

    Ordering: highest colony dynamism, then largest deficit, then scan
    order (sector markets, deficits in resource order, colonies).
    """
    allowed = allowed_investment_domains(corp)
    if not allowed:
        return []

    ownership_cap = max_infra_per_colony(corp.level)
    candidates: list[InvestmentCandidate] = []

    for sector_id, market in state.sector_markets.items():
        deficits = set(market.deficits())
        for resource in ResourceType:
            if resource not in deficits:
                continue
            domain = RESOURCE_TO_DOMAIN.get(resource)
            if domain is None or domain not in allowed:
                continue
            if any(i in deficits for i in DOMAIN_REQUIRED_INPUTS.get(domain, ())):
                continue

            severity = -market.net_surplus[resource]
            for colony in state.colonies.values():
                if colony.sector_id != sector_id:
                    continue
                if not colony.infra(domain).has_room:
                    continue
                if domain in EXTRACTION_DOMAINS and not _has_matching_deposit(state, colony, domain):
                    continue
                if corp.assets.owned_in(colony.colony_id) >= ownership_cap:
                    continue
                candidates.append(InvestmentCandidate(colony, domain, severity))

    candidates.sort(key=lambda c: (-c.colony.attributes.dynamism, -c.severity))
    return candidates


def attempt_investment(corp: Corporation, state: GameState) -> CorpAIResult | None:
    """Spend 2 capital for one corporate level, or None when nothing qualifies."""
    if corp.capital < MIN_CAPITAL_TO_INVEST:
        return None

    candidates = find_investment_candidates(corp, state)
    if not candidates:
        return None

    target = candidates[0]
    colony, domain = target.colony, target.domain

    new_colony = colony.with_infra(colony.infra(domain).with_corporate_levels(corp.corp_id, 1))
    if corp.corp_id not in new_colony.corporations_present:
        new_colony = new_colony._copy_with(
            corporations_present=new_colony.corporations_present + [corp.corp_id]
        )

    planets_present = list(corp.planets_present)
    if colony.planet_id not in planets_present:
        planets_present.append(colony.planet_id)

    new_corp = corp._copy_with(
        capital=corp.capital - INVEST_CAPITAL_COST,
        assets=corp.assets.with_holding(colony.colony_id, domain, 1),
        planets_present=planets_present,
    )

    event = make_event(
        state.turn,
        EventPriority.INFO,
        "corporation",
        f"{corp.name}: {domain.label} investment",
        f"{corp.name} spent {INVEST_CAPITAL_COST} capital to build "
        f"{domain.label} infrastructure on {colony.name}.",
        [corp.corp_id, colony.colony_id],
    )
    return CorpAIResult(corp=new_corp, updated_colonies={colony.colony_id: new_colony}, events=[event])


def acquisition_candidates(corp: Corporation, state: GameState) -> list[Corporation]:
    """Affordable targets at least 3 levels below, most infrastructure first."""
    if corp.level < MEGACORP_LEVEL:
        return []
    candidates = [
        other for other in state.corporations.values()
        if other.corp_id != corp.corp_id
        and corp.level - other.level >= ACQUISITION_LEVEL_GAP
        and corp.capital >= acquisition_cost(other.level)
    ]
    candidates.sort(key=lambda c: -c.assets.total_owned_infrastructure)
    return candidates


def merge_assets(buyer: CorpAssets, target: CorpAssets) -> CorpAssets:
    by_colony = {cid: dict(h) for cid, h in buyer.infrastructure_by_colony.items()}
    for colony_id, holdings in target.infrastructure_by_colony.items():
        merged = by_colony.setdefault(colony_id, {})
        for domain, levels in holdings.items():
            merged[domain] = merged.get(domain, 0) + levels
    return CorpAssets(
        infrastructure_by_colony=by_colony,
        schematics=buyer.schematics + target.schematics,
        patents=buyer.patents + target.patents,
    )


def transfer_colony_ownership(colony: Colony, from_corp: str, to_corp: str) -> Colony:
    """Move every corporate level held by `from_corp` in a colony to `to_corp`."""
    updated = colony
    for domain, infra in colony.infrastructure.items():
        levels = infra.corporate_levels.get(from_corp, 0)
        if levels:
            moved = infra.with_corporate_levels(from_corp, -levels).with_corporate_levels(to_corp, levels)
            updated = updated.with_infra(moved)

    present = [cid for cid in updated.corporations_present if cid != from_corp]
    if from_corp in colony.corporations_present and to_corp not in present:
        present.append(to_corp)
    return updated._copy_with(corporations_present=present)


def attempt_acquisition(corp: Corporation, state: GameState) -> CorpAIResult | None:
    candidates = acquisition_candidates(corp, state)
    if not candidates:
        return None

    target = candidates[0]
    cost = acquisition_cost(target.level)

    planets_present = list(corp.planets_present)
    for planet_id in target.planets_present:
        if planet_id not in planets_present:
            planets_present.append(planet_id)

    new_corp = corp._copy_with(
        capital=corp.capital - cost,
        level=min(MAX_CORP_LEVEL, corp.level + 1),
        assets=merge_assets(corp.assets, target.assets),
        planets_present=planets_present,
    )

    updated_colonies = {}
    for colony_id in target.assets.infrastructure_by_colony:
        colony = state.colonies.get(colony_id)
        if colony is not None:
            updated_colonies[colony_id] = transfer_colony_ownership(
                colony, target.corp_id, corp.corp_id
            )

    event = make_event(
        state.turn,
        EventPriority.INFO,
        "corporation",
        f"{corp.name} acquired {target.name}",
        f"{corp.name} (Level {corp.level}) acquired {target.name} (Level {target.level}) "
        f"for {cost} capital and absorbed all of its assets.",
        [corp.corp_id, target.corp_id],
    )
    logger.debug("%s absorbed %s", corp.corp_id, target.corp_id)
    return CorpAIResult(
        corp=new_corp,
        updated_colonies=updated_colonies,
        absorbed_corp_id=target.corp_id,
        events=[event],
    )


def run_corp_ai(corp: Corporation, state: GameState) -> CorpAIResult:
    """
    Run both decision paths for one corporation.

    Acquisition is attempted whatever the investment outcome, against
    the state as updated by the investment.
    """
    result = CorpAIResult(corp=corp)

    investment = attempt_investment(corp, state)
    if investment is not None:
        result = investment
        state = state._copy_with(
            colonies={**state.colonies, **investment.updated_colonies},
            corporations={**state.corporations, corp.corp_id: investment.corp},
        )

    acquisition = attempt_acquisition(result.corp, state)
    if acquisition is not None:
        result = CorpAIResult(
            corp=acquisition.corp,
            updated_colonies={**result.updated_colonies, **acquisition.updated_colonies},
            absorbed_corp_id=acquisition.absorbed_corp_id,
            events=result.events + acquisition.events,
        )
    return result
