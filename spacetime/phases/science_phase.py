"""
Science phase.

Order within the phase:
1. Distribute empire science output; resolve level-ups
2. Re-version schematics of every domain that levelled up
3. Science corporations roll once each for a discovery
4. Shipbuilding corporations roll for schematics
5. Every corporation rolls for a patent

Corporations roll in corporation-id order so draw order is stable.
"""

from __future__ import annotations
import logging
from dataclasses import replace

from ..engine_core.state import CorpType, Corporation, GameState
from ..engine_core.events import GameEvent, PhaseResult
from ..engine_core.random_source import RandomSource
from ..generators.discovery_generator import roll_for_discovery
from ..generators.patent_generator import roll_for_patent
from ..generators.schematic_generator import roll_for_schematic, version_schematics
from ..simulation.science_sim import advance_science, empire_science_output

logger = logging.getLogger(__name__)


def _corps_in_order(corporations: dict[str, Corporation], corp_type: CorpType | None = None):
    for corp_id in sorted(corporations):
        corp = corporations[corp_id]
        if corp_type is None or corp.corp_type == corp_type:
            yield corp_id


def resolve_science_phase(state: GameState, rng: RandomSource) -> PhaseResult:
    turn = state.turn
    events: list[GameEvent] = []

    total = empire_science_output(state.colonies)
    advance = advance_science(state.science_domains, total, turn)
    events.extend(advance.events)

    schematics = dict(state.schematics)
    for level_up in advance.level_ups:
        schematics, version_events = version_schematics(
            schematics, level_up.domain, level_up.new_level, turn
        )
        events.extend(version_events)

    domains = dict(advance.domains)
    bonuses = state.empire_bonuses
    discoveries = dict(state.discoveries)
    corporations = dict(state.corporations)
    patents = dict(state.patents)

    discovered = state.discovered_definition_ids
    for corp_id in _corps_in_order(corporations, CorpType.SCIENCE):
        result = roll_for_discovery(corporations[corp_id], domains, discovered, bonuses, turn, rng)
        if result.discovery is None:
            continue
        domains = result.science_domains
        bonuses = result.empire_bonuses
        discovered.add(result.discovery.definition_id)
        discoveries[result.discovery.discovery_id] = result.discovery
        events.extend(result.events)

    for corp_id in _corps_in_order(corporations, CorpType.SHIPBUILDING):
        corp = corporations[corp_id]
        result = roll_for_schematic(
            corp, domains, list(schematics.values()), list(discoveries.values()), turn, rng
        )
        if result.new_schematic is None:
            continue

        owned = list(corp.assets.schematics)
        if result.replaced_schematic_id is not None:
            schematics.pop(result.replaced_schematic_id, None)
            owned = [s for s in owned if s != result.replaced_schematic_id]
        schematics[result.new_schematic.schematic_id] = result.new_schematic
        owned.append(result.new_schematic.schematic_id)
        corporations[corp_id] = corp._copy_with(assets=replace(corp.assets, schematics=owned))
        events.extend(result.events)

    for corp_id in _corps_in_order(corporations):
        corp = corporations[corp_id]
        result = roll_for_patent(corp, list(patents.values()), turn, rng)
        if result.new_patent is None:
            continue
        patents[result.new_patent.patent_id] = result.new_patent
        corporations[corp_id] = corp._copy_with(
            assets=replace(corp.assets, patents=corp.assets.patents + [result.new_patent.patent_id])
        )
        events.extend(result.events)

    logger.debug("Science phase: %d points, %d events", total, len(events))
    new_state = state._copy_with(
        science_domains=domains,
        empire_bonuses=bonuses,
        discoveries=discoveries,
        schematics=schematics,
        patents=patents,
        corporations=corporations,
    )
    return PhaseResult(new_state=new_state, events=events)
