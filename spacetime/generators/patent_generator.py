"""
Patent Generator - operational bonuses any corporation can develop.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.state import Corporation, Patent
from ..engine_core.events import EventPriority, GameEvent, make_event
from ..engine_core.random_source import RandomSource, pick_index, roll_percent
from ..data.corporations import PATENT_DEFINITIONS

CHANCE_PER_CORP_LEVEL = 2


def patent_chance(corp_level: int) -> int:
    return corp_level * CHANCE_PER_CORP_LEVEL


def max_patents(corp_level: int) -> int:
    return corp_level // 2


@dataclass
class PatentRollResult:
    new_patent: Patent | None = None
    events: list[GameEvent] = field(default_factory=list)


def roll_for_patent(
    corp: Corporation,
    patents: list[Patent],
    turn: int,
    rng: RandomSource,
) -> PatentRollResult:
    """
    One patent attempt.

    Skipped without drawing at the cap. Otherwise one chance draw, then
    one pick among definitions whose bonus target the corporation lacks.
    """
    owned = [p for p in patents if p.owner_corp_id == corp.corp_id]
    if len(owned) >= max_patents(corp.level):
        return PatentRollResult()

    if not roll_percent(rng, patent_chance(corp.level)):
        return PatentRollResult()

    owned_targets = {p.bonus_target for p in owned}
    available = [d for d in PATENT_DEFINITIONS if d.bonus_target not in owned_targets]
    if not available:
        return PatentRollResult()

    definition = available[pick_index(rng, len(available))]
    patent = Patent(
        patent_id=f"pat_{corp.corp_id}_{definition.definition_id}",
        definition_id=definition.definition_id,
        name=definition.name,
        bonus_target=definition.bonus_target,
        bonus_amount=definition.bonus_per_level,
        owner_corp_id=corp.corp_id,
        developed_turn=turn,
    )
    event = make_event(
        turn,
        EventPriority.POSITIVE,
        "science",
        f"New Patent: {definition.name}",
        f"{corp.name} developed a new patent: {definition.name} ({definition.description})",
        [corp.corp_id, patent.patent_id],
    )
    return PatentRollResult(patent, [event])
