"""
Science Simulation - empire science output and domain progression.

Per turn:
1. Empire output = every Science infrastructure level, public and corporate
2. Split evenly over the nine domains; the remainder goes one point each to
   the first domains in ScienceSectorType declaration order
3. A focused domain receives double its allocation
4. Level-ups resolve in a loop, carrying excess points over
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..engine_core.state import (
    Colony,
    Corporation,
    InfraDomain,
    ScienceDomainState,
    ScienceSectorType,
    level_threshold,
)
from ..engine_core.events import EventPriority, GameEvent, make_event

logger = logging.getLogger(__name__)

FOCUS_MULTIPLIER = 2


def empire_science_output(colonies: dict[str, Colony]) -> int:
    return sum(colony.level(InfraDomain.SCIENCE) for colony in colonies.values())


def distribute_points(
    total: int,
    focused: ScienceSectorType | None = None,
) -> dict[ScienceSectorType, int]:
    """Allocation per domain for `total` science points."""
    sectors = list(ScienceSectorType)
    base, remainder = divmod(total, len(sectors))

    allocation = {}
    for index, sector in enumerate(sectors):
        points = base + (1 if index < remainder else 0)
        if sector == focused:
            points *= FOCUS_MULTIPLIER
        allocation[sector] = points
    return allocation


@dataclass
class LevelUp:
    domain: ScienceSectorType
    new_level: int


@dataclass
class ScienceAdvanceResult:
    domains: dict[ScienceSectorType, ScienceDomainState]
    level_ups: list[LevelUp] = field(default_factory=list)
    events: list[GameEvent] = field(default_factory=list)


def resolve_level_ups(domain_state: ScienceDomainState) -> tuple[ScienceDomainState, list[int]]:
    """
    Spend accumulated points on as many level-ups as they cover.

    Returns the new state and every level reached, in order.
    """
    level = domain_state.level
    points = domain_state.accumulated_points
    reached: list[int] = []
    while points >= level_threshold(level):
        points -= level_threshold(level)
        level += 1
        reached.append(level)
    return domain_state._copy_with(level=level, accumulated_points=points), reached


def advance_science(
    domains: dict[ScienceSectorType, ScienceDomainState],
    total_points: int,
    turn: int,
) -> ScienceAdvanceResult:
    """Distribute one turn of science output and resolve level-ups."""
    focused = next((s for s, d in domains.items() if d.focused), None)
    allocation = distribute_points(total_points, focused)

    updated: dict[ScienceSectorType, ScienceDomainState] = {}
    level_ups: list[LevelUp] = []
    events: list[GameEvent] = []

    for sector in ScienceSectorType:
        current = domains.get(sector) or ScienceDomainState(domain=sector)
        with_points = current._copy_with(
            accumulated_points=current.accumulated_points + allocation[sector]
        )
        resolved, reached = resolve_level_ups(with_points)
        updated[sector] = resolved

        for new_level in reached:
            level_ups.append(LevelUp(domain=sector, new_level=new_level))
            events.append(make_event(
                turn,
                EventPriority.POSITIVE,
                "science",
                f"{sector.label} advances to level {new_level}",
                f"Empire research in {sector.label} has reached level {new_level}.",
            ))

    if level_ups:
        logger.debug("Science level-ups on turn %d: %d", turn, len(level_ups))
    return ScienceAdvanceResult(domains=updated, level_ups=level_ups, events=events)


def set_domain_focus(
    domains: dict[ScienceSectorType, ScienceDomainState],
    focus: ScienceSectorType | None,
) -> dict[ScienceSectorType, ScienceDomainState]:
    """Focus exactly one domain (or none); every other focus is cleared."""
    return {
        sector: state._copy_with(focused=(sector == focus))
        for sector, state in domains.items()
    }


def corporation_science_infra(corp: Corporation) -> int:
    """Science levels a corporation owns across all colonies."""
    return sum(
        holdings.get(InfraDomain.SCIENCE, 0)
        for holdings in corp.assets.infrastructure_by_colony.values()
    )
