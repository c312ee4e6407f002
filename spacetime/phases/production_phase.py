"""
Production phase - colony resource flows and sector market totals.
"""

from __future__ import annotations
import logging

from ..engine_core.state import GameState
from ..engine_core.events import EventPriority, PhaseResult, make_event
from ..engine_core.random_source import RandomSource
from ..simulation.market import aggregate_sector_markets, compute_colony_flows

logger = logging.getLogger(__name__)


def resolve_production_phase(state: GameState, rng: RandomSource) -> PhaseResult:
    """Consumes no draws; `rng` is accepted to fit the phase signature."""
    flows = compute_colony_flows(state)
    markets = aggregate_sector_markets(state, flows)

    events = []
    for sector_id, market in markets.items():
        for resource in market.deficits():
            events.append(make_event(
                state.turn,
                EventPriority.WARNING,
                "market",
                f"{resource.label} deficit in {sector_id}",
                f"Sector {sector_id} is short {-market.net_surplus[resource]} "
                f"{resource.label} this turn.",
                [sector_id],
            ))

    logger.debug("Production phase: %d colonies, %d sectors", len(flows), len(markets))
    new_state = state._copy_with(colony_flows=flows, sector_markets=markets)
    return PhaseResult(new_state=new_state, events=events)
