"""
Sector market aggregation.

Sums colony resource flows per sector. Trade between colonies, imports
and shortage flags are left to market resolution and are not computed here.
"""

from __future__ import annotations

from ..engine_core.state import GameState, ResourceFlow, ResourceType, SectorMarketState
from .colony_sim import calculate_resource_flow


def compute_colony_flows(state: GameState) -> dict[str, dict[ResourceType, ResourceFlow]]:
    """Resource flow of every colony whose planet is known."""
    flows = {}
    for colony_id, colony in state.colonies.items():
        planet = state.planets.get(colony.planet_id)
        if planet is None:
            continue
        flows[colony_id] = calculate_resource_flow(colony, planet.deposits)
    return flows


def aggregate_sector_markets(
    state: GameState,
    flows: dict[str, dict[ResourceType, ResourceFlow]],
) -> dict[str, SectorMarketState]:
    markets: dict[str, SectorMarketState] = {}
    for colony_id, colony_flows in flows.items():
        sector_id = state.colonies[colony_id].sector_id
        market = markets.setdefault(sector_id, SectorMarketState(sector_id=sector_id))
        for resource, flow in colony_flows.items():
            market.total_production[resource] += flow.produced
            market.total_consumption[resource] += flow.consumed
            market.net_surplus[resource] += flow.surplus
    return markets
