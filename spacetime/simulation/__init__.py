"""
Simulation - per-colony economics, science progression and corporate AI.
"""

from .colony_sim import (
    calculate_resource_flow,
    apply_growth_tick,
    apply_organic_infra_growth,
    GrowthChange,
)
from .science_sim import advance_science, distribute_points, set_domain_focus
from .corp_ai import run_corp_ai, CorpAIResult
from .market import compute_colony_flows, aggregate_sector_markets

__all__ = [
    "calculate_resource_flow",
    "apply_growth_tick",
    "apply_organic_infra_growth",
    "GrowthChange",
    "advance_science",
    "distribute_points",
    "set_domain_focus",
    "run_corp_ai",
    "CorpAIResult",
    "compute_colony_flows",
    "aggregate_sector_markets",
]
