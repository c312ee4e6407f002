"""
Turn phases. Each is a pure `(state, rng) -> PhaseResult` function.
"""

from .income_phase import resolve_income_phase
from .science_phase import resolve_science_phase
from .corp_phase import resolve_corp_phase
from .colony_phase import resolve_colony_phase
from .production_phase import resolve_production_phase

__all__ = [
    "resolve_income_phase",
    "resolve_science_phase",
    "resolve_corp_phase",
    "resolve_colony_phase",
    "resolve_production_phase",
]
