"""
Income phase - planet and corporation taxes into the BP budget.
"""

from __future__ import annotations
import logging

from ..engine_core.state import GameState
from ..engine_core.events import PhaseResult
from ..engine_core.random_source import RandomSource
from ..formulas.tax import corp_tax, planet_tax

logger = logging.getLogger(__name__)


def total_income(state: GameState) -> int:
    colony_taxes = sum(
        planet_tax(c.population_level, c.attributes.habitability) for c in state.colonies.values()
    )
    corporate_taxes = sum(corp_tax(c.level) for c in state.corporations.values())
    return colony_taxes + corporate_taxes


def resolve_income_phase(state: GameState, rng: RandomSource) -> PhaseResult:
    income = total_income(state)
    logger.debug("Income phase: +%d BP", income)
    return PhaseResult(new_state=state._copy_with(current_bp=state.current_bp + income))
