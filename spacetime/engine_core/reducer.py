"""
Reducer - Applies player actions to the game state.

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure and a tagged error code
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from .state import GameState, InfraDomain, ScienceSectorType
from .action import Action, ActionErrorCode, ActionResult, ActionType
from ..data.resources import EXTRACTION_DOMAINS, matching_deposits
from ..formulas.attributes import infra_cap
from ..simulation.science_sim import set_domain_focus

logger = logging.getLogger(__name__)

INVEST_COST_BP = 3


@dataclass
class Reducer:
    """
    Reducer applies player actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ActionErrorCode.NO_HANDLER,
            )

        result = handler(state, action)
        if result.success:
            logger.debug("Applied action %s", action)
        return result

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.INVEST_PLANET: self._handle_invest_planet,
            ActionType.SET_SCIENCE_FOCUS: self._handle_set_science_focus,
        }
        return handlers.get(action_type)

    def _handle_invest_planet(self, state: GameState, action: Action) -> ActionResult:
        """Spend 3 BP on one public level of a colony domain."""
        colony_id = action.payload.colony_id
        domain = action.payload.domain

        colony = state.get_colony(colony_id) if colony_id else None
        if colony is None:
            return ActionResult.failure(
                f"Colony '{colony_id}' not found.",
                error_code=ActionErrorCode.COLONY_NOT_FOUND,
            )

        if not isinstance(domain, InfraDomain):
            return ActionResult.failure(
                f"Unknown infrastructure domain: {domain!r}",
                error_code=ActionErrorCode.UNKNOWN_DOMAIN,
            )

        if state.current_bp < INVEST_COST_BP:
            return ActionResult.failure(
                f"Investment requires {INVEST_COST_BP} BP. Player has {state.current_bp} BP.",
                error_code=ActionErrorCode.INSUFFICIENT_BP,
            )

        planet = state.planets.get(colony.planet_id)
        deposits = planet.deposits if planet else []

        if domain in EXTRACTION_DOMAINS and not matching_deposits(domain, deposits):
            return ActionResult.failure(
                f"No deposit for {domain.label} on this planet.",
                error_code=ActionErrorCode.NO_MATCHING_DEPOSIT,
            )

        cap = infra_cap(
            domain,
            colony.population_level,
            deposits,
            state.empire_bonuses.infra_caps,
            colony.modifiers,
        )
        infra = colony.infra(domain).with_cap(cap)
        if not infra.has_room:
            return ActionResult.failure(
                f"{domain.label} infrastructure is at its cap ({cap}).",
                error_code=ActionErrorCode.AT_CAP,
            )

        new_colony = colony.with_infra(infra.with_public_levels(1))
        new_state = state._copy_with(
            current_bp=state.current_bp - INVEST_COST_BP,
            colonies={**state.colonies, colony.colony_id: new_colony},
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{colony.name}: +1 {domain.label} (-{INVEST_COST_BP} BP)"],
        )

    def _handle_set_science_focus(self, state: GameState, action: Action) -> ActionResult:
        focus = action.payload.science_domain
        if focus is not None and not isinstance(focus, ScienceSectorType):
            return ActionResult.failure(
                f"Unknown science domain: {focus!r}",
                error_code=ActionErrorCode.UNKNOWN_SCIENCE_DOMAIN,
            )

        domains = set_domain_focus(state.science_domains, focus)
        change = f"Science focus: {focus.label}" if focus else "Science focus cleared"
        return ActionResult.success_with_state(
            state._copy_with(science_domains=domains), changes=[change]
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply a single action."""
    return Reducer().apply(state, action)
