"""
Simulation Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests to engine calls
2. Manages simulation sessions
3. Maps engine failures to structured error responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.action import Action
from ..engine_core.state import InfraDomain, ScienceSectorType
from ..scenarios import create_starter_state
from ..session.manager import SessionManager, SimulationSession
from .schemas import (
    ActionResponse,
    AdvanceResponse,
    CreateSimulationRequest,
    ErrorCode,
    ErrorResponse,
    EventsResponse,
    GameEventModel,
    GameStateModel,
    InvestRequest,
    PhaseLogModel,
    ScienceFocusRequest,
    SimulationResponse,
    StateResponse,
    TurnResultModel,
)


def _not_found(simulation_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Simulation '{simulation_id}' not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class SimulationService:
    """
    Service layer for the simulation API.

    Usage:
        service = SimulationService()

        # Create simulation
        response = service.create_simulation(CreateSimulationRequest(seed=7))

        # Advance three turns
        advance = service.advance(response.simulation_id, 3)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    default_seed: int | None = None

    # =========================================================================
    # Simulation lifecycle
    # =========================================================================

    def create_simulation(self, request: CreateSimulationRequest) -> SimulationResponse:
        state = request.state.to_state() if request.state else create_starter_state()
        seed = request.seed if request.seed is not None else self.default_seed
        session = self.session_manager.create_session(state, seed=seed)
        return self._session_to_response(session)

    def get_simulation(self, simulation_id: str) -> SimulationResponse | ErrorResponse:
        session = self.session_manager.get_session(simulation_id)
        if not session:
            return _not_found(simulation_id)
        return self._session_to_response(session)

    def end_simulation(self, simulation_id: str) -> bool:
        return self.session_manager.end_session(simulation_id)

    def list_simulations(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Turns
    # =========================================================================

    def advance(self, simulation_id: str, turns: int = 1) -> AdvanceResponse | ErrorResponse:
        """Resolve `turns` turns and return each turn's events."""
        if not self.session_manager.get_session(simulation_id):
            return _not_found(simulation_id)

        results = self.session_manager.advance(simulation_id, turns)
        session = self.session_manager.get_session(simulation_id)
        return AdvanceResponse(
            simulation_id=simulation_id,
            turn=session.turn,
            results=[
                TurnResultModel(
                    resolved_turn=result.resolved_turn,
                    events=[GameEventModel.from_event(e) for e in result.events],
                    phase_log=[PhaseLogModel.model_validate(p) for p in result.phase_log],
                )
                for result in results
            ],
        )

    def get_state(self, simulation_id: str) -> StateResponse | ErrorResponse:
        session = self.session_manager.get_session(simulation_id)
        if not session:
            return _not_found(simulation_id)
        return StateResponse(
            simulation_id=simulation_id,
            state=GameStateModel.from_state(session.game_state),
        )

    def get_events(self, simulation_id: str, turn: int | None = None) -> EventsResponse | ErrorResponse:
        session = self.session_manager.get_session(simulation_id)
        if not session:
            return _not_found(simulation_id)
        events = session.events if turn is None else session.events_for_turn(turn)
        return EventsResponse(
            simulation_id=simulation_id,
            events=[GameEventModel.from_event(e) for e in events],
        )

    # =========================================================================
    # Player actions
    # =========================================================================

    def invest(self, simulation_id: str, request: InvestRequest) -> ActionResponse | ErrorResponse:
        if not self.session_manager.get_session(simulation_id):
            return _not_found(simulation_id)
        try:
            domain = InfraDomain(request.domain)
        except ValueError:
            return ErrorResponse(
                error=f"Unknown infrastructure domain: {request.domain}",
                error_code=ErrorCode.UNKNOWN_DOMAIN,
                details={"valid": [d.value for d in InfraDomain]},
            )
        return self._apply(simulation_id, Action.invest_planet(request.colony_id, domain))

    def set_science_focus(
        self, simulation_id: str, request: ScienceFocusRequest
    ) -> ActionResponse | ErrorResponse:
        if not self.session_manager.get_session(simulation_id):
            return _not_found(simulation_id)
        focus = None
        if request.domain is not None:
            try:
                focus = ScienceSectorType(request.domain)
            except ValueError:
                return ErrorResponse(
                    error=f"Unknown science domain: {request.domain}",
                    error_code=ErrorCode.UNKNOWN_SCIENCE_DOMAIN,
                    details={"valid": [d.value for d in ScienceSectorType]},
                )
        return self._apply(simulation_id, Action.set_science_focus(focus))

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _apply(self, simulation_id: str, action: Action) -> ActionResponse | ErrorResponse:
        result = self.session_manager.apply_action(simulation_id, action)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Action failed",
                error_code=ErrorCode.__members__.get(result.error_code or "", ErrorCode.INTERNAL_ERROR),
            )
        session = self.session_manager.get_session(simulation_id)
        return ActionResponse(
            simulation_id=simulation_id,
            success=True,
            changes=result.state_changes,
            current_bp=session.game_state.current_bp,
        )

    def _session_to_response(self, session: SimulationSession) -> SimulationResponse:
        state = session.game_state
        return SimulationResponse(
            simulation_id=session.session_id,
            seed=session.seed,
            turn=state.turn,
            current_bp=state.current_bp,
            colony_count=len(state.colonies),
            corporation_count=len(state.corporations),
        )
