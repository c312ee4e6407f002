"""
API Module - HTTP interface to the simulation.

Clients:
1. Create a simulation (starter scenario or posted snapshot)
2. Apply player actions between turns
3. Advance turns and read back events
4. Fetch the full snapshot

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSimulationRequest,
    AdvanceRequest,
    InvestRequest,
    ScienceFocusRequest,
    # Responses
    SimulationResponse,
    AdvanceResponse,
    StateResponse,
    EventsResponse,
    ActionResponse,
    ErrorResponse,
    ErrorCode,
    # Snapshot
    GameStateModel,
    GameEventModel,
)
from .service import SimulationService
from .app import create_app

__all__ = [
    # Requests
    "CreateSimulationRequest",
    "AdvanceRequest",
    "InvestRequest",
    "ScienceFocusRequest",
    # Responses
    "SimulationResponse",
    "AdvanceResponse",
    "StateResponse",
    "EventsResponse",
    "ActionResponse",
    "ErrorResponse",
    "ErrorCode",
    # Snapshot
    "GameStateModel",
    "GameEventModel",
    # Service
    "SimulationService",
    "create_app",
]
