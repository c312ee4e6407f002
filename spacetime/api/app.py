"""
FastAPI Application - REST API for the simulation engine.

Endpoints:
    POST   /api/v1/simulations                     Create simulation
    GET    /api/v1/simulations                     List simulations
    GET    /api/v1/simulations/{id}                Get simulation summary
    DELETE /api/v1/simulations/{id}                End simulation
    POST   /api/v1/simulations/{id}/advance        Resolve N turns
    GET    /api/v1/simulations/{id}/state          Full snapshot
    GET    /api/v1/simulations/{id}/events         Event log (optionally one turn)
    POST   /api/v1/simulations/{id}/invest         Invest BP in a colony domain
    POST   /api/v1/simulations/{id}/science-focus  Set or clear the science focus

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import os

# Environment configuration
SPACETIME_ENV = os.getenv("SPACETIME_ENV", "development")
SPACETIME_DEFAULT_SEED = os.getenv("SPACETIME_DEFAULT_SEED")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def default_seed() -> Optional[int]:
    """SPACETIME_DEFAULT_SEED as an int, or None when unset."""
    if SPACETIME_DEFAULT_SEED in (None, ""):
        return None
    return int(SPACETIME_DEFAULT_SEED)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional SimulationService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import SimulationService
    from .schemas import (
        # Request models
        CreateSimulationRequest,
        AdvanceRequest,
        InvestRequest,
        ScienceFocusRequest,
        # Response models
        SimulationResponse,
        SimulationListResponse,
        EndSimulationResponse,
        AdvanceResponse,
        StateResponse,
        EventsResponse,
        ActionResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Spacetime Simulation API",
        description="""
Deterministic turn-based economy: colonies, science and corporations.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Simulation does not exist |
| `COLONY_NOT_FOUND` | Colony id not in the snapshot |
| `INSUFFICIENT_BP` | Not enough build points |
| `NO_MATCHING_DEPOSIT` | Extraction domain without a matching deposit |
| `AT_CAP` | Infrastructure already at its cap |
| `UNKNOWN_DOMAIN` | Unrecognised infrastructure domain |
| `UNKNOWN_SCIENCE_DOMAIN` | Unrecognised science domain |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or SimulationService(default_seed=default_seed())

    status_by_code = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.COLONY_NOT_FOUND: 404,
        ErrorCode.INSUFFICIENT_BP: 409,
        ErrorCode.AT_CAP: 409,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_by_code.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Simulation Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/simulations",
        response_model=SimulationResponse,
        tags=["Simulations"],
        summary="Create a simulation",
    )
    async def create_simulation(request: CreateSimulationRequest) -> SimulationResponse:
        """
        Start a simulation from a snapshot, or from the starter scenario.

        The same snapshot and seed always replay the same turns.
        """
        return api_service.create_simulation(request)

    @app.get(
        "/api/v1/simulations",
        response_model=SimulationListResponse,
        tags=["Simulations"],
        summary="List active simulations",
    )
    async def list_simulations() -> SimulationListResponse:
        simulations = api_service.list_simulations()
        return SimulationListResponse(simulations=simulations, count=len(simulations))

    @app.get(
        "/api/v1/simulations/{simulation_id}",
        response_model=SimulationResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Simulations"],
        summary="Get simulation summary",
    )
    async def get_simulation(simulation_id: str) -> Union[SimulationResponse, JSONResponse]:
        return respond(api_service.get_simulation(simulation_id))

    @app.delete(
        "/api/v1/simulations/{simulation_id}",
        response_model=EndSimulationResponse,
        tags=["Simulations"],
        summary="End a simulation",
    )
    async def end_simulation(simulation_id: str) -> EndSimulationResponse:
        """End a simulation and release its state."""
        success = api_service.end_simulation(simulation_id)
        return EndSimulationResponse(success=success, simulation_id=simulation_id)

    # =========================================================================
    # Turn Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/simulations/{simulation_id}/advance",
        response_model=AdvanceResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Turns"],
        summary="Resolve one or more turns",
    )
    async def advance(
        simulation_id: str,
        request: AdvanceRequest,
    ) -> Union[AdvanceResponse, JSONResponse]:
        return respond(api_service.advance(simulation_id, request.turns))

    @app.get(
        "/api/v1/simulations/{simulation_id}/state",
        response_model=StateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Turns"],
        summary="Get the full snapshot",
    )
    async def get_state(simulation_id: str) -> Union[StateResponse, JSONResponse]:
        return respond(api_service.get_state(simulation_id))

    @app.get(
        "/api/v1/simulations/{simulation_id}/events",
        response_model=EventsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Turns"],
        summary="Get the event log",
    )
    async def get_events(
        simulation_id: str,
        turn: Annotated[Optional[int], Query(description="Only events of this turn")] = None,
    ) -> Union[EventsResponse, JSONResponse]:
        return respond(api_service.get_events(simulation_id, turn))

    # =========================================================================
    # Action Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/simulations/{simulation_id}/invest",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
        tags=["Actions"],
        summary="Invest BP in one public infrastructure level",
    )
    async def invest(
        simulation_id: str,
        request: InvestRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.invest(simulation_id, request))

    @app.post(
        "/api/v1/simulations/{simulation_id}/science-focus",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Actions"],
        summary="Set or clear the science focus",
    )
    async def set_science_focus(
        simulation_id: str,
        request: ScienceFocusRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.set_science_focus(simulation_id, request))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="spacetime-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Spacetime Simulation API",
            "version": __version__,
            "env": SPACETIME_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
