"""
Pydantic Schemas for API - Request/response models and snapshot serialization.

These models define the exact wire contract for the simulation. Snapshot
models mirror the engine dataclasses one to one and convert both ways via
`from_state` / `to_state`, so a serialized snapshot can be posted back to
start a new simulation and replay identically.

Error Codes:
- SESSION_NOT_FOUND: Simulation does not exist or has ended
- COLONY_NOT_FOUND: Colony id not in the snapshot
- INSUFFICIENT_BP: Not enough build points for the action
- NO_MATCHING_DEPOSIT: Extraction investment on a planet without the deposit
- AT_CAP: Infrastructure already at its cap
- UNKNOWN_DOMAIN / UNKNOWN_SCIENCE_DOMAIN: Unrecognised domain name
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.state import (
    BonusEffect,
    Colony,
    ColonyAttributes,
    CorpAssets,
    Corporation,
    CorpType,
    Deposit,
    DepositType,
    Discovery,
    EmpireBonuses,
    GameState,
    InfraDomain,
    InfraState,
    Modifier,
    ModifierCondition,
    Patent,
    Planet,
    PlanetSize,
    ResourceFlow,
    ResourceType,
    RichnessLevel,
    Schematic,
    SchematicCategory,
    ScienceDomainState,
    ScienceSectorType,
    SectorMarketState,
)
from ..engine_core.events import EventPriority, GameEvent


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    COLONY_NOT_FOUND = "COLONY_NOT_FOUND"
    INSUFFICIENT_BP = "INSUFFICIENT_BP"
    NO_MATCHING_DEPOSIT = "NO_MATCHING_DEPOSIT"
    AT_CAP = "AT_CAP"
    UNKNOWN_DOMAIN = "UNKNOWN_DOMAIN"
    UNKNOWN_SCIENCE_DOMAIN = "UNKNOWN_SCIENCE_DOMAIN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Planets and colonies
# =============================================================================

class DepositModel(BaseModel):
    deposit_type: DepositType
    richness: RichnessLevel = RichnessLevel.MODERATE

    model_config = {"from_attributes": True}


class PlanetModel(BaseModel):
    planet_id: str
    name: str
    sector_id: str
    size: PlanetSize = PlanetSize.MEDIUM
    base_habitability: int = 5
    deposits: list[DepositModel] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    def to_state(self) -> Planet:
        return Planet(
            planet_id=self.planet_id,
            name=self.name,
            sector_id=self.sector_id,
            size=self.size,
            base_habitability=self.base_habitability,
            deposits=[Deposit(d.deposit_type, d.richness) for d in self.deposits],
        )


class ModifierConditionModel(BaseModel):
    attribute: str
    comparison: str = Field(description="lte or gte")
    value: float

    model_config = {"from_attributes": True}


class ModifierModel(BaseModel):
    id: str
    target: str
    operation: str = Field(description="add or multiply")
    value: float
    source_type: str = ""
    source_id: str = ""
    source_name: str = ""
    condition: Optional[ModifierConditionModel] = None

    model_config = {"from_attributes": True}

    def to_state(self) -> Modifier:
        condition = None
        if self.condition is not None:
            condition = ModifierCondition(**self.condition.model_dump())
        return Modifier(
            id=self.id,
            target=self.target,
            operation=self.operation,
            value=self.value,
            source_type=self.source_type,
            source_id=self.source_id,
            source_name=self.source_name,
            condition=condition,
        )


class InfraStateModel(BaseModel):
    domain: InfraDomain
    public_levels: int = 0
    corporate_levels: dict[str, int] = Field(default_factory=dict)
    current_cap: Optional[int] = Field(0, description="null means uncapped")

    model_config = {"from_attributes": True}


class ColonyAttributesModel(BaseModel):
    habitability: int = 0
    accessibility: int = 0
    dynamism: int = 0
    quality_of_life: int = 0
    stability: int = 0
    growth: int = 0

    model_config = {"from_attributes": True}


class ColonyModel(BaseModel):
    colony_id: str
    name: str
    planet_id: str
    sector_id: str
    population_level: int = 1
    attributes: ColonyAttributesModel = Field(default_factory=ColonyAttributesModel)
    infrastructure: list[InfraStateModel] = Field(default_factory=list)
    modifiers: list[ModifierModel] = Field(default_factory=list)
    corporations_present: list[str] = Field(default_factory=list)
    founded_turn: int = 1

    model_config = {"from_attributes": True}

    @classmethod
    def from_state(cls, colony: Colony) -> "ColonyModel":
        return cls(
            colony_id=colony.colony_id,
            name=colony.name,
            planet_id=colony.planet_id,
            sector_id=colony.sector_id,
            population_level=colony.population_level,
            attributes=ColonyAttributesModel.model_validate(colony.attributes),
            infrastructure=[
                InfraStateModel.model_validate(infra) for infra in colony.infrastructure.values()
            ],
            modifiers=[ModifierModel.model_validate(m) for m in colony.modifiers],
            corporations_present=list(colony.corporations_present),
            founded_turn=colony.founded_turn,
        )

    def to_state(self) -> Colony:
        return Colony(
            colony_id=self.colony_id,
            name=self.name,
            planet_id=self.planet_id,
            sector_id=self.sector_id,
            population_level=self.population_level,
            attributes=ColonyAttributes(**self.attributes.model_dump()),
            infrastructure={
                infra.domain: InfraState(
                    domain=infra.domain,
                    public_levels=infra.public_levels,
                    corporate_levels=dict(infra.corporate_levels),
                    current_cap=infra.current_cap,
                )
                for infra in self.infrastructure
            },
            modifiers=[m.to_state() for m in self.modifiers],
            corporations_present=list(self.corporations_present),
            founded_turn=self.founded_turn,
        )


# =============================================================================
# Corporations
# =============================================================================

class HoldingModel(BaseModel):
    """Levels one corporation owns in one (colony, domain) pair."""
    colony_id: str
    domain: InfraDomain
    levels: int


class CorporationModel(BaseModel):
    corp_id: str
    name: str
    corp_type: CorpType
    level: int = 1
    capital: int = 0
    traits: list[str] = Field(default_factory=list)
    home_planet_id: Optional[str] = None
    planets_present: list[str] = Field(default_factory=list)
    holdings: list[HoldingModel] = Field(default_factory=list)
    schematics: list[str] = Field(default_factory=list)
    patents: list[str] = Field(default_factory=list)
    founded_turn: int = 1

    model_config = {"from_attributes": True}

    @classmethod
    def from_state(cls, corp: Corporation) -> "CorporationModel":
        holdings = [
            HoldingModel(colony_id=colony_id, domain=domain, levels=levels)
            for colony_id, by_domain in corp.assets.infrastructure_by_colony.items()
            for domain, levels in by_domain.items()
        ]
        return cls(
            corp_id=corp.corp_id,
            name=corp.name,
            corp_type=corp.corp_type,
            level=corp.level,
            capital=corp.capital,
            traits=list(corp.traits),
            home_planet_id=corp.home_planet_id,
            planets_present=list(corp.planets_present),
            holdings=holdings,
            schematics=list(corp.assets.schematics),
            patents=list(corp.assets.patents),
            founded_turn=corp.founded_turn,
        )

    def to_state(self) -> Corporation:
        by_colony: dict[str, dict[InfraDomain, int]] = {}
        for holding in self.holdings:
            by_colony.setdefault(holding.colony_id, {})[holding.domain] = holding.levels
        return Corporation(
            corp_id=self.corp_id,
            name=self.name,
            corp_type=self.corp_type,
            level=self.level,
            capital=self.capital,
            traits=list(self.traits),
            home_planet_id=self.home_planet_id,
            planets_present=list(self.planets_present),
            assets=CorpAssets(
                infrastructure_by_colony=by_colony,
                schematics=list(self.schematics),
                patents=list(self.patents),
            ),
            founded_turn=self.founded_turn,
        )


# =============================================================================
# Science
# =============================================================================

class ScienceDomainModel(BaseModel):
    domain: ScienceSectorType
    level: int = 0
    accumulated_points: int = 0
    threshold: int = Field(0, description="Points needed for the next level (read-only)")
    focused: bool = False
    discovered_ids: list[str] = Field(default_factory=list)
    unlocked_schematic_categories: list[SchematicCategory] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    def to_state(self) -> ScienceDomainState:
        return ScienceDomainState(
            domain=self.domain,
            level=self.level,
            accumulated_points=self.accumulated_points,
            focused=self.focused,
            discovered_ids=list(self.discovered_ids),
            unlocked_schematic_categories=list(self.unlocked_schematic_categories),
        )


class BonusEffectModel(BaseModel):
    key: str
    amount: int

    model_config = {"from_attributes": True}


class DiscoveryModel(BaseModel):
    discovery_id: str
    definition_id: str
    name: str
    domain: ScienceSectorType
    pool_level: int
    discovered_by_corp_id: str
    discovered_turn: int
    empire_bonus_effects: list[BonusEffectModel] = Field(default_factory=list)
    unlocks_schematic_categories: list[SchematicCategory] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    def to_state(self) -> Discovery:
        data = self.model_dump(exclude={"empire_bonus_effects"})
        return Discovery(
            **data,
            empire_bonus_effects=[BonusEffect(e.key, e.amount) for e in self.empire_bonus_effects],
        )


class SchematicModel(BaseModel):
    schematic_id: str
    name: str
    category: SchematicCategory
    science_domain: ScienceSectorType
    level: int
    stat_target: str
    bonus_amount: int
    random_modifier: int
    iteration: int
    owner_corp_id: str
    source_discovery_id: str

    model_config = {"from_attributes": True}

    def to_state(self) -> Schematic:
        return Schematic(**self.model_dump())


class PatentModel(BaseModel):
    patent_id: str
    definition_id: str
    name: str
    bonus_target: str
    bonus_amount: float
    owner_corp_id: str
    developed_turn: int
    level: int = 1

    model_config = {"from_attributes": True}

    def to_state(self) -> Patent:
        return Patent(**self.model_dump())


class EmpireBonusesModel(BaseModel):
    ship_stats: dict[str, int] = Field(default_factory=dict)
    infra_caps: dict[str, int] = Field(default_factory=dict)

    model_config = {"from_attributes": True}

    def to_state(self) -> EmpireBonuses:
        bonuses = EmpireBonuses()
        bonuses.ship_stats.update(self.ship_stats)
        bonuses.infra_caps.update(self.infra_caps)
        return bonuses


# =============================================================================
# Flows and markets
# =============================================================================

class ResourceFlowModel(BaseModel):
    resource: ResourceType
    produced: int = 0
    consumed: int = 0
    surplus: int = 0
    imported: int = 0
    in_shortage: bool = False

    model_config = {"from_attributes": True}


class SectorMarketModel(BaseModel):
    sector_id: str
    total_production: dict[ResourceType, int] = Field(default_factory=dict)
    total_consumption: dict[ResourceType, int] = Field(default_factory=dict)
    net_surplus: dict[ResourceType, int] = Field(default_factory=dict)

    model_config = {"from_attributes": True}

    def to_state(self) -> SectorMarketState:
        market = SectorMarketState(sector_id=self.sector_id)
        market.total_production.update(self.total_production)
        market.total_consumption.update(self.total_consumption)
        market.net_surplus.update(self.net_surplus)
        return market


# =============================================================================
# Snapshot
# =============================================================================

class GameStateModel(BaseModel):
    """Complete serialized snapshot."""
    turn: int = 1
    current_bp: int = 0
    debt_tokens: int = 0
    planets: list[PlanetModel] = Field(default_factory=list)
    colonies: list[ColonyModel] = Field(default_factory=list)
    corporations: list[CorporationModel] = Field(default_factory=list)
    science_domains: list[ScienceDomainModel] = Field(default_factory=list)
    empire_bonuses: EmpireBonusesModel = Field(default_factory=EmpireBonusesModel)
    sector_markets: list[SectorMarketModel] = Field(default_factory=list)
    colony_flows: dict[str, list[ResourceFlowModel]] = Field(default_factory=dict)
    discoveries: list[DiscoveryModel] = Field(default_factory=list)
    schematics: list[SchematicModel] = Field(default_factory=list)
    patents: list[PatentModel] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        return cls(
            turn=state.turn,
            current_bp=state.current_bp,
            debt_tokens=state.debt_tokens,
            planets=[PlanetModel.model_validate(p) for p in state.planets.values()],
            colonies=[ColonyModel.from_state(c) for c in state.colonies.values()],
            corporations=[CorporationModel.from_state(c) for c in state.corporations.values()],
            science_domains=[
                ScienceDomainModel.model_validate(d) for d in state.science_domains.values()
            ],
            empire_bonuses=EmpireBonusesModel.model_validate(state.empire_bonuses),
            sector_markets=[SectorMarketModel.model_validate(m) for m in state.sector_markets.values()],
            colony_flows={
                colony_id: [ResourceFlowModel.model_validate(f) for f in flows.values()]
                for colony_id, flows in state.colony_flows.items()
            },
            discoveries=[DiscoveryModel.model_validate(d) for d in state.discoveries.values()],
            schematics=[SchematicModel.model_validate(s) for s in state.schematics.values()],
            patents=[PatentModel.model_validate(p) for p in state.patents.values()],
        )

    def to_state(self) -> GameState:
        domains = {d.domain: d.to_state() for d in self.science_domains}
        state = GameState(
            turn=self.turn,
            current_bp=self.current_bp,
            debt_tokens=self.debt_tokens,
            planets={p.planet_id: p.to_state() for p in self.planets},
            colonies={c.colony_id: c.to_state() for c in self.colonies},
            corporations={c.corp_id: c.to_state() for c in self.corporations},
            empire_bonuses=self.empire_bonuses.to_state(),
            sector_markets={m.sector_id: m.to_state() for m in self.sector_markets},
            colony_flows={
                colony_id: {f.resource: ResourceFlow(**f.model_dump()) for f in flows}
                for colony_id, flows in self.colony_flows.items()
            },
            discoveries={d.discovery_id: d.to_state() for d in self.discoveries},
            schematics={s.schematic_id: s.to_state() for s in self.schematics},
            patents={p.patent_id: p.to_state() for p in self.patents},
        )
        # Missing domains stay at their level-0 defaults
        state.science_domains.update(domains)
        return state


# =============================================================================
# Events
# =============================================================================

class GameEventModel(BaseModel):
    id: str
    turn: int
    priority: EventPriority
    category: str
    title: str
    description: str = ""
    related_entity_ids: list[str] = Field(default_factory=list)
    dismissed: bool = False

    model_config = {"from_attributes": True}

    @classmethod
    def from_event(cls, event: GameEvent) -> "GameEventModel":
        return cls.model_validate(event)


# =============================================================================
# Requests
# =============================================================================

class CreateSimulationRequest(BaseModel):
    """Start a simulation. Without a snapshot the starter scenario is used."""
    seed: Optional[int] = Field(None, description="Random seed; omitted means random")
    state: Optional[GameStateModel] = None


class AdvanceRequest(BaseModel):
    turns: int = Field(1, ge=1, le=500)


class InvestRequest(BaseModel):
    colony_id: str
    domain: str = Field(..., description="Infrastructure domain, e.g. 'mining'")


class ScienceFocusRequest(BaseModel):
    domain: Optional[str] = Field(None, description="Science domain, or null to clear focus")


# =============================================================================
# Responses
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SimulationResponse(BaseModel):
    simulation_id: str
    seed: int
    turn: int
    current_bp: int
    colony_count: int
    corporation_count: int


class PhaseLogModel(BaseModel):
    name: str
    event_count: int

    model_config = {"from_attributes": True}


class TurnResultModel(BaseModel):
    resolved_turn: int
    events: list[GameEventModel] = Field(default_factory=list)
    phase_log: list[PhaseLogModel] = Field(default_factory=list)


class AdvanceResponse(BaseModel):
    simulation_id: str
    turn: int
    results: list[TurnResultModel] = Field(default_factory=list)


class StateResponse(BaseModel):
    simulation_id: str
    state: GameStateModel


class EventsResponse(BaseModel):
    simulation_id: str
    events: list[GameEventModel] = Field(default_factory=list)


class ActionResponse(BaseModel):
    simulation_id: str
    success: bool
    changes: list[str] = Field(default_factory=list)
    current_bp: int


class SimulationListResponse(BaseModel):
    simulations: list[str] = Field(default_factory=list)
    count: int = 0


class EndSimulationResponse(BaseModel):
    success: bool
    simulation_id: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
