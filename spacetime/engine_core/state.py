"""
Game State - The immutable snapshot threaded through every turn phase.

Design principles:
- Immutable-friendly: all updates return new records, inputs are never touched
- Identity-keyed: colonies, planets, corporations, discoveries are dicts of id -> record
- Serializable: every record flattens to plain dicts/lists (see api.schemas)
- Engine-owned: the turn resolver is the only owner of the top-level snapshot
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from copy import deepcopy
from enum import Enum


class _LabeledEnum(Enum):
    """Enum with a human readable label derived from the member name."""

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


class InfraDomain(_LabeledEnum):
    """Infrastructure domains a colony can build in."""
    CIVILIAN = "civilian"
    MINING = "mining"
    DEEP_MINING = "deep_mining"
    GAS_EXTRACTION = "gas_extraction"
    AGRICULTURAL = "agricultural"
    LOW_INDUSTRY = "low_industry"
    HEAVY_INDUSTRY = "heavy_industry"
    HIGH_TECH_INDUSTRY = "high_tech_industry"
    SPACE_INDUSTRY = "space_industry"
    TRANSPORT = "transport"
    SCIENCE = "science"
    MILITARY = "military"


class ResourceType(_LabeledEnum):
    """Tradeable (and local) resources."""
    FOOD = "food"
    COMMON_MATERIALS = "common_materials"
    RARE_MATERIALS = "rare_materials"
    VOLATILES = "volatiles"
    CONSUMER_GOODS = "consumer_goods"
    HEAVY_MACHINERY = "heavy_machinery"
    HIGH_TECH_GOODS = "high_tech_goods"
    SHIP_PARTS = "ship_parts"
    TRANSPORT_CAPACITY = "transport_capacity"


class ScienceSectorType(_LabeledEnum):
    """
    The nine science tracks.

    Declaration order is the stable enumeration order used wherever
    domains are walked (point remainder distribution, discovery rolls).
    """
    SOCIETY = "society"
    ENERGY = "energy"
    APPLIED_SCIENCES = "applied_sciences"
    WEAPONRY = "weaponry"
    PROPULSION = "propulsion"
    CONSTRUCTION = "construction"
    LIFE_SCIENCES = "life_sciences"
    MATERIALS = "materials"
    COMPUTING = "computing"


class CorpType(_LabeledEnum):
    """Corporation types (determine specialty domains)."""
    EXPLOITATION = "exploitation"
    CONSTRUCTION = "construction"
    INDUSTRIAL = "industrial"
    SHIPBUILDING = "shipbuilding"
    SCIENCE = "science"
    TRANSPORT = "transport"
    MILITARY = "military"
    EXPLORATION = "exploration"
    AGRICULTURE = "agriculture"


class DepositType(_LabeledEnum):
    """Planetary deposit types."""
    FERTILE_GROUND = "fertile_ground"
    RICH_OCEAN = "rich_ocean"
    FUNGAL_NETWORKS = "fungal_networks"
    THERMAL_VENT_ECOSYSTEM = "thermal_vent_ecosystem"
    COMMON_ORE_VEIN = "common_ore_vein"
    CARBON_BASED_LAND = "carbon_based_land"
    SURFACE_METAL_FIELDS = "surface_metal_fields"
    GLACIAL_DEPOSITS = "glacial_deposits"
    RARE_ORE_VEIN = "rare_ore_vein"
    CRYSTAL_FORMATIONS = "crystal_formations"
    TECTONIC_SEAMS = "tectonic_seams"
    ANCIENT_SEABED = "ancient_seabed"
    GAS_POCKET = "gas_pocket"
    SUBSURFACE_ICE_RESERVES = "subsurface_ice_reserves"
    VOLCANIC_FUMAROLES = "volcanic_fumaroles"
    ATMOSPHERIC_LAYERS = "atmospheric_layers"


class RichnessLevel(_LabeledEnum):
    POOR = "poor"
    MODERATE = "moderate"
    RICH = "rich"
    EXCEPTIONAL = "exceptional"


class PlanetSize(_LabeledEnum):
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


class SchematicCategory(_LabeledEnum):
    """Ship component categories a schematic can improve."""
    HULL = "hull"
    SENSOR = "sensor"
    ARMOR = "armor"
    SHIELD = "shield"
    TURRET = "turret"
    MISSILE = "missile"
    REACTOR = "reactor"
    ENGINE = "engine"
    TARGETING_SYSTEM = "targeting_system"
    FIGHTER = "fighter"
    BOMBER = "bomber"
    GUNSHIP = "gunship"
    ELECTRONIC_SYSTEMS = "electronic_systems"


# =============================================================================
# Modifiers
# =============================================================================

@dataclass
class ModifierCondition:
    """Gate a modifier on a context attribute (e.g. habitability <= 3)."""
    attribute: str
    comparison: str  # "lte" | "gte"
    value: float


@dataclass
class Modifier:
    """
    A local numeric adjustment on a colony.

    `target` names the value being adjusted (e.g. "miningOutput",
    "habitability", "maxMining").
    """
    id: str
    target: str
    operation: str  # "add" | "multiply"
    value: float
    source_type: str = ""
    source_id: str = ""
    source_name: str = ""
    condition: ModifierCondition | None = None


# =============================================================================
# Planets and colonies
# =============================================================================

@dataclass
class Deposit:
    deposit_type: DepositType
    richness: RichnessLevel = RichnessLevel.MODERATE


@dataclass
class Planet:
    """A planet as far as the economy cares: size, habitability, deposits."""
    planet_id: str
    name: str
    sector_id: str
    size: PlanetSize = PlanetSize.MEDIUM
    base_habitability: int = 5
    deposits: list[Deposit] = field(default_factory=list)


@dataclass
class InfraState:
    """
    Infrastructure in one (colony, domain) pair.

    Invariant: total_levels <= current_cap. A cap of None means uncapped.
    """
    domain: InfraDomain
    public_levels: int = 0
    corporate_levels: dict[str, int] = field(default_factory=dict)
    current_cap: int | None = 0

    @property
    def corporate_total(self) -> int:
        return sum(self.corporate_levels.values())

    @property
    def total_levels(self) -> int:
        return self.public_levels + self.corporate_total

    @property
    def has_room(self) -> bool:
        """True while another level fits under the cap."""
        return self.current_cap is None or self.total_levels < self.current_cap

    def with_public_levels(self, delta: int) -> InfraState:
        """Return new state with public ownership changed by delta."""
        return replace(
            self,
            public_levels=self.public_levels + delta,
            corporate_levels=dict(self.corporate_levels),
        )

    def with_corporate_levels(self, corp_id: str, delta: int) -> InfraState:
        """Return new state with one corporation's ownership changed by delta."""
        levels = dict(self.corporate_levels)
        new_value = levels.get(corp_id, 0) + delta
        if new_value > 0:
            levels[corp_id] = new_value
        else:
            levels.pop(corp_id, None)
        return replace(self, corporate_levels=levels)

    def with_cap(self, cap: int | None) -> InfraState:
        return replace(self, current_cap=cap, corporate_levels=dict(self.corporate_levels))


@dataclass
class ColonyAttributes:
    """Derived colony attributes. `growth` is the growth accumulator."""
    habitability: int = 0
    accessibility: int = 0
    dynamism: int = 0
    quality_of_life: int = 0
    stability: int = 0
    growth: int = 0


@dataclass
class Colony:
    """A populated settlement; the unit of production and consumption."""
    colony_id: str
    name: str
    planet_id: str
    sector_id: str
    population_level: int = 1
    attributes: ColonyAttributes = field(default_factory=ColonyAttributes)
    infrastructure: dict[InfraDomain, InfraState] = field(default_factory=dict)
    modifiers: list[Modifier] = field(default_factory=list)
    corporations_present: list[str] = field(default_factory=list)
    founded_turn: int = 1

    def infra(self, domain: InfraDomain) -> InfraState:
        """Infrastructure for a domain (an empty record if never built)."""
        existing = self.infrastructure.get(domain)
        if existing is not None:
            return existing
        cap = None if domain == InfraDomain.CIVILIAN else 0
        return InfraState(domain=domain, current_cap=cap)

    def level(self, domain: InfraDomain) -> int:
        return self.infra(domain).total_levels

    @property
    def total_infrastructure(self) -> int:
        return sum(state.total_levels for state in self.infrastructure.values())

    @property
    def total_corporate_infrastructure(self) -> int:
        return sum(state.corporate_total for state in self.infrastructure.values())

    def with_infra(self, infra_state: InfraState) -> Colony:
        """Return new colony with one domain's infrastructure replaced."""
        infrastructure = dict(self.infrastructure)
        infrastructure[infra_state.domain] = infra_state
        return self._copy_with(infrastructure=infrastructure)

    def _copy_with(self, **kwargs) -> Colony:
        return replace(self, **kwargs)


# =============================================================================
# Corporations
# =============================================================================

@dataclass
class CorpAssets:
    """Everything a corporation owns."""
    infrastructure_by_colony: dict[str, dict[InfraDomain, int]] = field(default_factory=dict)
    schematics: list[str] = field(default_factory=list)
    patents: list[str] = field(default_factory=list)

    @property
    def total_owned_infrastructure(self) -> int:
        return sum(sum(holdings.values()) for holdings in self.infrastructure_by_colony.values())

    def owned_in(self, colony_id: str) -> int:
        return sum(self.infrastructure_by_colony.get(colony_id, {}).values())

    def with_holding(self, colony_id: str, domain: InfraDomain, delta: int) -> CorpAssets:
        """Return new assets with a holding changed by delta."""
        by_colony = {cid: dict(h) for cid, h in self.infrastructure_by_colony.items()}
        holdings = by_colony.setdefault(colony_id, {})
        holdings[domain] = holdings.get(domain, 0) + delta
        return CorpAssets(
            infrastructure_by_colony=by_colony,
            schematics=list(self.schematics),
            patents=list(self.patents),
        )


@dataclass
class Corporation:
    corp_id: str
    name: str
    corp_type: CorpType
    level: int = 1
    capital: int = 0
    traits: list[str] = field(default_factory=list)
    home_planet_id: str | None = None
    planets_present: list[str] = field(default_factory=list)
    assets: CorpAssets = field(default_factory=CorpAssets)
    founded_turn: int = 1

    def _copy_with(self, **kwargs) -> Corporation:
        return replace(self, **kwargs)


# =============================================================================
# Science
# =============================================================================

SCIENCE_THRESHOLD_PER_LEVEL = 15


def level_threshold(level: int) -> int:
    """Points required to advance from `level` to `level + 1`."""
    return (level + 1) * SCIENCE_THRESHOLD_PER_LEVEL


@dataclass
class ScienceDomainState:
    domain: ScienceSectorType
    level: int = 0
    accumulated_points: int = 0
    focused: bool = False
    discovered_ids: list[str] = field(default_factory=list)
    unlocked_schematic_categories: list[SchematicCategory] = field(default_factory=list)

    @property
    def threshold(self) -> int:
        return level_threshold(self.level)

    def _copy_with(self, **kwargs) -> ScienceDomainState:
        kwargs.setdefault("discovered_ids", list(self.discovered_ids))
        kwargs.setdefault("unlocked_schematic_categories", list(self.unlocked_schematic_categories))
        return replace(self, **kwargs)


@dataclass
class BonusEffect:
    """An additive empire bonus, keyed "shipStats.<stat>" or "infraCaps.<key>"."""
    key: str
    amount: int


@dataclass
class Discovery:
    discovery_id: str
    definition_id: str
    name: str
    domain: ScienceSectorType
    pool_level: int
    discovered_by_corp_id: str
    discovered_turn: int
    empire_bonus_effects: list[BonusEffect] = field(default_factory=list)
    unlocks_schematic_categories: list[SchematicCategory] = field(default_factory=list)


@dataclass
class Schematic:
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


@dataclass
class Patent:
    patent_id: str
    definition_id: str
    name: str
    bonus_target: str
    bonus_amount: float
    owner_corp_id: str
    developed_turn: int
    level: int = 1


SHIP_STAT_KEYS = ("size", "speed", "firepower", "armor", "sensors", "evasion")
INFRA_CAP_KEYS = (
    "maxMining",
    "maxDeepMining",
    "maxGasExtraction",
    "maxAgricultural",
    "maxScience",
    "maxSpaceIndustry",
    "maxLowIndustry",
    "maxHeavyIndustry",
    "maxHighTechIndustry",
)


def _zeroed(keys: tuple[str, ...]) -> dict[str, int]:
    return {key: 0 for key in keys}


@dataclass
class EmpireBonuses:
    """
    Cumulative empire-wide bonuses.

    Never retroactive: consumers read them when they next compute a cap
    or a ship. Only discoveries change them.
    """
    ship_stats: dict[str, int] = field(default_factory=lambda: _zeroed(SHIP_STAT_KEYS))
    infra_caps: dict[str, int] = field(default_factory=lambda: _zeroed(INFRA_CAP_KEYS))

    def with_effect(self, key: str, amount: int) -> EmpireBonuses:
        """Return new bonuses with a dotted-key effect added. Unknown keys are ignored."""
        category, _, name = key.partition(".")
        ship_stats = dict(self.ship_stats)
        infra_caps = dict(self.infra_caps)
        if category == "shipStats" and name in ship_stats:
            ship_stats[name] += amount
        elif category == "infraCaps" and name in infra_caps:
            infra_caps[name] += amount
        return EmpireBonuses(ship_stats=ship_stats, infra_caps=infra_caps)


# =============================================================================
# Resource flows and markets
# =============================================================================

@dataclass
class ResourceFlow:
    """
    One (colony, resource) entry for a turn.

    `imported` and `in_shortage` are owned by market resolution; the
    flow calculator always emits 0 / False.
    """
    resource: ResourceType
    produced: int = 0
    consumed: int = 0
    surplus: int = 0
    imported: int = 0
    in_shortage: bool = False


def _zero_resources() -> dict[ResourceType, int]:
    return {resource: 0 for resource in ResourceType}


@dataclass
class SectorMarketState:
    sector_id: str
    total_production: dict[ResourceType, int] = field(default_factory=_zero_resources)
    total_consumption: dict[ResourceType, int] = field(default_factory=_zero_resources)
    net_surplus: dict[ResourceType, int] = field(default_factory=_zero_resources)

    def deficits(self) -> list[ResourceType]:
        """Resources with a negative net surplus, in enum order."""
        return [r for r in ResourceType if self.net_surplus.get(r, 0) < 0]


# =============================================================================
# Game state
# =============================================================================

def create_initial_science_domains() -> dict[ScienceSectorType, ScienceDomainState]:
    """One level-0 domain per science sector, none focused."""
    return {sector: ScienceDomainState(domain=sector) for sector in ScienceSectorType}


@dataclass
class GameState:
    """
    Complete economic snapshot for one turn.

    Phases receive a snapshot and return a new one; nothing in the
    engine keeps a reference into a snapshot it was handed.
    """
    turn: int = 1
    current_bp: int = 0
    debt_tokens: int = 0

    planets: dict[str, Planet] = field(default_factory=dict)
    colonies: dict[str, Colony] = field(default_factory=dict)
    corporations: dict[str, Corporation] = field(default_factory=dict)

    science_domains: dict[ScienceSectorType, ScienceDomainState] = field(
        default_factory=create_initial_science_domains
    )
    empire_bonuses: EmpireBonuses = field(default_factory=EmpireBonuses)

    sector_markets: dict[str, SectorMarketState] = field(default_factory=dict)
    colony_flows: dict[str, dict[ResourceType, ResourceFlow]] = field(default_factory=dict)

    discoveries: dict[str, Discovery] = field(default_factory=dict)
    schematics: dict[str, Schematic] = field(default_factory=dict)
    patents: dict[str, Patent] = field(default_factory=dict)

    @property
    def focused_domain(self) -> ScienceSectorType | None:
        for domain_state in self.science_domains.values():
            if domain_state.focused:
                return domain_state.domain
        return None

    @property
    def discovered_definition_ids(self) -> set[str]:
        """Every discovery definition already made, empire-wide."""
        ids: set[str] = set()
        for domain_state in self.science_domains.values():
            ids.update(domain_state.discovered_ids)
        return ids

    def get_colony(self, colony_id: str) -> Colony | None:
        return self.colonies.get(colony_id)

    def clone(self) -> GameState:
        """Create a deep copy of the state."""
        return deepcopy(self)

    def _copy_with(self, **kwargs) -> GameState:
        """
        Shallow copy with overrides.

        Top-level collections are copied so a phase can rebind entries
        without touching the caller's dicts.
        """
        for name in (
            "planets", "colonies", "corporations", "science_domains",
            "sector_markets", "colony_flows", "discoveries", "schematics", "patents",
        ):
            kwargs.setdefault(name, dict(getattr(self, name)))
        return replace(self, **kwargs)
