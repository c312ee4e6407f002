"""
Resource and deposit tables.

Static lookup data for the production chain:
- which domain extracts which deposit
- richness caps
- planet size population limits
- domain <-> resource mapping
"""

from dataclasses import dataclass

from ..engine_core.state import (
    Deposit,
    DepositType,
    InfraDomain,
    PlanetSize,
    ResourceType,
    RichnessLevel,
)


@dataclass(frozen=True)
class DepositDefinition:
    deposit_type: DepositType
    name: str
    produces: ResourceType
    extracted_by: InfraDomain


def _deposit(deposit_type: DepositType, produces: ResourceType, extracted_by: InfraDomain):
    return deposit_type, DepositDefinition(deposit_type, deposit_type.label, produces, extracted_by)


DEPOSIT_DEFINITIONS: dict[DepositType, DepositDefinition] = dict([
    _deposit(DepositType.FERTILE_GROUND, ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    _deposit(DepositType.RICH_OCEAN, ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    _deposit(DepositType.FUNGAL_NETWORKS, ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    _deposit(DepositType.THERMAL_VENT_ECOSYSTEM, ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    _deposit(DepositType.COMMON_ORE_VEIN, ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    _deposit(DepositType.CARBON_BASED_LAND, ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    _deposit(DepositType.SURFACE_METAL_FIELDS, ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    _deposit(DepositType.GLACIAL_DEPOSITS, ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    _deposit(DepositType.RARE_ORE_VEIN, ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    _deposit(DepositType.CRYSTAL_FORMATIONS, ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    _deposit(DepositType.TECTONIC_SEAMS, ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    _deposit(DepositType.ANCIENT_SEABED, ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    _deposit(DepositType.GAS_POCKET, ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
    _deposit(DepositType.SUBSURFACE_ICE_RESERVES, ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
    _deposit(DepositType.VOLCANIC_FUMAROLES, ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
    _deposit(DepositType.ATMOSPHERIC_LAYERS, ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
])

RICHNESS_CAPS: dict[RichnessLevel, int] = {
    RichnessLevel.POOR: 5,
    RichnessLevel.MODERATE: 10,
    RichnessLevel.RICH: 15,
    RichnessLevel.EXCEPTIONAL: 20,
}

MAX_POPULATION_LEVEL: dict[PlanetSize, int] = {
    PlanetSize.TINY: 4,
    PlanetSize.SMALL: 5,
    PlanetSize.MEDIUM: 8,
    PlanetSize.LARGE: 9,
    PlanetSize.HUGE: 10,
}

EXTRACTION_DOMAINS: frozenset[InfraDomain] = frozenset({
    InfraDomain.AGRICULTURAL,
    InfraDomain.MINING,
    InfraDomain.DEEP_MINING,
    InfraDomain.GAS_EXTRACTION,
})

# Resource produced by each producing domain. Civilian, Science and
# Military produce nothing tradeable.
DOMAIN_TO_RESOURCE: dict[InfraDomain, ResourceType] = {
    InfraDomain.AGRICULTURAL: ResourceType.FOOD,
    InfraDomain.MINING: ResourceType.COMMON_MATERIALS,
    InfraDomain.DEEP_MINING: ResourceType.RARE_MATERIALS,
    InfraDomain.GAS_EXTRACTION: ResourceType.VOLATILES,
    InfraDomain.LOW_INDUSTRY: ResourceType.CONSUMER_GOODS,
    InfraDomain.HEAVY_INDUSTRY: ResourceType.HEAVY_MACHINERY,
    InfraDomain.HIGH_TECH_INDUSTRY: ResourceType.HIGH_TECH_GOODS,
    InfraDomain.SPACE_INDUSTRY: ResourceType.SHIP_PARTS,
    InfraDomain.TRANSPORT: ResourceType.TRANSPORT_CAPACITY,
}

RESOURCE_TO_DOMAIN: dict[ResourceType, InfraDomain] = {
    resource: domain for domain, resource in DOMAIN_TO_RESOURCE.items()
}

# Each manufacturing level consumes one unit of each listed input.
DOMAIN_REQUIRED_INPUTS: dict[InfraDomain, tuple[ResourceType, ...]] = {
    InfraDomain.LOW_INDUSTRY: (ResourceType.COMMON_MATERIALS,),
    InfraDomain.HEAVY_INDUSTRY: (ResourceType.COMMON_MATERIALS, ResourceType.RARE_MATERIALS),
    InfraDomain.HIGH_TECH_INDUSTRY: (ResourceType.RARE_MATERIALS, ResourceType.VOLATILES),
    InfraDomain.SPACE_INDUSTRY: (ResourceType.HIGH_TECH_GOODS, ResourceType.HEAVY_MACHINERY),
}

# Output modifier target per extraction domain.
EXTRACTION_OUTPUT_TARGETS: dict[InfraDomain, str] = {
    InfraDomain.AGRICULTURAL: "agriculturalOutput",
    InfraDomain.MINING: "miningOutput",
    InfraDomain.DEEP_MINING: "deepMiningOutput",
    InfraDomain.GAS_EXTRACTION: "gasExtractionOutput",
}

# Empire infra-cap bonus key per domain.
DOMAIN_TO_EMPIRE_CAP_KEY: dict[InfraDomain, str] = {
    InfraDomain.MINING: "maxMining",
    InfraDomain.DEEP_MINING: "maxDeepMining",
    InfraDomain.GAS_EXTRACTION: "maxGasExtraction",
    InfraDomain.AGRICULTURAL: "maxAgricultural",
    InfraDomain.SCIENCE: "maxScience",
    InfraDomain.SPACE_INDUSTRY: "maxSpaceIndustry",
    InfraDomain.LOW_INDUSTRY: "maxLowIndustry",
    InfraDomain.HEAVY_INDUSTRY: "maxHeavyIndustry",
    InfraDomain.HIGH_TECH_INDUSTRY: "maxHighTechIndustry",
}


def matching_deposits(domain: InfraDomain, deposits: list[Deposit]) -> list[Deposit]:
    """Deposits that `domain` extracts from."""
    return [d for d in deposits if DEPOSIT_DEFINITIONS[d.deposit_type].extracted_by == domain]
