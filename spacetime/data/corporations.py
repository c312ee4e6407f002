"""
Corporation tables - specialty domains per type and patent definitions.
"""

from dataclasses import dataclass

from ..engine_core.state import CorpType, InfraDomain


PRIMARY_DOMAINS: dict[CorpType, tuple[InfraDomain, ...]] = {
    CorpType.EXPLOITATION: (InfraDomain.MINING, InfraDomain.DEEP_MINING, InfraDomain.GAS_EXTRACTION),
    CorpType.CONSTRUCTION: (InfraDomain.CIVILIAN,),
    CorpType.INDUSTRIAL: (
        InfraDomain.LOW_INDUSTRY,
        InfraDomain.HEAVY_INDUSTRY,
        InfraDomain.HIGH_TECH_INDUSTRY,
    ),
    CorpType.SHIPBUILDING: (InfraDomain.SPACE_INDUSTRY,),
    CorpType.SCIENCE: (InfraDomain.SCIENCE,),
    CorpType.TRANSPORT: (InfraDomain.TRANSPORT,),
    CorpType.MILITARY: (InfraDomain.MILITARY,),
    CorpType.EXPLORATION: (),
    CorpType.AGRICULTURE: (InfraDomain.AGRICULTURAL,),
}

# Type of corporation that emerges from a colony's dominant public domain.
DOMAIN_TO_CORP_TYPE: dict[InfraDomain, CorpType] = {
    InfraDomain.AGRICULTURAL: CorpType.AGRICULTURE,
    InfraDomain.MINING: CorpType.EXPLOITATION,
    InfraDomain.DEEP_MINING: CorpType.EXPLOITATION,
    InfraDomain.GAS_EXTRACTION: CorpType.EXPLOITATION,
    InfraDomain.CIVILIAN: CorpType.CONSTRUCTION,
    InfraDomain.LOW_INDUSTRY: CorpType.INDUSTRIAL,
    InfraDomain.HEAVY_INDUSTRY: CorpType.INDUSTRIAL,
    InfraDomain.HIGH_TECH_INDUSTRY: CorpType.INDUSTRIAL,
    InfraDomain.SPACE_INDUSTRY: CorpType.SHIPBUILDING,
    InfraDomain.SCIENCE: CorpType.SCIENCE,
    InfraDomain.TRANSPORT: CorpType.TRANSPORT,
    InfraDomain.MILITARY: CorpType.MILITARY,
}


@dataclass(frozen=True)
class PatentDefinition:
    definition_id: str
    name: str
    domain: str
    description: str
    bonus_target: str
    bonus_per_level: float


PATENT_DEFINITIONS: tuple[PatentDefinition, ...] = (
    PatentDefinition(
        definition_id="construction_prefab_techniques",
        name="Prefab Construction Techniques",
        domain="construction",
        description="Streamlined building methods reduce contract durations.",
        bonus_target="contractSpeed",
        bonus_per_level=0.1,
    ),
    PatentDefinition(
        definition_id="exploration_advanced_scanners",
        name="Advanced Orbital Scanners",
        domain="exploration",
        description="Enhanced scanning technology improves orbit scan quality.",
        bonus_target="scanQuality",
        bonus_per_level=1,
    ),
)
