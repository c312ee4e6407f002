"""
Science tables - discovery pools, schematic categories, name pools.

Discoveries are grouped by (domain, pool level). A discovery becomes
available once its domain reaches the pool level and is made at most
once per empire.
"""

from dataclasses import dataclass, field

from ..engine_core.state import BonusEffect, SchematicCategory, ScienceSectorType


@dataclass(frozen=True)
class DiscoveryDefinition:
    definition_id: str
    name: str
    domain: ScienceSectorType
    pool_level: int
    description: str
    empire_bonus_effects: tuple[BonusEffect, ...] = field(default_factory=tuple)
    unlocks_schematic_categories: tuple[SchematicCategory, ...] = field(default_factory=tuple)


DISCOVERY_DEFINITIONS: tuple[DiscoveryDefinition, ...] = (
    DiscoveryDefinition(
        definition_id="society_1_administration",
        name="New Age Administration",
        domain=ScienceSectorType.SOCIETY,
        pool_level=1,
        description="Modern administrative techniques adapted for interstellar governance.",
    ),
    DiscoveryDefinition(
        definition_id="energy_1_fusion",
        name="Fusion Technology",
        domain=ScienceSectorType.ENERGY,
        pool_level=1,
        description="Compact fusion reactors unlock new possibilities in power generation.",
        unlocks_schematic_categories=(SchematicCategory.REACTOR,),
    ),
    DiscoveryDefinition(
        definition_id="applied_1_prefab",
        name="Prefab Systems",
        domain=ScienceSectorType.APPLIED_SCIENCES,
        pool_level=1,
        description="Modular construction components reduce colony setup time.",
    ),
    DiscoveryDefinition(
        definition_id="weaponry_1_railgun",
        name="Space-Compatible Railgun",
        domain=ScienceSectorType.WEAPONRY,
        pool_level=1,
        description="Electromagnetic accelerators adapted for zero-gravity combat.",
        empire_bonus_effects=(BonusEffect("shipStats.firepower", 1),),
        unlocks_schematic_categories=(SchematicCategory.TURRET, SchematicCategory.MISSILE),
    ),
    DiscoveryDefinition(
        definition_id="propulsion_1_ion",
        name="Ion Drives",
        domain=ScienceSectorType.PROPULSION,
        pool_level=1,
        description="High-efficiency ion propulsion reduces travel times across sectors.",
        empire_bonus_effects=(BonusEffect("shipStats.speed", 1),),
        unlocks_schematic_categories=(SchematicCategory.ENGINE,),
    ),
    DiscoveryDefinition(
        definition_id="construction_1_autonomous",
        name="Autonomous Systems",
        domain=ScienceSectorType.CONSTRUCTION,
        pool_level=1,
        description="Automated construction drones expand colony building capacity.",
    ),
    DiscoveryDefinition(
        definition_id="lifesciences_1_treatments",
        name="Space Treatments",
        domain=ScienceSectorType.LIFE_SCIENCES,
        pool_level=1,
        description="Medical advances counter the health effects of space travel.",
    ),
    DiscoveryDefinition(
        definition_id="materials_1_composite",
        name="Composite Armor",
        domain=ScienceSectorType.MATERIALS,
        pool_level=1,
        description="Layered composite materials improve structural resilience.",
        empire_bonus_effects=(BonusEffect("shipStats.armor", 1),),
        unlocks_schematic_categories=(SchematicCategory.ARMOR, SchematicCategory.HULL),
    ),
    DiscoveryDefinition(
        definition_id="computing_1_basic_ai",
        name="Basic AI",
        domain=ScienceSectorType.COMPUTING,
        pool_level=1,
        description="Primitive artificial intelligence enhances sensors and targeting.",
        empire_bonus_effects=(BonusEffect("shipStats.sensors", 1),),
        unlocks_schematic_categories=(
            SchematicCategory.SENSOR,
            SchematicCategory.TARGETING_SYSTEM,
            SchematicCategory.ELECTRONIC_SYSTEMS,
        ),
    ),
)


@dataclass(frozen=True)
class SchematicCategoryDefinition:
    category: SchematicCategory
    name: str
    stat_target: str
    base_bonus_per_level: int


def _category(category: SchematicCategory, name: str, stat: str, per_level: int):
    return category, SchematicCategoryDefinition(category, name, stat, per_level)


SCHEMATIC_CATEGORY_DEFINITIONS: dict[SchematicCategory, SchematicCategoryDefinition] = dict([
    _category(SchematicCategory.HULL, "Hull", "hullPoints", 10),
    _category(SchematicCategory.SENSOR, "Sensor", "sensors", 1),
    _category(SchematicCategory.ARMOR, "Armor", "armor", 1),
    _category(SchematicCategory.SHIELD, "Shield", "armor", 2),
    _category(SchematicCategory.TURRET, "Turret", "firepower", 1),
    _category(SchematicCategory.MISSILE, "Missile", "firepower", 2),
    _category(SchematicCategory.REACTOR, "Reactor", "powerProjection", 3),
    _category(SchematicCategory.ENGINE, "Engine", "speed", 1),
    _category(SchematicCategory.TARGETING_SYSTEM, "Targeting System", "firepower", 1),
    _category(SchematicCategory.FIGHTER, "Fighter Bay", "powerProjection", 2),
    _category(SchematicCategory.BOMBER, "Bomber Bay", "firepower", 3),
    _category(SchematicCategory.GUNSHIP, "Gunship Bay", "armor", 2),
    _category(SchematicCategory.ELECTRONIC_SYSTEMS, "Electronic Systems", "sensors", 2),
])

SCHEMATIC_NAME_PREFIXES: tuple[str, ...] = (
    "Aegis", "Apex", "Arc", "Atlas", "Banshee", "Bastion", "Centauri", "Chimera",
    "Citadel", "Cobra", "Condor", "Delta", "Dominus", "Drake", "Eclipse", "Ember",
    "Epoch", "Falcon", "Fenrir", "Ferrum", "Forge", "Gorgon", "Gryphon", "Harbinger",
    "Hellfire", "Helix", "Hydra", "Ignition", "Ironclad", "Javelin", "Kraken", "Lance",
    "Leviathan", "Lynx", "Maelstrom", "Magnus", "Mantis", "Meridian", "Nemesis", "Nova",
    "Obsidian", "Omega", "Paladin", "Phantom", "Phoenix", "Predator", "Quantum",
    "Raptor", "Rift", "Rogue", "Sentinel", "Serpent", "Shadow", "Shrike", "Specter",
    "Stalker", "Storm", "Striker", "Tempest", "Titan", "Torch", "Typhoon", "Umbra",
    "Valkyrie", "Vanguard", "Vengeance", "Vortex", "Vulture", "Warlock", "Warlord",
    "Wrath",
)


def schematic_level_label(iteration: int) -> str:
    """Generation marker appended to a schematic name ("" for the first)."""
    return "" if iteration == 1 else f" Mk{iteration}"
