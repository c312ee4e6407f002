"""
Starter scenario - a small, fully deterministic economy.

Used by the CLI demo, the API (as the default snapshot) and the tests.
Two colonies in one sector, plus a third colony in a neighbouring sector,
and one corporation of each type the science phase cares about.
"""

from __future__ import annotations

from .engine_core.state import (
    Colony,
    ColonyAttributes,
    CorpAssets,
    Corporation,
    CorpType,
    Deposit,
    DepositType,
    EmpireBonuses,
    GameState,
    InfraDomain,
    InfraState,
    Planet,
    PlanetSize,
    RichnessLevel,
    ScienceSectorType,
    create_initial_science_domains,
)
from .phases.colony_phase import recalculate_caps

STARTING_BP = 20


def _infra(public: dict[InfraDomain, int], corporate: dict[InfraDomain, dict[str, int]]):
    return {
        domain: InfraState(
            domain=domain,
            public_levels=public.get(domain, 0),
            corporate_levels=dict(corporate.get(domain, {})),
            current_cap=None if domain == InfraDomain.CIVILIAN else 0,
        )
        for domain in InfraDomain
        if domain in public or domain in corporate
    }


def starter_planets() -> dict[str, Planet]:
    terra = Planet(
        planet_id="terra_nova",
        name="Terra Nova",
        sector_id="sector_core",
        size=PlanetSize.LARGE,
        base_habitability=8,
        deposits=[
            Deposit(DepositType.FERTILE_GROUND, RichnessLevel.RICH),
            Deposit(DepositType.COMMON_ORE_VEIN, RichnessLevel.MODERATE),
            Deposit(DepositType.GAS_POCKET, RichnessLevel.POOR),
        ],
    )
    ferrous = Planet(
        planet_id="ferrous_prime",
        name="Ferrous Prime",
        sector_id="sector_core",
        size=PlanetSize.MEDIUM,
        base_habitability=4,
        deposits=[
            Deposit(DepositType.SURFACE_METAL_FIELDS, RichnessLevel.RICH),
            Deposit(DepositType.RARE_ORE_VEIN, RichnessLevel.MODERATE),
        ],
    )
    glacier = Planet(
        planet_id="glacier_reach",
        name="Glacier Reach",
        sector_id="sector_rim",
        size=PlanetSize.SMALL,
        base_habitability=3,
        deposits=[
            Deposit(DepositType.SUBSURFACE_ICE_RESERVES, RichnessLevel.EXCEPTIONAL),
            Deposit(DepositType.FUNGAL_NETWORKS, RichnessLevel.POOR),
        ],
    )
    return {p.planet_id: p for p in (terra, ferrous, glacier)}


def starter_colonies() -> dict[str, Colony]:
    capital = Colony(
        colony_id="col_terra_nova",
        name="Terra Nova",
        planet_id="terra_nova",
        sector_id="sector_core",
        population_level=7,
        attributes=ColonyAttributes(growth=0),
        infrastructure=_infra(
            {
                InfraDomain.CIVILIAN: 14,
                InfraDomain.AGRICULTURAL: 6,
                InfraDomain.MINING: 3,
                InfraDomain.LOW_INDUSTRY: 3,
                InfraDomain.HEAVY_INDUSTRY: 1,
                InfraDomain.TRANSPORT: 3,
                InfraDomain.SCIENCE: 2,
                InfraDomain.MILITARY: 1,
            },
            {
                InfraDomain.AGRICULTURAL: {"corp_agri_harvest": 2},
                InfraDomain.SCIENCE: {"corp_sci_lumen": 2},
                InfraDomain.SPACE_INDUSTRY: {"corp_ship_forge": 1},
            },
        ),
        corporations_present=["corp_agri_harvest", "corp_sci_lumen", "corp_ship_forge"],
    )
    foundry = Colony(
        colony_id="col_ferrous_prime",
        name="Ferrous Prime",
        planet_id="ferrous_prime",
        sector_id="sector_core",
        population_level=4,
        infrastructure=_infra(
            {
                InfraDomain.CIVILIAN: 6,
                InfraDomain.MINING: 4,
                InfraDomain.DEEP_MINING: 1,
                InfraDomain.HEAVY_INDUSTRY: 2,
                InfraDomain.TRANSPORT: 2,
            },
            {
                InfraDomain.MINING: {"corp_ore_delve": 3},
            },
        ),
        corporations_present=["corp_ore_delve"],
    )
    outpost = Colony(
        colony_id="col_glacier_reach",
        name="Glacier Reach",
        planet_id="glacier_reach",
        sector_id="sector_rim",
        population_level=2,
        infrastructure=_infra(
            {
                InfraDomain.CIVILIAN: 3,
                InfraDomain.GAS_EXTRACTION: 2,
                InfraDomain.AGRICULTURAL: 1,
                InfraDomain.TRANSPORT: 1,
            },
            {},
        ),
    )
    return {c.colony_id: c for c in (capital, foundry, outpost)}


def starter_corporations() -> dict[str, Corporation]:
    def holdings(**by_colony: dict[InfraDomain, int]) -> CorpAssets:
        return CorpAssets(infrastructure_by_colony={k: dict(v) for k, v in by_colony.items()})

    corporations = [
        Corporation(
            corp_id="corp_agri_harvest",
            name="Harvest Union",
            corp_type=CorpType.AGRICULTURE,
            level=2,
            capital=4,
            home_planet_id="terra_nova",
            planets_present=["terra_nova"],
            assets=holdings(col_terra_nova={InfraDomain.AGRICULTURAL: 2}),
        ),
        Corporation(
            corp_id="corp_ore_delve",
            name="Delve Mining Consortium",
            corp_type=CorpType.EXPLOITATION,
            level=3,
            capital=6,
            home_planet_id="ferrous_prime",
            planets_present=["ferrous_prime"],
            assets=holdings(col_ferrous_prime={InfraDomain.MINING: 3}),
        ),
        Corporation(
            corp_id="corp_sci_lumen",
            name="Lumen Institute",
            corp_type=CorpType.SCIENCE,
            level=3,
            capital=5,
            home_planet_id="terra_nova",
            planets_present=["terra_nova"],
            assets=holdings(col_terra_nova={InfraDomain.SCIENCE: 2}),
        ),
        Corporation(
            corp_id="corp_ship_forge",
            name="Forge Yards",
            corp_type=CorpType.SHIPBUILDING,
            level=2,
            capital=3,
            home_planet_id="terra_nova",
            planets_present=["terra_nova"],
            assets=holdings(col_terra_nova={InfraDomain.SPACE_INDUSTRY: 1}),
        ),
    ]
    return {c.corp_id: c for c in corporations}


def create_starter_state(focus: ScienceSectorType | None = ScienceSectorType.PROPULSION) -> GameState:
    """
    Build the starter snapshot at turn 1.

    Caps are computed from the planets up front. Attributes start unset;
    the first colony phase computes them.
    """
    domains = create_initial_science_domains()
    if focus is not None:
        domains[focus] = domains[focus]._copy_with(focused=True)

    planets = starter_planets()
    bonuses = EmpireBonuses()
    colonies = {
        cid: recalculate_caps(colony, planets[colony.planet_id], bonuses.infra_caps)
        for cid, colony in starter_colonies().items()
    }

    return GameState(
        turn=1,
        current_bp=STARTING_BP,
        planets=planets,
        colonies=colonies,
        empire_bonuses=bonuses,
        corporations=starter_corporations(),
        science_domains=domains,
    )
