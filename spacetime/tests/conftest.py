"""
Pytest fixtures for Spacetime tests.
"""

import pytest

from ..engine_core.state import (
    Colony,
    ColonyAttributes,
    CorpAssets,
    Corporation,
    CorpType,
    Deposit,
    DepositType,
    GameState,
    InfraDomain,
    InfraState,
    Planet,
    PlanetSize,
    RichnessLevel,
)
from ..scenarios import create_starter_state

DEFAULT_CAP = 10


def build_colony(
    colony_id: str = "col_a",
    planet_id: str = "planet_a",
    sector_id: str = "sector_a",
    population: int = 1,
    levels: dict | None = None,
    corporate: dict | None = None,
    caps: dict | None = None,
    modifiers: list | None = None,
    dynamism: int = 0,
    growth: int = 0,
) -> Colony:
    """
    Colony with explicit infrastructure.

    `levels` are public levels per domain, `corporate` maps domain to
    {corp_id: levels}. Non-civilian caps default to DEFAULT_CAP.
    """
    levels = levels or {}
    corporate = corporate or {}
    caps = caps or {}
    infrastructure = {}
    for domain in InfraDomain:
        if domain not in levels and domain not in corporate and domain not in caps:
            continue
        default_cap = None if domain == InfraDomain.CIVILIAN else DEFAULT_CAP
        infrastructure[domain] = InfraState(
            domain=domain,
            public_levels=levels.get(domain, 0),
            corporate_levels=dict(corporate.get(domain, {})),
            current_cap=caps.get(domain, default_cap),
        )
    return Colony(
        colony_id=colony_id,
        name=colony_id.replace("col_", "").title(),
        planet_id=planet_id,
        sector_id=sector_id,
        population_level=population,
        attributes=ColonyAttributes(dynamism=dynamism, growth=growth),
        infrastructure=infrastructure,
        modifiers=list(modifiers or []),
    )


def build_planet(
    planet_id: str = "planet_a",
    sector_id: str = "sector_a",
    deposits: list | None = None,
    size: PlanetSize = PlanetSize.MEDIUM,
    habitability: int = 5,
) -> Planet:
    return Planet(
        planet_id=planet_id,
        name=planet_id.replace("_", " ").title(),
        sector_id=sector_id,
        size=size,
        base_habitability=habitability,
        deposits=list(deposits or []),
    )


def build_corp(
    corp_id: str = "corp_a",
    corp_type: CorpType = CorpType.AGRICULTURE,
    level: int = 1,
    capital: int = 0,
    holdings: dict | None = None,
    planets_present: list | None = None,
) -> Corporation:
    return Corporation(
        corp_id=corp_id,
        name=corp_id.replace("corp_", "").title() + " Corp",
        corp_type=corp_type,
        level=level,
        capital=capital,
        planets_present=list(planets_present or []),
        assets=CorpAssets(
            infrastructure_by_colony={cid: dict(h) for cid, h in (holdings or {}).items()}
        ),
    )


def build_state(
    colonies: list | None = None,
    planets: list | None = None,
    corporations: list | None = None,
    **kwargs,
) -> GameState:
    return GameState(
        colonies={c.colony_id: c for c in colonies or []},
        planets={p.planet_id: p for p in planets or []},
        corporations={c.corp_id: c for c in corporations or []},
        **kwargs,
    )


@pytest.fixture
def make_colony():
    """Factory for colonies with explicit infrastructure."""
    return build_colony


@pytest.fixture
def make_planet():
    """Factory for planets."""
    return build_planet


@pytest.fixture
def make_corp():
    """Factory for corporations."""
    return build_corp


@pytest.fixture
def make_state():
    """Factory for game states from lists of records."""
    return build_state


@pytest.fixture
def farm_planet() -> Planet:
    """Medium planet with rich farmland and a moderate ore vein."""
    return build_planet(
        deposits=[
            Deposit(DepositType.FERTILE_GROUND, RichnessLevel.RICH),
            Deposit(DepositType.COMMON_ORE_VEIN, RichnessLevel.MODERATE),
        ],
    )


@pytest.fixture
def farm_colony() -> Colony:
    """Population 3 farming colony with room to grow."""
    return build_colony(
        population=3,
        levels={
            InfraDomain.CIVILIAN: 6,
            InfraDomain.AGRICULTURAL: 3,
            InfraDomain.MINING: 2,
        },
        caps={InfraDomain.AGRICULTURAL: 15, InfraDomain.MINING: 10},
    )


@pytest.fixture
def starter_state() -> GameState:
    """The deterministic starter scenario at turn 1."""
    return create_starter_state()
