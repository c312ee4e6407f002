"""
Tests for the corporate investment AI.

Tests:
- Investment targeting and eligibility
- Acquisitions by megacorporations
"""

import copy

import pytest

from ..engine_core.state import (
    CorpAssets,
    CorpType,
    Deposit,
    DepositType,
    InfraDomain,
    ResourceType,
    RichnessLevel,
    SectorMarketState,
)
from ..simulation.corp_ai import (
    allowed_investment_domains,
    attempt_acquisition,
    attempt_investment,
    run_corp_ai,
)

BARREN = []


def _market(sector_id="sector_a", **surplus):
    net = {ResourceType[name.upper()]: value for name, value in surplus.items()}
    return SectorMarketState(sector_id=sector_id, net_surplus=net)


@pytest.fixture
def food_deficit_state(make_state, farm_planet, make_colony):
    """One colony on fertile ground in a sector short of food."""
    colony = make_colony(population=3, levels={InfraDomain.AGRICULTURAL: 2})
    return make_state(
        colonies=[colony],
        planets=[farm_planet],
        sector_markets={"sector_a": _market(food=-5)},
    )


class TestInvestment:
    """Tests for attempt_investment."""

    def test_invests_in_deficit(self, food_deficit_state, make_corp):
        """An agriculture corp answers a food deficit."""
        corp = make_corp(corp_type=CorpType.AGRICULTURE, capital=4)
        result = attempt_investment(corp, food_deficit_state)

        assert result is not None
        assert result.corp.capital == 2
        assert result.corp.assets.owned_in("col_a") == 1
        assert result.corp.planets_present == ["planet_a"]

        colony = result.updated_colonies["col_a"]
        assert colony.infra(InfraDomain.AGRICULTURAL).corporate_levels == {"corp_a": 1}
        assert colony.infra(InfraDomain.AGRICULTURAL).public_levels == 2
        assert "corp_a" in colony.corporations_present
        assert result.events[0].category == "corporation"

    def test_inputs_not_mutated(self, food_deficit_state, make_corp):
        """The snapshot and the corporation are left as they were."""
        corp = make_corp(capital=4)
        before_state = copy.deepcopy(food_deficit_state)
        before_corp = copy.deepcopy(corp)
        attempt_investment(corp, food_deficit_state)
        assert food_deficit_state == before_state
        assert corp == before_corp

    def test_needs_two_capital(self, food_deficit_state, make_corp):
        """Capital below 2 means no investment."""
        assert attempt_investment(make_corp(capital=1), food_deficit_state) is None

    def test_specialty_restriction_below_level_three(self, food_deficit_state, make_corp):
        """A low-level corporation only builds its specialty domains."""
        corp = make_corp(corp_type=CorpType.EXPLOITATION, level=2, capital=4)
        assert attempt_investment(corp, food_deficit_state) is None

    def test_exploration_corps_invest_only_from_level_three(self, food_deficit_state, make_corp):
        """Exploration has no specialties; level 3 opens every domain."""
        assert allowed_investment_domains(make_corp(corp_type=CorpType.EXPLORATION, level=2)) == ()

        low = make_corp(corp_type=CorpType.EXPLORATION, level=2, capital=4)
        assert attempt_investment(low, food_deficit_state) is None

        high = make_corp(corp_type=CorpType.EXPLORATION, level=3, capital=4)
        result = attempt_investment(high, food_deficit_state)
        assert result is not None
        assert result.corp.assets.infrastructure_by_colony == {
            "col_a": {InfraDomain.AGRICULTURAL: 1}
        }

    def test_prefers_most_dynamic_colony(self, make_state, make_colony, make_planet, make_corp):
        """Among eligible colonies the highest dynamism wins."""
        fertile = [Deposit(DepositType.FERTILE_GROUND, RichnessLevel.MODERATE)]
        state = make_state(
            colonies=[
                make_colony("col_a", "planet_a", dynamism=2, levels={InfraDomain.AGRICULTURAL: 1}),
                make_colony("col_b", "planet_b", dynamism=5, levels={InfraDomain.AGRICULTURAL: 1}),
            ],
            planets=[make_planet("planet_a", deposits=fertile), make_planet("planet_b", deposits=fertile)],
            sector_markets={"sector_a": _market(food=-3)},
        )
        result = attempt_investment(make_corp(capital=2), state)
        assert list(result.updated_colonies) == ["col_b"]

    def test_respects_ownership_cap(self, food_deficit_state, make_corp):
        """A level-1 corporation holds at most 4 levels per colony."""
        corp = make_corp(capital=10, holdings={"col_a": {InfraDomain.AGRICULTURAL: 4}})
        assert attempt_investment(corp, food_deficit_state) is None

    def test_respects_infra_cap(self, make_state, farm_planet, make_colony, make_corp):
        """A domain at its cap cannot take another level."""
        colony = make_colony(levels={InfraDomain.AGRICULTURAL: 3}, caps={InfraDomain.AGRICULTURAL: 3})
        state = make_state(
            colonies=[colony], planets=[farm_planet],
            sector_markets={"sector_a": _market(food=-5)},
        )
        assert attempt_investment(make_corp(capital=4), state) is None

    def test_extraction_needs_deposit(self, make_state, make_planet, make_colony, make_corp):
        """No fertile ground, no agricultural investment."""
        state = make_state(
            colonies=[make_colony(levels={InfraDomain.AGRICULTURAL: 1})],
            planets=[make_planet(deposits=BARREN)],
            sector_markets={"sector_a": _market(food=-5)},
        )
        assert attempt_investment(make_corp(capital=4), state) is None

    def test_skips_domains_whose_inputs_are_short(self, make_state, farm_planet, make_colony, make_corp):
        """Low Industry is not built while Common Materials are also in deficit."""
        state = make_state(
            colonies=[make_colony(population=3, levels={InfraDomain.LOW_INDUSTRY: 1})],
            planets=[farm_planet],
            sector_markets={"sector_a": _market(consumer_goods=-3, common_materials=-2)},
        )
        corp = make_corp(corp_type=CorpType.INDUSTRIAL, level=2, capital=4)
        assert attempt_investment(corp, state) is None

    def test_no_deficit_no_investment(self, make_state, farm_planet, farm_colony, make_corp):
        """Balanced markets leave capital untouched."""
        state = make_state(
            colonies=[farm_colony], planets=[farm_planet],
            sector_markets={"sector_a": _market(food=2)},
        )
        assert attempt_investment(make_corp(capital=8), state) is None


class TestAcquisition:
    """Tests for attempt_acquisition."""

    def _state(self, make_state, make_colony, buyer, *targets):
        colony = make_colony(
            corporate={InfraDomain.AGRICULTURAL: {"corp_small": 2}},
        )
        colony = colony._copy_with(corporations_present=["corp_small"])
        return make_state(colonies=[colony], corporations=[buyer, *targets])

    def test_megacorp_acquires(self, make_state, make_colony, make_corp):
        """Level 6 buys a level-3 corporation for 15 capital and gains a level."""
        buyer = make_corp("corp_big", CorpType.INDUSTRIAL, level=6, capital=15)
        target = make_corp(
            "corp_small", CorpType.AGRICULTURE, level=3,
            holdings={"col_a": {InfraDomain.AGRICULTURAL: 2}},
            planets_present=["planet_a"],
        )
        target.assets = CorpAssets(
            infrastructure_by_colony=target.assets.infrastructure_by_colony,
            schematics=["sch_x"],
            patents=["pat_x"],
        )
        state = self._state(make_state, make_colony, buyer, target)

        result = attempt_acquisition(buyer, state)

        assert result.absorbed_corp_id == "corp_small"
        assert result.corp.level == 7
        assert result.corp.capital == 0
        assert result.corp.assets.owned_in("col_a") == 2
        assert result.corp.assets.schematics == ["sch_x"]
        assert result.corp.assets.patents == ["pat_x"]
        assert result.corp.planets_present == ["planet_a"]

        colony = result.updated_colonies["col_a"]
        agri = colony.infra(InfraDomain.AGRICULTURAL)
        assert agri.corporate_levels.get("corp_big") == 2
        assert agri.corporate_levels.get("corp_small", 0) == 0
        assert colony.corporations_present == ["corp_big"]

    def test_acquisition_leaves_inputs_alone(self, make_state, make_colony, make_corp):
        """Buyer, target and snapshot are unchanged after an acquisition."""
        buyer = make_corp("corp_big", CorpType.INDUSTRIAL, level=6, capital=15)
        target = make_corp(
            "corp_small", CorpType.AGRICULTURE, level=3,
            holdings={"col_a": {InfraDomain.AGRICULTURAL: 2}},
        )
        target.assets = CorpAssets(
            infrastructure_by_colony=target.assets.infrastructure_by_colony,
            schematics=["sch_x"],
        )
        state = self._state(make_state, make_colony, buyer, target)

        result = attempt_acquisition(buyer, state)

        assert result.absorbed_corp_id == "corp_small"
        assert buyer.level == 6
        assert buyer.capital == 15
        assert buyer.assets.schematics == []
        assert buyer.assets.owned_in("col_a") == 0
        assert target.assets.schematics == ["sch_x"]
        colony = state.colonies["col_a"]
        assert colony.infra(InfraDomain.AGRICULTURAL).corporate_levels == {"corp_small": 2}
        assert colony.corporations_present == ["corp_small"]
        assert "corp_small" in state.corporations

    def test_insufficient_capital(self, make_state, make_colony, make_corp):
        """Cost is target level x 5."""
        buyer = make_corp("corp_big", level=6, capital=10)
        target = make_corp("corp_small", level=3)
        state = self._state(make_state, make_colony, buyer, target)
        assert attempt_acquisition(buyer, state) is None

    def test_level_gap(self, make_state, make_colony, make_corp):
        """Targets must be at least three levels lower."""
        buyer = make_corp("corp_big", level=6, capital=40)
        target = make_corp("corp_small", level=4)
        state = self._state(make_state, make_colony, buyer, target)
        assert attempt_acquisition(buyer, state) is None

    def test_only_megacorps(self, make_state, make_colony, make_corp):
        """Below level 6 no acquisition is attempted."""
        buyer = make_corp("corp_big", level=5, capital=40)
        target = make_corp("corp_small", level=1)
        state = self._state(make_state, make_colony, buyer, target)
        assert attempt_acquisition(buyer, state) is None

    def test_level_capped_at_ten(self, make_state, make_colony, make_corp):
        """A level-10 buyer stays at level 10."""
        buyer = make_corp("corp_big", level=10, capital=15)
        target = make_corp("corp_small", level=3)
        state = self._state(make_state, make_colony, buyer, target)
        assert attempt_acquisition(buyer, state).corp.level == 10

    def test_prefers_largest_target(self, make_state, make_colony, make_corp):
        """The target holding the most infrastructure is bought first."""
        buyer = make_corp("corp_big", level=6, capital=20)
        small = make_corp("corp_small", level=2, holdings={"col_a": {InfraDomain.AGRICULTURAL: 2}})
        larger = make_corp("corp_larger", level=2, holdings={"col_b": {InfraDomain.MINING: 4}})
        state = self._state(make_state, make_colony, buyer, small, larger)
        assert attempt_acquisition(buyer, state).absorbed_corp_id == "corp_larger"


class TestRunCorpAI:
    """Tests for the combined decision run."""

    def test_invest_then_acquire(self, make_state, farm_planet, make_colony, make_corp):
        """Acquisition sees capital left over after investing."""
        colony = make_colony(levels={InfraDomain.AGRICULTURAL: 1})
        buyer = make_corp("corp_big", CorpType.AGRICULTURE, level=6, capital=12)
        target = make_corp("corp_small", level=2)
        state = make_state(
            colonies=[colony], planets=[farm_planet], corporations=[buyer, target],
            sector_markets={"sector_a": _market(food=-4)},
        )

        result = run_corp_ai(buyer, state)

        assert result.absorbed_corp_id == "corp_small"
        assert result.corp.capital == 0
        assert result.corp.level == 7
        assert len(result.events) == 2
        assert "col_a" in result.updated_colonies

    def test_nothing_to_do(self, make_state, make_corp):
        """Without deficits or targets the corporation comes back unchanged."""
        corp = make_corp(capital=5)
        result = run_corp_ai(corp, make_state(corporations=[corp]))
        assert result.corp is corp
        assert result.events == []
