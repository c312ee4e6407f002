"""
Tests for the stateless formulas.

Tests:
- Production (extraction, manufacturing, consumption)
- Infrastructure caps
- Modifier resolution
- Colony attributes
- Tax and corporate growth
"""

import pytest

from ..engine_core.state import (
    Deposit,
    DepositType,
    InfraDomain,
    Modifier,
    ModifierCondition,
    RichnessLevel,
)
from ..engine_core.random_source import ScriptedRandom
from ..data.resources import matching_deposits
from ..formulas import attributes as attr
from ..formulas.growth import (
    acquisition_cost,
    capital_gain,
    level_up_cost,
    max_infra_per_colony,
)
from ..formulas.modifiers import modifier_breakdown, resolve_modifiers
from ..formulas.production import (
    base_infra_cap,
    consumer_goods_consumption,
    extraction_cap,
    extraction_output,
    food_consumption,
    manufacturing_output,
    transport_consumption,
)
from ..formulas.tax import corp_tax, planet_tax


def _mod(target, value, operation="add", condition=None, mod_id="m1"):
    return Modifier(
        id=mod_id,
        target=target,
        operation=operation,
        value=value,
        source_name=f"source {mod_id}",
        condition=condition,
    )


class TestProduction:
    """Tests for production formulas."""

    def test_extraction_output_is_level_times_modifier(self):
        """Extraction output scales with the modifier."""
        assert extraction_output(3) == 3
        assert extraction_output(2, 1.5) == 3

    def test_extraction_output_floors_fractions(self):
        """Fractional output is floored."""
        assert extraction_output(3, 1.5) == 4

    def test_manufacturing_full_output_with_inputs(self):
        """With inputs, output equals the level."""
        assert manufacturing_output(6, has_inputs=True) == 6

    def test_manufacturing_halved_without_inputs(self):
        """Without inputs, output is floor(level / 2)."""
        assert manufacturing_output(6, has_inputs=False) == 3
        assert manufacturing_output(7, has_inputs=False) == 3
        assert manufacturing_output(1, has_inputs=False) == 0

    def test_population_consumption(self):
        """Food is population x 2; goods and transport are population x 1."""
        assert food_consumption(3) == 6
        assert consumer_goods_consumption(3) == 3
        assert transport_consumption(3) == 3

    @pytest.mark.parametrize("richness,cap", [
        (RichnessLevel.POOR, 5),
        (RichnessLevel.MODERATE, 10),
        (RichnessLevel.RICH, 15),
        (RichnessLevel.EXCEPTIONAL, 20),
    ])
    def test_extraction_cap_by_richness(self, richness, cap):
        """Richness tiers map to fixed caps."""
        assert extraction_cap(richness) == cap

    def test_base_cap_civilian_uncapped(self):
        """Civilian has no cap, others cap at population x 2."""
        assert base_infra_cap(4, InfraDomain.CIVILIAN) is None
        assert base_infra_cap(4, InfraDomain.LOW_INDUSTRY) == 8


class TestInfraCap:
    """Tests for the full cap calculation."""

    def test_extraction_uses_best_deposit_plus_empire_bonus(self):
        """Best matching deposit sets the base; empire bonus adds on top."""
        deposits = [
            Deposit(DepositType.CARBON_BASED_LAND, RichnessLevel.POOR),
            Deposit(DepositType.COMMON_ORE_VEIN, RichnessLevel.RICH),
        ]
        cap = attr.infra_cap(InfraDomain.MINING, 2, deposits, {"maxMining": 2}, [])
        assert cap == 17

    def test_extraction_without_deposit_is_zero(self):
        """No matching deposit means no capacity at all."""
        deposits = [Deposit(DepositType.FERTILE_GROUND, RichnessLevel.RICH)]
        assert attr.infra_cap(InfraDomain.MINING, 5, deposits, {}, []) == 0

    def test_matching_deposits(self):
        """Only deposits the domain extracts from match."""
        ore = Deposit(DepositType.COMMON_ORE_VEIN)
        soil = Deposit(DepositType.FERTILE_GROUND)
        assert matching_deposits(InfraDomain.MINING, [soil, ore]) == [ore]
        assert matching_deposits(InfraDomain.GAS_EXTRACTION, [soil, ore]) == []

    def test_non_extraction_uses_population(self):
        """Other domains cap at population x 2 plus local modifiers."""
        assert attr.infra_cap(InfraDomain.SCIENCE, 3, [], {}, []) == 6
        modifiers = [_mod("maxScience", 2)]
        assert attr.infra_cap(InfraDomain.SCIENCE, 3, [], {}, modifiers) == 8

    def test_civilian_uncapped(self):
        """Civilian stays uncapped whatever the bonuses."""
        assert attr.infra_cap(InfraDomain.CIVILIAN, 3, [], {"maxMining": 5}, []) is None


class TestModifiers:
    """Tests for modifier resolution."""

    def test_additive_then_multiplicative(self):
        """Additive modifiers apply before multiplicative ones."""
        modifiers = [_mod("growth", 1.5, "multiply", mod_id="m2"), _mod("growth", 2)]
        assert resolve_modifiers(4, "growth", modifiers) == 9

    def test_clamp(self):
        """Results are clamped into the given range."""
        modifiers = [_mod("habitability", 5)]
        assert resolve_modifiers(8, "habitability", modifiers, 0, 10) == 10
        assert resolve_modifiers(-3, "habitability", [], 0, 10) == 0

    def test_other_targets_ignored(self):
        """Only modifiers aimed at the target apply."""
        assert resolve_modifiers(4, "growth", [_mod("dynamism", 3)]) == 4

    def test_condition_gates_modifier(self):
        """Conditional modifiers apply only when the context matches."""
        condition = ModifierCondition(attribute="habitability", comparison="lte", value=3)
        modifiers = [_mod("growth", 2, condition=condition)]
        assert resolve_modifiers(1, "growth", modifiers, context={"habitability": 5}) == 1
        assert resolve_modifiers(1, "growth", modifiers, context={"habitability": 2}) == 3
        assert resolve_modifiers(1, "growth", modifiers) == 1

    def test_breakdown_lists_sources(self):
        """Breakdown reports every applicable source."""
        breakdown = modifier_breakdown("growth", [_mod("growth", 2), _mod("dynamism", 1)])
        assert breakdown == [{"source": "source m1", "operation": "add", "value": 2}]


class TestAttributes:
    """Tests for colony attribute formulas."""

    def test_habitability_clamped(self):
        """Habitability is clamped to 0..10."""
        assert attr.habitability(5, []) == 5
        assert attr.habitability(12, []) == 10

    def test_accessibility_from_transport(self):
        """Accessibility is 3 plus half the transport levels."""
        assert attr.accessibility(0, []) == 3
        assert attr.accessibility(4, []) == 5

    def test_dynamism(self):
        """Dynamism mixes accessibility, population and corporate presence."""
        assert attr.dynamism(5, 3, 20, []) == 6
        assert attr.dynamism(5, 3, 100, []) == 7

    def test_quality_of_life_penalised_by_hostile_worlds(self):
        """Low habitability lowers quality of life."""
        assert attr.quality_of_life(10, []) == 10
        assert attr.quality_of_life(4, []) == 8

    def test_stability(self):
        """Debt lowers stability; military raises it."""
        assert attr.stability(3, 6, 4, []) == 8
        assert attr.stability(9, 0, 0, []) == 10

    def test_growth_per_turn_signed(self):
        """Growth delta can be negative on hostile worlds."""
        assert attr.growth_per_turn(9, 10, 3, 5, []) == 3
        assert attr.growth_per_turn(6, 2, 3, 1, []) == -3


class TestTaxAndGrowth:
    """Tests for tax and corporate growth formulas."""

    def test_planet_tax(self):
        """Small colonies pay nothing; low habitability costs tax."""
        assert planet_tax(4, 10) == 0
        assert planet_tax(8, 10) == 16
        assert planet_tax(6, 7) == 3

    def test_corp_tax(self):
        """Corporation tax grows with the square of its level."""
        assert corp_tax(2) == 0
        assert corp_tax(5) == 5
        assert corp_tax(10) == 20

    def test_capital_gain_uses_one_draw(self):
        """Capital gain is a coin flip plus owned infrastructure / 10."""
        rng = ScriptedRandom([0.9])
        assert capital_gain(25, rng) == 3
        assert rng.consumed == [0.9]
        assert capital_gain(25, ScriptedRandom([0.1])) == 2

    def test_costs_and_caps(self):
        """Level-up and acquisition costs, ownership cap."""
        assert level_up_cost(3) == 9
        assert acquisition_cost(3) == 15
        assert max_infra_per_colony(2) == 8
