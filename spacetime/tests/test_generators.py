"""
Tests for the discovery, schematic and patent generators.
"""

from ..engine_core.state import (
    CorpType,
    Discovery,
    EmpireBonuses,
    InfraDomain,
    Patent,
    Schematic,
    SchematicCategory,
    ScienceDomainState,
    ScienceSectorType,
    create_initial_science_domains,
)
from ..engine_core.random_source import ScriptedRandom
from ..generators.discovery_generator import (
    available_discoveries,
    discovery_chance,
    roll_for_discovery,
)
from ..generators.patent_generator import max_patents, roll_for_patent
from ..generators.schematic_generator import (
    max_schematics,
    roll_for_schematic,
    version_schematics,
)


def _engine_discovery():
    return Discovery(
        discovery_id="dsc_propulsion_1_ion",
        definition_id="propulsion_1_ion",
        name="Ion Drives",
        domain=ScienceSectorType.PROPULSION,
        pool_level=1,
        discovered_by_corp_id="corp_s",
        discovered_turn=2,
        unlocks_schematic_categories=[SchematicCategory.ENGINE],
    )


def _propulsion(level=1, **kwargs):
    return ScienceDomainState(domain=ScienceSectorType.PROPULSION, level=level, **kwargs)


def _schematic(schematic_id="sch_1", name="Falcon Engine", level=1, iteration=1, owner="corp_x"):
    return Schematic(
        schematic_id=schematic_id,
        name=name,
        category=SchematicCategory.ENGINE,
        science_domain=ScienceSectorType.PROPULSION,
        level=level,
        stat_target="speed",
        bonus_amount=2,
        random_modifier=1,
        iteration=iteration,
        owner_corp_id=owner,
        source_discovery_id="dsc_propulsion_1_ion",
    )


def _domains(*levels, focused=None):
    """Every science domain at level 0 except the given (sector, level) pairs."""
    domains = create_initial_science_domains()
    for sector, level in levels:
        domains[sector] = ScienceDomainState(domain=sector, level=level, focused=sector == focused)
    return domains


class TestDiscovery:
    """Tests for discovery rolls."""

    def test_chance(self):
        """5% per corp level plus 2% per owned science level, doubled on focus."""
        assert discovery_chance(3, 2, False) == 19
        assert discovery_chance(3, 2, True) == 38

    def test_level_zero_domains_have_empty_pool(self, make_corp):
        """With every domain at level 0 the pool is empty and no draws are used."""
        corp = make_corp(corp_type=CorpType.SCIENCE, level=3)
        rng = ScriptedRandom([])
        result = roll_for_discovery(corp, _domains(), set(), EmpireBonuses(), 1, rng)
        assert result.discovery is None
        assert rng.consumed == []

    def test_successful_discovery(self, make_corp):
        """A success grants the discovery, its bonuses and its unlocks."""
        corp = make_corp(
            "corp_s", CorpType.SCIENCE, level=3,
            holdings={"col_a": {InfraDomain.SCIENCE: 2}},
        )
        domains = _domains((ScienceSectorType.PROPULSION, 1))
        result = roll_for_discovery(
            corp, domains, set(), EmpireBonuses(), 4, ScriptedRandom([0.0, 0.1])
        )

        assert result.discovery.discovery_id == "dsc_propulsion_1_ion"
        assert result.discovery.discovered_by_corp_id == "corp_s"
        assert result.discovery.discovered_turn == 4
        assert result.empire_bonuses.ship_stats["speed"] == 1
        propulsion = result.science_domains[ScienceSectorType.PROPULSION]
        assert propulsion.unlocked_schematic_categories == [SchematicCategory.ENGINE]
        assert propulsion.discovered_ids == ["propulsion_1_ion"]
        assert result.events[0].title == "Discovery: Ion Drives"
        assert domains[ScienceSectorType.PROPULSION].discovered_ids == []

    def test_failed_roll_changes_nothing(self, make_corp):
        """A draw above the chance leaves state and bonuses untouched."""
        corp = make_corp(corp_type=CorpType.SCIENCE, level=3)
        domains = _domains((ScienceSectorType.PROPULSION, 1))
        bonuses = EmpireBonuses()
        result = roll_for_discovery(corp, domains, set(), bonuses, 4, ScriptedRandom([0.0, 0.5]))
        assert result.discovery is None
        assert result.science_domains is domains
        assert result.empire_bonuses is bonuses

    def test_pool_spans_every_domain(self):
        """Definitions from all domains that reached their pool level are offered."""
        domains = _domains(
            (ScienceSectorType.PROPULSION, 1),
            (ScienceSectorType.WEAPONRY, 1),
            (ScienceSectorType.ENERGY, 1),
        )
        pool = [d.definition_id for d in available_discoveries(domains, set())]
        assert pool == ["energy_1_fusion", "weaponry_1_railgun", "propulsion_1_ion"]

    def test_discoveries_are_once_per_empire(self):
        """Already-made discoveries leave the pool."""
        domains = _domains((ScienceSectorType.PROPULSION, 1))
        assert available_discoveries(domains, {"propulsion_1_ion"}) == []
        assert len(available_discoveries(domains, set())) == 1

    def test_focus_follows_picked_definition(self, make_corp):
        """The focus bonus applies only when the picked definition's domain is focused."""
        corp = make_corp(corp_type=CorpType.SCIENCE, level=3)
        domains = _domains(
            (ScienceSectorType.ENERGY, 1),
            (ScienceSectorType.PROPULSION, 1),
            focused=ScienceSectorType.PROPULSION,
        )

        # Energy is unfocused: 15%, so a 0.2 draw fails.
        energy = roll_for_discovery(corp, domains, set(), EmpireBonuses(), 1, ScriptedRandom([0.0, 0.2]))
        assert energy.discovery is None

        # Propulsion is focused: 30%, so the same draw succeeds.
        propulsion = roll_for_discovery(corp, domains, set(), EmpireBonuses(), 1, ScriptedRandom([0.9, 0.2]))
        assert propulsion.discovery.definition_id == "propulsion_1_ion"


class TestSchematic:
    """Tests for schematic rolls and versioning."""

    def test_generates_first_iteration(self, make_corp):
        """Category, modifier and prefix come from three scripted draws after the chance roll."""
        corp = make_corp("corp_x", CorpType.SHIPBUILDING, level=2)
        domains = {ScienceSectorType.PROPULSION: _propulsion(
            unlocked_schematic_categories=[SchematicCategory.ENGINE],
        )}
        rng = ScriptedRandom([0.0, 0.0, 0.9, 0.0])
        result = roll_for_schematic(corp, domains, [], [_engine_discovery()], 4, rng)

        schematic = result.new_schematic
        assert schematic.schematic_id == "sch_corp_x_engine_t4"
        assert schematic.name == "Aegis Engine"
        assert schematic.bonus_amount == 2
        assert schematic.random_modifier == 1
        assert schematic.stat_target == "speed"
        assert schematic.iteration == 1
        assert schematic.source_discovery_id == "dsc_propulsion_1_ion"
        assert rng.remaining == 0

    def test_only_shipbuilders_roll(self, make_corp):
        """Other corporation types never draw."""
        corp = make_corp(corp_type=CorpType.SCIENCE, level=6)
        domains = {ScienceSectorType.PROPULSION: _propulsion(
            unlocked_schematic_categories=[SchematicCategory.ENGINE],
        )}
        rng = ScriptedRandom([])
        assert roll_for_schematic(corp, domains, [], [], 1, rng).new_schematic is None

    def test_skipped_at_cap_without_drawing(self, make_corp):
        """A corporation at its category cap is skipped before any draw."""
        corp = make_corp("corp_x", CorpType.SHIPBUILDING, level=2)
        domains = {ScienceSectorType.PROPULSION: _propulsion(
            unlocked_schematic_categories=[SchematicCategory.ENGINE],
        )}
        rng = ScriptedRandom([])
        result = roll_for_schematic(corp, domains, [_schematic()], [_engine_discovery()], 1, rng)
        assert result.new_schematic is None
        assert max_schematics(1) == 0
        assert max_schematics(5) == 2

    def test_versioning(self):
        """A domain level-up re-versions schematics below the new level."""
        schematics = {"sch_1": _schematic()}
        updated, events = version_schematics(schematics, ScienceSectorType.PROPULSION, 2, 5)

        mk2 = updated["sch_1"]
        assert mk2.name == "Falcon Engine Mk2"
        assert mk2.level == 2
        assert mk2.iteration == 2
        assert mk2.bonus_amount == 2
        assert mk2.random_modifier == 1
        assert events[0].title == "Schematic Updated: Falcon Engine Mk2"

        updated, _ = version_schematics(updated, ScienceSectorType.PROPULSION, 3, 6)
        assert updated["sch_1"].name == "Falcon Engine Mk3"

    def test_versioning_other_domains_untouched(self):
        """Schematics of other domains, or already at the level, stay as they are."""
        schematics = {"sch_1": _schematic(level=3)}
        updated, events = version_schematics(schematics, ScienceSectorType.PROPULSION, 3, 5)
        assert updated["sch_1"] is schematics["sch_1"]
        assert events == []
        updated, _ = version_schematics(schematics, ScienceSectorType.ENERGY, 4, 5)
        assert updated["sch_1"].iteration == 1


class TestPatent:
    """Tests for patent rolls."""

    def test_level_one_cannot_hold_patents(self, make_corp):
        """floor(1 / 2) = 0, so no draw is made."""
        rng = ScriptedRandom([])
        assert roll_for_patent(make_corp(level=1), [], 1, rng).new_patent is None
        assert max_patents(1) == 0

    def test_develops_patent(self, make_corp):
        """Chance draw then a uniform pick among unowned bonus targets."""
        corp = make_corp("corp_p", CorpType.CONSTRUCTION, level=4)
        result = roll_for_patent(corp, [], 7, ScriptedRandom([0.05, 0.0]))

        patent = result.new_patent
        assert patent.patent_id == "pat_corp_p_construction_prefab_techniques"
        assert patent.bonus_target == "contractSpeed"
        assert patent.developed_turn == 7
        assert patent.level == 1

    def test_skips_owned_bonus_targets(self, make_corp):
        """A corporation never holds two patents for the same bonus target."""
        corp = make_corp("corp_p", CorpType.CONSTRUCTION, level=4)
        owned = Patent(
            patent_id="pat_corp_p_construction_prefab_techniques",
            definition_id="construction_prefab_techniques",
            name="Prefab Construction Techniques",
            bonus_target="contractSpeed",
            bonus_amount=0.1,
            owner_corp_id="corp_p",
            developed_turn=1,
        )
        result = roll_for_patent(corp, [owned], 7, ScriptedRandom([0.05, 0.0]))
        assert result.new_patent.definition_id == "exploration_advanced_scanners"

    def test_failed_chance(self, make_corp):
        """One draw on a failed roll."""
        rng = ScriptedRandom([0.5])
        assert roll_for_patent(make_corp(level=4), [], 1, rng).new_patent is None
        assert rng.consumed == [0.5]
