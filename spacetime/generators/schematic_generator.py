"""
Schematic Generator - shipbuilding corporations develop ship component designs.

Only Shipbuilding corporations roll. A corporation may hold schematics in
at most floor(level / 2) distinct categories; at the cap it is skipped
before any draw. Developing a category it already holds replaces the old
schematic.

When a science domain levels up, its schematics are re-versioned in
place: level and iteration advance and the name gets a new "MkN" tag.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, replace

from ..engine_core.state import (
    Corporation,
    CorpType,
    Discovery,
    Schematic,
    SchematicCategory,
    ScienceDomainState,
    ScienceSectorType,
)
from ..engine_core.events import EventPriority, GameEvent, make_event
from ..engine_core.random_source import RandomSource, pick_index, roll_percent
from ..data.science import (
    SCHEMATIC_CATEGORY_DEFINITIONS,
    SCHEMATIC_NAME_PREFIXES,
    schematic_level_label,
)

logger = logging.getLogger(__name__)

CHANCE_PER_CORP_LEVEL = 2
_MK_SUFFIX = re.compile(r" Mk\d+$")


def schematic_chance(corp_level: int) -> int:
    return corp_level * CHANCE_PER_CORP_LEVEL


def max_schematics(corp_level: int) -> int:
    return corp_level // 2


@dataclass
class UnlockedCategory:
    category: SchematicCategory
    domain: ScienceSectorType
    domain_level: int


def unlocked_categories(
    domains: dict[ScienceSectorType, ScienceDomainState],
) -> list[UnlockedCategory]:
    """Every unlocked category, paired with the highest-level domain unlocking it."""
    best: dict[SchematicCategory, UnlockedCategory] = {}
    for sector in ScienceSectorType:
        domain_state = domains.get(sector)
        if domain_state is None:
            continue
        for category in domain_state.unlocked_schematic_categories:
            existing = best.get(category)
            if existing is None or domain_state.level > existing.domain_level:
                best[category] = UnlockedCategory(category, sector, domain_state.level)
    return list(best.values())


def find_discovery_for_category(
    category: SchematicCategory,
    discoveries: list[Discovery],
) -> str | None:
    for discovery in discoveries:
        if category in discovery.unlocks_schematic_categories:
            return discovery.discovery_id
    return None


def generate_schematic(
    category: SchematicCategory,
    domain: ScienceSectorType,
    domain_level: int,
    owner_corp_id: str,
    source_discovery_id: str,
    turn: int,
    rng: RandomSource,
) -> Schematic:
    """
    Build a first-iteration schematic.

    Draws: random modifier (-1, 0 or +1), then the name prefix.
    """
    definition = SCHEMATIC_CATEGORY_DEFINITIONS[category]
    random_modifier = pick_index(rng, 3) - 1
    level = max(1, domain_level)
    prefix = SCHEMATIC_NAME_PREFIXES[pick_index(rng, len(SCHEMATIC_NAME_PREFIXES))]

    return Schematic(
        schematic_id=f"sch_{owner_corp_id}_{category.value}_t{turn}",
        name=f"{prefix} {definition.name}{schematic_level_label(1)}",
        category=category,
        science_domain=domain,
        level=level,
        stat_target=definition.stat_target,
        bonus_amount=max(0, level * definition.base_bonus_per_level + random_modifier),
        random_modifier=random_modifier,
        iteration=1,
        owner_corp_id=owner_corp_id,
        source_discovery_id=source_discovery_id,
    )


@dataclass
class SchematicRollResult:
    new_schematic: Schematic | None = None
    replaced_schematic_id: str | None = None
    events: list[GameEvent] = field(default_factory=list)


def roll_for_schematic(
    corp: Corporation,
    domains: dict[ScienceSectorType, ScienceDomainState],
    schematics: list[Schematic],
    discoveries: list[Discovery],
    turn: int,
    rng: RandomSource,
) -> SchematicRollResult:
    """One schematic development attempt."""
    if corp.corp_type != CorpType.SHIPBUILDING:
        return SchematicRollResult()

    categories = unlocked_categories(domains)
    if not categories:
        return SchematicRollResult()

    owned = [s for s in schematics if s.owner_corp_id == corp.corp_id]
    if len({s.category for s in owned}) >= max_schematics(corp.level):
        return SchematicRollResult()

    if not roll_percent(rng, schematic_chance(corp.level)):
        return SchematicRollResult()

    chosen = categories[pick_index(rng, len(categories))]
    discovery_id = find_discovery_for_category(chosen.category, discoveries)
    if discovery_id is None:
        return SchematicRollResult()

    replaced = next((s.schematic_id for s in owned if s.category == chosen.category), None)
    schematic = generate_schematic(
        chosen.category,
        chosen.domain,
        chosen.domain_level,
        corp.corp_id,
        discovery_id,
        turn,
        rng,
    )

    event = make_event(
        turn,
        EventPriority.POSITIVE,
        "science",
        f"New Schematic: {schematic.name}",
        f"{corp.name} developed a {SCHEMATIC_CATEGORY_DEFINITIONS[chosen.category].name} "
        f"schematic: {schematic.name} (+{schematic.bonus_amount} {schematic.stat_target}).",
        [corp.corp_id, schematic.schematic_id],
    )
    logger.debug("%s developed schematic %s", corp.corp_id, schematic.schematic_id)
    return SchematicRollResult(schematic, replaced, [event])


def version_schematics(
    schematics: dict[str, Schematic],
    domain: ScienceSectorType,
    new_level: int,
    turn: int,
) -> tuple[dict[str, Schematic], list[GameEvent]]:
    """
    Re-version every schematic of `domain` below `new_level`.

    Bonus amount and random modifier carry over unchanged.
    """
    updated = dict(schematics)
    events: list[GameEvent] = []

    for schematic_id, schematic in schematics.items():
        if schematic.science_domain != domain or new_level <= schematic.level:
            continue

        iteration = schematic.iteration + 1
        name = _MK_SUFFIX.sub("", schematic.name) + schematic_level_label(iteration)
        updated[schematic_id] = replace(schematic, level=new_level, iteration=iteration, name=name)

        events.append(make_event(
            turn,
            EventPriority.INFO,
            "science",
            f"Schematic Updated: {name}",
            f"{schematic.category.label} schematic upgraded to level {new_level}.",
            [schematic.owner_corp_id, schematic_id],
        ))

    return updated, events
