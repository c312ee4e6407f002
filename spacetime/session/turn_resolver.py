"""
Turn Resolver - the fixed-order pipeline that advances the game one turn.

The pipeline is an ordered list of (name, phase) pairs folded left to
right: each phase receives the state produced by the previous one, and
events are concatenated in phase order. Reordering phases is a matter of
passing a different list, not of changing code.

Design principles:
- The caller's snapshot is never mutated (cloned once on entry)
- One injected random source is threaded through every phase
- Event ids are stamped here, in emission order, so replays match
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..engine_core.state import GameState
from ..engine_core.events import GameEvent, Phase
from ..engine_core.random_source import RandomSource
from ..phases import (
    resolve_colony_phase,
    resolve_corp_phase,
    resolve_income_phase,
    resolve_production_phase,
    resolve_science_phase,
)

logger = logging.getLogger(__name__)

DEFAULT_PHASES: tuple[tuple[str, Phase], ...] = (
    ("income", resolve_income_phase),
    ("science", resolve_science_phase),
    ("corporations", resolve_corp_phase),
    ("colonies", resolve_colony_phase),
    ("production", resolve_production_phase),
)


@dataclass
class PhaseLogEntry:
    name: str
    event_count: int


@dataclass
class TurnResult:
    """Outcome of one resolved turn."""
    new_state: GameState
    events: list[GameEvent] = field(default_factory=list)
    phase_log: list[PhaseLogEntry] = field(default_factory=list)
    resolved_turn: int = 0


@dataclass
class TurnResolver:
    """
    Resolves turns through a configurable phase pipeline.

    Usage:
        resolver = TurnResolver()
        result = resolver.resolve(state, seeded_source(42))
        state = result.new_state
    """
    phases: tuple[tuple[str, Phase], ...] = DEFAULT_PHASES

    def __post_init__(self):
        names = [name for name, _ in self.phases]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate phase names in pipeline: {names}")
        for name, phase in self.phases:
            if not callable(phase):
                raise ValueError(f"Phase {name!r} is not callable")

    def resolve(self, state: GameState, rng: RandomSource) -> TurnResult:
        """Run every phase once and advance the turn counter."""
        turn = state.turn
        current = state.clone()
        events: list[GameEvent] = []
        phase_log: list[PhaseLogEntry] = []

        for name, phase in self.phases:
            result = phase(current, rng)
            current = result.new_state
            events.extend(result.events)
            phase_log.append(PhaseLogEntry(name=name, event_count=len(result.events)))
            logger.debug("Turn %d phase %s: %d events", turn, name, len(result.events))

        for index, event in enumerate(events, start=1):
            event.id = f"evt_{turn}_{index}"

        current = current._copy_with(turn=turn + 1)
        logger.info("Resolved turn %d: %d events", turn, len(events))
        return TurnResult(new_state=current, events=events, phase_log=phase_log, resolved_turn=turn)

    def run(self, state: GameState, rng: RandomSource, turns: int) -> list[TurnResult]:
        """Resolve `turns` consecutive turns."""
        results = []
        for _ in range(turns):
            result = self.resolve(state, rng)
            results.append(result)
            state = result.new_state
        return results


def resolve_turn(state: GameState, rng: RandomSource) -> TurnResult:
    """Convenience function to resolve one turn with the default pipeline."""
    return TurnResolver().resolve(state, rng)
