"""
Day resolution: the vote's elimination plus everything carried over from the night.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Any

from ..core.exceptions import ActionValidationError
from ..core.game_engine import GameState
from ..core.player import EliminationCause, RoleChange
from ..core.roles import SpecialCondition
from .cascade import EliminationCascade, CascadeOutcome

VIP_IMMUNITY = "vip_immunity"
DAY_PROTECTION = "day_protection"


@dataclass
class DayResult:
    """Outcome of one day."""
    day_number: int
    eliminated: List[str] = field(default_factory=list)
    survived: Dict[str, str] = field(default_factory=dict)  # {player_id: reason}
    revenge_kills: List[str] = field(default_factory=list)
    forfeited_revenge: List[str] = field(default_factory=list)  # Heroes who named nobody
    transformations: List[RoleChange] = field(default_factory=list)
    validation_errors: List[ActionValidationError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day_number": self.day_number,
            "eliminated": list(self.eliminated),
            "survived": dict(self.survived),
            "revenge_kills": list(self.revenge_kills),
            "forfeited_revenge": list(self.forfeited_revenge),
            "transformations": [change.to_dict() for change in self.transformations],
            "validation_errors": [error.to_dict() for error in self.validation_errors],
        }


class DayPhaseHandler:
    """
    Resolves a day in order:

    1. players who survived a night attack on borrowed time die,
    2. Tragic Heroes killed last night take their victims,
    3. the vote's choice is eliminated unless immune or protected,
    4. heroes who fell today take their victims immediately.

    Every death goes through the same cascade as at night.
    """

    def resolve(self, day_number: int, state: GameState, eliminated_id: Optional[str] = None,
                revenge_targets: Optional[Dict[str, str]] = None) -> DayResult:
        result = DayResult(day_number=day_number)
        revenge_targets = revenge_targets or {}
        cascade = EliminationCascade(state, EliminationCause.DAY, day_number)

        heroes: Deque[str] = deque(state.pending_revenge)
        state.pending_revenge = []

        wounded = sorted(
            (state.get_player(pid) for pid in state.marked_for_day if state.get_player(pid) is not None),
            key=lambda p: p.position_order,
        )
        self._absorb(cascade.run([p.player_id for p in wounded], "night_wound"), result, heroes)
        self._settle_revenge(cascade, state, heroes, revenge_targets, result)

        if eliminated_id is not None:
            self._eliminate_by_vote(cascade, state, eliminated_id, result, heroes)
            self._settle_revenge(cascade, state, heroes, revenge_targets, result)

        state.day_protected = set()
        state.silenced = set()

        if state.event_emitter:
            state.event_emitter.emit_day_resolution(result.to_dict())
        return result

    def _eliminate_by_vote(self, cascade: EliminationCascade, state: GameState, eliminated_id: str,
                           result: DayResult, heroes: Deque[str]) -> None:
        target = state.get_player(eliminated_id)
        if target is None:
            result.validation_errors.append(
                ActionValidationError(None, f"Target {eliminated_id} not found", "day_vote"))
            return
        if not target.is_alive:
            result.validation_errors.append(
                ActionValidationError(None, f"Target {eliminated_id} is not alive", "day_vote"))
            return

        if target.role.has(SpecialCondition.DAY_ELIMINATION_IMMUNITY):
            result.survived[eliminated_id] = VIP_IMMUNITY
            return
        if eliminated_id in state.day_protected:
            result.survived[eliminated_id] = DAY_PROTECTION
            return

        self._absorb(cascade.run([eliminated_id], "vote"), result, heroes)

    def _settle_revenge(self, cascade: EliminationCascade, state: GameState, heroes: Deque[str],
                        revenge_targets: Dict[str, str], result: DayResult) -> None:
        while heroes:
            hero_id = heroes.popleft()
            target_id = revenge_targets.get(hero_id)
            if target_id is None:
                result.forfeited_revenge.append(hero_id)
                continue
            target = state.get_player(target_id)
            if target is None or not target.is_alive:
                result.validation_errors.append(
                    ActionValidationError(hero_id, f"Revenge target {target_id} is not a living player",
                                          "revenge"))
                continue
            outcome = cascade.run([target_id], "tragic_hero")
            result.revenge_kills.append(target_id)
            self._absorb(outcome, result, heroes)

    @staticmethod
    def _absorb(outcome: CascadeOutcome, result: DayResult, heroes: Deque[str]) -> None:
        result.eliminated.extend(outcome.eliminated)
        result.transformations.extend(outcome.transformations)
        heroes.extend(outcome.fallen_heroes)
