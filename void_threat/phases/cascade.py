"""
Elimination cascade shared by night and day resolution.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List, Iterator

from ..core.game_engine import GameState
from ..core.player import Player, EliminationCause, LinkType, RoleChange, DEATH_LINKS
from ..core.roles import SpecialCondition, CORE_INFO_ROLE


@dataclass
class CascadeOutcome:
    """Everything one batch of eliminations set off."""
    eliminated: List[str] = field(default_factory=list)
    transformations: List[RoleChange] = field(default_factory=list)
    fallen_heroes: List[str] = field(default_factory=list)  # Died holding instant_kill_on_death


class EliminationCascade:
    """
    Eliminates players and follows the consequences.

    Linked partners die in the same pass and are re-checked in turn, down to
    a depth equal to the roster size. A Clone whose target dies takes over the
    target's role. Death effects (next-night kill block, double kill, Bioscanner
    succession, Sleep Alien awakening) are written back onto the state.
    """

    def __init__(self, state: GameState, cause: EliminationCause, sequence: int):
        self.state = state
        self.cause = cause
        self.sequence = sequence

    def run(self, player_ids: Iterable[str], reason: str) -> CascadeOutcome:
        outcome = CascadeOutcome()
        max_depth = len(self.state.players)
        queue = deque((player_id, 0, reason) for player_id in player_ids)

        while queue:
            player_id, depth, why = queue.popleft()
            player = self.state.get_player(player_id)
            if player is None or not player.is_alive:
                continue

            self.state.record_elimination(player, self.cause, self.sequence, why)
            outcome.eliminated.append(player_id)

            for partner_id in self._linked_partners(player):
                if depth < max_depth:
                    queue.append((partner_id, depth + 1, "link"))

            self._clone_takeover(player, outcome)
            self._death_effects(player, outcome)

        return outcome

    def _linked_partners(self, player: Player) -> Iterator[str]:
        for link in self.state.active_links():
            if link.link_type not in DEATH_LINKS or not link.involves(player.player_id):
                continue
            link.trigger(self.sequence)
            partner = self.state.get_player(link.partner_of(player.player_id))
            if partner is not None and partner.is_alive:
                yield partner.player_id

    def _clone_takeover(self, player: Player, outcome: CascadeOutcome) -> None:
        for link in self.state.active_links(LinkType.CLONE):
            if link.target_id != player.player_id:
                continue
            link.trigger(self.sequence)
            clone = self.state.get_player(link.source_id)
            if clone is not None and clone.is_alive:
                outcome.transformations.append(
                    self.state.apply_role_change(clone, player.role_key, "clone", self.sequence)
                )

    def _death_effects(self, player: Player, outcome: CascadeOutcome) -> None:
        role = player.role

        if role.has(SpecialCondition.BLOCK_NEXT_KILL) and self.cause == EliminationCause.NIGHT:
            self.state.kill_blocked_next_night = True

        if role.has(SpecialCondition.DOUBLE_KILL_ON_DEATH):
            self.state.double_kill_next_night = True

        if role.has(SpecialCondition.INSTANT_KILL_ON_DEATH):
            outcome.fallen_heroes.append(player.player_id)

        if role.key == CORE_INFO_ROLE and not self.state.get_players_with_role(CORE_INFO_ROLE):
            successors = sorted(
                (p for p in self.state.get_alive_players() if p.role.has(SpecialCondition.SUCCESSOR)),
                key=lambda p: p.position_order,
            )
            if successors:
                outcome.transformations.append(
                    self.state.apply_role_change(successors[0], CORE_INFO_ROLE, "succession", self.sequence)
                )

        if player.is_infiltrator and not self.state.sleeper_awake:
            self.state.sleeper_awake = True
            self.state._log_action("sleeper_awakened", {"trigger": player.player_id})
