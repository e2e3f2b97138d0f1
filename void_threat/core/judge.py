"""
Judge/Moderator: drives one game through setup, nights and days.
"""

import random
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from .assignment import (
    AssignmentResult,
    assign_standard_roles,
    assign_custom_roles,
    shuffle_roles,
    bind_roles_to_seats,
)
from .exceptions import InvalidPlayerCount, InvalidTransition
from .game_engine import GameState, GamePhase
from .player import Player
from .win_conditions import Winner
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..recording.event_emitter import EventEmitter
    from ..phases.actions import NightAction
    from ..phases.night_phase import NightResult
    from ..phases.day_phase import DayResult
    from ..phases.voting import VoteTally


class Judge:
    """Judge/Moderator that enforces rules and manages game flow."""

    def __init__(self, game_state: GameState, config: GameConfig = default_config,
                 event_emitter: Optional['EventEmitter'] = None):
        # Imported here: the phase resolvers import core modules themselves
        from ..phases.night_phase import NightActionResolver
        from ..phases.day_phase import DayPhaseHandler
        from ..phases.voting import VotingHandler

        self.game_state = game_state
        self.config = config
        self.event_emitter = event_emitter
        if event_emitter is not None:
            self.game_state.event_emitter = event_emitter
        self.announcements: List[str] = []
        self.assignment: Optional[AssignmentResult] = None

        self.night_resolver = NightActionResolver()
        self.day_handler = DayPhaseHandler()
        self.voting_handler = VotingHandler()

    def announce(self, message: str) -> None:
        """Make a judge announcement."""
        if self.config.use_judge_announcements:
            self.announcements.append(message)
            print(f"[JUDGE] {message}")
            if self.event_emitter:
                self.event_emitter.emit_announcement(
                    message,
                    self.game_state.phase.value,
                    self.game_state.day_number,
                    self.game_state.night_number
                )

    def setup_game(self, player_ids: List[str], names: Optional[Dict[str, str]] = None,
                   role_counts: Optional[Dict[str, int]] = None,
                   rng: Optional[random.Random] = None) -> List[Player]:
        """
        Generate, shuffle and bind roles for the given players.

        Args:
            player_ids: Players in seat order
            names: Optional display names by player id
            role_counts: Custom role set; falls back to config.custom_roles,
                then to the standard balanced assignment
            rng: Random source for the shuffle; seeded from config.random_seed if omitted

        Returns:
            The seated players
        """
        player_count = len(player_ids)
        if player_count > self.config.max_players:
            raise InvalidPlayerCount(
                player_count,
                f"Maximum {self.config.max_players} players supported (got {player_count})",
            )

        role_counts = role_counts or self.config.custom_roles
        if role_counts:
            self.assignment = assign_custom_roles(role_counts, self.config)
        else:
            self.assignment = assign_standard_roles(player_count, self.config)

        rng = rng or random.Random(self.config.random_seed)
        roles = shuffle_roles(self.assignment.roles, rng)
        players = bind_roles_to_seats(player_ids, roles, names)
        self.game_state.bind_players(players)

        if self.event_emitter:
            self.event_emitter.emit_game_start(
                [p.to_dict() for p in players],
                self.assignment.balance.to_dict(),
                self.assignment.is_balanced,
            )
        balance = self.assignment.balance
        self.announce(
            f"{player_count} players seated. Balance: crew {balance.crew_score}, "
            f"aliens {balance.infiltrator_score}, total {balance.total_score}."
        )
        if not self.assignment.is_balanced:
            self.announce("Warning: this role set is not balanced.")
        return players

    def advance_phase(self) -> GamePhase:
        """Move to the next phase and announce it."""
        phase = self.game_state.advance_phase()
        if self.game_state.machine.is_night:
            self.announce(f"Night {self.game_state.night_number} falls. The ship goes dark.")
        elif self.game_state.machine.is_day:
            alive = [p.label for p in self.game_state.get_alive_players()]
            self.announce(f"Day {self.game_state.day_number} begins. Alive: {', '.join(alive)}")
        return phase

    def resolve_night(self, actions: Iterable['NightAction']) -> 'NightResult':
        """Resolve the current night's actions, then check for a winner."""
        if not self.game_state.machine.is_night:
            raise InvalidTransition(self.game_state.phase.value, "Night actions resolve only at night")

        result = self.night_resolver.resolve(self.game_state.night_number, self.game_state, actions)

        if result.kill_blocked:
            self.announce("The aliens were unable to strike tonight.")
        for player_id in result.eliminated:
            self.announce(f"{self._label(player_id)} was found dead.")
        if not result.eliminated:
            self.announce("Nobody died last night.")
        for change in result.transformations:
            if change.reason == "attack_transform":
                continue  # Secret from the crew
            self.announce(f"{self._label(change.player_id)} is no longer who they were.")

        self.check_winner()
        return result

    def tally_votes(self, votes: Dict[str, str], double_vote_by: Iterable[str] = ()) -> 'VoteTally':
        """Count today's votes."""
        if not self.game_state.machine.is_day:
            raise InvalidTransition(self.game_state.phase.value, "Votes are only counted by day")

        tally = self.voting_handler.tally(self.game_state, votes, double_vote_by)
        if self.event_emitter:
            self.event_emitter.emit_vote_results(dict(tally.counts), self.game_state.day_number,
                                                 tally.elimination_target)
        if tally.is_tie:
            tied = ", ".join(self._label(pid) for pid in tally.get_tied_players())
            self.announce(f"Tie between {tied}. Nobody is eliminated by vote.")
        return tally

    def resolve_day(self, eliminated_id: Optional[str] = None,
                    revenge_targets: Optional[Dict[str, str]] = None) -> 'DayResult':
        """Resolve the day's elimination and carried-over effects, then check for a winner."""
        if not self.game_state.machine.is_day:
            raise InvalidTransition(self.game_state.phase.value, "Day resolution happens only by day")

        result = self.day_handler.resolve(self.game_state.day_number, self.game_state,
                                          eliminated_id, revenge_targets)

        for player_id, reason in result.survived.items():
            self.announce(f"{self._label(player_id)} survives the vote ({reason.replace('_', ' ')}).")
        for player_id in result.eliminated:
            self.announce(f"{self._label(player_id)} has been eliminated.")

        self.check_winner()
        return result

    def check_winner(self) -> Optional[Winner]:
        """End the game if a winner is decided."""
        if self.game_state.machine.is_ended:
            return self.game_state.winner
        winner = self.game_state.check_win_condition()
        if winner is not None:
            self.game_state.end_game(winner)
            self.announce(f"Game over. Winner: {winner.value.replace('_', ' ')}.")
        return winner

    def end_without_winner(self, reason: str) -> None:
        """Stop the game with no winner (e.g. round limit reached)."""
        self.game_state.end_game(None, reason)
        self.announce(f"Game stopped: {reason.replace('_', ' ')}.")

    def _label(self, player_id: str) -> str:
        player = self.game_state.get_player(player_id)
        return player.label if player else player_id
