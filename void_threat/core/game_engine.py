"""
Core game engine: the phase state machine and the explicit per-game state.
"""

from enum import Enum
from typing import List, Optional, Dict, Any, Set, Tuple, TYPE_CHECKING
from dataclasses import dataclass, field

from .exceptions import InvalidTransition
from .player import Player, Link, LinkType, RoleChange, EliminationCause
from .roles import Faction
from .win_conditions import Winner, evaluate_winner

if TYPE_CHECKING:
    from ..recording.event_emitter import EventEmitter


class GamePhase(Enum):
    """Current game phase."""
    SETUP = "setup"
    NIGHT1 = "night1"
    DAY1 = "day1"
    NIGHT2PLUS = "night2plus"
    DAY2PLUS = "day2plus"
    ENDED = "ended"


NIGHT_PHASES = (GamePhase.NIGHT1, GamePhase.NIGHT2PLUS)
DAY_PHASES = (GamePhase.DAY1, GamePhase.DAY2PLUS)


@dataclass
class PhaseStateMachine:
    """Phase and night/day counters, advanced by an external driver."""
    phase: GamePhase = GamePhase.SETUP
    night_number: int = 0
    day_number: int = 0
    roster_bound: bool = False

    @property
    def is_night(self) -> bool:
        return self.phase in NIGHT_PHASES

    @property
    def is_day(self) -> bool:
        return self.phase in DAY_PHASES

    @property
    def is_ended(self) -> bool:
        return self.phase == GamePhase.ENDED

    def bind_roster(self) -> None:
        self.roster_bound = True

    def advance(self) -> GamePhase:
        """Move to the next phase and return it."""
        if self.phase == GamePhase.ENDED:
            raise InvalidTransition(self.phase.value, "Game has ended")

        if self.phase == GamePhase.SETUP:
            if not self.roster_bound:
                raise InvalidTransition(self.phase.value, "Cannot start before a roster is bound")
            self.phase = GamePhase.NIGHT1
            self.night_number = 1
        elif self.phase == GamePhase.NIGHT1:
            self.phase = GamePhase.DAY1
            self.day_number = 1
        elif self.phase == GamePhase.DAY1:
            self.phase = GamePhase.NIGHT2PLUS
            self.night_number = 2
        elif self.phase == GamePhase.NIGHT2PLUS:
            self.phase = GamePhase.DAY2PLUS
            self.day_number = max(2, self.day_number + 1)
        elif self.phase == GamePhase.DAY2PLUS:
            self.phase = GamePhase.NIGHT2PLUS
            self.night_number += 1

        return self.phase

    def end(self) -> None:
        """Force the terminal phase."""
        self.phase = GamePhase.ENDED


@dataclass
class GameState:
    """
    Complete state of one game.

    Passed explicitly into every resolver call and mutated there; nothing
    about a game lives outside this object.
    """
    players: List[Player] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    machine: PhaseStateMachine = field(default_factory=PhaseStateMachine)

    # Carried between nights
    kill_blocked_next_night: bool = False
    double_kill_next_night: bool = False
    sleeper_awake: bool = False
    used_abilities: Set[Tuple[str, str]] = field(default_factory=set)  # {(actor_id, action_kind)}
    last_protect_targets: Dict[str, Tuple[int, str]] = field(default_factory=dict)  # {actor_id: (night_number, target_id)}

    # Carried from a night into the following day
    marked_for_day: Set[str] = field(default_factory=set)  # Survived an attack, must die by day
    pending_revenge: List[str] = field(default_factory=list)  # Heroes killed at night
    day_protected: Set[str] = field(default_factory=set)
    silenced: Set[str] = field(default_factory=set)

    # Game history
    action_log: List[Dict[str, Any]] = field(default_factory=list)

    # Win condition
    winner: Optional[Winner] = None

    # Event emitter for run recording (optional)
    event_emitter: Optional['EventEmitter'] = None

    @property
    def phase(self) -> GamePhase:
        return self.machine.phase

    @property
    def night_number(self) -> int:
        return self.machine.night_number

    @property
    def day_number(self) -> int:
        return self.machine.day_number

    def bind_players(self, players: List[Player]) -> None:
        """Install the seated roster. Only allowed during setup."""
        if self.phase != GamePhase.SETUP:
            raise InvalidTransition(self.phase.value, "Roster can only be bound during setup")
        seats = sorted(p.position_order for p in players)
        if seats != list(range(1, len(players) + 1)):
            raise ValueError("Seats must be unique and numbered 1..N")
        self.players = list(players)
        self.machine.bind_roster()
        self._log_action("roster_bound", {
            "players": [p.player_id for p in self.players],
        })

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_player_at(self, position_order: int) -> Optional[Player]:
        """Get player by seat."""
        for player in self.players:
            if player.position_order == position_order:
                return player
        return None

    def get_alive_players(self) -> List[Player]:
        """Get all alive players."""
        return [p for p in self.players if p.is_alive]

    def get_infiltrator_players(self) -> List[Player]:
        """Get all alive alien team players."""
        return [p for p in self.get_alive_players() if p.faction == Faction.INFILTRATOR]

    def get_crew_players(self) -> List[Player]:
        """Get all alive crew players."""
        return [p for p in self.get_alive_players() if p.faction == Faction.CREW]

    def get_players_with_role(self, role_key: str, alive_only: bool = True) -> List[Player]:
        pool = self.get_alive_players() if alive_only else self.players
        return [p for p in pool if p.role_key == role_key]

    def active_links(self, link_type: Optional[LinkType] = None) -> List[Link]:
        return [
            link for link in self.links
            if link.is_active and (link_type is None or link.link_type == link_type)
        ]

    def add_link(self, link: Link) -> None:
        self.links.append(link)
        self._log_action("link_created", link.to_dict())

    def advance_phase(self) -> GamePhase:
        """Advance the phase machine and log the change."""
        phase = self.machine.advance()
        self._log_action("phase_change", {"phase": phase.value})
        if self.event_emitter:
            self.event_emitter.emit_phase_change(phase.value, self.day_number, self.night_number)
        return phase

    def check_win_condition(self) -> Optional[Winner]:
        """
        Check if game has ended and return the winner.
        Returns None if game continues.
        """
        return evaluate_winner(self.players)

    def record_elimination(self, player: Player, cause: EliminationCause, sequence: int,
                           reason: str) -> None:
        """Mark a player dead and log it."""
        player.eliminate(cause, sequence)
        self.marked_for_day.discard(player.player_id)
        self._log_action("player_eliminated", {
            "player": player.player_id,
            "role": player.role_key,
            "cause": cause.value,
            "reason": reason,
            "sequence": sequence,
        })
        if self.event_emitter:
            self.event_emitter.emit_elimination(player.player_id, player.role_key, cause.value,
                                                reason, sequence)

    def apply_role_change(self, player: Player, role_key: str, reason: str, sequence: int) -> RoleChange:
        """Change a player's role (faction follows) and log the mutation."""
        from_role, from_faction = player.role_key, player.faction
        player.change_role(role_key)
        change = RoleChange(
            player_id=player.player_id,
            from_role=from_role,
            to_role=player.role_key,
            from_faction=from_faction,
            to_faction=player.faction,
            reason=reason,
            sequence=sequence,
        )
        self._log_action("role_change", change.to_dict())
        if self.event_emitter:
            self.event_emitter.emit_role_change(change.to_dict())
        return change

    def end_game(self, winner: Optional[Winner], reason: str = "win_condition") -> None:
        """End the game with a winner."""
        self.winner = winner
        self.machine.end()
        self._log_action("game_over", {
            "winner": winner.value if winner else None,
            "reason": reason,
            "day_number": self.day_number,
            "night_number": self.night_number,
        })
        if self.event_emitter:
            self.event_emitter.emit_game_over(winner.value if winner else None, reason,
                                              self.day_number, self.night_number)

    def _log_action(self, action_type: str, data: Dict[str, Any]) -> None:
        """Log a game action."""
        self.action_log.append({
            "type": action_type,
            "phase": self.phase.value,
            "day": self.day_number,
            "night": self.night_number,
            "data": data,
        })

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        return {
            "phase": self.phase.value,
            "day": self.day_number,
            "night": self.night_number,
            "alive_players": len(self.get_alive_players()),
            "alive_infiltrators": len(self.get_infiltrator_players()),
            "alive_crew": len(self.get_crew_players()),
            "winner": self.winner.value if self.winner else None,
        }
