"""
Base agent interface for Void Threat players.
"""

from typing import Dict, List, Any, Optional, TYPE_CHECKING
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..core import Player, GameState, GamePhase, ActionKind
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..phases.actions import NightAction


@dataclass
class AgentContext:
    """Context information provided to an agent."""
    player: Player
    game_state: GameState
    current_phase: GamePhase
    available_actions: List[ActionKind]
    private_info: Dict[str, Any] = field(default_factory=dict)


class BaseAgent(ABC):
    """
    Abstract base class for all player agents.

    This defines the interface that all agent implementations must follow.
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        """
        Initialize the agent.

        Args:
            player: The player this agent represents
            config: Game configuration
        """
        self.player = player
        self.config = config
        # Private answers received at night: {night_number: result}
        self.scan_results: Dict[int, str] = {}

    @abstractmethod
    def get_night_action(self, context: AgentContext) -> Optional['NightAction']:
        """
        Choose tonight's action.

        Args:
            context: Current game context

        Returns:
            The action to submit, or None to pass
        """

    @abstractmethod
    def get_vote_choice(self, context: AgentContext) -> Optional[str]:
        """
        Get voting choice.

        Returns:
            Player id to vote against, or None to abstain
        """

    def get_revenge_target(self, context: AgentContext) -> Optional[str]:
        """Pick a victim when this player falls as a Tragic Hero. Default: forfeit."""
        return None

    def wants_double_vote(self, context: AgentContext) -> bool:
        return False

    def receive_scan_result(self, night_number: int, result: str) -> None:
        self.scan_results[night_number] = result

    def build_context(self, game_state: GameState) -> AgentContext:
        """
        Build context for the agent.

        Args:
            game_state: Current game state

        Returns:
            AgentContext with all relevant information
        """
        available = []
        if game_state.machine.is_night and self.player.is_alive:
            available = sorted(self.player.role.allowed_actions, key=lambda kind: kind.value)

        return AgentContext(
            player=self.player,
            game_state=game_state,
            current_phase=game_state.phase,
            available_actions=available,
            private_info={
                "role": self.player.role_key,
                "faction": self.player.faction.value,
                "scan_results": dict(self.scan_results),
            },
        )
