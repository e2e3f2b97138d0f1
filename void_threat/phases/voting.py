"""
Day vote tallying.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..core.game_engine import GameState
from ..core.roles import SpecialCondition

DOUBLE_VOTE = "double_vote"


@dataclass
class VoteTally:
    """Counted votes for one day."""
    counts: Dict[str, int] = field(default_factory=dict)  # {target_id: votes}
    ignored_voters: List[str] = field(default_factory=list)
    double_votes: List[str] = field(default_factory=list)

    def get_tied_players(self) -> List[str]:
        """Players sharing the highest count."""
        if not self.counts:
            return []
        max_votes = max(self.counts.values())
        return [player for player, votes in self.counts.items() if votes == max_votes]

    @property
    def is_tie(self) -> bool:
        return len(self.get_tied_players()) > 1

    @property
    def elimination_target(self) -> Optional[str]:
        """The single most-voted player, or None on a tie or an empty vote."""
        tied = self.get_tied_players()
        return tied[0] if len(tied) == 1 else None


class VotingHandler:
    """Counts day votes by plurality."""

    def tally(self, state: GameState, votes: Dict[str, str],
              double_vote_by: Iterable[str] = ()) -> VoteTally:
        """
        Count votes.

        Args:
            state: Current game state
            votes: {voter_id: target_id}
            double_vote_by: Voters asking to spend a once-per-game double vote

        Dead, silenced or unknown voters and votes for non-living targets are
        ignored. Only roles with the double-vote ability that have not spent it
        get their vote counted twice.
        """
        tally = VoteTally()
        doubling = set(double_vote_by)

        for voter_id, target_id in votes.items():
            voter = state.get_player(voter_id)
            target = state.get_player(target_id)
            if (voter is None or not voter.is_alive or voter_id in state.silenced
                    or target is None or not target.is_alive):
                tally.ignored_voters.append(voter_id)
                continue

            weight = 1
            if (voter_id in doubling and voter.role.has(SpecialCondition.DOUBLE_VOTE)
                    and (voter_id, DOUBLE_VOTE) not in state.used_abilities):
                state.used_abilities.add((voter_id, DOUBLE_VOTE))
                tally.double_votes.append(voter_id)
                weight = 2

            tally.counts[target_id] = tally.counts.get(target_id, 0) + weight

        return tally
