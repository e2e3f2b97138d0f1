"""
Main game loop for Void Threat simulation.
"""

import argparse
import os
import random
from dataclasses import replace
from typing import Dict, List, Optional

from dotenv import load_dotenv

from void_threat.core import GameState, Judge, Player, InvalidPlayerCount, SpecialCondition
from void_threat.agents import BaseAgent, DummyAgent
from void_threat.config.game_config import GameConfig, default_config
from void_threat.config.config_loader import load_config
from void_threat.phases import NightAction
from void_threat.recording import EventEmitter, RunRecorder


class VoidThreatGame:
    """Main game controller: seats dummy agents and plays until a winner or the round limit."""

    def __init__(self, config: Optional[GameConfig] = None, event_emitter: Optional[EventEmitter] = None,
                 run_name: Optional[str] = None):
        config = config or default_config

        # Generate seed if not provided, without touching the shared default
        if config.random_seed is None:
            config = replace(config, random_seed=random.randint(0, 2**31 - 1))
        self.config = config

        self.run_recorder: Optional[RunRecorder] = None
        if event_emitter is None and self.config.record_events:
            self.run_recorder = RunRecorder(self.config.runs_dir)
            run_name = self.run_recorder.create_run(run_name, seed=self.config.random_seed)
            event_emitter = EventEmitter(self.run_recorder)
            print(f"Recording game to: {self.config.runs_dir}/{run_name}/")
        elif event_emitter is not None:
            self.run_recorder = event_emitter.run_recorder
        self.event_emitter = event_emitter

        self.game_state = GameState(event_emitter=self.event_emitter)
        self.judge = Judge(self.game_state, self.config, event_emitter=self.event_emitter)
        self.agents: Dict[str, BaseAgent] = {}

    def player_count(self) -> int:
        if self.config.custom_roles:
            return sum(count for count in self.config.custom_roles.values() if count > 0)
        return self.config.total_players

    def setup(self) -> List[Player]:
        player_ids = [f"p{seat}" for seat in range(1, self.player_count() + 1)]
        players = self.judge.setup_game(player_ids)
        self.agents = {p.player_id: DummyAgent(p, self.config) for p in players}

        if self.run_recorder:
            assignment = self.judge.assignment
            self.run_recorder.save_game_metadata(players, assignment.balance, assignment.is_balanced, self.config)
        return players

    def run_game(self) -> Optional[str]:
        """
        Run the complete game until win condition or round limit.
        Returns the winner value, or None if no one won.
        """
        players = self.setup()

        print("=" * 60)
        print("VOID THREAT - Starting")
        print("=" * 60)
        for player in players:
            print(f"  {player.label}: {player.role.name}")
        print("=" * 60)

        rounds = 0
        while not self.game_state.machine.is_ended:
            self.judge.advance_phase()

            if self.game_state.machine.is_night:
                print(f"\n--- NIGHT {self.game_state.night_number} ---")
                self._play_night()
            else:
                print(f"\n--- DAY {self.game_state.day_number} ---")
                self._play_day()
                rounds += 1
                if not self.game_state.machine.is_ended and rounds >= self.config.max_rounds:
                    self.judge.end_without_winner("max_rounds")

        winner = self.game_state.winner.value if self.game_state.winner else None
        if self.run_recorder:
            game_over = next(e["data"] for e in reversed(self.game_state.action_log) if e["type"] == "game_over")
            self.run_recorder.record_outcome(
                winner, game_over["reason"], self.game_state.night_number, self.game_state.day_number,
                [p.player_id for p in self.game_state.get_alive_players()],
            )

        self._print_game_summary()
        return winner

    def _play_night(self) -> None:
        actions: List[NightAction] = []
        for player in self.game_state.get_alive_players():
            agent = self.agents[player.player_id]
            action = agent.get_night_action(agent.build_context(self.game_state))
            if action is not None:
                actions.append(action)

        result = self.judge.resolve_night(actions)
        for actor_id, scan in result.scan_results.items():
            self.agents[actor_id].receive_scan_result(result.night_number, scan.result)
        for error in result.validation_errors:
            print(f"  Rejected action: {error}")

    def _play_day(self) -> None:
        votes: Dict[str, str] = {}
        doubling = []
        for player in self.game_state.get_alive_players():
            agent = self.agents[player.player_id]
            context = agent.build_context(self.game_state)
            target = agent.get_vote_choice(context)
            if target is not None:
                votes[player.player_id] = target
            if player.role.has(SpecialCondition.DOUBLE_VOTE) and agent.wants_double_vote(context):
                doubling.append(player.player_id)

        tally = self.judge.tally_votes(votes, doubling)

        # Heroes pick in advance: last night's dead and anyone who may fall today
        revenge: Dict[str, str] = {}
        for player in self.game_state.players:
            if not player.role.has(SpecialCondition.INSTANT_KILL_ON_DEATH):
                continue
            if player.is_alive or player.player_id in self.game_state.pending_revenge:
                agent = self.agents[player.player_id]
                target = agent.get_revenge_target(agent.build_context(self.game_state))
                if target is not None:
                    revenge[player.player_id] = target

        self.judge.resolve_day(tally.elimination_target, revenge)

    def _print_game_summary(self) -> None:
        """Print a formatted game summary."""
        print("\nGAME SUMMARY")
        print("-" * 60)
        winner = self.game_state.winner
        print(f"Winner: {winner.value.replace('_', ' ').title() if winner else 'None'}")
        print(f"Total Days: {self.game_state.day_number}")
        print(f"Total Nights: {self.game_state.night_number}")
        print(f"Random Seed: {self.config.random_seed}")

        eliminations = {
            entry["data"]["player"]: entry["data"]
            for entry in self.game_state.action_log
            if entry["type"] == "player_eliminated"
        }
        for player in sorted(self.game_state.players, key=lambda p: p.position_order):
            status = "alive"
            if not player.is_alive:
                info = eliminations.get(player.player_id, {})
                status = f"{info.get('reason', 'eliminated')} ({info.get('cause')} {info.get('sequence')})"
            print(f"  {player.label}: {player.role.name} [{player.faction.value}] - {status}")

    def get_game_summary(self) -> Dict:
        """Get final game summary as dictionary."""
        return {
            "winner": self.game_state.winner.value if self.game_state.winner else None,
            "days": self.game_state.day_number,
            "nights": self.game_state.night_number,
            "final_state": self.game_state.get_game_summary(),
            "action_log": self.game_state.action_log[-10:],  # Last 10 actions
        }


def main():
    """Entry point for running a game."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Run a Void Threat game simulation with random agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                   # Standard 8-player game
  python main.py --players 12 --seed 7             # Bigger, reproducible game
  python main.py --config configs/custom_roles.yaml
        """
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=os.getenv("VOID_THREAT_CONFIG"),
        help="Path to YAML configuration file (default: $VOID_THREAT_CONFIG or built-in defaults)"
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for reproducible games"
    )
    parser.add_argument(
        "--players",
        "-p",
        type=int,
        default=None,
        help="Number of players for a standard game"
    )
    parser.add_argument(
        "--run-name",
        "-r",
        type=str,
        default=None,
        help="Custom name for this run (default: auto-generated timestamp)"
    )
    parser.add_argument(
        "--no-record",
        action="store_true",
        help="Do not write run events to disk"
    )

    args = parser.parse_args()

    config = load_config(args.config)
    overrides = {}
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.players is not None:
        overrides["total_players"] = args.players
    if args.no_record:
        overrides["record_events"] = False
    if overrides:
        config = replace(config, **overrides)

    print("Void Threat Simulation")
    print("=" * 60)
    if args.config:
        print(f"Using config: {args.config}")
    print("=" * 60)

    game = VoidThreatGame(config=config, run_name=args.run_name)
    try:
        game.run_game()
    except InvalidPlayerCount as e:
        print(f"Cannot start game: {e}")
        return 1

    if game.run_recorder:
        run_path = game.run_recorder.get_run_path()
        if run_path:
            print(f"\nGame events saved to: {run_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
