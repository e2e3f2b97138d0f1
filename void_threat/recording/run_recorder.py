"""
Run recorder that saves one game per run directory.

A run holds ``events.jsonl`` (one JSON event per line, numbered from 0) and
``metadata.json`` (seating, balance and settings, plus the outcome once the
game is over).
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence, TYPE_CHECKING
from threading import Lock

if TYPE_CHECKING:
    from ..config.game_config import GameConfig
    from ..core.balance import BalanceScore
    from ..core.player import Player

METADATA_VERSION = 1

# Winner values as written by the game_over event
OUTCOME_LABELS = {
    "crew": "Crew Win",
    "infiltrators": "Aliens Win",
    "rogue_alien": "Rogue Alien Wins",
    "predator": "Predator Wins",
}


def outcome_label(winner: Optional[str]) -> str:
    return OUTCOME_LABELS.get(winner, "No Winner")


class RunRecorder:
    """Records one game's events and metadata under runs_dir/<run_name>/."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.runs_dir.mkdir(parents=True, exist_ok=True)
        self.current_run_dir: Optional[Path] = None
        self.events_file: Optional[Path] = None
        self.metadata_file: Optional[Path] = None
        self._lock = Lock()
        self._event_count = 0

    def create_run(self, run_name: Optional[str] = None, seed: Optional[int] = None) -> str:
        """
        Start a new run directory for one game.

        Args:
            run_name: Directory name; defaults to ``game_<timestamp>`` with
                ``_seed<seed>`` appended when a seed is given
            seed: Random seed of the game, used only for the default name

        Returns:
            The run name. Reusing a name starts its event log over.
        """
        if run_name is None:
            run_name = f"game_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
            if seed is not None:
                run_name += f"_seed{seed}"

        self.current_run_dir = self.runs_dir / run_name
        self.current_run_dir.mkdir(exist_ok=True)

        self.events_file = self.current_run_dir / "events.jsonl"
        self.metadata_file = self.current_run_dir / "metadata.json"
        if self.events_file.exists():
            self.events_file.unlink()
        self._event_count = 0

        return run_name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append one event to events.jsonl. No-op until a run is created."""
        if not self.events_file:
            return

        with self._lock:
            event = {
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
                "sequence": self._event_count
            }
            self._event_count += 1

            with open(self.events_file, 'a') as f:
                f.write(json.dumps(event) + '\n')

    @property
    def event_count(self) -> int:
        return self._event_count

    def save_game_metadata(self, players: Sequence['Player'], balance: 'BalanceScore',
                           is_balanced: bool, config: 'GameConfig') -> Dict[str, Any]:
        """Write the seating chart, role counts, balance and game settings."""
        role_counts: Dict[str, int] = {}
        for player in players:
            role_counts[player.role_key] = role_counts.get(player.role_key, 0) + 1

        metadata = {
            "version": METADATA_VERSION,
            "created_at": datetime.now().isoformat(),
            "player_count": len(players),
            "seats": [
                {"seat": p.position_order, "player_id": p.player_id, "role": p.role_key,
                 "faction": p.faction.value}
                for p in sorted(players, key=lambda p: p.position_order)
            ],
            "role_counts": role_counts,
            "balance": balance.to_dict(),
            "is_balanced": is_balanced,
            "mode": "custom" if config.custom_roles else "standard",
            "settings": {
                "random_seed": config.random_seed,
                "max_rounds": config.max_rounds,
                "infiltrator_ratio": config.infiltrator_ratio,
                "balance_tolerance": config.balance_tolerance,
            },
        }
        self._write_metadata(metadata)
        return metadata

    def record_outcome(self, winner: Optional[str], reason: str, night_number: int, day_number: int,
                       survivors: Sequence[str]) -> None:
        """Merge the final result into metadata.json."""
        if not self.metadata_file:
            return

        metadata = self.load_metadata() or {}
        metadata["outcome"] = {
            "winner": winner,
            "label": outcome_label(winner),
            "reason": reason,
            "nights": night_number,
            "days": day_number,
            "survivors": list(survivors),
        }
        self._write_metadata(metadata)

    def load_metadata(self, run_name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Read metadata.json of the named run, or of the current one."""
        metadata_file = self.runs_dir / run_name / "metadata.json" if run_name else self.metadata_file
        if not metadata_file or not metadata_file.exists():
            return None
        with open(metadata_file, 'r') as f:
            return json.load(f)

    def load_events(self, run_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Read back the events of the named run, or of the current one, in order."""
        events_file = self.runs_dir / run_name / "events.jsonl" if run_name else self.events_file
        if not events_file or not events_file.exists():
            return []
        with open(events_file, 'r') as f:
            return [json.loads(line) for line in f if line.strip()]

    def _write_metadata(self, metadata: Dict[str, Any]) -> None:
        if not self.metadata_file:
            return

        with self._lock:
            with open(self.metadata_file, 'w') as f:
                json.dump(metadata, f, indent=2)

    def get_run_path(self) -> Optional[Path]:
        """Get the current run directory path."""
        return self.current_run_dir

    def list_runs(self) -> List[Dict[str, Any]]:
        """
        List all recorded runs, newest name first.

        Returns:
            List of run info dictionaries with event counts and, where the
            game finished, its outcome
        """
        runs = []
        if not self.runs_dir.exists():
            return runs

        for run_dir in sorted(self.runs_dir.iterdir(), reverse=True):
            if not run_dir.is_dir():
                continue

            metadata_file = run_dir / "metadata.json"
            events_file = run_dir / "events.jsonl"

            run_info: Dict[str, Any] = {
                "name": run_dir.name,
                "path": str(run_dir),
                "has_metadata": metadata_file.exists(),
                "has_events": events_file.exists(),
            }

            if metadata_file.exists():
                try:
                    with open(metadata_file, 'r') as f:
                        run_info["metadata"] = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    print(f"Skipping unreadable metadata in {run_dir.name}: {e}")

            if events_file.exists():
                event_count, outcome = self._scan_events(events_file)
                run_info["event_count"] = event_count
                if outcome:
                    run_info["game_outcome"] = outcome

            runs.append(run_info)

        return runs

    @staticmethod
    def _scan_events(events_file: Path):
        """Count events and pick the outcome off the game_over event."""
        event_count = 0
        outcome = None
        with open(events_file, 'r') as f:
            for line in f:
                if not line.strip():
                    continue
                event_count += 1
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if event.get("event_type") == "game_over":
                    winner = event.get("data", {}).get("winner")
                    outcome = outcome_label(winner)
        return event_count, outcome
