"""
Event emitter for recording game events to files.
"""

from typing import Dict, Any, Optional, List

from .run_recorder import RunRecorder


class EventEmitter:
    """Event emitter that records game events to files."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event by recording it to file."""
        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except OSError as e:
                # Don't let recording errors break the game
                print(f"Error recording event: {e}")

    def emit_game_start(self, players: List[Dict[str, Any]], balance: Dict[str, int],
                        is_balanced: bool) -> None:
        self._emit("game_start", {
            "players": players,
            "balance": balance,
            "is_balanced": is_balanced,
        })

    def emit_phase_change(self, phase: str, day_number: int, night_number: int) -> None:
        self._emit("phase_change", {
            "phase": phase,
            "day_number": day_number,
            "night_number": night_number
        })

    def emit_elimination(self, player_id: str, role: str, cause: str, reason: str, sequence: int) -> None:
        """Emit player elimination event."""
        self._emit("elimination", {
            "player_id": player_id,
            "role": role,
            "cause": cause,
            "reason": reason,
            "sequence": sequence,
        })

    def emit_role_change(self, change: Dict[str, Any]) -> None:
        self._emit("role_change", change)

    def emit_validation_error(self, night_number: int, error: Dict[str, Any]) -> None:
        """Emit a rejected night action."""
        self._emit("validation_error", {
            "night_number": night_number,
            "error": error,
        })

    def emit_night_resolution(self, result: Dict[str, Any]) -> None:
        self._emit("night_resolution", result)

    def emit_vote_results(self, vote_counts: Dict[str, int], day_number: int,
                          target: Optional[str]) -> None:
        self._emit("vote_results", {
            "vote_counts": vote_counts,
            "day_number": day_number,
            "target": target,
        })

    def emit_day_resolution(self, result: Dict[str, Any]) -> None:
        self._emit("day_resolution", result)

    def emit_announcement(self, message: str, phase: str, day_number: int, night_number: int) -> None:
        """Emit judge announcement event."""
        self._emit("announcement", {
            "message": message,
            "phase": phase,
            "day_number": day_number,
            "night_number": night_number
        })

    def emit_game_over(self, winner: Optional[str], reason: str, day_number: int, night_number: int) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "winner": winner,
            "reason": reason,
            "day_number": day_number,
            "night_number": night_number
        })
