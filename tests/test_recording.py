"""
Tests for run recording.
"""

import json

from void_threat.config.game_config import GameConfig
from void_threat.core import assign_custom_roles, bind_roles_to_seats
from void_threat.recording import EventEmitter, RunRecorder


def _seated(role_counts):
    assignment = assign_custom_roles(role_counts)
    players = bind_roles_to_seats([f"p{seat}" for seat in range(1, len(assignment.roles) + 1)],
                                  assignment.roles)
    return assignment, players


def test_records_events_as_jsonl(tmp_path):
    recorder = RunRecorder(str(tmp_path / "runs"))
    name = recorder.create_run("demo")
    emitter = EventEmitter(recorder)

    emitter.emit_phase_change("night1", 0, 1)
    emitter.emit_elimination("p3", "crew_member", "night", "night_kill", 1)

    lines = (tmp_path / "runs" / name / "events.jsonl").read_text().splitlines()
    events = [json.loads(line) for line in lines]
    assert [e["event_type"] for e in events] == ["phase_change", "elimination"]
    assert [e["sequence"] for e in events] == [0, 1]
    assert events[1]["data"]["player_id"] == "p3"
    assert recorder.load_events(name) == events


def test_generated_run_name(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    assert recorder.create_run().startswith("game_")
    assert recorder.create_run(seed=42).endswith("_seed42")
    assert recorder.get_run_path().exists()


def test_reused_run_name_starts_over(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run("again")
    recorder.record_event("phase_change", {})
    recorder.record_event("phase_change", {})

    recorder.create_run("again")
    recorder.record_event("game_over", {"winner": "crew"})
    assert [e["sequence"] for e in recorder.load_events()] == [0]


def test_no_run_no_file(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.record_event("phase_change", {})
    recorder.record_outcome("crew", "win_condition", 1, 1, [])
    assert recorder.load_events() == []
    assert list(tmp_path.iterdir()) == []


def test_emitter_without_recorder_is_silent():
    EventEmitter().emit_game_over("crew", "win_condition", 1, 1)


def test_game_metadata_and_outcome(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run("seated")
    assignment, players = _seated({"bioscanner": 1, "alien": 1, "crew_member": 3})
    config = GameConfig(random_seed=9, custom_roles={"bioscanner": 1, "alien": 1, "crew_member": 3})

    recorder.save_game_metadata(players, assignment.balance, assignment.is_balanced, config)
    recorder.record_outcome("crew", "win_condition", 2, 2, ["p1", "p3"])

    metadata = recorder.load_metadata("seated")
    assert metadata["player_count"] == 5
    assert metadata["seats"][1] == {"seat": 2, "player_id": "p2", "role": "alien", "faction": "infiltrator"}
    assert metadata["role_counts"] == {"bioscanner": 1, "alien": 1, "crew_member": 3}
    assert metadata["mode"] == "custom"
    assert metadata["settings"]["random_seed"] == 9
    assert metadata["balance"] == assignment.balance.to_dict()
    assert metadata["outcome"]["label"] == "Crew Win"
    assert metadata["outcome"]["survivors"] == ["p1", "p3"]


def test_list_runs_reports_outcome(tmp_path):
    recorder = RunRecorder(str(tmp_path))
    recorder.create_run("a_finished")
    recorder.record_outcome(None, "max_rounds", 3, 3, ["p1"])
    EventEmitter(recorder).emit_game_over("infiltrators", "win_condition", 2, 3)

    recorder.create_run("b_running")
    EventEmitter(recorder).emit_phase_change("night1", 0, 1)

    runs = {run["name"]: run for run in recorder.list_runs()}
    assert runs["a_finished"]["game_outcome"] == "Aliens Win"
    assert runs["a_finished"]["metadata"]["outcome"]["label"] == "No Winner"
    assert runs["b_running"]["event_count"] == 1
    assert "game_outcome" not in runs["b_running"]
    assert [run["name"] for run in recorder.list_runs()] == ["b_running", "a_finished"]
