"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from void_threat.config import GameConfig, default_config, load_config, load_config_from_yaml, parse_custom_roles
from void_threat.core import assign_custom_roles

CONFIGS_DIR = Path(__file__).resolve().parent.parent / "configs"


def test_defaults():
    config = GameConfig()
    assert config.min_players == 5
    assert config.max_players == 25
    assert config.infiltrator_ratio == 0.3
    assert config.balance_tolerance == 2
    assert config.custom_roles is None


def test_load_config_without_path_returns_default():
    assert load_config() is default_config


def test_load_yaml_overrides(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("total_players: 12\ninfiltrator_ratio: 0.25\nuse_judge_announcements: false\n")

    config = load_config(str(path))
    assert config.total_players == 12
    assert config.infiltrator_ratio == 0.25
    assert config.use_judge_announcements is False
    assert config.max_rounds == 30


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config_from_yaml(str(path)) == GameConfig()


def test_unknown_key_warns(tmp_path, capsys):
    path = tmp_path / "odd.yaml"
    path.write_text("warp_speed: 9\n")

    config = load_config_from_yaml(str(path))
    assert not hasattr(config, "warp_speed")
    assert "warp_speed" in capsys.readouterr().out


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config_from_yaml("does/not/exist.yaml")


def test_shipped_configs():
    standard = load_config(str(CONFIGS_DIR / "default.yaml"))
    assert standard.total_players == 8

    custom = load_config(str(CONFIGS_DIR / "custom_roles.yaml"))
    assert sum(custom.custom_roles.values()) == 8
    assert custom.record_events is False


def test_custom_role_counts_are_coerced(tmp_path):
    path = tmp_path / "quoted.yaml"
    path.write_text('custom_roles:\n  bioscanner: "1"\n  alien: "1"\n  crew_member: 3\nmax_rounds: "5"\n')

    config = load_config_from_yaml(str(path))
    assert config.custom_roles == {"bioscanner": 1, "alien": 1, "crew_member": 3}
    assert config.max_rounds == 5
    assert len(assign_custom_roles(config.custom_roles).role_keys) == 5


def test_unknown_custom_role_warns_and_is_dropped(capsys):
    assert parse_custom_roles({"alien": 1, "space_pirate": 2}) == {"alien": 1}
    assert "space_pirate" in capsys.readouterr().out


@pytest.mark.parametrize("raw", [
    ["alien", "crew_member"],
    {"alien": "lots"},
    {"alien": -1},
    {"alien": True},
])
def test_malformed_custom_roles_rejected(raw):
    with pytest.raises(ValueError):
        parse_custom_roles(raw)


def test_null_custom_roles_means_standard_mode():
    assert parse_custom_roles(None) is None
