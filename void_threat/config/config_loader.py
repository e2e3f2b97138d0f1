"""
Configuration loader for YAML-based game configurations.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from .game_config import GameConfig, default_config
from ..core.roles import is_known_role

# Keys whose YAML value is coerced to the listed type
_INT_KEYS = ("min_players", "max_players", "total_players", "balance_tolerance", "max_rounds",
             "random_seed")
_FLOAT_KEYS = ("infiltrator_ratio",)


def parse_custom_roles(raw: Any) -> Optional[Dict[str, int]]:
    """
    Turn a YAML ``custom_roles`` mapping into ``{role_key: count}``.

    Counts may be quoted ("2"); they are coerced to int. Unknown role keys
    are reported and dropped. A null value means standard assignment.

    Raises:
        ValueError: If the value is not a mapping or a count is not a
            non-negative whole number
    """
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"custom_roles must be a mapping of role to count, got {type(raw).__name__}")

    role_counts: Dict[str, int] = {}
    for role_key, count in raw.items():
        role_key = str(role_key)
        if not is_known_role(role_key):
            print(f"Warning: Unknown role '{role_key}' in custom_roles, skipping")
            continue
        if isinstance(count, bool):
            raise ValueError(f"custom_roles count for '{role_key}' must be a number, got {count!r}")
        try:
            count = int(count)
        except (TypeError, ValueError):
            raise ValueError(f"custom_roles count for '{role_key}' must be a number, got {count!r}") from None
        if count < 0:
            raise ValueError(f"custom_roles count for '{role_key}' cannot be negative")
        role_counts[role_key] = count
    return role_counts


def _coerce(key: str, value: Any) -> Any:
    if value is None:
        return value
    if key == "custom_roles":
        return parse_custom_roles(value)
    if key in _INT_KEYS:
        return int(value)
    if key in _FLOAT_KEYS:
        return float(value)
    return value


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Load game configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        GameConfig instance with values from YAML file

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If the YAML file is invalid
        ValueError: If a value has the wrong shape (see parse_custom_roles)
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    config = GameConfig()
    if config_dict is None:
        return config

    for key, value in config_dict.items():
        if hasattr(config, key):
            setattr(config, key, _coerce(key, value))
        else:
            print(f"Warning: Unknown config key '{key}' in YAML file")

    return config


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """Load configuration from YAML file, or the shared default when no path is given."""
    if config_path is None:
        return default_config

    return load_config_from_yaml(config_path)
