"""
Engine configuration.

Settings are loaded from a YAML file; anything not set falls back to the
dataclass defaults.
"""
import os
from dataclasses import dataclass, fields
from typing import Any, Optional

import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "assets", "config", "engine.yaml"
)


@dataclass
class EngineConfig:
    """Configuration for building engine services."""
    seed: Optional[int] = None            # None seeds from OS entropy
    log_max_messages: int = 1000
    log_level: str = "INFO"               # Name of a LogLevel member
    weapons_path: Optional[str] = None    # None uses the packaged catalog
    skills_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown engine config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> "EngineConfig":
        """Load configuration from YAML (the packaged default if no path)."""
        path = path or DEFAULT_CONFIG_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Engine config file not found: {path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Engine config {path} must be a mapping")
        section = data.get("engine") or {}
        if not isinstance(section, dict):
            raise ValueError(f"Engine config {path}: 'engine' must be a mapping")
        return cls.from_dict(section)
