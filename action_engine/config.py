"""Configuration loader for the action engine."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

ENV_PREFIX = "ACTION_ENGINE_"

DEFAULTS: Dict[str, Any] = {
    "max_wait_ms": 30000,
    "default_wait_until": "networkidle2",
    "default_polling": "raf",
    "stop_on_error": True,
    "log_prefix": "ActionExecutor",
}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    max_wait_ms: int = DEFAULTS["max_wait_ms"]
    default_wait_until: str = DEFAULTS["default_wait_until"]
    default_polling: str = DEFAULTS["default_polling"]
    stop_on_error: bool = DEFAULTS["stop_on_error"]
    log_prefix: str = DEFAULTS["log_prefix"]

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "EngineConfig":
        data = dict(DEFAULTS)
        data.update(mapping)
        return cls(
            max_wait_ms=int(data["max_wait_ms"]),
            default_wait_until=str(data["default_wait_until"]),
            default_polling=str(data["default_polling"]),
            stop_on_error=str(data["stop_on_error"]).lower() in {"true", "1", "yes"},
            log_prefix=str(data["log_prefix"]),
        )


def _load_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(config_path: Optional[Path] = None) -> EngineConfig:
    """Load configuration from environment, optional TOML file, and defaults."""

    env_map: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            env_map[key[len(ENV_PREFIX):].lower()] = value

    path = config_path or Path("config.toml")
    file_map = _load_toml(path).get("engine", {})

    merged = {**file_map, **env_map}
    return EngineConfig.from_mapping(merged)
