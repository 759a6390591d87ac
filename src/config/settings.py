"""
Configuration loader and helpers for shall.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path("shall.yaml")
ENV_CONFIG_PATH = "SHALL_CONFIG"


@dataclass(frozen=True)
class AppConfig:
    """Container for raw configuration data and path helpers."""

    root_dir: Path
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        """Load configuration from YAML and normalize the root directory.

        An explicit path or ``$SHALL_CONFIG`` must exist. When neither is
        given, a missing ``shall.yaml`` yields an empty configuration.
        """
        config_value = os.environ.get(ENV_CONFIG_PATH)
        config_path = path
        required = True
        if config_path is None:
            if config_value:
                config_path = Path(config_value)
            else:
                config_path = DEFAULT_CONFIG_PATH
                required = False
        config_path = config_path.expanduser()
        if not config_path.is_absolute():
            config_path = (Path.cwd() / config_path).resolve()
        if not config_path.exists():
            if required:
                raise FileNotFoundError(f"Config file not found: {config_path}")
            return cls.empty()
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")
        return cls(root_dir=config_path.parent, raw=data)

    @classmethod
    def empty(cls) -> "AppConfig":
        """Return a configuration with every value at its default."""
        return cls(root_dir=Path.cwd(), raw={})

    def get(self, *keys: str, default: Any = None) -> Any:
        """Retrieve nested configuration values with an optional default."""
        node: Any = self.raw
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def get_bool(self, *keys: str, default: bool) -> bool:
        """Retrieve a true/false value; quoted strings such as "false" are rejected."""
        value = self.get(*keys, default=default)
        if not isinstance(value, bool):
            raise ValueError(f"{'.'.join(keys)} must be true or false, got {value!r}")
        return value

    def get_int(self, *keys: str, default: int) -> int:
        """Retrieve an integer value."""
        value = self.get(*keys, default=default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{'.'.join(keys)} must be an integer, got {value!r}")
        return value

    def get_float(self, *keys: str, default: float) -> float:
        """Retrieve a numeric value as a float."""
        value = self.get(*keys, default=default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{'.'.join(keys)} must be a number, got {value!r}")
        return float(value)

    def resolve_path(self, *keys: str, default: str | None = None) -> Optional[Path]:
        """Resolve a path from configuration keys to an absolute Path, if set."""
        value = self.get(*keys, default=default)
        if value is None:
            return None
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = (self.root_dir / path).resolve()
        return path
