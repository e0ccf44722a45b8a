"""Client configuration."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from dacite import Config, from_dict


DEFAULT_BASE_URL = "https://www.speedrun.com/api/v1"


@dataclass(frozen=True)
class ClientConfig:
    """Settings threaded through the HTTP transport at construction time."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    user_agent: str = "speedrun-client"
    # threads used when resolving lists of identifiers; 1 means sequential
    max_workers: int = 4

    def __post_init__(self):
        """Normalise the base URL so link prefixes compare cleanly."""
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


def config_from_dict(data: Dict[str, Any]) -> ClientConfig:
    """Build a ClientConfig from a plain dictionary, e.g. parsed JSON."""
    return from_dict(data_class=ClientConfig, data=data, config=Config(cast=[float]))


def load_config(path: Union[str, Path]) -> ClientConfig:
    """Read a JSON configuration file into a ClientConfig.

    Args:
        path: Path to a JSON file; missing keys fall back to defaults

    Returns:
        The parsed configuration

    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return config_from_dict(data)
