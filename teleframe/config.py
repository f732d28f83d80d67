"""
Configuration settings and the persisted TeleFrame config document
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Top-level key of the addon section in the config document
ADDON_SECTION_KEY = "addonInterface"

LogType = Literal["info", "warn", "error"]


class ConfigError(Exception):
    """The config document could not be read, parsed or written"""


@dataclass
class Settings:
    """Process settings for the addon system"""
    config_path: str = "config/config.json"
    addons_dir: str = "addons"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            config_path=os.getenv("TELEFRAME_CONFIG_PATH", "config/config.json"),
            addons_dir=os.getenv("TELEFRAME_ADDONS_DIR", "addons"),
            log_level=os.getenv("TELEFRAME_LOG_LEVEL", "INFO"),
        )


class AddonInterfaceConfig(BaseModel):
    """The addonInterface section: enabled log types and per-addon settings"""
    model_config = ConfigDict(extra="allow")

    logging: List[LogType] = Field(default_factory=lambda: ["info", "warn", "error"])
    addons: Dict[str, Any] = Field(default_factory=dict)


class Configuration:
    """
    The TeleFrame config document.

    Only the addonInterface section is modelled; every other top-level key
    is kept as loaded and written back unchanged.
    """

    def __init__(self, path: Union[str, Path], addon_interface: Optional[AddonInterfaceConfig] = None,
                 extra: Optional[Dict[str, Any]] = None):
        self.path = Path(path)
        self.addon_interface = addon_interface or AddonInterfaceConfig()
        self.extra: Dict[str, Any] = extra or {}

    @property
    def addons(self) -> Dict[str, Any]:
        return self.addon_interface.addons

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Configuration":
        """Read the config document. A missing file yields an empty configuration."""
        path = Path(path)
        if not path.exists():
            return cls(path)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to read config '{path}': {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config '{path}' must contain a JSON object")

        section = data.pop(ADDON_SECTION_KEY, None) or {}
        try:
            addon_interface = AddonInterfaceConfig.model_validate(section)
        except ValidationError as e:
            raise ConfigError(f"Invalid '{ADDON_SECTION_KEY}' section in '{path}': {e}") from e

        return cls(path, addon_interface, data)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data[ADDON_SECTION_KEY] = self.addon_interface.model_dump()
        return data

    def write_config(self) -> None:
        """Write the document back to its path, replacing the file atomically"""
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigError(f"Failed to write config '{self.path}': {e}") from e
