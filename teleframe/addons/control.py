"""
Addon control commands: status, enable, disable, remove, config
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..config import ConfigError, Configuration
from .base import AddonError
from .discovery import AddonLoader, sanitize_addon_name

logger = logging.getLogger(__name__)

COMMANDS = ("status", "enable", "disable", "remove", "config")
HELP_FLAGS = ("help", "--help", "-h")

USAGE = """
Usage: teleframe-addon <command> <addonName> [...arguments]

Commands:
  status                        list the configured addons in load order
  enable  <addonName>           enable an installed addon
  disable <addonName>           disable an addon
  remove  <addonName>           remove the addon configuration
  config  <addonName> <key> <value> [...]
                                change the addon configuration
"""


class ControlError(AddonError):
    """Invalid control command or arguments"""


class AddonNotFoundError(ControlError):
    """The addon is not installed or has no implementation"""


@dataclass
class ControlResult:
    changed: bool
    message: str


class AddonControl:
    """
    Commands on the persisted addon configuration.

    Every command writes the configuration only when it changed something.
    """

    def __init__(self, configuration: Configuration, loader: AddonLoader):
        self.configuration = configuration
        self.loader = loader

    @property
    def addons(self):
        return self.configuration.addons

    def _write(self) -> None:
        self.configuration.write_config()

    def status(self) -> str:
        lines = [
            "",
            "Installed in the order they are loaded when enabled:",
            "-" * 61,
            f"{'Addon'.ljust(50)} | enabled",
            "-" * 61,
        ]
        for name, section in self.addons.items():
            enabled = not (isinstance(section, dict) and section.get("enabled") is False)
            lines.append(f"{name.ljust(50)} | {str(enabled).lower()}")
        return "\n".join(lines) + "\n"

    def enable(self, addon_name: str) -> ControlResult:
        if not self.loader.exists(addon_name):
            raise AddonNotFoundError(
                f"Addon folder doesn't exist '{self.loader.addons_dir / addon_name}'"
            )

        section = self.addons.get(addon_name)
        if section is None:
            self.addons[addon_name] = {"enabled": True}
        elif section.get("enabled") is False:
            section["enabled"] = True
        else:
            return ControlResult(False, f"Nothing to do. Addon '{addon_name}' was already enabled.")

        self._write()
        return ControlResult(True, f"Enabled addon '{addon_name}'.")

    def disable(self, addon_name: str) -> ControlResult:
        section = self.addons.get(addon_name)
        if section is None or section.get("enabled") is False:
            return ControlResult(
                False, f"Nothing to do. Addon '{addon_name}' was already disabled or not installed."
            )

        section["enabled"] = False
        self._write()
        return ControlResult(True, f"Disabled addon '{addon_name}'.")

    def remove(self, addon_name: str) -> ControlResult:
        if addon_name not in self.addons:
            return ControlResult(
                False, f"Nothing to do. Addon '{addon_name}' was not enabled or installed."
            )

        del self.addons[addon_name]
        self._write()
        return ControlResult(True, f"Removed addon '{addon_name}'.")

    def configure(self, addon_name: str, *args: Any) -> ControlResult:
        """
        Change addon settings.

        Without a config_ctrl function exported by the addon, args are
        <key> <value>. Otherwise config_ctrl(section, set_value, *args) decides
        and returns whether the configuration changed.
        """
        if len(args) < 2:
            raise ControlError(
                f"Error configuring addon '{addon_name}'! Too few arguments. Requires <key> <value>"
            )
        section = self.addons.get(addon_name)
        if section is None:
            raise AddonNotFoundError(f"Error configuring not installed addon '{addon_name}'!")

        config_ctrl: Optional[Callable] = None
        try:
            config_ctrl = self.loader.config_ctrl(addon_name)
        except Exception:
            logger.error(f"Failed to load config_ctrl for addon '{addon_name}'!", exc_info=True)

        def set_value(key: str, value: Any) -> bool:
            section[key] = value
            return True

        if config_ctrl is not None:
            logger.info(f"Use config_ctrl function from addon '{addon_name}'.")
            changed = bool(config_ctrl(section, set_value, *args))
        else:
            changed = set_value(args[0], args[1])

        if not changed:
            return ControlResult(False, f"Nothing to do. Config unchanged for addon '{addon_name}'.")
        self._write()
        return ControlResult(True, f"Config changed for addon '{addon_name}'.")

    def run(self, command: str, addon_name: str, *args: Any) -> ControlResult:
        if command == "enable":
            return self.enable(addon_name)
        if command == "disable":
            return self.disable(addon_name)
        if command == "remove":
            return self.remove(addon_name)
        if command == "config":
            return self.configure(addon_name, *args)
        raise ControlError(f"Unknown command '{command}'")


def control(
    command: Optional[str],
    addon_name: Optional[str] = None,
    *args: Any,
    configuration: Optional[Configuration] = None,
    loader: Optional[AddonLoader] = None,
    config_path: str = "config/config.json",
    addons_dir: str = "addons",
) -> int:
    """
    Run a control command and print the outcome.

    Returns the process exit status: non-zero for invalid arguments or
    failures of a destructive command. status always returns 0.
    """
    if not command or command in HELP_FLAGS:
        print(USAGE)
        return 0 if command else 1
    if command not in COMMANDS or (command != "status" and not addon_name):
        print(USAGE, file=sys.stderr)
        return 1

    failure_status = 0 if command == "status" else 1

    if configuration is None:
        try:
            configuration = Configuration.load(config_path)
        except ConfigError as e:
            print(f"Error loading configuration! {e}", file=sys.stderr)
            return failure_status
    ctrl = AddonControl(configuration, loader or AddonLoader(addons_dir))

    if command == "status":
        print(ctrl.status())
        return 0

    addon_name = sanitize_addon_name(addon_name)
    try:
        result = ctrl.run(command, addon_name, *args)
    except ControlError as e:
        print(str(e), file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Control command failed", exc_info=True)
        print(f"Error running '{command}' for addon '{addon_name}'! {e}", file=sys.stderr)
        return 1

    print(result.message)
    return 0
