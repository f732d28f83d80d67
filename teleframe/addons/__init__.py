"""
TeleFrame Addon System

Lets the host load optional addons and routes events between the
renderer and the addons:
- Event vocabularies for both directions
- Base class every addon extends (directly or through an init function)
- Loader for registered and on-disk addons
- AddonInterface for loading and event fan-out
- Control commands for the persisted addon configuration
"""

from .registry import InputEvent, ListenEvent
from .base import (
    AddonBase,
    AddonContext,
    AddonError,
    AddonInitError,
    AddonDeclarationError,
    SingletonViolation,
    get_class_logger,
)
from .discovery import AddonLoader, FunctionAddon, build_addon, sanitize_addon_name
from .manager import AddonInterface, InstanceGuard, init_addon_interface
from .control import AddonControl, AddonNotFoundError, ControlError, ControlResult, control

__all__ = [
    "InputEvent",
    "ListenEvent",
    "AddonBase",
    "AddonContext",
    "AddonError",
    "AddonInitError",
    "AddonDeclarationError",
    "SingletonViolation",
    "get_class_logger",
    "AddonLoader",
    "FunctionAddon",
    "build_addon",
    "sanitize_addon_name",
    "AddonInterface",
    "InstanceGuard",
    "init_addon_interface",
    "AddonControl",
    "AddonNotFoundError",
    "ControlError",
    "ControlResult",
    "control",
]
