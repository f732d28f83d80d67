"""
AddonInterface: loads the configured addons and routes events between
the host and the addons
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from .base import AddonBase, AddonContext, SingletonViolation, get_class_logger
from .discovery import AddonLoader, build_addon, sanitize_addon_name
from .registry import ListenEvent, coerce_listen_event, listen_event_names

# Config key reserved for the interface itself
RESERVED_NAME = "addonInterface"


class Emitter(Protocol):
    """Outbound channel to the renderer"""

    def send(self, event_name: str, *args: Any) -> Any:
        ...


class InboundSource(Protocol):
    """Inbound channel from the renderer. Handlers are called as handler(event, *args)."""

    def on(self, event_name: str, handler: Callable[..., Any]) -> Any:
        ...


class InstanceGuard:
    """
    Marker owned by the host's composition root. Each guard admits
    exactly one AddonInterface.
    """

    def __init__(self):
        self._owner: Optional["AddonInterface"] = None

    @property
    def owner(self) -> Optional["AddonInterface"]:
        return self._owner

    def claim(self, interface: "AddonInterface") -> None:
        if self._owner is not None:
            raise SingletonViolation("Only one instance of the AddonInterface class is allowed.")
        self._owner = interface


class AddonInterface:
    """
    Loads and handles the configured addons.

    Lifecycle (all inside the constructor):
    1. load_addons() - build every enabled addon and collect its listeners
    2. install_listeners() - one inbound handler per subscribed event
    """

    def __init__(
        self,
        images: Any,
        host_logger: Optional[logging.Logger],
        emitter: Emitter,
        inbound: InboundSource,
        addon_config: Mapping[str, Any],
        log_types: Optional[List[str]] = None,
        *,
        guard: InstanceGuard,
        loader: Optional[AddonLoader] = None,
    ):
        guard.claim(self)

        self.images = images
        self.emitter = emitter
        self.inbound = inbound
        self.loader = loader or AddonLoader()
        self.log_types = list(log_types) if log_types is not None else ["info", "warn", "error"]
        self.host_logger = host_logger or logging.getLogger("teleframe")
        self.logger = get_class_logger(type(self).__name__, self.host_logger, self.log_types)

        # loaded addon instances in load order
        self.addons: List[AddonBase] = []
        # config name -> loaded addon
        self.addons_by_name: Dict[str, AddonBase] = {}
        # subscribed event names, first registrant order
        self.listeners: List[Any] = []
        self.installed_listeners: List[ListenEvent] = []

        self.load_addons(addon_config)
        self.install_listeners()
        self.logger.info("Addons loaded and initialized")

    def load_addons(self, addon_config: Mapping[str, Any]) -> List[AddonBase]:
        """Build an addon for every enabled config entry; failures skip the addon"""
        self.logger.info("Load addons...")
        loaded: List[AddonBase] = []

        for raw_name, section in addon_config.items():
            addon_name = sanitize_addon_name(raw_name)

            if not isinstance(section, dict):
                self.logger.warning(f"Ignore addon '{addon_name}': configuration is not an object.")
                continue
            if addon_name == RESERVED_NAME:
                self.logger.warning(f"Ignore addon '{addon_name}': reserved name.")
                continue
            if section.get("enabled") is False:
                self.logger.warning(f"Addon {addon_name} disabled in config.")
                continue

            context = AddonContext(
                addon_config=dict(section),
                logger=self.host_logger,
                log_types=list(self.log_types),
                images=self.images,
                interface=self,
            )
            try:
                unit = self.loader.resolve(addon_name)
                addon = build_addon(unit, context, addon_name)
            except Exception:
                self.logger.error(
                    f"Error initialize addon '{addon_name}'! Addon was disabled.", exc_info=True
                )
                continue

            self.addons.append(addon)
            self.addons_by_name[addon_name] = addon
            loaded.append(addon)
            for event_name in addon.listeners:
                if event_name not in self.listeners:
                    self.listeners.append(event_name)
            self.logger.info(f"Successfully loaded addon '{addon_name}'.")

        self.logger.info(f"Loaded {len(loaded)} of {len(addon_config)} configured addons")
        return loaded

    def install_listeners(self) -> None:
        """Install one inbound handler per subscribed event name"""
        self.logger.info("Initialize addons...")
        for event_name in self.listeners:
            event = coerce_listen_event(event_name)
            if event is None:
                self.logger.warning(
                    f"Ignore definition for unknown event listener: '{event_name}'! "
                    f"Use one of {listen_event_names()}"
                )
                continue
            if event in self.installed_listeners:
                continue
            self.inbound.on(event.value, self._make_handler(event))
            self.installed_listeners.append(event)
            self.logger.info(f"Installed listener '{event.value}'")

    def _make_handler(self, event: ListenEvent) -> Callable[..., None]:
        def handler(_event: Any, *args: Any) -> None:
            self.execute_event_callbacks(event, *args)
        return handler

    def execute_event_callbacks(self, event_name, *args) -> None:
        """
        Run the addon callbacks for an event directly.

        Called by the installed inbound handlers and by host code that
        notifies addons without going through the renderer.
        """
        event = coerce_listen_event(event_name)
        if event is None or event not in self.listeners:
            return

        for addon in self.addons:
            callbacks = addon.listeners.get(event)
            if not callbacks:
                continue
            try:
                for callback in callbacks:
                    callback(*args)
            except Exception:
                self.logger.error(
                    f"Error execute callback for addon {addon.name} event {event.value}!",
                    exc_info=True
                )

    def get_addon(self, name: str) -> Optional[AddonBase]:
        """Get a loaded addon by its config name or display name"""
        if name in self.addons_by_name:
            return self.addons_by_name[name]
        for addon in self.addons:
            if addon.name == name:
                return addon
        return None

    def get_status(self) -> Dict[str, Any]:
        return {
            "loaded": list(self.addons_by_name),
            "listeners": [event.value for event in self.installed_listeners],
        }


def init_addon_interface(
    images: Any,
    host_logger: Optional[logging.Logger],
    emitter: Emitter,
    inbound: InboundSource,
    config: Any,
    *,
    guard: InstanceGuard,
    loader: Optional[AddonLoader] = None,
) -> AddonInterface:
    """
    Create the AddonInterface from a Configuration or AddonInterfaceConfig.

    Raises SingletonViolation if the guard already admitted an interface.
    """
    section = getattr(config, "addon_interface", config)
    return AddonInterface(
        images,
        host_logger,
        emitter,
        inbound,
        section.addons,
        section.logging,
        guard=guard,
        loader=loader,
    )
