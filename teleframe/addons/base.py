"""
Addon base class and shared plumbing
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union, TYPE_CHECKING

from .registry import ListenEvent, coerce_input_event, coerce_listen_event, listen_event_names

if TYPE_CHECKING:
    from .manager import AddonInterface

LOG_TYPES = ("info", "warn", "error")


class AddonError(Exception):
    """Base class for addon system errors"""


class SingletonViolation(AddonError):
    """A second AddonInterface was constructed against the same guard"""


class AddonInitError(AddonError):
    """An addon was constructed without a running AddonInterface"""


class AddonDeclarationError(AddonError):
    """An addon module does not export a usable addon"""


class AddonLogger(logging.LoggerAdapter):
    """
    Logger adapter that prefixes messages with [name] and only passes
    the enabled log types (info, warn, error).
    """

    def __init__(self, name: str, logger: logging.Logger, enabled_types: Iterable[str]):
        super().__init__(logger, {"addon": name})
        self.prefix = name
        self.enabled_types = frozenset(enabled_types)

    @staticmethod
    def log_type(level: int) -> str:
        if level >= logging.ERROR:
            return "error"
        if level >= logging.WARNING:
            return "warn"
        return "info"

    def isEnabledFor(self, level: int) -> bool:
        if self.log_type(level) not in self.enabled_types:
            return False
        return self.logger.isEnabledFor(level)

    def process(self, msg, kwargs):
        return f"[{self.prefix}] {msg}", kwargs


def get_class_logger(
    name: str,
    logger: Optional[logging.Logger] = None,
    enabled_types: Optional[Iterable[str]] = None,
) -> AddonLogger:
    """Build a name-prefixed logger on top of the host logger"""
    if logger is None:
        logger = logging.getLogger("teleframe.addons")
    if enabled_types is None:
        enabled_types = LOG_TYPES
    return AddonLogger(name, logger, enabled_types)


@dataclass
class AddonContext:
    """Everything an addon receives from the AddonInterface at construction"""
    addon_config: Dict[str, Any]  # the persisted config section of the addon
    logger: Optional[logging.Logger] = None  # host logger
    log_types: List[str] = field(default_factory=lambda: list(LOG_TYPES))
    images: Any = None  # shared images collection, not owned
    interface: Optional["AddonInterface"] = None


class AddonBase:
    """
    Base class for TeleFrame addons.

    Subclasses register callbacks for renderer events with
    register_listener() and send input events with send_event():

        class Clock(AddonBase):
            def __init__(self, context):
                super().__init__(context)
                self.register_listener(ListenEvent.NEW_IMAGE, self.on_new_image)

            def on_new_image(self, *args):
                self.send_event(InputEvent.NEWEST)
    """

    def __init__(self, context: AddonContext, logger_name: Optional[str] = None):
        """
        Args:
            context: AddonContext prepared by the AddonInterface
            logger_name: name for log output. Only set when the instance wraps
                an addon declared as a function.
        """
        if context.interface is None:
            raise AddonInitError("AddonInterface was not initialized.")

        self._interface = context.interface
        self._name = logger_name or type(self).__name__
        self._images = context.images
        self._logger = get_class_logger(f"addon {self._name}", context.logger, context.log_types)

        # event -> callbacks in registration order
        self.listeners: Dict[ListenEvent, List[Callable]] = {}

        # The addon's own settings flattened onto the root, without the
        # transient host references
        config: Dict[str, Any] = {"log_types": list(context.log_types)}
        config.update(context.addon_config or {})
        self._config: Mapping[str, Any] = MappingProxyType(config)

    @property
    def name(self) -> str:
        return self._name

    @property
    def images(self) -> Any:
        return self._images

    @property
    def logger(self) -> AddonLogger:
        return self._logger

    @property
    def config(self) -> Mapping[str, Any]:
        return self._config

    def register_listener(
        self,
        event_names: Union[str, ListenEvent, Iterable[Union[str, ListenEvent]]],
        callbacks: Union[Callable, Iterable[Callable]],
    ) -> None:
        """
        Register callbacks for events sent from the renderer.

        Args:
            event_names: one event name or a list of names
            callbacks: one callback or a list of callbacks, called in order
        """
        if isinstance(event_names, str):
            event_names = [event_names]
        if callable(callbacks):
            callbacks = [callbacks]
        callbacks = list(callbacks)

        for event_name in event_names:
            event = coerce_listen_event(event_name)
            if event is None:
                self.logger.warning(
                    f"Ignore definition for unknown event listener: '{event_name}'! "
                    f"Use one of {listen_event_names()}"
                )
                continue
            self.listeners.setdefault(event, []).extend(callbacks)

    def send_event(self, event_name, *args) -> None:
        """Send an input event to the renderer"""
        event = coerce_input_event(event_name)
        if event is None:
            self.logger.warning(f"send_event: Ignored invalid event name '{event_name}'!")
            return

        try:
            self._interface.emitter.send(event.value, *args)
        except Exception:
            self.logger.error(f"Error send input event {event.value}!", exc_info=True)
