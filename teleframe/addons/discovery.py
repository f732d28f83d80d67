"""
Addon lookup and construction

Addons come from two places:
- factories registered in code with AddonLoader.register()
- the addons directory, one package (<name>/__init__.py) or module (<name>.py) per addon

A loaded addon module exports `addon` (an AddonBase subclass or a plain
function taking an AddonBase instance) and optionally `config_ctrl`.
"""

import importlib.util
import inspect
import logging
import re
import sys
from pathlib import Path
from types import ModuleType, SimpleNamespace
from typing import Any, Callable, Dict, Optional, Union

from .base import AddonBase, AddonContext, AddonDeclarationError

logger = logging.getLogger(__name__)

_INVALID_NAME_CHARS = re.compile(r"[./\\\s]")
_MODULE_PREFIX = "teleframe_addon_"


def sanitize_addon_name(addon_name: str) -> str:
    """Remove path traversal and whitespace characters from an addon name"""
    return _INVALID_NAME_CHARS.sub("", addon_name)


class FunctionAddon(AddonBase):
    """Wraps an addon declared as a plain init function"""

    def __init__(self, context: AddonContext, init_function: Callable, logger_name: Optional[str] = None):
        super().__init__(context, logger_name)
        init_function(self)


def load_addon_module(path: Path, module_name: str) -> ModuleType:
    """Import a single file or package addon from the given path"""
    if path.is_dir():
        spec = importlib.util.spec_from_file_location(
            module_name,
            path / "__init__.py",
            submodule_search_locations=[str(path)]
        )
    else:
        spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load spec for {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


class AddonLoader:
    """Resolves addon names to loadable addon units"""

    def __init__(self, addons_dir: Union[str, Path] = "addons"):
        self.addons_dir = Path(addons_dir)
        self._factories: Dict[str, SimpleNamespace] = {}
        self._modules: Dict[str, Any] = {}

    def register(self, name: str, unit: Callable, config_ctrl: Optional[Callable] = None) -> None:
        """Register an addon class or function under a name"""
        self._factories[name] = SimpleNamespace(addon=unit, config_ctrl=config_ctrl)
        logger.debug(f"Registered addon factory: {name}")

    def addon_path(self, name: str) -> Optional[Path]:
        """Return the package or module path for an addon, if one exists"""
        name = sanitize_addon_name(name)
        package = self.addons_dir / name
        if (package / "__init__.py").is_file():
            return package
        module = self.addons_dir / f"{name}.py"
        if module.is_file():
            return module
        return None

    def exists(self, name: str) -> bool:
        return name in self._factories or self.addon_path(name) is not None

    def load(self, name: str) -> Any:
        """Return the registered factory or the imported addon module"""
        if name in self._factories:
            return self._factories[name]
        if name in self._modules:
            return self._modules[name]

        path = self.addon_path(name)
        if path is None:
            raise ImportError(f"No addon named '{name}' in {self.addons_dir}")
        module = load_addon_module(path, f"{_MODULE_PREFIX}{name}")
        self._modules[name] = module
        return module

    def resolve(self, name: str) -> Any:
        """Return the constructible unit for an addon"""
        loaded = self.load(name)
        return getattr(loaded, "addon", loaded)

    def config_ctrl(self, name: str) -> Optional[Callable]:
        ctrl = getattr(self.load(name), "config_ctrl", None)
        return ctrl if callable(ctrl) else None


def _function_name(unit: Callable, default: str) -> str:
    name = getattr(unit, "__name__", "")
    if not name or name == "<lambda>":
        return default
    return name


def build_addon(unit: Any, context: AddonContext, addon_name: str) -> AddonBase:
    """
    Construct an addon instance from an exported unit.

    Classes must extend AddonBase and are called with the context.
    Any other callable is run as an init function on a FunctionAddon.
    """
    if inspect.isclass(unit):
        if not issubclass(unit, AddonBase):
            raise AddonDeclarationError(
                f"Invalid class declaration for addon '{addon_name}'! The class must extend the AddonBase class."
            )
        instance = unit(context)
    elif callable(unit):
        instance = FunctionAddon(context, unit, _function_name(unit, addon_name))
    else:
        raise AddonDeclarationError("Invalid addon declaration! Requires class or function.")

    if not isinstance(instance, AddonBase):
        raise AddonDeclarationError(
            f"Invalid class declaration for addon '{addon_name}'! The class must extend the AddonBase class."
        )
    return instance
