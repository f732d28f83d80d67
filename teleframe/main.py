"""
TeleFrame addon host - HTTP control API
"""

import logging
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .addons import AddonControl, AddonInterface, AddonLoader
from .config import Configuration, Settings
from .routers import addons as addons_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    interface: Optional[AddonInterface] = None,
    configuration: Optional[Configuration] = None,
    loader: Optional[AddonLoader] = None,
) -> FastAPI:
    """
    Build the control API.

    The host passes its running AddonInterface to enable event injection;
    without it only the persisted configuration can be managed.
    """
    settings = settings or Settings.from_env()
    if loader is None:
        loader = interface.loader if interface is not None else AddonLoader(settings.addons_dir)
    if configuration is None:
        configuration = Configuration.load(settings.config_path)

    app = FastAPI(
        title="TeleFrame Addons",
        description="Addon management for the TeleFrame host",
        version=__version__,
    )
    app.state.addon_control = AddonControl(configuration, loader)
    app.state.addon_interface = interface

    app.include_router(addons_router.router, prefix="/api/addons", tags=["addons"])

    @app.get("/")
    async def root():
        return {
            "service": "TeleFrame Addons",
            "version": __version__,
            "addon_interface": "running" if app.state.addon_interface is not None else "detached",
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    logger.info(f"Addon control API created for config '{configuration.path}'")
    return app
