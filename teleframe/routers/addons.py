"""
API endpoints for addon management
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ..addons import (
    AddonControl,
    AddonInterface,
    AddonNotFoundError,
    ControlError,
    ListenEvent,
    sanitize_addon_name,
)
from ..addons.registry import coerce_listen_event, input_event_names, listen_event_names
from ..config import ConfigError

logger = logging.getLogger(__name__)
router = APIRouter()


def get_addon_control(request: Request) -> AddonControl:
    """Get the addon control from the app state or raise 503"""
    ctrl = getattr(request.app.state, "addon_control", None)
    if ctrl is None:
        raise HTTPException(status_code=503, detail="Addon configuration not available")
    return ctrl


def get_addon_interface(request: Request) -> AddonInterface:
    """Get the running addon interface from the app state or raise 503"""
    interface = getattr(request.app.state, "addon_interface", None)
    if interface is None:
        raise HTTPException(status_code=503, detail="Addon system not initialized")
    return interface


# Response schemas
class AddonStatus(BaseModel):
    name: str
    enabled: bool
    loaded: bool = False


class AddonListResponse(BaseModel):
    addons: List[AddonStatus]
    listeners: List[str] = Field(default_factory=list)


class EventVocabularyResponse(BaseModel):
    input: List[str]
    listen: List[str]


class ControlResponse(BaseModel):
    success: bool
    changed: bool
    message: str


class ArgsRequest(BaseModel):
    args: List[Any] = Field(default_factory=list)


def _run(ctrl: AddonControl, command: str, name: str, *args: Any) -> ControlResponse:
    name = sanitize_addon_name(name)
    try:
        result = ctrl.run(command, name, *args)
    except AddonNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ControlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConfigError as e:
        logger.error(f"Failed to persist addon config for '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return ControlResponse(success=True, changed=result.changed, message=result.message)


@router.get("/", response_model=AddonListResponse)
async def list_addons(request: Request):
    """List configured addons with their enabled and loaded state"""
    ctrl = get_addon_control(request)
    interface: Optional[AddonInterface] = getattr(request.app.state, "addon_interface", None)
    loaded = set(interface.get_status()["loaded"]) if interface else set()

    addons = []
    for name, section in ctrl.addons.items():
        enabled = not (isinstance(section, dict) and section.get("enabled") is False)
        addons.append(AddonStatus(name=name, enabled=enabled, loaded=name in loaded))

    return AddonListResponse(
        addons=addons,
        listeners=interface.get_status()["listeners"] if interface else [],
    )


@router.get("/events", response_model=EventVocabularyResponse)
async def list_events():
    """Get the event names addons can send and listen to"""
    return EventVocabularyResponse(input=input_event_names(), listen=listen_event_names())


@router.post("/events/{event_name}")
async def inject_event(event_name: str, request: Request, body: Optional[ArgsRequest] = None):
    """Run the addon callbacks for an inbound event"""
    event: Optional[ListenEvent] = coerce_listen_event(event_name)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Unknown event '{event_name}'")

    interface = get_addon_interface(request)
    args = body.args if body else []
    interface.execute_event_callbacks(event, *args)
    return {"event": event.value, "dispatched": event in interface.listeners}


@router.post("/{name}/enable", response_model=ControlResponse)
async def enable_addon(name: str, request: Request):
    """Enable an installed addon"""
    return _run(get_addon_control(request), "enable", name)


@router.post("/{name}/disable", response_model=ControlResponse)
async def disable_addon(name: str, request: Request):
    """Disable an addon"""
    return _run(get_addon_control(request), "disable", name)


@router.delete("/{name}", response_model=ControlResponse)
async def remove_addon(name: str, request: Request):
    """Remove the configuration of an addon"""
    return _run(get_addon_control(request), "remove", name)


@router.put("/{name}/config", response_model=ControlResponse)
async def configure_addon(name: str, body: ArgsRequest, request: Request):
    """Change addon settings: args are <key> <value> or the addon's config_ctrl arguments"""
    return _run(get_addon_control(request), "config", name, *body.args)
