"""
Event name vocabularies for addon communication
"""

from enum import Enum
from typing import Optional, Union


class InputEvent(str, Enum):
    """Events addons may send to the renderer"""
    NEXT = "next"
    PREVIOUS = "previous"
    PAUSE = "pause"
    PLAY = "play"
    PLAY_PAUSE = "playPause"
    NEWEST = "newest"
    DELETE = "delete"
    STAR = "star"
    MUTE = "mute"
    REBOOT = "reboot"
    SHUTDOWN = "shutdown"
    RECORD = "record"
    ASK_CONFIRM = "askConfirm"
    ASK_CANCEL = "askCancel"

    # Info box for the renderer. Requires 'title' or 'html' in the payload
    MESSAGE_BOX = "messageBox"
    # Argument: the updated images collection
    IMAGES_UPDATED = "imagesUpdated"
    RELOAD_RENDERER = "reloadRenderer"


class ListenEvent(str, Enum):
    """Events addons can subscribe to"""
    RENDERER_READY = "renderer-ready"
    # Fired once when the images collection was initialized
    IMAGES_LOADED = "images-loaded"
    # Fired once when the host objects are prepared and running
    TELEFRAME_READY = "teleFrame-ready"

    # Arguments: current image index
    STAR_IMAGE = "starImage"
    UNSTAR_IMAGE = "unstarImage"
    DELETE_IMAGE = "deleteImage"
    IMAGE_DELETED = "imageDeleted"
    REMOVE_IMAGE_UNSEEN = "removeImageUnseen"
    NEW_IMAGE = "newImage"

    # Arguments: True|False
    PAUSED = "paused"
    MUTED = "muted"

    RECORD_STARTED = "recordStarted"
    RECORD_STOPPED = "recordStopped"
    RECORD_ERROR = "recordError"

    # Arguments: current image index, fade time
    CHANGING_ACTIVE_IMAGE = "changingActiveImage"
    # Arguments: current image index
    CHANGED_ACTIVE_IMAGE = "changedActiveImage"


def coerce_input_event(name: Union[str, InputEvent]) -> Optional[InputEvent]:
    """Return the InputEvent for a name, or None if it is not in the vocabulary"""
    try:
        return InputEvent(name)
    except ValueError:
        return None


def coerce_listen_event(name: Union[str, ListenEvent]) -> Optional[ListenEvent]:
    """Return the ListenEvent for a name, or None if it is not in the vocabulary"""
    try:
        return ListenEvent(name)
    except ValueError:
        return None


def input_event_names() -> list:
    return [event.value for event in InputEvent]


def listen_event_names() -> list:
    return [event.value for event in ListenEvent]
