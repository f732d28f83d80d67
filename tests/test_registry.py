from teleframe.addons.registry import (
    InputEvent,
    ListenEvent,
    coerce_input_event,
    coerce_listen_event,
    input_event_names,
    listen_event_names,
)


def test_vocabularies_are_closed_and_complete():
    assert len(InputEvent) == 17
    assert len(ListenEvent) == 16
    assert "playPause" in input_event_names()
    assert "reloadRenderer" in input_event_names()
    assert "renderer-ready" in listen_event_names()
    assert "changedActiveImage" in listen_event_names()


def test_coerce_known_names_returns_members():
    assert coerce_input_event("messageBox") is InputEvent.MESSAGE_BOX
    assert coerce_input_event(InputEvent.STAR) is InputEvent.STAR
    assert coerce_listen_event("teleFrame-ready") is ListenEvent.TELEFRAME_READY
    assert coerce_listen_event(ListenEvent.NEW_IMAGE) is ListenEvent.NEW_IMAGE


def test_coerce_unknown_names_returns_none():
    assert coerce_input_event("explode") is None
    assert coerce_input_event("newImage") is None
    assert coerce_listen_event("next") is None
    assert coerce_listen_event("") is None


def test_members_compare_equal_to_their_wire_names():
    assert ListenEvent.NEW_IMAGE == "newImage"
    assert InputEvent.PLAY_PAUSE.value == "playPause"
