import pytest
from fastapi.testclient import TestClient

from teleframe.addons import AddonBase
from teleframe.config import Settings
from teleframe.main import create_app


class Collector(AddonBase):
    received = []

    def __init__(self, context):
        super().__init__(context)
        self.register_listener("starImage", self.on_star)

    def on_star(self, index):
        Collector.received.append(index)


@pytest.fixture
def settings(tmp_path, addons_dir):
    return Settings(config_path=str(tmp_path / "config.json"), addons_dir=str(addons_dir))


@pytest.fixture
def client(settings, configuration, loader, write_addon):
    write_addon("clock", "def addon(instance):\n    pass\n")
    config = configuration({"clock": {"enabled": True}, "weather": {"enabled": False}})
    app = create_app(settings, configuration=config, loader=loader)
    return TestClient(app)


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["addon_interface"] == "detached"


def test_list_addons(client):
    data = client.get("/api/addons/").json()

    assert data["addons"] == [
        {"name": "clock", "enabled": True, "loaded": False},
        {"name": "weather", "enabled": False, "loaded": False},
    ]
    assert data["listeners"] == []


def test_event_vocabularies(client):
    data = client.get("/api/addons/events").json()
    assert "playPause" in data["input"]
    assert "newImage" in data["listen"]


def test_enable_disable_remove(client):
    response = client.post("/api/addons/clock/enable")
    assert response.status_code == 200
    assert response.json()["changed"] is False

    response = client.post("/api/addons/clock/disable")
    assert response.json() == {"success": True, "changed": True, "message": "Disabled addon 'clock'."}

    assert client.delete("/api/addons/weather").json()["changed"] is True
    assert [a["name"] for a in client.get("/api/addons/").json()["addons"]] == ["clock"]


def test_enable_unknown_addon_is_404(client):
    assert client.post("/api/addons/ghost/enable").status_code == 404


def test_configure(client):
    response = client.put("/api/addons/clock/config", json={"args": ["format", "HH:mm"]})
    assert response.status_code == 200
    assert response.json()["changed"] is True

    assert client.put("/api/addons/clock/config", json={"args": ["format"]}).status_code == 400
    assert client.put("/api/addons/ghost/config", json={"args": ["a", "b"]}).status_code == 404


def test_inject_event_requires_interface(client):
    assert client.post("/api/addons/events/starImage", json={"args": [1]}).status_code == 503
    assert client.post("/api/addons/events/explode").status_code == 404


def test_inject_event_dispatches_to_addons(settings, configuration, loader, make_interface):
    Collector.received = []
    loader.register("collector", Collector)
    interface = make_interface({"collector": {}})
    app = create_app(settings, interface=interface, configuration=configuration({"collector": {}}))
    client = TestClient(app)

    response = client.post("/api/addons/events/starImage", json={"args": [4]})

    assert response.json() == {"event": "starImage", "dispatched": True}
    assert Collector.received == [4]
    data = client.get("/api/addons/").json()
    assert data["addons"] == [{"name": "collector", "enabled": True, "loaded": True}]
    assert data["listeners"] == ["starImage"]
    assert client.get("/").json()["addon_interface"] == "running"
