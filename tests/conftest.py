import logging
import textwrap
from pathlib import Path

import pytest

from teleframe.addons import AddonInterface, AddonLoader, InstanceGuard
from teleframe.config import AddonInterfaceConfig, Configuration


class FakeEmitter:
    def __init__(self):
        self.sent = []

    def send(self, event_name, *args):
        self.sent.append((event_name, args))


class FailingEmitter:
    def send(self, event_name, *args):
        raise RuntimeError("renderer gone")


class FakeInbound:
    """Stands in for the renderer channel; handlers get a sender object first"""

    def __init__(self):
        self.handlers = {}

    def on(self, event_name, handler):
        self.handlers.setdefault(event_name, []).append(handler)

    def fire(self, event_name, *args):
        for handler in self.handlers.get(event_name, []):
            handler(object(), *args)


@pytest.fixture
def emitter():
    return FakeEmitter()


@pytest.fixture
def inbound():
    return FakeInbound()


@pytest.fixture
def guard():
    return InstanceGuard()


@pytest.fixture
def host_logger(caplog):
    caplog.set_level(logging.DEBUG)
    return logging.getLogger("teleframe.test")


@pytest.fixture
def addons_dir(tmp_path) -> Path:
    path = tmp_path / "addons"
    path.mkdir()
    return path


@pytest.fixture
def loader(addons_dir) -> AddonLoader:
    return AddonLoader(addons_dir)


@pytest.fixture
def write_addon(addons_dir):
    """Write an addon package (<name>/__init__.py) or module (<name>.py)"""

    def _write(name, source, package=True):
        source = textwrap.dedent(source)
        if package:
            path = addons_dir / name
            path.mkdir()
            (path / "__init__.py").write_text(source)
            return path
        path = addons_dir / f"{name}.py"
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def make_interface(guard, emitter, inbound, host_logger, loader):
    def _make(addons, log_types=None, images=None):
        return AddonInterface(
            images if images is not None else ["a.jpg", "b.jpg"],
            host_logger,
            emitter,
            inbound,
            addons,
            log_types,
            guard=guard,
            loader=loader,
        )

    return _make


@pytest.fixture
def configuration(tmp_path):
    def _make(addons, extra=None):
        return Configuration(
            tmp_path / "config" / "config.json",
            AddonInterfaceConfig(addons=addons),
            extra,
        )

    return _make
