import os
from types import SimpleNamespace

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from simgallery.config import RuntimeConfig
from simgallery.core.manager import RuntimeManager
from simgallery.core.scheduler import ManualFrameSource
from simgallery.core.surface import RenderSurface


class RecordingContext:
    """Drawing context that records every call as (method, args)."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.calls.append((name, args))

        return record

    def names(self):
        return [name for name, _ in self.calls]


class FakeCanvas:
    def __init__(self, width=800, height=600):
        self.context = RecordingContext()
        self.size = (width, height)
        self.visible = True
        self.clears = 0
        self.presents = 0

    def surface_size(self):
        return self.size

    def clear(self):
        self.clears += 1
        self.context.calls.clear()

    def present(self):
        self.presents += 1

    def set_visible(self, visible):
        self.visible = visible


class FakeScene:
    def __init__(self):
        self.actors = []
        self.removed = []
        self.renders = 0
        self.background = None

    def set_background(self, color):
        self.background = color

    def add_mesh(self, mesh, **kwargs):
        actor = SimpleNamespace(mesh=mesh, kwargs=kwargs, orientation=(0.0, 0.0, 0.0))
        self.actors.append(actor)
        return actor

    def remove_actor(self, actor):
        self.actors = [a for a in self.actors if a is not actor]
        self.removed.append(actor)

    def reset_camera(self):
        pass

    def render(self):
        self.renders += 1


class FakeSceneBackend:
    def __init__(self, canvas):
        self.canvas = canvas
        self.created = []
        self.disposed = []

    def create_scene(self):
        scene = FakeScene()
        self.created.append(scene)
        return scene

    def dispose_scene(self, scene):
        self.disposed.append(scene)


class FakeControls:
    def __init__(self):
        self.descriptors = []
        self.clears = 0

    def add_control(self, descriptor):
        self.descriptors.append(descriptor)

    def clear(self):
        self.clears += 1
        self.descriptors = []

    def by_label(self, label):
        return next(d for d in self.descriptors if d.label == label)


class FakeStatus:
    def __init__(self):
        self.text = ""

    def set_text(self, text):
        self.text = text

    def clear(self):
        self.text = ""


@pytest.fixture
def canvas():
    return FakeCanvas()


@pytest.fixture
def scene_backend(canvas):
    return FakeSceneBackend(canvas)


@pytest.fixture
def surface(canvas, scene_backend):
    return RenderSurface(canvas, scene_backend)


@pytest.fixture
def controls():
    return FakeControls()


@pytest.fixture
def status():
    return FakeStatus()


@pytest.fixture
def frames():
    return ManualFrameSource()


@pytest.fixture
def make_manager(surface, controls, status, frames):
    def make(**config):
        return RuntimeManager(surface, controls, status, frames, config=RuntimeConfig(**config))

    return make


@pytest.fixture
def manager(make_manager):
    return make_manager()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
