"""
Render Surface
==============
The drawing targets a demonstration can write to.

A ``RenderSurface`` wraps two host-provided backends:

1. A persistent immediate-mode 2D canvas, redrawn every frame through its
   ``DrawingContext``.
2. An optional retained-mode 3D scene, created lazily through
   ``acquire_scene()`` and disposed through ``release_scene()``.

At most one retained-mode scene exists at a time. While it is held the 2D
canvas is hidden; releasing the scene brings the canvas back.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from simgallery.core.errors import NoSceneBackendError, SceneAlreadyAcquiredError

logger = logging.getLogger(__name__)

Color = Any  # anything the host understands: "#rrggbb", a color name, an (r, g, b) tuple
Point = tuple[float, float]


class DrawingContext(Protocol):
    """Immediate-mode 2D drawing operations offered by the host canvas."""

    def fill_background(self, color: Color) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color, width: float = 1.0) -> None: ...

    def fill_circle(self, x: float, y: float, r: float, color: Color) -> None: ...

    def stroke_circle(self, x: float, y: float, r: float, color: Color, width: float = 1.0) -> None: ...

    def gradient_circle(
        self, x: float, y: float, r: float, stops: Sequence[tuple[float, Color]], focus: Optional[Point] = None
    ) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color, width: float = 1.0) -> None: ...

    def polyline(self, points: Sequence[Point], color: Color, width: float = 1.0) -> None: ...

    def fill_polygon(self, points: Sequence[Point], color: Color) -> None: ...

    def text(self, x: float, y: float, text: str, color: Color = "black", size: int = 12) -> None: ...


class Canvas(Protocol):
    """Host canvas backing the immediate-mode surface."""
    context: DrawingContext

    def surface_size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def present(self) -> None: ...

    def set_visible(self, visible: bool) -> None: ...


class SceneBackend(Protocol):
    """Host factory for retained-mode scenes (e.g. a pyvista plotter)."""

    def create_scene(self) -> Any: ...

    def dispose_scene(self, scene: Any) -> None: ...


class StatusSurface(Protocol):
    """Host region showing status text; ``\\n`` is a line break."""

    def set_text(self, text: str) -> None: ...

    def clear(self) -> None: ...


class RenderSurface:
    """Primary 2D canvas plus the optional retained-mode scene slot."""

    def __init__(self, canvas: Canvas, scene_backend: Optional[SceneBackend] = None) -> None:
        self.canvas = canvas
        self._scene_backend = scene_backend
        self._scene: Any = None

    # ---- 2D canvas ----

    @property
    def context(self) -> DrawingContext:
        return self.canvas.context

    @property
    def width(self) -> int:
        return self.canvas.surface_size()[0]

    @property
    def height(self) -> int:
        return self.canvas.surface_size()[1]

    def clear(self) -> None:
        self.canvas.clear()

    def present(self) -> None:
        self.canvas.present()

    def show_canvas(self) -> None:
        """Put the 2D canvas back in the foreground."""
        self.canvas.set_visible(True)

    # ---- retained-mode scene ----

    @property
    def scene(self) -> Any:
        return self._scene

    @property
    def has_scene(self) -> bool:
        return self._scene is not None

    def acquire_scene(self) -> Any:
        """
        Create the retained-mode scene and hide the 2D canvas.

        Raises:
            SceneAlreadyAcquiredError: If a scene is already held.
            NoSceneBackendError: If the host has no retained-mode backend.
        """
        if self._scene is not None:
            raise SceneAlreadyAcquiredError("A retained-mode scene is already acquired; release it first.")
        if self._scene_backend is None:
            raise NoSceneBackendError("This host does not provide a retained-mode scene backend.")
        self._scene = self._scene_backend.create_scene()
        self.canvas.set_visible(False)
        logger.debug("Retained-mode scene acquired.")
        return self._scene

    def release_scene(self) -> None:
        """Dispose the scene if one is held. Safe to call repeatedly."""
        if self._scene is None:
            return
        scene, self._scene = self._scene, None
        self._scene_backend.dispose_scene(scene)
        self.canvas.set_visible(True)
        logger.debug("Retained-mode scene released.")
