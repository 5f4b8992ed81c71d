"""
Simulation Contract
===================
The shape every demonstration satisfies.

A demonstration is built from four inputs:

* ``surface`` - the ``RenderSurface`` (2D canvas and optional 3D scene slot),
* ``context`` - the 2D drawing context of the canvas,
* ``register_control(kind, label, config, on_change)`` - declares a widget,
* ``report_status(text)`` - replaces the status panel text (``\\n`` = newline).

Lifecycle: Constructed -> Active (``update()`` then ``draw()`` every frame)
<-> Paused -> Torn down (``destroy()``). ``reset()`` must leave the instance
exactly as a freshly constructed one.

Any class with this constructor and ``update``/``draw`` methods works; the
``Simulation`` base class is a convenience, not a requirement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from simgallery.core.surface import Color, DrawingContext, RenderSurface

RegisterControl = Callable[..., None]  # (kind, label, config, on_change)
ReportStatus = Callable[[str], None]


class Demonstration(Protocol):
    """Capability set the runtime relies on. ``reset``/``destroy`` are optional."""

    def update(self) -> None: ...

    def draw(self) -> None: ...


DemonstrationFactory = Callable[..., Demonstration]  # (surface, context, register_control, report_status)


class Simulation(ABC):
    """Base class for demonstrations drawing on the 2D canvas."""

    def __init__(
        self,
        surface: RenderSurface,
        context: DrawingContext,
        register_control: RegisterControl,
        report_status: ReportStatus,
    ) -> None:
        self.surface = surface
        self.ctx = context
        self.width: int = surface.width
        self.height: int = surface.height
        self.register_control = register_control
        self.report_status = report_status

    @abstractmethod
    def update(self) -> None:
        """Advance the state by one frame."""

    @abstractmethod
    def draw(self) -> None:
        """Paint the current state. Must not change it."""

    def reset(self) -> None:
        pass

    def destroy(self) -> None:
        pass

    def draw_sphere(self, x: float, y: float, radius: float, color: Color, focus: Optional[tuple[float, float]] = None) -> None:
        """Shaded ball; tiny radii fall back to a flat disc."""
        if radius < 2:
            self.ctx.fill_circle(x, y, radius, color)
            return
        if focus is None:
            focus = (x - radius * 0.3, y - radius * 0.3)
        self.ctx.gradient_circle(x, y, radius, [(0.0, "white"), (0.4, color), (1.0, "black")], focus=focus)
