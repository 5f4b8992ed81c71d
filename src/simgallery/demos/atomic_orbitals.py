"""
Atomic Orbitals (3D)
====================
Electron probability clouds for s, p and d orbitals, drawn as a point cloud in
the retained-mode scene.

Points are drawn by rejection sampling inside the cube [-10, 10]^3 against an
unnormalized density:

* s: exp(-r)
* p: |z| exp(-r/2)
* d: |xy| exp(-r/3)
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import numpy.typing as npt
import pyvista as pv

from simgallery.core.simulation import Simulation
from simgallery.demos.catalog import demo

logger = logging.getLogger(__name__)

ORBITALS = ("s", "p", "d")
POINT_COUNT = 5000
HALF_EXTENT = 10.0
BATCH_SIZE = 200_000
POINT_COLOR = "#ff6c00"
BACKGROUND = "#f3f4f6"


def orbital_density(kind: str, pts: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    x, y, z = pts[:, 0], pts[:, 1], pts[:, 2]
    r = np.sqrt(x * x + y * y + z * z)
    if kind == "s":
        return np.exp(-r)
    if kind == "p":
        return np.abs(z) * np.exp(-r / 2)
    if kind == "d":
        return np.abs(x * y) * np.exp(-r / 3)
    raise ValueError(f"Unknown orbital type '{kind}'.")


def sample_orbital(kind: str, count: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
    """Draw ``count`` points of the given orbital, shape (count, 3)."""
    accepted: list[npt.NDArray[np.float64]] = []
    total = 0
    while total < count:
        candidates = rng.uniform(-HALF_EXTENT, HALF_EXTENT, size=(BATCH_SIZE, 3))
        keep = candidates[rng.random(BATCH_SIZE) < orbital_density(kind, candidates)]
        accepted.append(keep)
        total += len(keep)
    return np.vstack(accepted)[:count]


@demo("atomic-orbitals", title="Atomic Orbitals (3D)")
class AtomicOrbitals(Simulation):
    def __init__(self, surface, context, register_control, report_status, seed: Optional[int] = None) -> None:
        super().__init__(surface, context, register_control, report_status)
        self._rng = np.random.default_rng(seed)
        self.orbital = "s"
        self.rotation_speed = 0.01
        self.rotation = 0.0
        self.points: npt.NDArray[np.float64] = np.empty((0, 3))

        self.scene = surface.acquire_scene()
        self.scene.set_background(BACKGROUND)
        self._cloud_actor = None
        self._nucleus_actor = self.scene.add_mesh(pv.Sphere(radius=0.5, theta_resolution=32, phi_resolution=16), color="black")
        self._rebuild()
        self.scene.reset_camera()

        for kind in ORBITALS:
            self.register_control("button", f"{kind} Orbital", {}, lambda kind=kind: self.set_orbital(kind))
        self.register_control(
            "slider", "Rotation Speed", {"min": 0, "max": 0.1, "step": 0.001, "value": 0.01}, self._set_rotation_speed
        )

    def _set_rotation_speed(self, value: float) -> None:
        self.rotation_speed = value

    def set_orbital(self, kind: str) -> None:
        if kind not in ORBITALS:
            raise ValueError(f"Unknown orbital type '{kind}'.")
        self.orbital = kind
        self._rebuild()

    def _rebuild(self) -> None:
        self.points = sample_orbital(self.orbital, POINT_COUNT, self._rng)
        if self._cloud_actor is not None:
            self.scene.remove_actor(self._cloud_actor)
        self._cloud_actor = self.scene.add_mesh(
            pv.PolyData(self.points),
            color=POINT_COLOR,
            point_size=3.0,
            render_points_as_spheres=True,
        )
        logger.debug(f"Sampled {len(self.points)} points for the {self.orbital} orbital.")

    def update(self) -> None:
        self.rotation += self.rotation_speed
        self.report_status(f"Orbital: {self.orbital.upper()} (3D)")

    def draw(self) -> None:
        angle = math.degrees(self.rotation)
        for actor in (self._cloud_actor, self._nucleus_actor):
            actor.orientation = (0.0, angle, 0.0)
        self.scene.render()

    def reset(self) -> None:
        self.rotation = 0.0
        self.orbital = "s"
        self._rebuild()

    def destroy(self) -> None:
        self._cloud_actor = None
        self._nucleus_actor = None
        self.surface.release_scene()
