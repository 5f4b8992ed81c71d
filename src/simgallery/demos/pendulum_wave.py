from __future__ import annotations

import math
from dataclasses import dataclass

from simgallery.core.simulation import Simulation
from simgallery.demos._drawing import hsl
from simgallery.demos.catalog import demo

DEFAULT_COUNT = 12
BASE_FREQUENCY = 10
BOB_RADIUS = 10
AMPLITUDE = math.pi / 4

PALETTES = ("Rainbow", "Warm", "Cool", "Mono")


def palette_color(palette: str, i: int, count: int) -> str:
    t = i / max(1, count)
    if palette == "Warm":
        return hsl(t * 60.0)
    if palette == "Cool":
        return hsl(180.0 + t * 80.0)
    if palette == "Mono":
        return hsl(210.0, 0.5, 0.25 + 0.5 * t)
    return hsl(t * 360.0)


@dataclass
class Pendulum:
    frequency: int
    length: float
    color: str
    angle: float = 0.0


@demo("pendulum-wave", title="Pendulum Wave")
class PendulumWave(Simulation):
    """
    Pendulums whose frequencies step by one, so their phases drift apart and
    periodically line up again.
    """

    def __init__(self, surface, context, register_control, report_status) -> None:
        super().__init__(surface, context, register_control, report_status)
        self.time = 0.0
        self.speed = 0.5
        self.count = DEFAULT_COUNT
        self.palette = PALETTES[0]
        self.pendulums: list[Pendulum] = []
        self._build()

        self.register_control("slider", "Speed", {"min": 0, "max": 2, "step": 0.1, "value": 0.5}, self._set_speed)
        self.register_control("slider", "Count", {"min": 5, "max": 20, "step": 1, "value": DEFAULT_COUNT}, self._set_count)
        self.register_control("select", "Palette", {"options": list(PALETTES), "value": PALETTES[0]}, self._set_palette)

    def _build(self) -> None:
        self.pendulums = []
        for i in range(self.count):
            freq = BASE_FREQUENCY + i
            self.pendulums.append(Pendulum(
                frequency=freq,
                length=(10000 / freq ** 2) * 8,
                color=palette_color(self.palette, i, self.count),
            ))
        self._swing()

    def _set_speed(self, value: float) -> None:
        self.speed = value

    def _set_count(self, value: float) -> None:
        self.count = int(value)
        self._build()

    def _set_palette(self, value: str) -> None:
        if value not in PALETTES:
            return
        self.palette = value
        for i, p in enumerate(self.pendulums):
            p.color = palette_color(value, i, self.count)

    def _swing(self) -> None:
        for p in self.pendulums:
            p.angle = AMPLITUDE * math.cos(self.time * p.frequency * 0.05)

    def update(self) -> None:
        self.time += 0.05 * self.speed
        self._swing()
        self.report_status(f"Time: {self.time:.1f} s")

    def draw(self) -> None:
        ox, oy = self.width / 2, 50
        for p in self.pendulums:
            x = ox + p.length * math.sin(p.angle)
            y = oy + p.length * math.cos(p.angle)
            self.ctx.line(ox, oy, x, y, "#cccccc", 1.0)
            self.draw_sphere(x, y, BOB_RADIUS, p.color)

    def reset(self) -> None:
        self.time = 0.0
        self._swing()
