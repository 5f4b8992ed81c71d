from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from simgallery.core.simulation import Simulation
from simgallery.demos._drawing import hsl
from simgallery.demos.catalog import demo
from simgallery.physics import Vector2, check_circle_collision, resolve_elastic_collision, separate_overlap

INITIAL_BALLS = 5


@dataclass
class Ball:
    pos: Vector2
    vel: Vector2
    radius: float
    color: str
    mass: float = 1.0


@demo("bouncing-balls", title="Bouncing Balls")
class BouncingBalls(Simulation):
    """Balls under gravity bouncing off the walls and each other."""

    def __init__(self, surface, context, register_control, report_status, seed: Optional[int] = None) -> None:
        super().__init__(surface, context, register_control, report_status)
        self._rng = np.random.default_rng(seed)
        self.gravity = 0.5
        self.friction = 0.99
        self.bounciness = 0.8
        self.balls: list[Ball] = []
        for _ in range(INITIAL_BALLS):
            self.add_ball()

        self.register_control("slider", "Gravity", {"min": 0, "max": 2, "step": 0.1, "value": 0.5}, self._set_gravity)
        self.register_control("slider", "Bounciness", {"min": 0.1, "max": 1.2, "step": 0.1, "value": 0.8}, self._set_bounciness)
        self.register_control("button", "Add Ball", {}, self.add_ball)

    def _set_gravity(self, value: float) -> None:
        self.gravity = value

    def _set_bounciness(self, value: float) -> None:
        self.bounciness = value

    def add_ball(self) -> None:
        rng = self._rng
        self.balls.append(Ball(
            pos=Vector2(rng.random() * self.width, rng.random() * self.height / 2),
            vel=Vector2((rng.random() - 0.5) * 10, (rng.random() - 0.5) * 10),
            radius=15 + rng.random() * 10,
            color=hsl(rng.random() * 360),
        ))

    def kinetic_energy(self) -> float:
        return sum(0.5 * b.mass * b.vel.mag_sq() for b in self.balls)

    def update(self) -> None:
        for b in self.balls:
            b.vel = Vector2(b.vel.x, b.vel.y + self.gravity).mult(self.friction)
            b.pos = b.pos + b.vel
            self._bounce_walls(b)

        for i, b1 in enumerate(self.balls):
            for b2 in self.balls[i + 1:]:
                if check_circle_collision(b1, b2):
                    resolve_elastic_collision(b1, b2)
                    separate_overlap(b1, b2)

        self.report_status(f"Total Kinetic Energy: {self.kinetic_energy():.0f} J\nCount: {len(self.balls)}")

    def _bounce_walls(self, b: Ball) -> None:
        x, y = b.pos
        vx, vy = b.vel
        if x < b.radius:
            x, vx = b.radius, -vx * self.bounciness
        if x > self.width - b.radius:
            x, vx = self.width - b.radius, -vx * self.bounciness
        if y > self.height - b.radius:
            y, vy = self.height - b.radius, -vy * self.bounciness
        if y < b.radius:
            y, vy = b.radius, -vy * self.bounciness
        b.pos = Vector2(x, y)
        b.vel = Vector2(vx, vy)

    def draw(self) -> None:
        for b in self.balls:
            self.draw_sphere(b.pos.x, b.pos.y, b.radius, b.color)

    def reset(self) -> None:
        self.balls = []
        for _ in range(INITIAL_BALLS):
            self.add_ball()
