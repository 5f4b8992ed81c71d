"""
Projectile Motion
=================
A cannon at the bottom-left fires balls under adjustable gravity. Distances
are reported in metres with 10 px per metre, measured from the muzzle.

``ProjectileChallenge`` adds three target distances on top, checked through
a ``ChallengeSet``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from simgallery.core.challenge import Challenge, ChallengeSet
from simgallery.core.simulation import Simulation
from simgallery.demos._drawing import rotated_rect
from simgallery.demos.catalog import demo
from simgallery.physics import Vector2

CANNON_X = 50.0
PX_PER_METRE = 10.0
DT = 0.1
MAX_BALLS = 5
BALL_RADIUS = 8
GROUND_COLOR = "#8bc34a"
BALL_COLOR = "#FF6C00"


@dataclass
class Projectile:
    pos: Vector2
    vel: Vector2
    path: list[tuple[float, float]] = field(default_factory=list)
    time: int = 0


@demo("projectile-motion", title="Projectile Motion")
class ProjectileMotion(Simulation):
    """Parabolic flight with bounces off the ground."""

    def __init__(self, surface, context, register_control, report_status) -> None:
        super().__init__(surface, context, register_control, report_status)
        self.angle = 45.0
        self.speed = 15.0
        self.gravity = 9.8
        self.show_vectors = True
        self.balls: list[Projectile] = []

        self.register_control("slider", "Angle", {"min": 0, "max": 90, "step": 1, "value": 45}, self._set_angle)
        self.register_control("slider", "Initial Speed", {"min": 5, "max": 30, "step": 1, "value": 15}, self._set_speed)
        self.register_control("slider", "Gravity", {"min": 1, "max": 20, "step": 0.5, "value": 9.8}, self._set_gravity)
        self.register_control("checkbox", "Show Vectors", {"checked": True}, self._set_show_vectors)
        self.register_control("button", "Fire Cannon", {}, self.fire)

    def _set_angle(self, value: float) -> None:
        self.angle = value

    def _set_speed(self, value: float) -> None:
        self.speed = value

    def _set_gravity(self, value: float) -> None:
        self.gravity = value

    def _set_show_vectors(self, checked: bool) -> None:
        self.show_vectors = checked

    @property
    def ground_y(self) -> float:
        return self.height - 10

    @property
    def muzzle(self) -> Vector2:
        return Vector2(CANNON_X, self.height - 50)

    def fire(self) -> None:
        rad = math.radians(self.angle)
        self.balls.append(Projectile(
            pos=self.muzzle,
            vel=Vector2(math.cos(rad) * self.speed, -math.sin(rad) * self.speed),
        ))
        if len(self.balls) > MAX_BALLS:
            self.balls.pop(0)

    def distance_of(self, ball: Projectile) -> float:
        return (ball.pos.x - CANNON_X) / PX_PER_METRE

    def last_distance(self) -> Optional[float]:
        if not self.balls:
            return None
        return self.distance_of(self.balls[-1])

    def update(self) -> None:
        for b in self.balls:
            if b.time % 2 < 1:
                b.path.append(b.pos.to_tuple())
            b.time += 1

            vx, vy = b.vel.x, b.vel.y + self.gravity * DT
            x, y = b.pos.x + vx * DT, b.pos.y + vy * DT
            if y > self.ground_y:
                y = self.ground_y
                vy *= -0.6
                vx *= 0.8
                if abs(vy) < 1:
                    vy = 0.0
                if abs(vx) < 0.1:
                    vx = 0.0
            b.pos = Vector2(x, y)
            b.vel = Vector2(vx, vy)

        self.report_status(self.status_line())

    def status_line(self) -> str:
        if not self.balls:
            return "Ready to fire!"
        b = self.balls[-1]
        height = max(0.0, (self.ground_y - b.pos.y) / PX_PER_METRE)
        return (
            f"Height: {height:.1f}m | Distance: {self.distance_of(b):.1f}m"
            f" | Velocity: {b.vel.mag():.1f}m/s"
        )

    def draw(self) -> None:
        ctx = self.ctx
        ctx.fill_rect(0, self.ground_y, self.width, self.height - self.ground_y, GROUND_COLOR)

        muzzle = self.muzzle
        ctx.fill_polygon(rotated_rect(muzzle.x, muzzle.y, 40, 12, math.radians(self.angle)), "#333333")
        ctx.fill_circle(muzzle.x, muzzle.y, 14, "#555555")

        for b in self.balls:
            if len(b.path) > 1:
                ctx.polyline(b.path, "#999999", 1.0)
            self.draw_sphere(b.pos.x, b.pos.y, BALL_RADIUS, BALL_COLOR)
            if self.show_vectors:
                tip = b.pos + b.vel * 5
                ctx.line(b.pos.x, b.pos.y, tip.x, tip.y, "green", 2.0)

    def reset(self) -> None:
        self.balls = []


CHALLENGES = (
    Challenge("c1", "Hit the target at 50m! (Hint: Try Angle 45, Speed ~22)", 50, 2, units="m"),
    Challenge("c2", "Hit the target at 80m! (Hint: Increase speed)", 80, 3, units="m"),
    Challenge("c3", "High arc target at 20m! (Hint: Angle > 70)", 20, 1, units="m"),
)


@demo("projectile-challenge", title="Projectile Challenge")
class ProjectileChallenge(ProjectileMotion):
    """Projectile motion with target distances to hit in order."""

    def __init__(self, surface, context, register_control, report_status) -> None:
        super().__init__(surface, context, register_control, report_status)
        self.challenges = ChallengeSet(CHALLENGES, on_result=self._on_result)
        self.message = self.challenges.current.question
        self.register_control("button", "Check Distance", {}, self.check_distance)

    def _on_result(self, correct: bool, message: str) -> None:
        self.message = message
        self.report_status(message)

    def check_distance(self) -> None:
        distance = self.last_distance()
        if distance is None:
            self.message = "Fire the cannon first!"
            self.report_status(self.message)
            return
        challenge = self.challenges.current
        if challenge is None:
            return
        if not self.challenges.check_answer(distance):
            self.message = f"Missed! You hit {distance:.1f}m. Target is {challenge.target_value:g}m."
            self.report_status(self.message)

    def status_line(self) -> str:
        return f"{self.challenges.progress()}\n{super().status_line()}"

    def draw(self) -> None:
        super().draw()
        ctx = self.ctx
        challenge = self.challenges.current
        if challenge is not None:
            x = CANNON_X + challenge.target_value * PX_PER_METRE
            band = challenge.tolerance * PX_PER_METRE
            ctx.fill_rect(x - band, self.ground_y - 4, 2 * band, 4, "#ff9800")
            ctx.line(x, self.ground_y, x, self.ground_y - 40, "#333333", 2.0)
            ctx.fill_polygon([(x, self.ground_y - 40), (x + 20, self.ground_y - 33), (x, self.ground_y - 26)], "red")
        ctx.text(20, 30, self.message, "black", 14)
        ctx.text(20, 50, self.challenges.progress(), "#555555", 12)

    def reset(self) -> None:
        super().reset()
        self.challenges = ChallengeSet(CHALLENGES, on_result=self._on_result)
        self.message = self.challenges.current.question
