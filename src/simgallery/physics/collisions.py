"""
Collision Helpers
=================
Pairwise circle collision detection and elastic impulse exchange.

Collision response and overlap correction are separate steps:
``resolve_elastic_collision`` only touches velocities, positional
separation is done by the caller (``separate_overlap`` is provided for that).
"""
from __future__ import annotations

from typing import Protocol

from simgallery.physics.vector import Vector2

GRAVITY = Vector2(0.0, 0.5)


class Circle(Protocol):
    pos: Vector2
    radius: float


class Body(Protocol):
    pos: Vector2
    vel: Vector2
    mass: float


def check_circle_collision(c1: Circle, c2: Circle) -> bool:
    """True if the two circles overlap (touching does not count)."""
    return c1.pos.dist(c2.pos) < (c1.radius + c2.radius)


def resolve_elastic_collision(p1: Body, p2: Body) -> None:
    """
    Exchange momentum between two bodies along the line of centers.

    Velocities of both bodies are reassigned in place. Nothing happens when the
    bodies are already separating, when their centers coincide or when the
    total mass is not positive.
    """
    offset = Vector2.sub(p2.pos, p1.pos)
    distance = offset.mag()
    if distance == 0:
        return

    normal = offset.div(distance)
    # Closing speed is negative while the bodies approach each other.
    closing = Vector2.sub(p2.vel, p1.vel).dot(normal)
    if closing >= 0:
        return

    total_mass = p1.mass + p2.mass
    if total_mass <= 0:
        return

    impulse = -2.0 * closing / total_mass
    p1.vel = p1.vel.sub(normal.mult(impulse * p2.mass))
    p2.vel = p2.vel.add(normal.mult(impulse * p1.mass))


def separate_overlap(p1: Circle, p2: Circle) -> None:
    """Push two overlapping circles apart by half the overlap each."""
    distance = p1.pos.dist(p2.pos)
    overlap = (p1.radius + p2.radius - distance) / 2.0
    if overlap <= 0:
        return
    direction = p2.pos.sub(p1.pos).normalize()
    p1.pos = p1.pos.sub(direction.mult(overlap))
    p2.pos = p2.pos.add(direction.mult(overlap))
