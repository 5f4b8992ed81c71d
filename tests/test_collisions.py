from dataclasses import dataclass

import pytest

from simgallery.physics import Vector2, check_circle_collision, resolve_elastic_collision, separate_overlap


@dataclass
class Disc:
    pos: Vector2
    vel: Vector2
    radius: float = 10.0
    mass: float = 1.0


def test_overlap_is_strict():
    a = Disc(Vector2(0, 0), Vector2())
    assert check_circle_collision(a, Disc(Vector2(15, 0), Vector2()))
    assert not check_circle_collision(a, Disc(Vector2(20, 0), Vector2()))


def test_head_on_equal_masses_swap_velocities():
    a = Disc(Vector2(0, 0), Vector2(1, 0))
    b = Disc(Vector2(10, 0), Vector2(-1, 0))
    resolve_elastic_collision(a, b)
    assert a.vel.x == pytest.approx(-1)
    assert b.vel.x == pytest.approx(1)
    assert a.vel.y == b.vel.y == 0


def test_momentum_is_conserved_for_unequal_masses():
    a = Disc(Vector2(0, 0), Vector2(3, 1), mass=2.0)
    b = Disc(Vector2(8, 6), Vector2(-1, -2), mass=5.0)
    before = a.vel * a.mass + b.vel * b.mass
    resolve_elastic_collision(a, b)
    after = a.vel * a.mass + b.vel * b.mass
    assert after.x == pytest.approx(before.x)
    assert after.y == pytest.approx(before.y)


def test_separating_bodies_are_untouched():
    a = Disc(Vector2(0, 0), Vector2(-1, 0))
    b = Disc(Vector2(10, 0), Vector2(1, 0))
    resolve_elastic_collision(a, b)
    assert a.vel == Vector2(-1, 0)
    assert b.vel == Vector2(1, 0)


def test_coincident_centers_are_untouched():
    a = Disc(Vector2(5, 5), Vector2(1, 0))
    b = Disc(Vector2(5, 5), Vector2(-1, 0))
    resolve_elastic_collision(a, b)
    assert a.vel == Vector2(1, 0)
    assert b.vel == Vector2(-1, 0)


def test_separate_overlap_pushes_apart_evenly():
    a = Disc(Vector2(0, 0), Vector2())
    b = Disc(Vector2(10, 0), Vector2())
    separate_overlap(a, b)
    assert a.pos.x == pytest.approx(-5)
    assert b.pos.x == pytest.approx(15)
    assert not check_circle_collision(a, b)


def test_massless_bodies_are_left_alone():
    a = Disc(Vector2(0, 0), Vector2(1, 0), mass=0.0)
    b = Disc(Vector2(10, 0), Vector2(-1, 0), mass=0.0)
    resolve_elastic_collision(a, b)
    assert a.vel == Vector2(1, 0)
    assert b.vel == Vector2(-1, 0)
