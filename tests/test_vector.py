import dataclasses
import math

import pytest

from simgallery.physics import Vector2


def test_arithmetic_returns_new_vectors():
    a = Vector2(1, 2)
    b = Vector2(3, 5)
    assert a.add(b) == Vector2(4, 7)
    assert b.sub(a) == Vector2(2, 3)
    assert a.mult(3) == Vector2(3, 6)
    assert b.div(2) == Vector2(1.5, 2.5)
    assert a == Vector2(1, 2)


def test_static_forms_match_instance_forms():
    a, b = Vector2(1, 1), Vector2(4, 5)
    assert Vector2.add(a, b) == a.add(b)
    assert Vector2.sub(b, a) == Vector2(3, 4)
    assert Vector2.dist(a, b) == pytest.approx(5.0)


def test_operators():
    a = Vector2(2, -1)
    assert a + Vector2(1, 1) == Vector2(3, 0)
    assert a - Vector2(1, 1) == Vector2(1, -2)
    assert a * 2 == 2 * a == Vector2(4, -2)
    assert a / 2 == Vector2(1, -0.5)
    assert -a == Vector2(-2, 1)
    assert tuple(a) == (2, -1)


def test_divide_by_zero_is_zero_vector():
    assert Vector2(3, 4).div(0) == Vector2(0, 0)


def test_normalize():
    n = Vector2(3, 4).normalize()
    assert n.x == pytest.approx(0.6)
    assert n.y == pytest.approx(0.8)
    assert Vector2(0, 0).normalize() == Vector2(0, 0)


def test_magnitude_and_limit():
    v = Vector2(3, 4)
    assert v.mag() == 5
    assert v.mag_sq() == 25
    assert abs(v) == 5
    assert v.limit(10) == v
    assert v.limit(1).mag() == pytest.approx(1.0)


def test_dot_and_heading():
    assert Vector2(1, 2).dot(Vector2(3, 4)) == 11
    assert Vector2(0, 1).heading() == pytest.approx(math.pi / 2)


def test_vectors_are_immutable():
    v = Vector2(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5
    assert v.copy() == v
