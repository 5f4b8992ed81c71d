from simgallery.physics.vector import Vector2
from simgallery.physics.collisions import (
    GRAVITY,
    check_circle_collision,
    resolve_elastic_collision,
    separate_overlap,
)

__all__ = [
    "Vector2",
    "GRAVITY",
    "check_circle_collision",
    "resolve_elastic_collision",
    "separate_overlap",
]
