from __future__ import annotations

from typing import Callable, TypeVar

from simgallery.core.registry import DemonstrationRegistry

T = TypeVar("T")

_CATALOG: dict[str, tuple[Callable, str]] = {}


def demo(sim_id: str, title: str) -> Callable[[T], T]:
    """Class decorator to list a demonstration under a stable id."""
    def decorator(cls: T) -> T:
        if sim_id in _CATALOG:
            raise ValueError(f"Demonstration id '{sim_id}' is used twice.")
        _CATALOG[sim_id] = (cls, title)
        return cls
    return decorator


def list_demos() -> list[str]:
    return list(_CATALOG.keys())


def install_demos(registry: DemonstrationRegistry) -> None:
    for sim_id, (factory, title) in _CATALOG.items():
        registry.register(sim_id, factory, title)
