from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from simgallery.core.errors import DuplicateRegistrationError, RegistryFrozenError
from simgallery.core.simulation import DemonstrationFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemonstrationRegistration:
    sim_id: str
    factory: DemonstrationFactory
    title: str


class DemonstrationRegistry:
    """Stable id -> factory table, filled at startup and frozen afterwards."""

    def __init__(self) -> None:
        self._entries: dict[str, DemonstrationRegistration] = {}
        self._frozen = False

    def register(self, sim_id: str, factory: DemonstrationFactory, title: Optional[str] = None) -> DemonstrationRegistration:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{sim_id}': registry is frozen.")
        if not sim_id:
            raise ValueError("Demonstration id must be a non-empty string.")
        if sim_id in self._entries:
            raise DuplicateRegistrationError(f"Demonstration '{sim_id}' is already registered.")
        entry = DemonstrationRegistration(sim_id=sim_id, factory=factory, title=title or sim_id)
        self._entries[sim_id] = entry
        logger.debug(f"Registered demonstration '{sim_id}'.")
        return entry

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, sim_id: str) -> Optional[DemonstrationRegistration]:
        return self._entries.get(sim_id)

    def ids(self) -> list[str]:
        return list(self._entries.keys())

    def __contains__(self, sim_id: object) -> bool:
        return sim_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DemonstrationRegistration]:
        return iter(self._entries.values())
