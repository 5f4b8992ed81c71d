from simgallery.core.challenge import SCORE_INCREMENT, Challenge, ChallengeSet
from simgallery.core.controls import ControlConfig, ControlDescriptor, ControlKind, make_descriptor
from simgallery.core.errors import (
    DuplicateRegistrationError,
    NoSceneBackendError,
    RegistryFrozenError,
    SceneAlreadyAcquiredError,
    SimGalleryError,
)
from simgallery.core.manager import RuntimeManager, SessionState
from simgallery.core.registry import DemonstrationRegistration, DemonstrationRegistry
from simgallery.core.scheduler import FrameSource, ManualFrameSource
from simgallery.core.simulation import Demonstration, Simulation
from simgallery.core.surface import RenderSurface

__all__ = [
    "SCORE_INCREMENT",
    "Challenge",
    "ChallengeSet",
    "ControlConfig",
    "ControlDescriptor",
    "ControlKind",
    "make_descriptor",
    "DuplicateRegistrationError",
    "NoSceneBackendError",
    "RegistryFrozenError",
    "SceneAlreadyAcquiredError",
    "SimGalleryError",
    "RuntimeManager",
    "SessionState",
    "DemonstrationRegistration",
    "DemonstrationRegistry",
    "FrameSource",
    "ManualFrameSource",
    "Demonstration",
    "Simulation",
    "RenderSurface",
]
