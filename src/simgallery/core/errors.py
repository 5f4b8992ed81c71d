from __future__ import annotations


class SimGalleryError(Exception):
    """Base class for runtime errors raised by simgallery."""


class SceneAlreadyAcquiredError(SimGalleryError):
    """A retained-mode scene is requested while another one is still held."""


class NoSceneBackendError(SimGalleryError):
    """The host provides no retained-mode render backend."""


class DuplicateRegistrationError(SimGalleryError, ValueError):
    """A demonstration id is registered twice."""


class RegistryFrozenError(SimGalleryError):
    """The registry no longer accepts registrations."""
