"""
Runtime Manager
===============
Owns the render loop, the demonstration registry, the control panel and the
coexistence of the 2D canvas with the retained-mode 3D scene.

Why is this file needed?
------------------------
It is the single authority that grants a demonstration access to the shared
surfaces (canvas, control panel, status panel) by constructing it, and
revokes that access by destroying it. Exactly one demonstration is active at
a time.

States::

    IDLE --load_sim--> STOPPED --start_sim--> RUNNING
                          ^                      |
                          +-------stop_sim-------+

Any ``load_sim`` goes back through IDLE before reaching STOPPED.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from PySide6.QtCore import QObject, Signal

from simgallery.config import RuntimeConfig
from simgallery.core.controls import ControlCallback, ControlConfig, ControlDescriptor, ControlKind, ControlSurface, make_descriptor
from simgallery.core.registry import DemonstrationRegistry
from simgallery.core.scheduler import FrameHandle, FrameSource
from simgallery.core.simulation import Demonstration, DemonstrationFactory
from simgallery.core.surface import RenderSurface, StatusSurface

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    STOPPED = "stopped"
    RUNNING = "running"


class RuntimeManager(QObject):
    """The active session: current demonstration, scheduler state, panels."""
    running_changed = Signal(bool)
    sim_loaded = Signal(str)
    sim_failed = Signal(str)

    def __init__(
        self,
        surface: RenderSurface,
        controls: ControlSurface,
        status: StatusSurface,
        frame_source: FrameSource,
        registry: Optional[DemonstrationRegistry] = None,
        config: Optional[RuntimeConfig] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.surface = surface
        self.registry = registry if registry is not None else DemonstrationRegistry()
        self.config = config or RuntimeConfig()
        self._controls_surface = controls
        self._status_surface = status
        self._frame_source = frame_source

        self._current: Optional[Demonstration] = None
        self._current_id: Optional[str] = None
        self._running: bool = False
        self._pending: Optional[FrameHandle] = None

        # Callbacks handed to a demonstration stay valid only while this
        # generation is current.
        self._generation: int = 0
        self._descriptors: list[ControlDescriptor] = []
        self._status_text: str = ""

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def current_instance(self) -> Optional[Demonstration]:
        return self._current

    @property
    def current_id(self) -> Optional[str]:
        return self._current_id

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending_frame_handle(self) -> Optional[FrameHandle]:
        return self._pending

    @property
    def state(self) -> SessionState:
        if self._current is None:
            return SessionState.IDLE
        return SessionState.RUNNING if self._running else SessionState.STOPPED

    @property
    def controls(self) -> tuple[ControlDescriptor, ...]:
        return tuple(self._descriptors)

    @property
    def status_text(self) -> str:
        return self._status_text

    def register(self, sim_id: str, factory: DemonstrationFactory, title: Optional[str] = None) -> None:
        self.registry.register(sim_id, factory, title)

    def registered_ids(self) -> list[str]:
        return self.registry.ids()

    def title_for(self, sim_id: str) -> str:
        entry = self.registry.get(sim_id)
        return entry.title if entry else sim_id

    def load_sim(self, sim_id: str) -> bool:
        """
        Replace the current demonstration with ``sim_id``.

        Returns:
            True if the demonstration was constructed and started.
        """
        # 1.-4. tear down the previous demonstration and its resources
        self._teardown()

        # 5. lookup; unknown ids leave the session idle
        entry = self.registry.get(sim_id)
        if entry is None:
            logger.warning(f"Simulation '{sim_id}' not found in registry.")
            self._write_status(f"Error: Simulation '{sim_id}' not implemented yet.")
            self.sim_failed.emit(sim_id)
            return False

        # 6. construct with callbacks bound to the now-empty panels
        generation = self._generation
        try:
            instance = entry.factory(
                self.surface,
                self.surface.context,
                self._make_register_control(generation),
                self._make_report_status(generation),
            )
        except Exception as exc:
            self._abandon_construction()
            if not self.config.isolate_failures:
                raise
            logger.exception(f"Simulation '{sim_id}' failed to start.")
            self._write_status(f"Error: '{sim_id}' failed to start: {exc}")
            self.sim_failed.emit(sim_id)
            return False

        self._current = instance
        self._current_id = sim_id
        logger.info(f"Loaded simulation '{sim_id}'.")
        self.sim_loaded.emit(sim_id)

        # 7. run
        self.start_sim()
        return True

    def start_sim(self) -> None:
        if self._running:
            return
        if self._current is None:
            logger.debug("start_sim ignored: no simulation loaded.")
            return
        self._running = True
        self._schedule_frame()
        self.running_changed.emit(True)

    def stop_sim(self) -> None:
        was_running = self._running
        self._running = False
        if self._pending is not None:
            self._frame_source.cancel_frame(self._pending)
            self._pending = None
        if was_running:
            self.running_changed.emit(False)

    def toggle_play(self) -> None:
        if self._running:
            self.stop_sim()
        else:
            self.start_sim()

    def reset(self) -> None:
        """Reset the current demonstration; repaint once if the loop is stopped."""
        instance = self._current
        if instance is None:
            return
        reset = getattr(instance, "reset", None)
        if callable(reset) and not self._guarded("reset", reset):
            return
        if not self._running:
            self.surface.clear()
            if self._guarded("draw", instance.draw):
                self.surface.present()

    def shutdown(self) -> None:
        """Destroy the current demonstration and release every resource."""
        self._teardown()
        logger.info("Runtime shut down.")

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _teardown(self) -> None:
        # 1. destroy first: the instance releases listeners and its scene
        instance, self._current = self._current, None
        previous_id, self._current_id = self._current_id, None
        try:
            if instance is not None:
                self._destroy(instance, previous_id)
        finally:
            # 2. stop the scheduler
            self.stop_sim()

            # 3. empty panels and canvas; revoke the old instance's callbacks
            self._generation += 1
            self._clear_panels()
            self.surface.clear()

            # 4. no retained-mode scene survives a switch
            self.surface.release_scene()
            self.surface.show_canvas()
            self.surface.present()

    def _destroy(self, instance: Demonstration, sim_id: Optional[str]) -> None:
        destroy = getattr(instance, "destroy", None)
        if not callable(destroy):
            return
        try:
            destroy()
        except Exception:
            if not self.config.isolate_failures:
                raise
            logger.exception(f"Simulation '{sim_id}' failed to clean up.")

    def _abandon_construction(self) -> None:
        """Undo whatever a failed constructor left behind."""
        self._generation += 1
        self._clear_panels()
        self.surface.release_scene()
        self.surface.show_canvas()
        self.surface.clear()
        self.surface.present()

    def _clear_panels(self) -> None:
        self._descriptors.clear()
        self._controls_surface.clear()
        self._status_text = ""
        self._status_surface.clear()

    def _write_status(self, text: str) -> None:
        self._status_text = text
        self._status_surface.set_text(text)

    def _make_register_control(self, generation: int) -> Callable[..., None]:
        def register_control(
            kind: Union[ControlKind, str],
            label: str,
            config: Union[Mapping[str, Any], ControlConfig, None],
            on_change: ControlCallback,
        ) -> None:
            if generation != self._generation:
                logger.debug(f"Ignoring control '{label}' from a retired simulation.")
                return
            descriptor = make_descriptor(kind, label, config, on_change)
            if any(d.label == descriptor.label for d in self._descriptors):
                # Kept as-is: status echo lookups keyed by label will collide.
                logger.warning(f"Duplicate control label '{descriptor.label}' in one panel.")
            self._descriptors.append(descriptor)
            self._controls_surface.add_control(descriptor)

        return register_control

    def _make_report_status(self, generation: int) -> Callable[[str], None]:
        def report_status(text: str) -> None:
            if generation != self._generation:
                return
            self._write_status(str(text))

        return report_status

    def _schedule_frame(self) -> None:
        if self._pending is None:
            self._pending = self._frame_source.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._pending = None
        instance = self._current
        if not self._running or instance is None:
            return

        self.surface.clear()
        if not self._guarded("update", instance.update):
            return
        if not self._guarded("draw", instance.draw):
            return
        self.surface.present()

        if self._running and instance is self._current:
            self._schedule_frame()

    def _guarded(self, action: str, fn: Callable[[], Any]) -> bool:
        """
        Run one demonstration hook.

        On failure the loop stops. With ``isolate_failures`` the error is
        logged and shown in the status panel, otherwise it propagates.

        Returns:
            True if the hook completed.
        """
        try:
            fn()
        except Exception as exc:
            self.stop_sim()
            if not self.config.isolate_failures:
                raise
            logger.exception(f"Simulation '{self._current_id}' failed in {action}().")
            self._write_status(f"Error in '{self._current_id}' ({action}): {exc}")
            self.sim_failed.emit(self._current_id or "")
            return False
        return True
