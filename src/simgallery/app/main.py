"""
Application Initialization
==========================
Builds the host window, wires it to one runtime session and starts the Qt
event loop.

It acts as the "Dependency Injection" root:
1. Reads the runtime configuration.
2. Instantiates the Main Window (host surfaces).
3. Creates the RuntimeManager on top of those surfaces and fills its registry.
4. Hands the session to the window.

Run with: python -m simgallery
"""
from __future__ import annotations

import logging
from typing import Optional

from simgallery.app.application import create_app
from simgallery.app.ui.frame_source import QtFrameSource
from simgallery.app.ui.main_window import MainWindow
from simgallery.app.ui.scene_host import PyVistaSceneHost
from simgallery.config import RuntimeConfig, load_runtime_config
from simgallery.core.manager import RuntimeManager
from simgallery.core.surface import RenderSurface
from simgallery.demos import install_demos

logger = logging.getLogger(__name__)


def build_session(window: MainWindow, config: RuntimeConfig) -> RuntimeManager:
    """Create the runtime session bound to the window's surfaces."""
    surface = RenderSurface(window.canvas, PyVistaSceneHost(window.surface_stack))
    manager = RuntimeManager(
        surface=surface,
        controls=window.control_panel,
        status=window.status_panel,
        frame_source=QtFrameSource(config.frame_interval_ms, parent=window),
        config=config,
        parent=window,
    )
    install_demos(manager.registry)
    manager.registry.freeze()
    window.attach(manager)
    return manager


def main(initial_sim: Optional[str] = None) -> int:
    """Main entry point for the application."""
    app = create_app()
    config = load_runtime_config()
    logger.info(f"Runtime config: {config}")

    win = MainWindow(config)
    build_session(win, config)
    win.show()
    if initial_sim:
        win.select_sim(initial_sim)
    return app.exec()
