"""
3D Scene Host (PyVista Wrapper)
===============================
Retained-mode backend of the render surface.

``create_scene`` builds a ``pyvistaqt.QtInteractor`` inside the same stacked
widget that holds the 2D canvas and makes it the visible page;
``dispose_scene`` closes the plotter and removes it from the layout.
"""
from __future__ import annotations

import logging

from PySide6.QtWidgets import QStackedWidget
from pyvistaqt import QtInteractor

logger = logging.getLogger(__name__)


class PyVistaSceneHost:
    def __init__(self, stack: QStackedWidget, background: str = "white") -> None:
        self._stack = stack
        self._background = background

    def create_scene(self) -> QtInteractor:
        plotter = QtInteractor(self._stack)
        plotter.set_background(self._background)
        self._stack.addWidget(plotter)
        self._stack.setCurrentWidget(plotter)
        logger.info("Created 3D scene.")
        return plotter

    def dispose_scene(self, scene: QtInteractor) -> None:
        scene.clear()
        scene.close()
        self._stack.removeWidget(scene)
        scene.deleteLater()
        logger.info("Disposed 3D scene.")
