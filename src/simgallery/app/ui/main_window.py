"""
Main window of the gallery: catalog list on the left, the render surface in
the middle, the play/reset bar, controls and status on the right, and a log
console at the bottom.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QDockWidget, QHBoxLayout, QListWidget, QListWidgetItem, QMainWindow, QPlainTextEdit, QPushButton,
    QScrollArea, QSplitter, QStackedWidget, QVBoxLayout, QWidget,
)

from simgallery.app.application import VISIBLE_APP_NAME
from simgallery.app.ui.canvas import CanvasWidget
from simgallery.app.ui.control_panel import ControlPanel
from simgallery.app.ui.status_panel import StatusPanel
from simgallery.config import RuntimeConfig
from simgallery.core.manager import RuntimeManager

logger = logging.getLogger(__name__)

PLAY_TEXT = "▶ Play"
PAUSE_TEXT = "⏸ Pause"


class Console(QPlainTextEdit):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMaximumBlockCount(500)

    def _log(self, level: str, msg: str) -> None:
        self.appendPlainText(f"{datetime.now().strftime('%d.%m.%Y %H:%M:%S')} [{level}] {msg}")

    def info(self, msg: str) -> None:
        self._log("info", msg)

    def warn(self, msg: str) -> None:
        self._log("warn", msg)

    def error(self, msg: str) -> None:
        self._log("error", msg)


class ConsoleLogHandler(logging.Handler):
    """Mirrors 'simgallery' log records into the window console."""

    def __init__(self, console: Console) -> None:
        super().__init__(level=logging.INFO)
        self.console = console

    def emit(self, record: logging.LogRecord) -> None:
        msg = record.getMessage()
        if record.levelno >= logging.ERROR:
            self.console.error(msg)
        elif record.levelno >= logging.WARNING:
            self.console.warn(msg)
        else:
            self.console.info(msg)


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[RuntimeConfig] = None):
        super().__init__()
        self.config = config or RuntimeConfig()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)
        self.manager: Optional[RuntimeManager] = None

        # ---- Central: catalog | surface stack | side panel ----
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)

        self.catalog = QListWidget(split)
        self.catalog.setMinimumWidth(200)

        self.surface_stack = QStackedWidget(split)
        self.canvas = CanvasWidget(self.config.canvas_width, self.config.canvas_height, self.surface_stack)
        self.surface_stack.addWidget(self.canvas)

        side = QWidget(split)
        side_layout = QVBoxLayout(side)
        bar = QHBoxLayout()
        self.btn_play = QPushButton(PLAY_TEXT, side)
        self.btn_reset = QPushButton(self.tr("Reset"), side)
        bar.addWidget(self.btn_play)
        bar.addWidget(self.btn_reset)
        side_layout.addLayout(bar)

        scroll = QScrollArea(side)
        scroll.setWidgetResizable(True)
        self.control_panel = ControlPanel(scroll)
        scroll.setWidget(self.control_panel)
        side_layout.addWidget(scroll, 1)

        self.status_panel = StatusPanel(side)
        side_layout.addWidget(self.status_panel, 0)

        split.addWidget(self.catalog)
        split.addWidget(self.surface_stack)
        split.addWidget(side)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
        split.setStretchFactor(2, 0)
        self.setCentralWidget(split)

        # ---- Bottom: log console ----
        self.console = Console(self)
        dock = QDockWidget(self.tr("Log"), self)
        dock.setWidget(self.console)
        dock.setFeatures(QDockWidget.DockWidgetFeature.DockWidgetMovable)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, dock)
        self._log_handler = ConsoleLogHandler(self.console)
        logging.getLogger("simgallery").addHandler(self._log_handler)

    def attach(self, manager: RuntimeManager) -> None:
        """Bind the window to a runtime session and fill the catalog."""
        self.manager = manager

        self.catalog.clear()
        for sim_id in manager.registered_ids():
            item = QListWidgetItem(manager.title_for(sim_id))
            item.setData(Qt.ItemDataRole.UserRole, sim_id)
            self.catalog.addItem(item)

        self.catalog.currentItemChanged.connect(self._on_catalog_changed)
        self.btn_play.clicked.connect(manager.toggle_play)
        self.btn_reset.clicked.connect(manager.reset)
        manager.running_changed.connect(self._on_running_changed)
        manager.sim_loaded.connect(lambda sim_id: self.statusBar().showMessage(manager.title_for(sim_id)))

    def select_sim(self, sim_id: str) -> None:
        for row in range(self.catalog.count()):
            if self.catalog.item(row).data(Qt.ItemDataRole.UserRole) == sim_id:
                self.catalog.setCurrentRow(row)
                return
        # not in the catalog: let the runtime report it
        if self.manager is not None:
            self.manager.load_sim(sim_id)

    @Slot(QListWidgetItem, QListWidgetItem)
    def _on_catalog_changed(self, current: QListWidgetItem | None, _previous) -> None:
        if current is None or self.manager is None:
            return
        self.manager.load_sim(current.data(Qt.ItemDataRole.UserRole))

    @Slot(bool)
    def _on_running_changed(self, running: bool) -> None:
        self.btn_play.setText(PAUSE_TEXT if running else PLAY_TEXT)

    def closeEvent(self, event: QCloseEvent) -> None:
        if self.manager is not None:
            self.manager.shutdown()
        logging.getLogger("simgallery").removeHandler(self._log_handler)
        event.accept()
