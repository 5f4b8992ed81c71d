from __future__ import annotations

import itertools
import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class QtFrameSource(QObject):
    """
    One-frame-at-a-time scheduler on top of a single-shot QTimer.

    A new request replaces any request still pending; ``cancel_frame`` only
    stops the timer if the handle is the pending one.
    """

    def __init__(self, interval_ms: int, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._ids = itertools.count(1)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)
        self._handle: Optional[int] = None
        self._callback: Optional[Callable[[], None]] = None

    def request_frame(self, callback: Callable[[], None]) -> int:
        self._handle = next(self._ids)
        self._callback = callback
        self._timer.start()
        return self._handle

    def cancel_frame(self, handle) -> None:
        if handle is not None and handle == self._handle:
            self._timer.stop()
            self._handle = None
            self._callback = None

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
