"""
Frame Sources
=============
The runtime asks the host for one "next frame" callback at a time, in the
manner of ``requestAnimationFrame``. A frame source hands out a handle for
each request so the request can be cancelled before it fires.

``ManualFrameSource`` is ticked explicitly. It drives headless runs and
the test-suite; the desktop host uses ``simgallery.app.ui.frame_source``.
"""
from __future__ import annotations

import itertools
import logging
from typing import Callable, Hashable, Protocol

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]
FrameHandle = Hashable


class FrameSource(Protocol):
    def request_frame(self, callback: FrameCallback) -> FrameHandle: ...

    def cancel_frame(self, handle: FrameHandle) -> None: ...


class ManualFrameSource:
    """Frame source advanced by calling ``tick()``."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: dict[int, FrameCallback] = {}
        self.frames_fired: int = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: FrameHandle) -> None:
        self._pending.pop(handle, None)

    def tick(self) -> int:
        """
        Fire every callback pending at the start of this tick.

        Callbacks requested while ticking run on the next tick. If a callback
        raises, the ones after it stay pending and the error propagates.

        Returns:
            Number of callbacks fired.
        """
        due = list(self._pending)
        fired = 0
        for handle in due:
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            fired += 1
            self.frames_fired += 1
            callback()
        return fired

    def run(self, frames: int) -> None:
        for _ in range(frames):
            self.tick()
