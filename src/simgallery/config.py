"""
Configuration
=============
Central place for global constants and the runtime settings.

Why is this file needed?
------------------------
1. Abstraction: No frame timings or canvas sizes scattered around the code.
2. Overrides: ``load_runtime_config()`` reads user overrides from QSettings.

Exports:
    DEFAULT_CANVAS_SIZE (tuple[int, int]): Size of the 2D canvas in pixels.
    FRAME_INTERVAL_MS (int): Delay between two frames (about 60 fps).
    RuntimeConfig: Settings consumed by the runtime manager.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# Global Constants
DEFAULT_CANVAS_SIZE: tuple[int, int] = (800, 600)
FRAME_INTERVAL_MS: int = 16


@dataclass
class RuntimeConfig:
    """Settings of one runtime session."""
    frame_interval_ms: int = FRAME_INTERVAL_MS
    # Contain exceptions raised by a demonstration (constructor, update, draw,
    # reset, destroy) instead of letting them escape the frame loop.
    isolate_failures: bool = True
    canvas_width: int = DEFAULT_CANVAS_SIZE[0]
    canvas_height: int = DEFAULT_CANVAS_SIZE[1]


def load_runtime_config() -> RuntimeConfig:
    """Build a RuntimeConfig, applying overrides stored in QSettings."""
    from PySide6.QtCore import QSettings

    settings = QSettings()
    defaults = RuntimeConfig()
    cfg = RuntimeConfig(
        frame_interval_ms=int(settings.value("runtime/frame_interval_ms", defaults.frame_interval_ms, type=int)),
        isolate_failures=bool(settings.value("runtime/isolate_failures", defaults.isolate_failures, type=bool)),
        canvas_width=int(settings.value("runtime/canvas_width", defaults.canvas_width, type=int)),
        canvas_height=int(settings.value("runtime/canvas_height", defaults.canvas_height, type=int)),
    )
    if cfg.frame_interval_ms <= 0:
        logger.warning(f"Invalid frame interval {cfg.frame_interval_ms} ms, using {FRAME_INTERVAL_MS} ms.")
        cfg.frame_interval_ms = FRAME_INTERVAL_MS
    return cfg
