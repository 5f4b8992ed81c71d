"""
Control Descriptors
===================
Declarative description of one adjustable parameter of a demonstration.

A demonstration calls ``register_control(kind, label, config, on_change)``; the
runtime turns that into a ``ControlDescriptor`` with defaults filled in and
hands it to the host's control surface. The host only materializes a widget
and feeds raw widget values to ``ControlDescriptor.emit``, which applies the
type coercion for the control kind before calling ``on_change``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Union

logger = logging.getLogger(__name__)

ControlCallback = Callable[..., None]

DEFAULT_MIN: float = 0.0
DEFAULT_MAX: float = 100.0
DEFAULT_STEP: float = 1.0


class ControlKind(str, Enum):
    SLIDER = "slider"
    CHECKBOX = "checkbox"
    BUTTON = "button"
    SELECT = "select"


@dataclass(frozen=True)
class ControlConfig:
    """Widget configuration. Every field is optional for the caller."""
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    value: Optional[Any] = None
    checked: Optional[bool] = None
    options: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Union[Mapping[str, Any], ControlConfig, None]) -> ControlConfig:
        if data is None:
            return cls()
        if isinstance(data, ControlConfig):
            return data
        known = {"min", "max", "step", "value", "checked", "options"}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown control config keys: {sorted(unknown)}")
        options = data.get("options") or ()
        if isinstance(options, str) or not isinstance(options, Iterable):
            logger.debug(f"Control options {options!r} are not a list, ignoring them.")
            options = ()
        return cls(
            min=data.get("min"),
            max=data.get("max"),
            step=data.get("step"),
            value=data.get("value"),
            checked=data.get("checked"),
            options=tuple(str(o) for o in options),
        )


def _as_float(raw: Any, default: float) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.debug(f"Control setting {raw!r} is not a number, using {default}.")
        return default
    if not math.isfinite(value):
        return default
    return value


def _normalized(kind: ControlKind, config: ControlConfig) -> ControlConfig:
    """Substitute defaults for missing or unusable settings."""
    if kind is ControlKind.SLIDER:
        lo = _as_float(config.min, DEFAULT_MIN)
        hi = _as_float(config.max, DEFAULT_MAX)
        if hi < lo:
            lo, hi = hi, lo
        step = _as_float(config.step, DEFAULT_STEP)
        if step <= 0:
            step = DEFAULT_STEP
        value = _as_float(config.value, lo)
        value = min(max(value, lo), hi)
        return ControlConfig(min=lo, max=hi, step=step, value=value)
    if kind is ControlKind.CHECKBOX:
        return ControlConfig(checked=bool(config.checked))
    if kind is ControlKind.SELECT:
        value = config.value
        if value is None and config.options:
            value = config.options[0]
        return ControlConfig(value=value, options=config.options)
    return ControlConfig()


@dataclass
class ControlDescriptor:
    kind: ControlKind
    label: str
    config: ControlConfig
    on_change: ControlCallback

    def emit(self, raw: Any = None) -> None:
        """Coerce a raw widget value for this control kind and forward it."""
        if self.kind is ControlKind.BUTTON:
            self.on_change()
        elif self.kind is ControlKind.SLIDER:
            self.on_change(float(raw))
        elif self.kind is ControlKind.CHECKBOX:
            self.on_change(bool(raw))
        else:
            self.on_change(raw)


def make_descriptor(
    kind: Union[ControlKind, str],
    label: str,
    config: Union[Mapping[str, Any], ControlConfig, None],
    on_change: ControlCallback,
) -> ControlDescriptor:
    """
    Build a descriptor with defaults substituted.

    Raises:
        ValueError: If ``kind`` is not one of the control kinds.
    """
    try:
        kind = ControlKind(kind)
    except ValueError:
        raise ValueError(f"Unknown control kind '{kind}'") from None
    cfg = _normalized(kind, ControlConfig.from_mapping(config))
    return ControlDescriptor(kind=kind, label=str(label), config=cfg, on_change=on_change)


class ControlSurface(Protocol):
    """The host region that materializes descriptors into widgets."""

    def add_control(self, descriptor: ControlDescriptor) -> None: ...

    def clear(self) -> None: ...
