"""
2D Canvas Widget (QPainter)
===========================
Immediate-mode drawing target of the gallery.

Demonstrations paint into an off-screen ``QImage`` through ``PainterContext``;
the runtime calls ``present()`` once a frame is complete, which ends the open
painter and schedules a repaint of the widget.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QImage, QPainter, QPaintEvent, QPen, QPolygonF, QRadialGradient
from PySide6.QtWidgets import QSizePolicy, QStackedWidget, QWidget

logger = logging.getLogger(__name__)


def to_qcolor(color) -> QColor:
    """Convert "#rrggbb", color names or (r, g, b[, a]) tuples to QColor."""
    if isinstance(color, QColor):
        return color
    if isinstance(color, (tuple, list)):
        return QColor(*[int(c) for c in color])
    qc = QColor(str(color))
    if not qc.isValid():
        logger.debug(f"Invalid color '{color}', using black.")
        return QColor("black")
    return qc


class PainterContext:
    """DrawingContext implementation backed by a QPainter on a QImage."""

    def __init__(self, image: QImage, background: QColor) -> None:
        self._image = image
        self._background = background
        self._painter: Optional[QPainter] = None

    # ---- painter lifetime ----

    def _p(self) -> QPainter:
        if self._painter is None:
            self._painter = QPainter(self._image)
            self._painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        return self._painter

    def end(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    # ---- drawing API ----

    def clear(self) -> None:
        self.end()
        self._image.fill(self._background)

    def fill_background(self, color) -> None:
        self._p().fillRect(QRectF(0, 0, self._image.width(), self._image.height()), to_qcolor(color))

    def fill_rect(self, x, y, w, h, color) -> None:
        self._p().fillRect(QRectF(x, y, w, h), to_qcolor(color))

    def stroke_rect(self, x, y, w, h, color, width=1.0) -> None:
        p = self._p()
        p.setPen(QPen(to_qcolor(color), width))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawRect(QRectF(x, y, w, h))

    def fill_circle(self, x, y, r, color) -> None:
        p = self._p()
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(to_qcolor(color)))
        p.drawEllipse(QPointF(x, y), r, r)

    def stroke_circle(self, x, y, r, color, width=1.0) -> None:
        p = self._p()
        p.setPen(QPen(to_qcolor(color), width))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(QPointF(x, y), r, r)

    def gradient_circle(self, x, y, r, stops: Sequence, focus=None) -> None:
        fx, fy = focus if focus is not None else (x, y)
        grad = QRadialGradient(QPointF(x, y), r, QPointF(fx, fy))
        for pos, color in stops:
            grad.setColorAt(float(pos), to_qcolor(color))
        p = self._p()
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(grad))
        p.drawEllipse(QPointF(x, y), r, r)

    def line(self, x1, y1, x2, y2, color, width=1.0) -> None:
        p = self._p()
        p.setPen(QPen(to_qcolor(color), width))
        p.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def polyline(self, points: Sequence, color, width=1.0) -> None:
        if len(points) < 2:
            return
        p = self._p()
        p.setPen(QPen(to_qcolor(color), width))
        p.drawPolyline(QPolygonF([QPointF(px, py) for px, py in points]))

    def fill_polygon(self, points: Sequence, color) -> None:
        if len(points) < 3:
            return
        p = self._p()
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(to_qcolor(color)))
        p.drawPolygon(QPolygonF([QPointF(px, py) for px, py in points]))

    def text(self, x, y, text, color="black", size=12) -> None:
        p = self._p()
        font = QFont()
        font.setPixelSize(int(size))
        p.setFont(font)
        p.setPen(QPen(to_qcolor(color)))
        p.drawText(QPointF(x, y), str(text))


class CanvasWidget(QWidget):
    """Widget showing the canvas image, scaled to fit with preserved aspect ratio."""

    def __init__(self, width: int, height: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 240)

        self._background = QColor("white")
        self._image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        self._image.fill(self._background)
        self.context = PainterContext(self._image, self._background)

    # ---- Canvas protocol ----

    def surface_size(self) -> tuple[int, int]:
        return self._image.width(), self._image.height()

    def clear(self) -> None:
        self.context.clear()

    def present(self) -> None:
        self.context.end()
        self.update()

    def set_visible(self, visible: bool) -> None:
        stack = self.parentWidget()
        if isinstance(stack, QStackedWidget):
            if visible:
                stack.setCurrentWidget(self)
            return
        self.setVisible(visible)

    # ---- Qt ----

    def image(self) -> QImage:
        return self._image

    def paintEvent(self, event: QPaintEvent) -> None:
        # Never read the image while a frame is still being painted
        self.context.end()
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#f0f0f0"))
        scaled = self._image.size().scaled(self.size(), Qt.AspectRatioMode.KeepAspectRatio)
        x = (self.width() - scaled.width()) / 2
        y = (self.height() - scaled.height()) / 2
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.drawImage(QRectF(x, y, scaled.width(), scaled.height()), self._image)
        painter.end()
