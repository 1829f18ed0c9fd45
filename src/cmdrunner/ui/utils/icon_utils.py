"""Tray icon utilities

Two fixed icon variants painted at runtime: a dark glyph for light
taskbars and a light glyph for dark taskbars.
"""

from typing import Dict

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QIcon, QPainter, QPen, QPixmap

ICON_LIGHT = "light"
ICON_DARK = "dark"

# Icon cache to avoid repainting
_ICON_CACHE: Dict[str, QIcon] = {}

_GLYPH_COLORS = {
    ICON_LIGHT: QColor(33, 33, 33),
    ICON_DARK: QColor(238, 238, 238),
}


def icon_variant(dark_theme: bool) -> str:
    return ICON_DARK if dark_theme else ICON_LIGHT


def _paint_icon(variant: str, size: int = 32) -> QIcon:
    """Terminal window with a `>_` prompt"""
    color = _GLYPH_COLORS[variant]

    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(0, 0, 0, 0))

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    pen = QPen(color)
    pen.setWidthF(max(2.0, size * 0.07))
    painter.setPen(pen)
    painter.setBrush(Qt.BrushStyle.NoBrush)
    inset = size * 0.08
    frame = QRectF(inset, inset + size * 0.06, size - 2 * inset, size - 2 * inset - size * 0.12)
    painter.drawRoundedRect(frame, size * 0.12, size * 0.12)

    # Prompt chevron
    pen = QPen(color)
    pen.setWidthF(max(2.0, size * 0.09))
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    painter.setPen(pen)
    left = frame.left() + size * 0.16
    mid_y = frame.center().y()
    painter.drawLine(int(left), int(mid_y - size * 0.12), int(left + size * 0.14), int(mid_y))
    painter.drawLine(int(left + size * 0.14), int(mid_y), int(left), int(mid_y + size * 0.12))

    # Cursor underscore
    cursor_y = mid_y + size * 0.12
    painter.drawLine(
        int(left + size * 0.24), int(cursor_y), int(left + size * 0.46), int(cursor_y)
    )

    painter.end()
    return QIcon(pixmap)


def get_tray_icon(dark_theme: bool) -> QIcon:
    """Icon for the requested theme (cached)"""
    variant = icon_variant(dark_theme)
    if variant not in _ICON_CACHE:
        _ICON_CACHE[variant] = _paint_icon(variant)
    return _ICON_CACHE[variant]
