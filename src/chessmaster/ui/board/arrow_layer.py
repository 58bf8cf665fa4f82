"""Arrow drawing surface backed by items on a QGraphicsScene."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from PyQt6.QtCore import QLineF, QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QPen, QPolygonF
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsLineItem, QGraphicsPolygonItem

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QGraphicsScene

    from chessmaster.ui.board.overlay import Point


class ArrowLayer:
    """Owns the overlay items; ``clear`` removes every one of them."""

    Z_VALUE = 3.0

    __slots__ = ("_scene", "_items")

    def __init__(self, scene: QGraphicsScene) -> None:
        self._scene = scene
        self._items: list[QGraphicsItem] = []

    @property
    def items(self) -> tuple[QGraphicsItem, ...]:
        return tuple(self._items)

    def clear(self) -> None:
        for item in self._items:
            self._scene.removeItem(item)
        self._items.clear()

    def draw_shaft(self, start: Point, end: Point, color: QColor, width: float) -> None:
        pen = QPen(color, width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        item = QGraphicsLineItem(QLineF(QPointF(*start), QPointF(*end)))
        item.setPen(pen)
        self._add(item)

    def fill_polygon(self, points: Sequence[Point], color: QColor) -> None:
        item = QGraphicsPolygonItem(QPolygonF([QPointF(x, y) for x, y in points]))
        item.setBrush(QBrush(color))
        item.setPen(QPen(Qt.PenStyle.NoPen))
        self._add(item)

    def _add(self, item: QGraphicsItem) -> None:
        item.setZValue(self.Z_VALUE)
        item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self._scene.addItem(item)
        self._items.append(item)
