"""
Timeline Scene Module.

Provides the scene and lane background components for the timeline.
"""

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor, QPen
from PySide6.QtWidgets import QGraphicsRectItem, QGraphicsScene

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#1E1E1E"
LANE_COLORS = ("#252526", "#2D2D30")


class TimelineScene(QGraphicsScene):
    """
    Custom Graphics Scene for the Timeline.
    Holds the lane rows and the item bars.
    """

    def __init__(self, parent=None):
        """
        Initializes the TimelineScene.

        Args:
            parent (QObject, optional): The parent object. Defaults to None.
        """
        super().__init__(parent)
        self.setBackgroundBrush(QBrush(QColor(BACKGROUND_COLOR)))


class LaneRowItem(QGraphicsRectItem):
    """
    Striped background row for one lane. Purely decorative; never
    accepts mouse input so presses fall through to the view.
    """

    def __init__(self, index: int, x: float, y: float, width: float, height: float):
        super().__init__(x, y, width, height)
        self.lane_index = index
        self.setBrush(QBrush(QColor(LANE_COLORS[index % len(LANE_COLORS)])))
        self.setPen(QPen(QColor(0, 0, 0, 0)))
        self.setZValue(-10)
        self.setAcceptedMouseButtons(Qt.NoButton)
