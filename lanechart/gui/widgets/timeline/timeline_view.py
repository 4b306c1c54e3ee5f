"""
Timeline View Module.

Provides the TimelineView class for rendering and interacting with the timeline.
"""

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QGraphicsView

from lanechart.app.constants import (
    ACTIVATION_THRESHOLD_PX,
    BAR_HEIGHT,
    CLICK_DELAY_MS,
    DEFAULT_PIXELS_PER_DAY,
    LANE_HEIGHT,
    PADDING_DAYS,
    RULER_HEIGHT,
    RULER_TICK_SPACING_PX,
)
from lanechart.core.date_math import date_to_x, timeline_bounds, total_days
from lanechart.core.gesture import PointerPosition
from lanechart.core.interaction import InteractionController
from lanechart.core.lane_assignment import assign_lanes, lane_index_map
from lanechart.core.pointer_capture import PointerCapture
from lanechart.core.protocols import Scheduler
from lanechart.gui.utils.qt_scheduler import QtScheduler
from lanechart.gui.widgets.timeline.timeline_item import TimelineItemGraphic
from lanechart.gui.widgets.timeline.timeline_scene import LaneRowItem, TimelineScene
from lanechart.gui.widgets.timeline_ruler import TimelineRuler

logger = logging.getLogger(__name__)


class TimelineView(QGraphicsView):
    """
    Custom Graphics View for displaying the TimelineScene.
    Handles:
    - Lane assignment and vertical placement of item bars.
    - Coordinate mapping between dates and pixels.
    - Publishing pointer moves/releases to the active gesture session.
    - Rendering the date ruler (Foreground).
    """

    item_updated = Signal(dict)  # Partial update {"id": ..., **fields}
    item_selected = Signal(object)  # TimelineItem
    background_clicked = Signal()

    def __init__(
        self,
        parent=None,
        scheduler: Optional[Scheduler] = None,
        pointer_capture: Optional[PointerCapture] = None,
    ):
        """
        Initializes the TimelineView.

        Args:
            parent (QWidget, optional): The parent widget. Defaults to None.
            scheduler: Deferred-callback source; defaults to a QtScheduler.
            pointer_capture: Shared pointer registry; one is created if omitted.
        """
        super().__init__(parent)
        self.scene = TimelineScene(self)
        self.setScene(self.scene)

        self._ruler = TimelineRuler(RULER_TICK_SPACING_PX)
        self.scheduler = scheduler or QtScheduler(self)
        self.pointer_capture = pointer_capture or PointerCapture()

        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setRenderHint(QPainter.Antialiasing)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setMouseTracking(True)

        self.timeline_items: List = []
        self.lanes: List[List] = []
        self.lane_of: Dict[str, int] = {}
        self.pixels_per_day: float = DEFAULT_PIXELS_PER_DAY
        self.min_gap_days = 0
        self.origin, self.last_day = timeline_bounds([], PADDING_DAYS)
        self.selected_id: Optional[str] = None

        self._graphics: Dict[str, TimelineItemGraphic] = {}
        self._lane_rows: List[LaneRowItem] = []

    # Coordinate mapping

    def date_to_x(self, value) -> float:
        """Scene x of a day relative to the current origin."""
        return date_to_x(value, self.origin, self.pixels_per_day)

    def total_days(self) -> int:
        return total_days(self.origin, self.last_day)

    def lane_y(self, lane_index: int) -> float:
        """Scene y of the bar top in the given lane."""
        return RULER_HEIGHT + lane_index * LANE_HEIGHT + (LANE_HEIGHT - BAR_HEIGHT) / 2

    def pointer_position(self, scene_pos: QPointF) -> PointerPosition:
        """Viewport x plus the horizontal scroll offset for a scene point."""
        viewport_x = self.mapFromScene(scene_pos).x()
        return self._position_at(viewport_x)

    def _position_at(self, viewport_x: float) -> PointerPosition:
        return PointerPosition(
            x=float(viewport_x), scroll_x=float(self.horizontalScrollBar().value())
        )

    def graphic_for(self, item_id: str) -> Optional[TimelineItemGraphic]:
        return self._graphics.get(item_id)

    def controller_for(self, item_id: str) -> Optional[InteractionController]:
        graphic = self._graphics.get(item_id)
        return graphic.controller if graphic else None

    # Data

    def set_items(self, items, min_gap_days: Optional[int] = None) -> None:
        """
        Replaces the rendered items and recomputes lanes.

        Existing bars are reused by id so a gesture that just committed keeps
        its controller; bars for vanished items are torn down.
        """
        self.timeline_items = list(items)
        if min_gap_days is not None:
            self.min_gap_days = min_gap_days
        self._rebuild()

    def set_scale(self, pixels_per_day: float, min_gap_days: int) -> None:
        """Applies a new zoom and the lane gap that goes with it."""
        self.pixels_per_day = pixels_per_day
        self.min_gap_days = min_gap_days
        for graphic in self._graphics.values():
            graphic.controller.set_pixels_per_day(pixels_per_day)
        self._rebuild()

    def set_selected(self, item_id: Optional[str]) -> None:
        """Highlights the bar of the selected item (None clears)."""
        self.selected_id = item_id
        for gid, graphic in self._graphics.items():
            graphic.set_selected(gid == item_id)

    def _rebuild(self) -> None:
        items = self.timeline_items
        self.origin, self.last_day = timeline_bounds(items, PADDING_DAYS)
        self.lanes = assign_lanes(items, min_gap_days=self.min_gap_days)

        current_ids = {item.id for item in items}
        for item_id in list(self._graphics):
            if item_id not in current_ids:
                graphic = self._graphics.pop(item_id)
                graphic.dispose()
                self.scene.removeItem(graphic)

        self.lane_of = lane_index_map(self.lanes)
        for item in items:
            graphic = self._graphics.get(item.id)
            if graphic is None:
                graphic = self._create_graphic(item)
            else:
                graphic.controller.set_item(item)
            graphic.setY(self.lane_y(self.lane_of[item.id]))
            graphic.set_selected(item.id == self.selected_id)
            graphic.refresh()

        width = self.total_days() * self.pixels_per_day
        self._rebuild_lane_rows(width)
        height = RULER_HEIGHT + max(1, len(self.lanes)) * LANE_HEIGHT + LANE_HEIGHT
        self.scene.setSceneRect(0, 0, width, height)
        self.viewport().update()

        logger.debug(
            f"Rendered {len(items)} items in {len(self.lanes)} lanes "
            f"at {self.pixels_per_day} px/day"
        )

    def _create_graphic(self, item) -> TimelineItemGraphic:
        controller = InteractionController(
            item,
            date_to_x=self.date_to_x,
            pixels_per_day=self.pixels_per_day,
            scheduler=self.scheduler,
            pointer_capture=self.pointer_capture,
            on_update=self.item_updated.emit,
            on_select=self.item_selected.emit,
            click_delay_ms=CLICK_DELAY_MS,
            activation_threshold=ACTIVATION_THRESHOLD_PX,
        )
        graphic = TimelineItemGraphic(controller, self.pointer_position)
        self.scene.addItem(graphic)
        self._graphics[item.id] = graphic
        return graphic

    def _rebuild_lane_rows(self, width: float) -> None:
        for row in self._lane_rows:
            self.scene.removeItem(row)
        self._lane_rows = []
        for index in range(len(self.lanes)):
            row = LaneRowItem(
                index, 0, RULER_HEIGHT + index * LANE_HEIGHT, width, LANE_HEIGHT
            )
            self.scene.addItem(row)
            self._lane_rows.append(row)

    def teardown(self) -> None:
        """Tears down every item controller (listeners and timers)."""
        for graphic in self._graphics.values():
            graphic.dispose()

    def fit_pixels_per_day(self, minimum: float, maximum: float) -> float:
        """Scale at which all rendered days fit the viewport width."""
        days = self.total_days()
        width = self.viewport().width()
        if days <= 0 or width <= 0:
            return self.pixels_per_day
        return max(minimum, min(maximum, width / days))

    def focus_item(self, item_id: str) -> None:
        """Scrolls the given item into view."""
        graphic = self._graphics.get(item_id)
        if graphic is not None:
            self.ensureVisible(graphic)

    # Pointer events

    def mousePressEvent(self, event):
        """
        Emits 'background_clicked' for presses that do not land on a bar.
        """
        pos = event.position().toPoint()
        under = self.itemAt(pos)
        if not isinstance(under, TimelineItemGraphic) and (
            under is None or not isinstance(under.parentItem(), TimelineItemGraphic)
        ):
            self.background_clicked.emit()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        """Publishes the move to the live gesture session before the scene."""
        if self.pointer_capture.publish_move(self._position_at(event.position().x())):
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        """Publishes the release, then lets the scene deliver the click."""
        if event.button() == Qt.LeftButton:
            self.pointer_capture.publish_up(self._position_at(event.position().x()))
        super().mouseReleaseEvent(event)

    # Ruler

    def drawForeground(self, painter, rect):
        """
        Draws the day ruler pinned to the top of the viewport.
        """
        painter.save()
        painter.resetTransform()

        w = self.viewport().width()
        h = RULER_HEIGHT

        painter.setBrush(QColor("#2B2B2B"))
        painter.setPen(Qt.NoPen)
        painter.drawRect(0, 0, w, h)
        painter.setPen(QPen(QColor("#555555"), 1))
        painter.drawLine(0, h, w, h)

        font = QFont(painter.font())
        font.setPointSize(8)
        painter.setFont(font)

        ticks = self._ruler.calculate_ticks(
            self.origin, self.total_days(), self.pixels_per_day
        )
        for tick in ticks:
            screen_x = self.mapFromScene(QPointF(tick.position, 0)).x()
            if screen_x < -120 or screen_x > w + 20:
                continue
            painter.setPen(QPen(QColor("#888888"), 1))
            painter.drawLine(int(screen_x), h - 8, int(screen_x), h)
            painter.setPen(QColor("#DDDDDD"))
            painter.drawText(
                QRectF(screen_x + 3, 4, 110, h - 14),
                Qt.AlignVCenter | Qt.AlignLeft,
                tick.label,
            )

        painter.restore()
