"""
Timeline Widget Package.

Main entry point for timeline visualization. Provides TimelineWidget wrapper
that combines TimelineView with the zoom controls.

The timeline components live in separate modules:
- timeline/timeline_item.py - TimelineItemGraphic bar with drag/resize/edit
- timeline/timeline_scene.py - Scene and lane row components
- timeline/timeline_view.py - Main view with lane layout, ruler and pointer capture
"""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from lanechart.app.constants import (
    DEFAULT_PIXELS_PER_DAY,
    LABEL_GAP_PX,
    MAX_PIXELS_PER_DAY,
    MIN_PIXELS_PER_DAY,
)
from lanechart.core.lane_assignment import min_gap_for_scale
from lanechart.gui.widgets.timeline.timeline_item import TimelineItemGraphic
from lanechart.gui.widgets.timeline.timeline_scene import LaneRowItem, TimelineScene
from lanechart.gui.widgets.timeline.timeline_view import TimelineView


class TimelineWidget(QWidget):
    """
    Wrapper widget for TimelineView + Toolbar.
    """

    item_updated = Signal(dict)
    item_selected = Signal(object)
    background_clicked = Signal()
    pixels_per_day_changed = Signal(int)

    def __init__(self, parent=None, scheduler=None, pointer_capture=None):
        """
        Initializes the TimelineWidget.

        Args:
            parent (QWidget, optional): The parent widget. Defaults to None.
            scheduler: Optional Scheduler forwarded to the view.
            pointer_capture: Optional PointerCapture forwarded to the view.
        """
        super().__init__(parent)
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.layout = QVBoxLayout(self)
        self.layout.setSpacing(0)
        self.layout.setContentsMargins(0, 0, 0, 0)

        # Toolbar Container (Header)
        self.header_frame = QWidget()
        self.header_frame.setObjectName("TimelineHeader")
        self.toolbar_layout = QHBoxLayout(self.header_frame)
        self.toolbar_layout.setContentsMargins(4, 4, 4, 4)

        self.zoom_label = QLabel()
        self.toolbar_layout.addWidget(self.zoom_label)

        self.zoom_slider = QSlider(Qt.Horizontal)
        self.zoom_slider.setRange(MIN_PIXELS_PER_DAY, MAX_PIXELS_PER_DAY)
        self.zoom_slider.setValue(DEFAULT_PIXELS_PER_DAY)
        self.zoom_slider.setMaximumWidth(200)
        self.zoom_slider.setToolTip("Zoom (pixels per day)")
        self.zoom_slider.valueChanged.connect(self._on_zoom_changed)
        self.toolbar_layout.addWidget(self.zoom_slider)

        self.toolbar_layout.addStretch()

        self.btn_fit = QPushButton("Fit View")
        self.btn_fit.clicked.connect(self.fit_view)
        self.toolbar_layout.addWidget(self.btn_fit)

        self.layout.addWidget(self.header_frame)

        # View
        self.view = TimelineView(scheduler=scheduler, pointer_capture=pointer_capture)
        self.view.item_updated.connect(self.item_updated.emit)
        self.view.item_selected.connect(self.item_selected.emit)
        self.view.background_clicked.connect(self.background_clicked.emit)
        self.layout.addWidget(self.view)

        self._update_zoom_label(DEFAULT_PIXELS_PER_DAY)
        self.view.set_scale(
            DEFAULT_PIXELS_PER_DAY, min_gap_for_scale(DEFAULT_PIXELS_PER_DAY, LABEL_GAP_PX)
        )

    @property
    def pixels_per_day(self) -> int:
        return self.zoom_slider.value()

    @property
    def min_gap_days(self) -> int:
        """Lane gap derived from the zoom so labels keep some room."""
        return min_gap_for_scale(self.pixels_per_day, LABEL_GAP_PX)

    def set_items(self, items):
        """Passes the item list to the view."""
        self.view.set_items(items, self.min_gap_days)

    def set_pixels_per_day(self, value: int):
        """Moves the zoom slider (clamped to its range)."""
        self.zoom_slider.setValue(int(value))

    def set_selected(self, item_id):
        self.view.set_selected(item_id)

    def focus_item(self, item_id: str):
        """Scrolls the timeline to the given item."""
        self.view.focus_item(item_id)

    def fit_view(self):
        """Zooms so that the whole padded date range fits the viewport."""
        ppd = self.view.fit_pixels_per_day(MIN_PIXELS_PER_DAY, MAX_PIXELS_PER_DAY)
        self.set_pixels_per_day(int(ppd))

    def _on_zoom_changed(self, value: int):
        self._update_zoom_label(value)
        self.view.set_scale(value, min_gap_for_scale(value, LABEL_GAP_PX))
        self.pixels_per_day_changed.emit(value)

    def _update_zoom_label(self, value: int):
        self.zoom_label.setText(f"Zoom (pixels/day): {value}")

    def teardown(self):
        self.view.teardown()


__all__ = [
    "TimelineWidget",
    "TimelineItemGraphic",
    "TimelineScene",
    "LaneRowItem",
    "TimelineView",
]
