"""
Main Window Module.

The application shell: owns the authoritative ItemStore, re-renders the
timeline whenever items or zoom change, and merges partial updates coming
back from the item controllers.
"""

import logging
import os
from typing import Optional

from PySide6 import QtCore
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QMainWindow,
    QStatusBar,
)

from lanechart.app.constants import (
    DEFAULT_PIXELS_PER_DAY,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    ITEMS_FILE_FILTER,
    SETTINGS_GEOMETRY_KEY,
    SETTINGS_LAST_FILE_KEY,
    SETTINGS_PIXELS_PER_DAY_KEY,
    STATUS_ERROR_PREFIX,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
    WINDOW_TITLE,
)
from lanechart.core.item_loader import load_items, sample_items, save_items
from lanechart.core.item_store import ItemStore, UpdateResult
from lanechart.gui.widgets.item_detail_panel import ItemDetailPanel
from lanechart.gui.widgets.timeline import TimelineWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    The main application window.

    Acts as the state container for the timeline:
    - ItemStore holding the authoritative items.
    - TimelineWidget rendering lanes and item bars.
    - ItemDetailPanel dock for the selected item.
    """

    def __init__(self, items=None, scheduler=None, pointer_capture=None):
        """
        Initializes the MainWindow.

        Args:
            items: Initial items; the bundled sample set when None.
            scheduler: Optional Scheduler forwarded to the timeline.
            pointer_capture: Optional PointerCapture forwarded to the timeline.
        """
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        # Looked up at call time so tests can patch QSettings
        self.settings = QtCore.QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        self.selected_id: Optional[str] = None

        self.store = ItemStore(sample_items() if items is None else items)

        # Widgets
        self.timeline = TimelineWidget(
            scheduler=scheduler, pointer_capture=pointer_capture
        )
        self.setCentralWidget(self.timeline)

        self.detail_panel = ItemDetailPanel()
        self.detail_dock = QDockWidget("Item", self)
        self.detail_dock.setObjectName("ItemDetailDock")
        self.detail_dock.setWidget(self.detail_panel)
        self.addDockWidget(Qt.RightDockWidgetArea, self.detail_dock)
        self.detail_dock.hide()

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self._create_actions()

        # Wiring
        self.store.subscribe(self._on_items_changed)
        self.timeline.item_updated.connect(self.update_item)
        self.timeline.item_selected.connect(self.select_item)
        self.timeline.background_clicked.connect(self.clear_selection)
        self.detail_panel.name_committed.connect(self.update_item)
        self.detail_panel.close_requested.connect(self.clear_selection)

        self._restore_settings()
        self.timeline.set_items(self.store.items)

    def _create_actions(self):
        file_menu = self.menuBar().addMenu("&File")

        self.action_open = QAction("&Open Items...", self)
        self.action_open.setShortcut("Ctrl+O")
        self.action_open.triggered.connect(self._on_open_requested)
        file_menu.addAction(self.action_open)

        self.action_export = QAction("&Export Items...", self)
        self.action_export.setShortcut("Ctrl+E")
        self.action_export.triggered.connect(self._on_export_requested)
        file_menu.addAction(self.action_export)

        self.action_sample = QAction("Load &Sample Items", self)
        self.action_sample.triggered.connect(self.load_sample)
        file_menu.addAction(self.action_sample)

        view_menu = self.menuBar().addMenu("&View")
        self.action_fit = QAction("&Fit View", self)
        self.action_fit.triggered.connect(self.timeline.fit_view)
        view_menu.addAction(self.action_fit)

    # State container

    def update_item(self, partial: dict) -> UpdateResult:
        """Merges a partial update from the timeline or the detail panel."""
        result = self.store.apply_update(partial)
        if not result.success:
            self.status_bar.showMessage(f"{STATUS_ERROR_PREFIX}{result.message}", 5000)
        return result

    def select_item(self, item) -> None:
        """Shows the item in the detail dock."""
        if item is None:
            self.clear_selection()
            return
        current = self.store.get(item.id) or item
        self.selected_id = current.id
        self.detail_panel.set_item(current)
        self.detail_dock.show()
        self.timeline.set_selected(current.id)

    def clear_selection(self) -> None:
        if self.selected_id is None:
            return
        self.selected_id = None
        self.detail_panel.set_item(None)
        self.detail_dock.hide()
        self.timeline.set_selected(None)

    def _on_items_changed(self, items) -> None:
        self.timeline.set_items(items)
        if self.selected_id is not None:
            selected = self.store.get(self.selected_id)
            if selected is None:
                self.clear_selection()
            else:
                self.detail_panel.set_item(selected)

    # File handling

    def open_file(self, path: str) -> bool:
        """
        Replaces the items with the content of a JSON file.

        Returns:
            bool: True if the file was loaded.
        """
        try:
            items = load_items(path)
            self.clear_selection()
            self.store.replace_all(items)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load items from {path}: {e}")
            self.status_bar.showMessage(f"{STATUS_ERROR_PREFIX}{e}", 8000)
            return False

        self.settings.setValue(SETTINGS_LAST_FILE_KEY, path)
        self.status_bar.showMessage(f"Loaded {len(items)} items", 3000)
        return True

    def export_file(self, path: str) -> bool:
        """Writes the current items as JSON."""
        try:
            save_items(path, self.store.items)
        except OSError as e:
            logger.error(f"Failed to export items to {path}: {e}")
            self.status_bar.showMessage(f"{STATUS_ERROR_PREFIX}{e}", 8000)
            return False
        self.status_bar.showMessage(f"Exported {len(self.store)} items", 3000)
        return True

    def restore_last_file(self) -> bool:
        """
        Reopens the item file loaded in the previous session, if any.

        Returns:
            bool: True if a remembered file was loaded.
        """
        path = self.settings.value(SETTINGS_LAST_FILE_KEY)
        if not path:
            return False
        if not os.path.isfile(path):
            logger.info(f"Last items file no longer exists: {path}")
            self.settings.remove(SETTINGS_LAST_FILE_KEY)
            return False
        return self.open_file(path)

    def load_sample(self) -> None:
        self.clear_selection()
        self.store.replace_all(sample_items())

    def _on_open_requested(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Items", "", ITEMS_FILE_FILTER
        )
        if path:
            self.open_file(path)

    def _on_export_requested(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Items", "items.json", ITEMS_FILE_FILTER
        )
        if path:
            self.export_file(path)

    # Settings

    def _restore_settings(self):
        geometry = self.settings.value(SETTINGS_GEOMETRY_KEY)
        if geometry is not None:
            self.restoreGeometry(geometry)
        ppd = self.settings.value(
            SETTINGS_PIXELS_PER_DAY_KEY, DEFAULT_PIXELS_PER_DAY, type=int
        )
        self.timeline.set_pixels_per_day(ppd)

    def closeEvent(self, event):
        """Saves settings and tears down live gestures before closing."""
        self.settings.setValue(SETTINGS_GEOMETRY_KEY, self.saveGeometry())
        self.settings.setValue(
            SETTINGS_PIXELS_PER_DAY_KEY, self.timeline.pixels_per_day
        )
        self.timeline.teardown()
        logger.info("Main window closed")
        super().closeEvent(event)
