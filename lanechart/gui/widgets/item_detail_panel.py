"""
Item Detail Panel Module.

Shows the selected timeline item: an editable name plus its dates.
"""

import logging
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from lanechart.core.date_math import to_iso
from lanechart.core.items import TimelineItem

logger = logging.getLogger(__name__)


class NameLineEdit(QLineEdit):
    """Line edit that commits on Enter or focus loss and reverts on Escape."""

    commit_requested = Signal()
    revert_requested = Signal()

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Return, Qt.Key_Enter):
            event.accept()
            self.commit_requested.emit()
            return
        if event.key() == Qt.Key_Escape:
            event.accept()
            self.revert_requested.emit()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.commit_requested.emit()


class ItemDetailPanel(QWidget):
    """
    Detail view for the selected item.

    Emits ``name_committed`` with a partial update when the edited name is
    non-empty and differs from the item's current name.
    """

    name_committed = Signal(dict)
    close_requested = Signal()

    def __init__(self, parent=None):
        """
        Initializes the ItemDetailPanel.

        Args:
            parent (QWidget, optional): The parent widget. Defaults to None.
        """
        super().__init__(parent)
        self._item: Optional[TimelineItem] = None

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self.name_edit = NameLineEdit()
        self.name_edit.setAccessibleName("Edit name")
        self.name_edit.commit_requested.connect(self.commit_name)
        self.name_edit.revert_requested.connect(self.revert_name)
        header.addWidget(self.name_edit)

        self.btn_close = QPushButton("×")
        self.btn_close.setToolTip("Close")
        self.btn_close.setMaximumWidth(28)
        self.btn_close.clicked.connect(self.close_requested.emit)
        header.addWidget(self.btn_close)
        layout.addLayout(header)

        form = QFormLayout()
        self.start_label = QLabel("-")
        self.end_label = QLabel("-")
        self.duration_label = QLabel("-")
        form.addRow("Start:", self.start_label)
        form.addRow("End:", self.end_label)
        form.addRow("Days:", self.duration_label)
        layout.addLayout(form)
        layout.addStretch()

        self.set_item(None)

    @property
    def item(self) -> Optional[TimelineItem]:
        return self._item

    def set_item(self, item: Optional[TimelineItem]) -> None:
        """Shows the given item (None clears the panel)."""
        self._item = item
        enabled = item is not None
        self.name_edit.setEnabled(enabled)
        if item is None:
            self.name_edit.setText("")
            self.start_label.setText("-")
            self.end_label.setText("-")
            self.duration_label.setText("-")
            return

        self.name_edit.setText(item.name)
        self.start_label.setText(to_iso(item.start))
        self.end_label.setText(to_iso(item.end))
        self.duration_label.setText(str(item.duration_days))

    def commit_name(self) -> None:
        if self._item is None:
            return
        value = self.name_edit.text().strip()
        if value and value != self._item.name:
            logger.debug(f"Detail panel renaming {self._item.id}")
            self.name_committed.emit({"id": self._item.id, "name": value})

    def revert_name(self) -> None:
        self.name_edit.setText(self._item.name if self._item else "")
