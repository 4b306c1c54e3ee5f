"""
Timeline Item Graphic Module.

Provides the TimelineItemGraphic class: one draggable, resizable bar per
timeline item, with an inline name editor. All gesture decisions are
delegated to the item's InteractionController; this class only maps Qt
mouse/keyboard events onto it and paints the result.
"""

import logging

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QCursor, QPainter, QPen
from PySide6.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsProxyWidget,
    QLineEdit,
)

from lanechart.app.constants import (
    BAR_HEIGHT,
    RESIZE_HANDLE_WIDTH,
    SHOW_META_MIN_WIDTH,
)
from lanechart.core.date_math import to_iso
from lanechart.core.gesture import GestureKind
from lanechart.core.interaction import InteractionController

logger = logging.getLogger(__name__)


class InlineNameEditor(QLineEdit):
    """
    Line edit that reports Enter, Escape and focus loss to the controller.
    """

    def __init__(self, controller: InteractionController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setObjectName("TimelineItemEditor")

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Return, Qt.Key_Enter):
            self.controller.commit_edit(self.text())
            event.accept()
            return
        if event.key() == Qt.Key_Escape:
            self.controller.cancel_edit()
            event.accept()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        # Harmless after Enter/Escape: the controller is no longer editing.
        self.controller.commit_edit(self.text())


class TimelineItemGraphic(QGraphicsObject):
    """
    Rounded bar spanning an item's (draft or committed) date range.

    The left and right edges are resize handles; the body moves the item.
    """

    BASE_COLOR = QColor("#3498DB")
    DRAG_COLOR = QColor("#5DADE2")
    SELECTED_BORDER = QColor("#F1C40F")

    def __init__(self, controller: InteractionController, pointer_position, parent=None):
        """
        Initializes a TimelineItemGraphic.

        Args:
            controller: The item's interaction controller.
            pointer_position: Callable mapping a scene position to a
                PointerPosition (viewport x plus horizontal scroll).
            parent (QGraphicsItem, optional): Parent item.
        """
        super().__init__(parent)
        self.controller = controller
        self._pointer_position = pointer_position
        self._width = 0.0
        self._selected = False

        self.setFlags(QGraphicsItem.ItemIsFocusable)
        self.setAcceptHoverEvents(True)
        self.setCursor(QCursor(Qt.OpenHandCursor))

        self._editor = InlineNameEditor(controller)
        self._proxy = QGraphicsProxyWidget(self)
        self._proxy.setWidget(self._editor)
        self._proxy.hide()

        controller.on_changed = self.refresh
        controller.on_focus_editor = self._focus_editor
        self.refresh()

    @property
    def item(self):
        return self.controller.item

    @property
    def editor(self) -> QLineEdit:
        return self._editor

    @property
    def bar_width(self) -> float:
        return self._width

    def set_selected(self, selected: bool) -> None:
        """Marks the bar as the item shown in the detail panel."""
        if selected != self._selected:
            self._selected = selected
            self.update()

    def refresh(self) -> None:
        """Re-reads geometry and edit state from the controller."""
        left, width = self.controller.geometry()
        if width != self._width:
            self.prepareGeometryChange()
            self._width = width
        self.setX(left)
        self.setToolTip(self.controller.tooltip())
        self._sync_editor()
        self.update()

    def _sync_editor(self) -> None:
        editing = self.controller.is_editing
        if editing and not self._proxy.isVisible():
            self._editor.setText(self.item.name)
            self._proxy.setGeometry(QRectF(2, 2, max(60.0, self._width - 4), BAR_HEIGHT - 4))
            self._proxy.show()
        elif not editing and self._proxy.isVisible():
            self._proxy.hide()

    def _focus_editor(self) -> None:
        self._proxy.setFocus()
        self._editor.setFocus()
        self._editor.selectAll()

    def handle_width(self) -> float:
        """Handle width, narrowed on short bars so the body stays grabbable."""
        return min(float(RESIZE_HANDLE_WIDTH), self._width / 4.0)

    def hit_zone(self, local_x: float) -> GestureKind:
        """Which gesture a press at local_x starts."""
        handle = self.handle_width()
        if local_x < handle:
            return GestureKind.RESIZE_LEFT
        if local_x > self._width - handle:
            return GestureKind.RESIZE_RIGHT
        return GestureKind.MOVE

    # QGraphicsItem interface

    def boundingRect(self) -> QRectF:
        return QRectF(0, 0, self._width, BAR_HEIGHT)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(QPainter.Antialiasing)
        rect = self.boundingRect().adjusted(0.5, 0.5, -0.5, -0.5)

        dragging = self.controller.draft is not None
        color = self.DRAG_COLOR if dragging else self.BASE_COLOR
        painter.setBrush(QBrush(color))

        pen = QPen(self.SELECTED_BORDER if self._selected else color.darker(140))
        pen.setCosmetic(True)
        pen.setWidth(2 if self._selected else 1)
        painter.setPen(pen)
        painter.drawRoundedRect(rect, 4, 4)

        # Handles
        handle = self.handle_width()
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(color.darker(120)))
        painter.drawRect(QRectF(0, 0, handle, BAR_HEIGHT))
        painter.drawRect(QRectF(self._width - handle, 0, handle, BAR_HEIGHT))

        if self.controller.is_editing:
            return

        painter.setPen(QPen(Qt.white))
        font = painter.font()
        font.setBold(True)
        font.setPointSize(9)
        painter.setFont(font)
        text_rect = QRectF(handle + 2, 1, max(0.0, self._width - 2 * handle - 4), 15)
        name = painter.fontMetrics().elidedText(
            self.item.name, Qt.ElideRight, int(text_rect.width())
        )
        painter.drawText(text_rect, Qt.AlignVCenter | Qt.AlignLeft, name)

        if self._width >= SHOW_META_MIN_WIDTH:
            rng = self.controller.display_range
            font.setBold(False)
            font.setPointSize(7)
            painter.setFont(font)
            painter.setPen(QPen(QColor(230, 230, 230)))
            meta_rect = QRectF(text_rect.x(), 15, text_rect.width(), 13)
            painter.drawText(
                meta_rect,
                Qt.AlignVCenter | Qt.AlignLeft,
                f"{to_iso(rng.start)} — {to_iso(rng.end)}",
            )

    def hoverMoveEvent(self, event):
        zone = self.hit_zone(event.pos().x())
        if zone is GestureKind.MOVE:
            self.setCursor(QCursor(Qt.OpenHandCursor))
        else:
            self.setCursor(QCursor(Qt.SizeHorCursor))
        super().hoverMoveEvent(event)

    def mousePressEvent(self, event):
        """
        Starts a candidate gesture. Moves and the release are delivered
        through the view's pointer capture, not through this item.
        """
        if event.button() != Qt.LeftButton:
            event.ignore()
            return
        event.accept()
        if self.controller.is_editing:
            return
        kind = self.hit_zone(event.pos().x())
        self.controller.pointer_down(kind, self._pointer_position(event.scenePos()))

    def mouseMoveEvent(self, event):
        event.accept()

    def mouseReleaseEvent(self, event):
        """A release reaching the item is the click half of the press."""
        event.accept()
        if event.button() == Qt.LeftButton:
            self.controller.click()

    def mouseDoubleClickEvent(self, event):
        event.accept()
        if event.button() == Qt.LeftButton:
            self.controller.double_click()

    def dispose(self) -> None:
        """Tears down the controller before the item leaves the scene."""
        self.controller.teardown()
