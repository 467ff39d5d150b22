from PySide6.QtCore import QLineF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QImageReader, QPainter, QPainterPath, QPen, QPixmap
from PySide6.QtWidgets import (
    QGraphicsLineItem,
    QGraphicsPathItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QGraphicsView,
)

from scaleruler.constants import ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR
from scaleruler.errors import ImageLoadError
from scaleruler_qt.constants import (
    LABEL_BACKGROUND_RGBA,
    LABEL_CORNER_RADIUS,
    LABEL_OFFSET_X,
    LABEL_OFFSET_Y,
    LABEL_PADDING,
    LABEL_TEXT_RGBA,
    LINE_WIDTH,
    MEASUREMENT_LINE_RGBA,
    PREVIEW_DASH_PATTERN,
    PREVIEW_LINE_RGBA,
)


def label_geometry(x1, y1, x2, y2, text_width, text_height):
    """Return ``(text_x, text_top, rect)`` for a label next to a segment midpoint.

    The text baseline sits at the midpoint shifted by the label offset; ``rect``
    is the padded highlight behind the text as ``(x, y, width, height)``.
    """
    text_x = (x1 + x2) / 2.0 + LABEL_OFFSET_X
    baseline_y = (y1 + y2) / 2.0 + LABEL_OFFSET_Y
    rect = (
        text_x - LABEL_PADDING,
        baseline_y - text_height - LABEL_PADDING,
        text_width + LABEL_PADDING * 2,
        text_height + LABEL_PADDING * 2,
    )
    return text_x, baseline_y - text_height, rect


class ImageView(QGraphicsView):
    """Image canvas with a measurement overlay in display coordinates.

    The image is scaled to fit the viewport when fitted; overlay items live in
    that fitted coordinate space and the view transform only carries the zoom.
    """

    pointClicked = Signal(float, float)
    secondaryClicked = Signal()
    labelSecondaryClicked = Signal(object)
    pointerMoved = Signal(float, float)
    pointerLeft = Signal()
    zoomRequested = Signal(float)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)
        self.setRenderHint(QPainter.Antialiasing)
        self.setRenderHint(QPainter.SmoothPixmapTransform)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)
        self.setCursor(Qt.CrossCursor)

        self._pixmap_item = None
        self._preview_item = None
        self._overlays = {}
        self._pan_active = False
        self._pan_last = None
        self._pointer_inside = False

    # ── Public API ───────────────────────────────────────────────

    @property
    def has_image(self):
        return self._pixmap_item is not None

    def open_image(self, path):
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        image = reader.read()
        if image.isNull():
            raise ImageLoadError(reader.errorString() or f"Could not decode {path}")

        self._scene.clear()
        self._overlays.clear()
        self._preview_item = None
        self._pixmap_item = self._scene.addPixmap(QPixmap.fromImage(image))
        self._pixmap_item.setTransformationMode(Qt.SmoothTransformation)
        self.set_zoom(1.0)

    def viewport_ready(self):
        viewport = self.viewport()
        return viewport.isVisible() and viewport.width() > 0 and viewport.height() > 0

    def fit_image_to_viewport(self):
        if not self._pixmap_item:
            return None
        pixmap = self._pixmap_item.pixmap()
        viewport = self.viewport()
        if pixmap.width() <= 0 or pixmap.height() <= 0 or viewport.width() <= 0 or viewport.height() <= 0:
            return None
        fit = min(viewport.width() / pixmap.width(), viewport.height() / pixmap.height())
        self._pixmap_item.setScale(fit)
        display = QRectF(0.0, 0.0, pixmap.width() * fit, pixmap.height() * fit)
        self._scene.setSceneRect(display)
        return display

    def display_rect(self):
        if not self._pixmap_item:
            return QRectF()
        return self._pixmap_item.sceneBoundingRect()

    def set_zoom(self, scale):
        self.resetTransform()
        self.scale(scale, scale)

    # ── Overlay ──────────────────────────────────────────────────

    def show_preview(self, x0, y0, x1, y1):
        if self._preview_item is None:
            pen = QPen(QColor(*PREVIEW_LINE_RGBA), LINE_WIDTH)
            pen.setDashPattern([v / LINE_WIDTH for v in PREVIEW_DASH_PATTERN])
            self._preview_item = QGraphicsLineItem()
            self._preview_item.setPen(pen)
            self._scene.addItem(self._preview_item)
        self._preview_item.setLine(QLineF(x0, y0, x1, y1))

    def clear_preview(self):
        if self._preview_item is not None:
            self._scene.removeItem(self._preview_item)
            self._preview_item = None

    @property
    def preview_visible(self):
        return self._preview_item is not None

    def add_reference_line(self, x0, y0, x1, y1):
        line = QGraphicsLineItem(x0, y0, x1, y1)
        line.setPen(QPen(QColor(*MEASUREMENT_LINE_RGBA), LINE_WIDTH))
        self._scene.addItem(line)
        return line

    def remove_item(self, item):
        if item is not None and item.scene() is self._scene:
            self._scene.removeItem(item)

    def add_measurement_overlay(self, measurement):
        x1, y1, x2, y2 = measurement.coordinates
        line = self.add_reference_line(x1, y1, x2, y2)
        rect = QGraphicsPathItem()
        rect.setPen(QPen(Qt.NoPen))
        rect.setBrush(QBrush(QColor(*LABEL_BACKGROUND_RGBA)))
        text = QGraphicsSimpleTextItem()
        text.setBrush(QBrush(QColor(*LABEL_TEXT_RGBA)))
        self._scene.addItem(rect)
        self._scene.addItem(text)
        self._overlays[id(measurement)] = (measurement, line, rect, text)
        self.update_measurement_overlay(measurement)

    def update_measurement_overlay(self, measurement):
        entry = self._overlays.get(id(measurement))
        if entry is None:
            return
        _, _line, rect, text = entry
        text.setText(measurement.label)
        bounds = text.boundingRect()
        text_x, text_top, (rx, ry, rw, rh) = label_geometry(
            *measurement.coordinates, bounds.width(), bounds.height()
        )
        text.setPos(text_x, text_top)
        path = QPainterPath()
        path.addRoundedRect(QRectF(rx, ry, rw, rh), LABEL_CORNER_RADIUS, LABEL_CORNER_RADIUS)
        rect.setPath(path)

    def remove_measurement_overlay(self, measurement):
        entry = self._overlays.pop(id(measurement), None)
        if entry is None:
            return
        for item in entry[1:]:
            self.remove_item(item)

    def measurement_at_label(self, item):
        for measurement, _line, rect, text in self._overlays.values():
            if item is rect or item is text:
                return measurement
        return None

    def clear_overlays(self):
        for measurement, *_ in list(self._overlays.values()):
            self.remove_measurement_overlay(measurement)
        self.clear_preview()

    # ── Mouse ────────────────────────────────────────────────────

    def wheelEvent(self, event):
        delta = event.angleDelta().y()
        if delta == 0:
            super().wheelEvent(event)
            return
        self.zoomRequested.emit(ZOOM_IN_FACTOR if delta > 0 else ZOOM_OUT_FACTOR)
        event.accept()

    def mousePressEvent(self, event):
        button = event.button()
        if button == Qt.MiddleButton:
            self._pan_active = True
            self._pan_last = event.position()
            self.viewport().setCursor(Qt.ClosedHandCursor)
            event.accept()
            return
        if self._pan_active:
            event.accept()
            return
        if button == Qt.LeftButton and self._pixmap_item is not None:
            scene_pos = self.mapToScene(event.position().toPoint())
            if self.display_rect().contains(scene_pos):
                self.pointClicked.emit(scene_pos.x(), scene_pos.y())
                event.accept()
                return
        if button == Qt.RightButton and self._pixmap_item is not None:
            measurement = self.measurement_at_label(self.itemAt(event.position().toPoint()))
            if measurement is not None:
                self.labelSecondaryClicked.emit(measurement)
                event.accept()
                return
            scene_pos = self.mapToScene(event.position().toPoint())
            if self.display_rect().contains(scene_pos):
                self.secondaryClicked.emit()
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._pan_active:
            pos = event.position()
            self.pan_by(pos.x() - self._pan_last.x(), pos.y() - self._pan_last.y())
            self._pan_last = pos
            event.accept()
            return
        scene_pos = self.mapToScene(event.position().toPoint())
        if self._pixmap_item is not None and self.display_rect().contains(scene_pos):
            self._pointer_inside = True
            self.pointerMoved.emit(scene_pos.x(), scene_pos.y())
        elif self._pointer_inside:
            self._leave_drawable_area()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MiddleButton and self._pan_active:
            self._stop_pan()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self._leave_drawable_area()
        if self._pan_active:
            self._stop_pan()
        super().leaveEvent(event)

    def _leave_drawable_area(self):
        self._pointer_inside = False
        self.clear_preview()
        self.pointerLeft.emit()

    def pan_by(self, dx, dy):
        hbar = self.horizontalScrollBar()
        vbar = self.verticalScrollBar()
        hbar.setValue(int(round(hbar.value() - dx)))
        vbar.setValue(int(round(vbar.value() - dy)))

    def _stop_pan(self):
        self._pan_active = False
        self._pan_last = None
        self.viewport().setCursor(Qt.CrossCursor)


__all__ = ["ImageView", "label_geometry"]
