import logging
import os

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QFileDialog

from scaleruler.constants import BUTTON_ZOOM_FACTOR, IMAGE_FILE_PATTERNS
from scaleruler.domain.session import SECONDARY_CANCELLED_LINE, AnnotationSession
from scaleruler.errors import ImageLoadError
from scaleruler_qt.dialogs import ask_feet_inches

logger = logging.getLogger(__name__)

IMAGE_FILE_FILTER = f"Image Files ({' '.join(IMAGE_FILE_PATTERNS)})"


class MeasureMixin:
    session = None

    def _init_measure_state(self):
        self.session = AnnotationSession(store=self.annotation_store)

    # ── Open ─────────────────────────────────────────────────────

    def _open_image_dialog(self):
        last = self.annotation_store.get_last_path()
        start_dir = os.path.dirname(last) if last else ""
        path, _ = QFileDialog.getOpenFileName(self, "Open Image", start_dir, IMAGE_FILE_FILTER)
        if not path:
            return
        normalized = os.path.abspath(path)
        self.annotation_store.set_last_path(normalized)
        self._load_image_from_path(normalized)

    def _open_last_image_if_any(self):
        last = self.annotation_store.get_last_path()
        if last and os.path.isfile(last) and os.access(last, os.R_OK):
            return self._load_image_from_path(os.path.abspath(last))
        return False

    def _load_image_from_path(self, path):
        try:
            self.image_view.open_image(path)
        except ImageLoadError as exc:
            logger.warning("Could not open image %s: %s", path, exc)
            self._set_status(f"Could not open image: {os.path.basename(path)}")
            return False

        self.session = AnnotationSession.open(path, self.annotation_store)
        self.image_view.set_zoom(self.session.view_scale)
        self._show_canvas()
        self._set_status(f"Opened {os.path.basename(path)}")
        self._update_calibration_status()
        self._update_total_label()
        self._restore_measurements_when_ready(self.session)
        return True

    def _restore_measurements_when_ready(self, session):
        if session is not self.session:
            return
        if not self.image_view.viewport_ready():
            QTimer.singleShot(0, lambda s=session: self._restore_measurements_when_ready(s))
            return
        self.image_view.fit_image_to_viewport()
        for measurement in session.restore_measurements():
            self.image_view.add_measurement_overlay(measurement)
        self._update_total_label()

    # ── Drawing ──────────────────────────────────────────────────

    def _on_image_point_clicked(self, x, y):
        view = self.image_view
        if not view.has_image:
            return
        session = self.session
        first = session.pending_first_point
        if first is None:
            session.begin_line((x, y))
            view.show_preview(x, y, x, y)
            self._set_status("Click the second point...")
            return

        view.clear_preview()
        if not session.is_calibrated:
            reference = view.add_reference_line(first.x, first.y, x, y)
            try:
                session.complete_line((x, y), self._prompt_calibration)
            finally:
                view.remove_item(reference)
            self._refresh_measurement_labels()
            self._update_calibration_status()
            self._set_status("Calibrated." if session.is_calibrated else "Calibration cancelled.")
        else:
            measurement = session.complete_line((x, y), self._prompt_calibration)
            if measurement is not None:
                view.add_measurement_overlay(measurement)
                self._set_status(f"Measured {measurement.label}")
        self._update_total_label()

    def _prompt_calibration(self):
        return ask_feet_inches(self)

    def _on_image_pointer_moved(self, x, y):
        first = self.session.pending_first_point
        if first is not None:
            self.image_view.show_preview(first.x, first.y, x, y)

    def _on_image_pointer_left(self):
        self.image_view.clear_preview()

    def _on_image_secondary_clicked(self):
        action = self.session.secondary_click()
        if action == SECONDARY_CANCELLED_LINE:
            self.image_view.clear_preview()
            self._set_status("Line cancelled.")
            return
        self._refresh_measurement_labels()
        self._update_calibration_status()
        self._update_total_label()
        self._set_status("Calibration reset. Draw a reference line to recalibrate.")

    def _on_measurement_delete_requested(self, measurement):
        if self.session.delete_measurement(measurement) is None:
            return
        self.image_view.remove_measurement_overlay(measurement)
        self._update_total_label()
        self._set_status(f"Deleted {measurement.label}")

    # ── Zoom ─────────────────────────────────────────────────────

    def _on_zoom_requested(self, factor):
        self.image_view.set_zoom(self.session.zoom(factor))

    def _on_zoom_in(self):
        self._on_zoom_requested(BUTTON_ZOOM_FACTOR)

    def _on_zoom_out(self):
        self._on_zoom_requested(1.0 / BUTTON_ZOOM_FACTOR)

    def _on_fit(self):
        self.image_view.set_zoom(self.session.set_view_scale(1.0))

    # ── Labels ───────────────────────────────────────────────────

    def _refresh_measurement_labels(self):
        for measurement in self.session.measurements:
            self.image_view.update_measurement_overlay(measurement)

    def _update_total_label(self):
        self._total_label.setText(self.session.total_label)

    def _update_calibration_status(self):
        if self.session.is_calibrated:
            self._cal_status.setText(f"Cal: {self.session.units_per_pixel:.4f} in/px")
        else:
            self._cal_status.setText("Not calibrated")


__all__ = ["MeasureMixin"]
