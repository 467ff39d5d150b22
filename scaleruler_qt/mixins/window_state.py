from scaleruler.constants import (
    QT_WINDOW_DEFAULT_GEOMETRY,
    QT_WINDOW_MIN_HEIGHT,
    QT_WINDOW_MIN_WIDTH,
    WINDOW_GEOMETRY_KEY,
    WINDOW_MAXIMIZED_KEY,
)


def parse_window_size(text):
    """Return ``(width, height)`` from a ``WxH`` string, clamped to the minimum size."""
    width_text, height_text = str(text).lower().split("x")
    return max(QT_WINDOW_MIN_WIDTH, int(width_text)), max(QT_WINDOW_MIN_HEIGHT, int(height_text))


class WindowStateMixin:
    _restored_size = None
    _start_maximized = True

    def _restore_window_geometry(self):
        store = self.annotation_store
        try:
            size = parse_window_size(store.get_value(WINDOW_GEOMETRY_KEY, QT_WINDOW_DEFAULT_GEOMETRY))
        except ValueError:
            size = parse_window_size(QT_WINDOW_DEFAULT_GEOMETRY)
        self._restored_size = size
        self._start_maximized = store.get_value(WINDOW_MAXIMIZED_KEY, "true").strip().lower() != "false"
        self.resize(*size)

    def _show_restored(self):
        if self._start_maximized:
            self.showMaximized()
        else:
            self.show()

    def _normal_window_size(self):
        # While maximized only normalGeometry() remembers the size to restore to.
        if self.isMaximized():
            normal = self.normalGeometry()
            if normal.isValid() and not normal.isEmpty():
                return normal.width(), normal.height()
            if self._restored_size is not None:
                return self._restored_size
        return self.width(), self.height()

    def closeEvent(self, event):
        width, height = self._normal_window_size()
        self.annotation_store.set_value(WINDOW_GEOMETRY_KEY, f"{width}x{height}")
        self.annotation_store.set_value(WINDOW_MAXIMIZED_KEY, "true" if self.isMaximized() else "false")
        super().closeEvent(event)

    def _set_status(self, text):
        self.status_lbl.setText(text)


__all__ = ["WindowStateMixin", "parse_window_size"]
