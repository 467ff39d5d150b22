from PySide6.QtWidgets import QMainWindow

from scaleruler.infra.annotation_store import AnnotationStore
from scaleruler.infra.settings_store import PropertiesSettingsStore
from scaleruler_qt.mixins import LayoutMixin, MeasureMixin, WindowStateMixin


class ScaleRulerWindow(LayoutMixin, MeasureMixin, WindowStateMixin, QMainWindow):
    def __init__(self, settings=None):
        super().__init__()
        self.annotation_store = AnnotationStore(settings or PropertiesSettingsStore())
        self._init_measure_state()
        self._build_ui()
        self._restore_window_geometry()


__all__ = ["ScaleRulerWindow"]
