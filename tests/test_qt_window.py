from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QApplication

from scaleruler.constants import WINDOW_GEOMETRY_KEY, WINDOW_MAXIMIZED_KEY
from scaleruler.infra.settings_store import PropertiesSettingsStore
from scaleruler_qt.mixins.window_state import WindowStateMixin
from scaleruler_qt.window import ScaleRulerWindow


def _ensure_app():
    return QApplication.instance() or QApplication([])


def _settings(tmp_path):
    return PropertiesSettingsStore(str(tmp_path / "settings.properties"))


def test_window_starts_with_empty_session(tmp_path):
    _ensure_app()
    window = ScaleRulerWindow(settings=_settings(tmp_path))

    assert window.session.image_path is None
    assert window._total_label.text() == "Total: 0′ 0″"
    assert window._cal_status.text() == "Not calibrated"
    assert window._open_last_image_if_any() is False


def test_window_geometry_restored_and_saved(tmp_path):
    _ensure_app()
    settings = _settings(tmp_path)
    settings.set(WINDOW_GEOMETRY_KEY, "900x700")
    settings.persist()

    window = ScaleRulerWindow(settings=_settings(tmp_path))
    assert (window.width(), window.height()) == (900, 700)

    window.resize(1000, 750)
    window.closeEvent(QCloseEvent())

    reloaded = _settings(tmp_path)
    reloaded.load()
    assert reloaded.get(WINDOW_GEOMETRY_KEY) == "1000x750"


def test_window_geometry_falls_back_on_garbage(tmp_path):
    _ensure_app()
    settings = _settings(tmp_path)
    settings.set(WINDOW_GEOMETRY_KEY, "wide")
    settings.persist()

    window = ScaleRulerWindow(settings=_settings(tmp_path))

    assert (window.width(), window.height()) == (1200, 800)


def test_opening_unreadable_image_reports_failure(tmp_path):
    _ensure_app()
    bogus = tmp_path / "not-an-image.png"
    bogus.write_bytes(b"definitely not a png")
    window = ScaleRulerWindow(settings=_settings(tmp_path))

    assert window._load_image_from_path(str(bogus)) is False
    assert window.session.image_path is None
    assert window.status_lbl.text() == "Could not open image: not-an-image.png"


class _FakeRect:
    def __init__(self, width, height):
        self._width = width
        self._height = height

    def isValid(self):
        return self._width > 0 and self._height > 0

    def isEmpty(self):
        return not self.isValid()

    def width(self):
        return self._width

    def height(self):
        return self._height


class _FakeAnnotationStore:
    def __init__(self, values=None):
        self.values = dict(values or {})

    def get_value(self, key, default=None):
        return self.values.get(key, default)

    def set_value(self, key, value):
        self.values[key] = value


class _CloseRecorder:
    closed = False

    def closeEvent(self, event):
        self.closed = True


class _WindowHarness(WindowStateMixin, _CloseRecorder):
    def __init__(self, values=None, maximized=False, normal=(0, 0)):
        self.annotation_store = _FakeAnnotationStore(values)
        self.maximized = maximized
        self.normal = normal
        self.size = (0, 0)
        self.shown = None

    def resize(self, width, height):
        self.size = (width, height)

    def width(self):
        return 1920 if self.maximized else self.size[0]

    def height(self):
        return 1080 if self.maximized else self.size[1]

    def isMaximized(self):
        return self.maximized

    def normalGeometry(self):
        return _FakeRect(*self.normal)

    def showMaximized(self):
        self.shown = "maximized"

    def show(self):
        self.shown = "normal"


def test_maximized_close_saves_normal_size_not_screen_size():
    window = _WindowHarness({WINDOW_GEOMETRY_KEY: "900x700"}, maximized=True, normal=(1000, 750))
    window._restore_window_geometry()

    window.closeEvent(None)

    assert window.annotation_store.values[WINDOW_GEOMETRY_KEY] == "1000x750"
    assert window.annotation_store.values[WINDOW_MAXIMIZED_KEY] == "true"
    assert window.closed is True


def test_maximized_close_without_normal_geometry_keeps_restored_size():
    window = _WindowHarness({WINDOW_GEOMETRY_KEY: "900x700"}, maximized=True)
    window._restore_window_geometry()

    window.closeEvent(None)

    assert window.annotation_store.values[WINDOW_GEOMETRY_KEY] == "900x700"


def test_window_starts_maximized_unless_last_closed_normal():
    window = _WindowHarness()
    window._restore_window_geometry()
    window._show_restored()
    assert window.shown == "maximized"
    assert window.size == (1200, 800)

    window = _WindowHarness({WINDOW_GEOMETRY_KEY: "900x700", WINDOW_MAXIMIZED_KEY: "false"})
    window._restore_window_geometry()
    window._show_restored()
    assert window.shown == "normal"
    assert window.size == (900, 700)
