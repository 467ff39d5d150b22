import faulthandler
import logging
import os
import sys

faulthandler.enable()  # Dump traceback on segfault/crash to stderr

try:
    from PySide6.QtWidgets import QApplication
except ImportError as exc:
    print("PySide6 is required. Install with: pip install PySide6")
    raise

from scaleruler.constants import APP_NAME
from scaleruler_qt.theme import style_for_theme
from scaleruler_qt.window import ScaleRulerWindow

LOG_LEVEL_ENV = "SCALERULER_LOG_LEVEL"
THEME_ENV = "SCALERULER_THEME"


def main():
    logging.basicConfig(
        level=getattr(logging, os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setStyleSheet(style_for_theme(os.environ.get(THEME_ENV)))
    window = ScaleRulerWindow()
    window._show_restored()
    window._open_last_image_if_any()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
