LIGHT_APP_STYLE = """
QWidget {
    font-size: 13px;
}
QMainWindow {
    background-color: #f5f6f8;
}
QFrame#topBar {
    background-color: #fdfdfd;
    border-bottom: 1px solid #dfe3ea;
}
QLabel#appTitle {
    color: #1b1f24;
    font-size: 20px;
    font-weight: 700;
}
QLabel#statusLabel {
    color: #586171;
}
QLabel#calStatus {
    color: #586171;
}
QLabel#totalLabel {
    color: #0f172a;
    font-size: 15px;
    font-weight: 600;
}
QLabel#placeholderLabel {
    color: #8a94a6;
    font-size: 16px;
}
QPushButton {
    background: #f3f5f8;
    border: 1px solid #cfd5df;
    border-radius: 6px;
    color: #1f2937;
    padding: 6px 12px;
    min-height: 28px;
}
QPushButton:hover {
    border-color: #9db2d0;
    background: #eef3fb;
}
QPushButton#primaryButton {
    background: #2563eb;
    border-color: #1d4ed8;
    color: #ffffff;
}
QGraphicsView {
    background: #1f2328;
    border: none;
}
"""

DARK_APP_STYLE_OVERRIDES = """
QMainWindow {
    background-color: #0d1117;
}
QFrame#topBar {
    background-color: #161b22;
    border-bottom: 1px solid #30363d;
}
QLabel#appTitle, QLabel#totalLabel {
    color: #e6edf3;
}
QLabel#statusLabel, QLabel#calStatus, QLabel#placeholderLabel {
    color: #8b949e;
}
QPushButton {
    background: #21262d;
    border-color: #30363d;
    color: #e6edf3;
}
QPushButton:hover {
    background: #30363d;
    border-color: #8b949e;
}
"""

THEME_LIGHT = "light"
THEME_DARK = "dark"


def normalize_theme_mode(value):
    return THEME_DARK if str(value or "").strip().lower() == THEME_DARK else THEME_LIGHT


def style_for_theme(mode):
    normalized = normalize_theme_mode(mode)
    if normalized == THEME_DARK:
        return f"{LIGHT_APP_STYLE}\n{DARK_APP_STYLE_OVERRIDES}"
    return LIGHT_APP_STYLE


__all__ = [
    "DARK_APP_STYLE_OVERRIDES",
    "LIGHT_APP_STYLE",
    "THEME_DARK",
    "THEME_LIGHT",
    "normalize_theme_mode",
    "style_for_theme",
]
