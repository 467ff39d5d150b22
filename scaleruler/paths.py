import os


SETTINGS_ENV = "SCALERULER_SETTINGS"
HOME_DIR = os.path.expanduser("~") or "."
SETTINGS_FILE = os.environ.get(SETTINGS_ENV) or os.path.join(HOME_DIR, ".scaleruler.properties")
