APP_NAME = "Scale Ruler"
SETTINGS_HEADER = "ScaleRuler settings"

INCHES_PER_FOOT = 12
MAX_INCHES_FIELD = 11

LAST_PATH_KEY = "lastPath"
SCALE_KEY_PREFIX = "scale."
MEASUREMENTS_KEY_PREFIX = "meas."
WINDOW_GEOMETRY_KEY = "window.geometry"
WINDOW_MAXIMIZED_KEY = "window.maximized"

MEASUREMENT_ENTRY_SEPARATOR = "|"
MEASUREMENT_FIELD_SEPARATOR = ","
MEASUREMENT_FIELD_COUNT = 4

VIEW_SCALE_MIN = 0.1
VIEW_SCALE_MAX = 10.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

IMAGE_FILE_PATTERNS = ("*.png", "*.jpg", "*.jpeg", "*.gif", "*.bmp", "*.tiff")

QT_WINDOW_DEFAULT_GEOMETRY = "1200x800"
QT_WINDOW_MIN_WIDTH = 640
QT_WINDOW_MIN_HEIGHT = 480
BUTTON_ZOOM_FACTOR = 1.25
