import logging
import math
import re

from scaleruler.constants import (
    LAST_PATH_KEY,
    MEASUREMENT_ENTRY_SEPARATOR,
    MEASUREMENT_FIELD_COUNT,
    MEASUREMENT_FIELD_SEPARATOR,
    MEASUREMENTS_KEY_PREFIX,
    SCALE_KEY_PREFIX,
)

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def scale_key(path):
    return SCALE_KEY_PREFIX + path


def measurements_key(path):
    return MEASUREMENTS_KEY_PREFIX + path


def _to_float(raw):
    """Parse a plain ASCII decimal number; anything else, including nan/inf, is None."""
    if raw is None or not _DECIMAL_RE.fullmatch(raw.strip()):
        return None
    value = float(raw)
    return value if math.isfinite(value) else None


def encode_measurements(measurements):
    entries = []
    for values in measurements:
        values = list(values)[:MEASUREMENT_FIELD_COUNT]
        values += [0.0] * (MEASUREMENT_FIELD_COUNT - len(values))
        entries.append(MEASUREMENT_FIELD_SEPARATOR.join("%f" % float(v) for v in values))
    return MEASUREMENT_ENTRY_SEPARATOR.join(entries)


def decode_measurements(raw):
    items = []
    for entry in (raw or "").split(MEASUREMENT_ENTRY_SEPARATOR):
        if not entry.strip():
            continue
        parts = entry.split(MEASUREMENT_FIELD_SEPARATOR)
        if len(parts) != MEASUREMENT_FIELD_COUNT:
            continue
        numbers = [_to_float(part) for part in parts]
        if any(n is None for n in numbers):
            continue
        items.append(tuple(numbers))
    return items


class AnnotationStore:
    """Per-image calibration and measurements on top of a settings store.

    Every call reloads the whole store; writes persist it straight away.
    """

    def __init__(self, settings):
        self.settings = settings

    def _read(self, key):
        self.settings.load()
        return self.settings.get(key)

    def _persist(self):
        # An unreadable file would be overwritten with only the keys changed here.
        if self.settings.load_error:
            logger.warning("Not saving settings; the settings file could not be read.")
            return False
        return self.settings.persist()

    def _write(self, key, value):
        self.settings.load()
        self.settings.set(key, value)
        self._persist()

    def get_last_path(self):
        return self._read(LAST_PATH_KEY)

    def set_last_path(self, path):
        self._write(LAST_PATH_KEY, path)

    def get_scale(self, path):
        value = _to_float(self._read(scale_key(path)))
        if value is None or not math.isfinite(value) or value <= 0:
            return None
        return value

    def set_scale(self, path, inches_per_pixel):
        self._write(scale_key(path), repr(float(inches_per_pixel)))

    def clear_scale(self, path):
        self.settings.load()
        if self.settings.delete(scale_key(path)):
            self._persist()

    def get_measurements(self, path):
        return decode_measurements(self._read(measurements_key(path)))

    def set_measurements(self, path, measurements):
        self._write(measurements_key(path), encode_measurements(measurements))

    def get_value(self, key, default=None):
        value = self._read(key)
        return default if value is None else value

    def set_value(self, key, value):
        self._write(key, str(value))


__all__ = [
    "AnnotationStore",
    "decode_measurements",
    "encode_measurements",
    "measurements_key",
    "scale_key",
]
