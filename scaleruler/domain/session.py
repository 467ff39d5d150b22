"""In-memory annotation state for the currently open image.

The session owns the two-click drawing protocol, the calibration ratio
(inches per display pixel) and the ordered measurement list. Every mutating
operation writes through to the annotation store when one is attached.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional

from scaleruler.constants import VIEW_SCALE_MAX, VIEW_SCALE_MIN
from scaleruler.domain.helpers import feet_inches_to_inches, format_feet_inches, segment_length
from scaleruler.errors import SessionStateError

CalibrationPrompt = Callable[[], Optional[tuple[int, int]]]

SECONDARY_CANCELLED_LINE = "cancelled_line"
SECONDARY_RESET_CALIBRATION = "reset_calibration"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(eq=False)
class Measurement:
    start: Point
    end: Point
    length_inches: float = 0.0

    @property
    def distance(self) -> float:
        return segment_length(self.start.x, self.start.y, self.end.x, self.end.y)

    @property
    def coordinates(self) -> tuple[float, float, float, float]:
        return (self.start.x, self.start.y, self.end.x, self.end.y)

    @property
    def label(self) -> str:
        return format_feet_inches(self.length_inches)

    def recalculate(self, units_per_pixel: float | None) -> None:
        self.length_inches = (units_per_pixel or 0.0) * self.distance


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class AwaitingSecondPoint:
    first: Point


IDLE = Idle()


def _as_point(value) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


def _valid_ratio(value) -> float | None:
    if value is None:
        return None
    try:
        ratio = float(value)
    except (TypeError, ValueError):
        return None
    if math.isfinite(ratio) and ratio > 0:
        return ratio
    return None


class AnnotationSession:
    def __init__(self, image_path=None, store=None, units_per_pixel=None):
        self.image_path = image_path
        self.store = store
        self.units_per_pixel = _valid_ratio(units_per_pixel)
        self.measurements: list[Measurement] = []
        self.state = IDLE
        self.view_scale = 1.0

    @classmethod
    def open(cls, image_path, store=None):
        """Start a fresh session for ``image_path`` with its stored calibration."""
        units_per_pixel = store.get_scale(image_path) if store is not None and image_path else None
        return cls(image_path=image_path, store=store, units_per_pixel=units_per_pixel)

    def restore_measurements(self) -> list[Measurement]:
        if self.store is None or not self.image_path:
            return []
        restored = []
        for x1, y1, x2, y2 in self.store.get_measurements(self.image_path):
            restored.append(self.add_measurement(Point(x1, y1), Point(x2, y2), persist=False))
        return restored

    # ── Derived values ───────────────────────────────────────────

    @property
    def is_calibrated(self) -> bool:
        return self.units_per_pixel is not None

    @property
    def pending_first_point(self) -> Point | None:
        if isinstance(self.state, AwaitingSecondPoint):
            return self.state.first
        return None

    @property
    def total_inches(self) -> float:
        return sum(m.length_inches for m in self.measurements)

    @property
    def total_label(self) -> str:
        return f"Total: {format_feet_inches(self.total_inches)}"

    # ── Two-click drawing protocol ───────────────────────────────

    def begin_line(self, point) -> Point:
        if not isinstance(self.state, Idle):
            raise SessionStateError("A line is already in progress.")
        first = _as_point(point)
        self.state = AwaitingSecondPoint(first)
        return first

    def complete_line(self, point, prompt: CalibrationPrompt) -> Measurement | None:
        """Finish the pending line.

        Uncalibrated sessions treat the line as a calibration reference and ask
        ``prompt`` for its real length; the reference line never becomes a
        measurement. Calibrated sessions record a new measurement.
        """
        if not isinstance(self.state, AwaitingSecondPoint):
            raise SessionStateError("No line in progress.")
        start = self.state.first
        end = _as_point(point)
        distance = segment_length(start.x, start.y, end.x, end.y)
        try:
            if self.units_per_pixel is None:
                result = prompt()
                if result is not None:
                    feet, inches = result
                    self.set_calibration(feet_inches_to_inches(feet, inches), distance)
                return None
            return self.add_measurement(start, end)
        finally:
            self.state = IDLE

    def cancel_line(self) -> bool:
        if isinstance(self.state, Idle):
            return False
        self.state = IDLE
        return True

    def secondary_click(self) -> str:
        if self.cancel_line():
            return SECONDARY_CANCELLED_LINE
        self.reset_calibration()
        return SECONDARY_RESET_CALIBRATION

    # ── Calibration ──────────────────────────────────────────────

    def set_calibration(self, total_inches: float, distance: float) -> bool:
        if not (total_inches > 0.0 and distance > 0.0):
            return False
        ratio = _valid_ratio(total_inches / distance)
        if ratio is None:
            return False
        self.units_per_pixel = ratio
        if self.store is not None and self.image_path:
            self.store.set_scale(self.image_path, ratio)
        self.recalculate_all()
        return True

    def reset_calibration(self) -> None:
        self.units_per_pixel = None
        if self.store is not None and self.image_path:
            self.store.clear_scale(self.image_path)
        self.recalculate_all()

    def recalculate_all(self) -> None:
        for measurement in self.measurements:
            measurement.recalculate(self.units_per_pixel)

    # ── Measurements ─────────────────────────────────────────────

    def add_measurement(self, start, end, persist=True) -> Measurement:
        measurement = Measurement(_as_point(start), _as_point(end))
        measurement.recalculate(self.units_per_pixel)
        self.measurements.append(measurement)
        if persist:
            self._persist_measurements()
        return measurement

    def delete_measurement(self, ref) -> Measurement | None:
        if isinstance(ref, int):
            if ref < 0 or ref >= len(self.measurements):
                return None
            removed = self.measurements.pop(ref)
        else:
            index = next((i for i, m in enumerate(self.measurements) if m is ref), None)
            if index is None:
                return None
            removed = self.measurements.pop(index)
        self._persist_measurements()
        return removed

    def _persist_measurements(self) -> None:
        if self.store is None or not self.image_path:
            return
        self.store.set_measurements(self.image_path, [m.coordinates for m in self.measurements])

    # ── View ─────────────────────────────────────────────────────

    def zoom(self, factor: float) -> float:
        return self.set_view_scale(self.view_scale * factor)

    def set_view_scale(self, value: float) -> float:
        self.view_scale = min(VIEW_SCALE_MAX, max(VIEW_SCALE_MIN, float(value)))
        return self.view_scale


__all__ = [
    "IDLE",
    "AnnotationSession",
    "AwaitingSecondPoint",
    "CalibrationPrompt",
    "Idle",
    "Measurement",
    "Point",
    "SECONDARY_CANCELLED_LINE",
    "SECONDARY_RESET_CALIBRATION",
]
