import math
import re

from scaleruler.constants import INCHES_PER_FOOT, MAX_INCHES_FIELD

_INT_FIELD_RE = re.compile(r"[+-]?[0-9]+")


def segment_length(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def round_to_feet_inches(total_inches: float) -> tuple[int, int]:
    """Split a length in inches into whole feet and inches, rounding half up."""
    if total_inches is None or not math.isfinite(total_inches) or total_inches < 0:
        rounded = 0.0
    else:
        rounded = math.floor(total_inches + 0.5)
    feet = int(rounded // INCHES_PER_FOOT)
    inches = int(rounded % INCHES_PER_FOOT)
    if inches == INCHES_PER_FOOT:
        feet += 1
        inches = 0
    return feet, inches


def format_feet_inches(total_inches: float) -> str:
    feet, inches = round_to_feet_inches(total_inches)
    return f"{feet}′ {inches}″"


def feet_inches_to_inches(feet: int, inches: int) -> float:
    return feet * float(INCHES_PER_FOOT) + inches


def _parse_int_field(raw) -> int | None:
    text = str(raw if raw is not None else "").strip() or "0"
    if not _INT_FIELD_RE.fullmatch(text):
        return None
    return int(text)


def parse_feet_inches(feet_text, inches_text) -> tuple[int, int] | None:
    """Parse calibration dialog fields; blank counts as zero, anything invalid is None."""
    feet = _parse_int_field(feet_text)
    inches = _parse_int_field(inches_text)
    if feet is None or inches is None:
        return None
    if feet < 0 or not 0 <= inches <= MAX_INCHES_FIELD:
        return None
    return feet, inches


__all__ = [
    "feet_inches_to_inches",
    "format_feet_inches",
    "parse_feet_inches",
    "round_to_feet_inches",
    "segment_length",
]
