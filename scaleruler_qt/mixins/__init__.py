from scaleruler_qt.mixins.layout import LayoutMixin
from scaleruler_qt.mixins.measure import MeasureMixin
from scaleruler_qt.mixins.window_state import WindowStateMixin

__all__ = [
    "LayoutMixin",
    "MeasureMixin",
    "WindowStateMixin",
]
