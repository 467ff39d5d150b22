"""Domain logic: measurement arithmetic and the annotation session."""

from . import helpers, session

__all__ = ["helpers", "session"]
