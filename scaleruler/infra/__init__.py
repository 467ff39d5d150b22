"""Infrastructure modules for Scale Ruler."""

from . import annotation_store, settings_store

__all__ = ["annotation_store", "settings_store"]
