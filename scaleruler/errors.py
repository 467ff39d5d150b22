"""Project-wide error types."""


class ProjectError(Exception):
    """Base for all Scale Ruler errors."""


class SessionStateError(ProjectError):
    """A drawing operation was issued in the wrong state."""


class ImageLoadError(ProjectError):
    """An image file could not be opened or decoded."""


__all__ = ["ProjectError", "SessionStateError", "ImageLoadError"]
