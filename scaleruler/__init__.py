"""Scale Ruler core package."""

from . import constants, domain, errors, infra, paths

__all__ = [
    "constants",
    "domain",
    "errors",
    "infra",
    "paths",
]
