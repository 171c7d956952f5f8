"""Registry resolver implementations."""

from .gomod import GoModuleResolver
from .npm import NpmResolver
from .pypi import PyPIResolver

__all__ = [
    "GoModuleResolver",
    "NpmResolver",
    "PyPIResolver",
]
