"""Manifest parser implementations."""

from .go_mod import GoModParser
from .package_json import PackageJSONParser
from .pyproject import PyProjectParser

__all__ = [
    "GoModParser",
    "PackageJSONParser",
    "PyProjectParser",
]
