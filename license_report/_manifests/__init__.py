"""Manifest parsing: turns a manifest file into normalized dependency records."""

from .models import (
    DependencyRecord,
    Ecosystem,
    ManifestType,
    ParsedManifest,
    ProjectDescriptor,
)
from .protocol import ManifestParser
from .registry import ManifestParserRegistry, create_default_registry, parse_manifest

__all__ = [
    "DependencyRecord",
    "Ecosystem",
    "ManifestType",
    "ParsedManifest",
    "ProjectDescriptor",
    "ManifestParser",
    "ManifestParserRegistry",
    "create_default_registry",
    "parse_manifest",
]
