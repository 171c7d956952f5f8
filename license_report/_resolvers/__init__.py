"""Plugin-based registry resolution of dependency metadata."""

from .license_utils import standardize_license
from .metadata import MetadataRecord
from .protocol import Resolver
from .registry import ResolverRegistry
from .resolver import LicenseResolver, create_default_registry
from .versioning import normalize_version

__all__ = [
    "LicenseResolver",
    "create_default_registry",
    "MetadataRecord",
    "Resolver",
    "ResolverRegistry",
    "normalize_version",
    "standardize_license",
]
