"""LicenseResolver: resolves dependency lists against public registries."""

from typing import Callable, List, Optional, Sequence

import requests

from license_report._manifests.models import DependencyRecord
from license_report.http_client import create_session
from license_report.logging_config import logger

from .metadata import MetadataRecord
from .registry import ResolverRegistry
from .sources import GoModuleResolver, NpmResolver, PyPIResolver

# Called before each dependency with (index, total, dependency)
ProgressCallback = Callable[[int, int, DependencyRecord], None]


def create_default_registry() -> ResolverRegistry:
    """
    Create a ResolverRegistry with one resolver per supported ecosystem.

    - GoModuleResolver - pkg.go.dev documentation pages (go)
    - NpmResolver - registry.npmjs.org version documents (npm)
    - PyPIResolver - pypi.org JSON API (pypi)

    Returns:
        Configured ResolverRegistry
    """
    registry = ResolverRegistry()
    registry.register(GoModuleResolver())
    registry.register(NpmResolver())
    registry.register(PyPIResolver())
    return registry


class LicenseResolver:
    """
    Resolves metadata for dependencies, one request at a time.

    Holds a single requests session for the run; there is no cache, every
    dependency triggers exactly one registry request.

    Example:
        with LicenseResolver() as resolver:
            records = resolver.resolve_all(manifest.dependencies)
    """

    def __init__(self, registry: Optional[ResolverRegistry] = None, session: Optional[requests.Session] = None) -> None:
        """
        Initialize the LicenseResolver.

        Args:
            registry: Optional ResolverRegistry. If not provided, creates
                      the default registry with all standard resolvers.
            session: Optional session to use instead of creating one
        """
        self._registry = registry if registry is not None else create_default_registry()
        self._session = session
        self._owns_session = session is None

    @property
    def registry(self) -> ResolverRegistry:
        """Get the resolver registry."""
        return self._registry

    def _get_session(self) -> requests.Session:
        """Get or create a requests session."""
        if self._session is None:
            self._session = create_session()
        return self._session

    def close(self) -> None:
        """Close the requests session if this resolver created it."""
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "LicenseResolver":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def resolve(self, dependency: DependencyRecord) -> MetadataRecord:
        """
        Resolve metadata for a single dependency.

        Args:
            dependency: Dependency parsed from a manifest

        Returns:
            MetadataRecord (never None)
        """
        return self._registry.resolve(dependency, self._get_session())

    def resolve_all(
        self,
        dependencies: Sequence[DependencyRecord],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[MetadataRecord]:
        """
        Resolve dependencies sequentially, in order.

        Args:
            dependencies: Dependencies in manifest order
            on_progress: Optional callback invoked before each dependency

        Returns:
            One MetadataRecord per dependency, in the same order
        """
        records: List[MetadataRecord] = []
        total = len(dependencies)
        resolver_names = ", ".join(r["name"] for r in self._registry.list_resolvers())
        logger.debug(f"Resolving {total} dependencies with: {resolver_names}")
        for index, dependency in enumerate(dependencies):
            if on_progress:
                on_progress(index, total, dependency)
            records.append(self.resolve(dependency))

        unresolved = sum(1 for r in records if r.is_sparse())
        if unresolved:
            logger.info(f"{unresolved}/{total} dependencies returned no registry metadata")
        return records
