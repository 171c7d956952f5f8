"""Resolver protocol for registry resolver plugins."""

from typing import Protocol

import requests

from license_report._manifests.models import DependencyRecord, Ecosystem

from .metadata import MetadataRecord


class Resolver(Protocol):
    """
    Protocol defining the interface for registry resolver plugins.

    Each resolver queries one public registry for a single dependency and
    maps the response onto a MetadataRecord.

    Example:
        class PyPIResolver:
            name = "pypi.org"
            ecosystem = Ecosystem.PYPI

            def supports(self, dependency: DependencyRecord) -> bool:
                return dependency.ecosystem == Ecosystem.PYPI

            def resolve(self, dependency: DependencyRecord, session: requests.Session) -> MetadataRecord:
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of the registry.

        Used for logging. Examples: "pkg.go.dev", "registry.npmjs.org", "pypi.org"
        """
        ...

    @property
    def ecosystem(self) -> Ecosystem:
        """Ecosystem served by this resolver."""
        ...

    def supports(self, dependency: DependencyRecord) -> bool:
        """
        Check if this resolver can describe the dependency.

        Args:
            dependency: Dependency parsed from a manifest

        Returns:
            True if the dependency belongs to this resolver's ecosystem
        """
        ...

    def resolve(self, dependency: DependencyRecord, session: requests.Session) -> MetadataRecord:
        """
        Fetch and map metadata for one dependency.

        Implementations should:
        1. Issue exactly one request through http_client.fetch
        2. Return MetadataRecord.sparse(dependency) on transport errors,
           timeouts, non-200 responses and undecodable bodies
        3. Never raise for registry-side problems

        Args:
            dependency: Dependency parsed from a manifest
            session: requests.Session with configured headers

        Returns:
            MetadataRecord, sparsely populated when metadata is unavailable
        """
        ...
