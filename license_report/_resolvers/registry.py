"""Resolver registry for dispatching dependencies to registry resolvers."""

from typing import Any, Dict, List, Optional

import requests

from license_report._manifests.models import DependencyRecord
from license_report.logging_config import logger

from .metadata import MetadataRecord
from .protocol import Resolver


class ResolverRegistry:
    """
    Registry for managing resolver plugins.

    Dependencies are dispatched on their ecosystem tag to the first
    registered resolver that supports them.

    Example:
        registry = ResolverRegistry()
        registry.register(GoModuleResolver())
        registry.register(NpmResolver())
        registry.register(PyPIResolver())

        record = registry.resolve(dependency, session)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._resolvers: List[Resolver] = []

    def register(self, resolver: Resolver) -> None:
        """
        Register a resolver.

        Args:
            resolver: Resolver implementation to register
        """
        self._resolvers.append(resolver)
        logger.debug(f"Registered resolver: {resolver.name} ({resolver.ecosystem.value})")

    def get_resolver_for(self, dependency: DependencyRecord) -> Optional[Resolver]:
        """
        Find the resolver for a dependency.

        Args:
            dependency: Dependency parsed from a manifest

        Returns:
            The first resolver supporting the dependency, or None
        """
        for resolver in self._resolvers:
            if resolver.supports(dependency):
                return resolver
        return None

    def resolve(self, dependency: DependencyRecord, session: requests.Session) -> MetadataRecord:
        """
        Resolve one dependency; never raises for resolution failures.

        Args:
            dependency: Dependency parsed from a manifest
            session: requests.Session with configured headers

        Returns:
            MetadataRecord (sparse when no resolver applies or the resolver failed)
        """
        resolver = self.get_resolver_for(dependency)
        if resolver is None:
            logger.warning(f"No resolver available for ecosystem: {dependency.ecosystem.value}")
            return MetadataRecord.sparse(dependency)

        try:
            return resolver.resolve(dependency, session)
        except Exception as e:
            logger.warning(f"Error resolving {dependency.name} with {resolver.name}: {e}")
            return MetadataRecord.sparse(dependency)

    def list_resolvers(self) -> List[Dict[str, Any]]:
        """
        List all registered resolvers.

        Returns:
            List of dicts with 'name' and 'ecosystem' keys
        """
        return [{"name": r.name, "ecosystem": r.ecosystem.value} for r in self._resolvers]
