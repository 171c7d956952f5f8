"""Metadata record returned by registry resolvers."""

from dataclasses import dataclass, fields

from license_report._manifests.models import DependencyRecord, Ecosystem


def go_proxy_info_path(module_path: str, version: str) -> str:
    """Module proxy path of the .info document for a module version, without a host."""
    return f"{module_path}/@v/{version}.info"


@dataclass(frozen=True)
class MetadataRecord:
    """
    Best-effort metadata for one dependency.

    Every field is a string and defaults to "". A record is never absent:
    unresolved metadata is represented by empty fields, not by None.

    Attributes:
        name: Dependency name (echoed)
        version: Resolved version, or the raw constraint when unresolved
        license: License identifier
        license_url: Lookup URL built from the license
        author: Author or maintainer
        description: Short summary of the package
        copyright: Copyright notice derived from the license or scraped text
        repository_url: Project homepage or repository link
        source_url: Source-control link (often GitHub)
        ecosystem: Ecosystem tag of the resolver ("go", "npm", "pypi")
        package_url: Module proxy info path (Go modules only)
        module_name: Dependency name without version
    """

    name: str = ""
    version: str = ""
    license: str = ""
    license_url: str = ""
    author: str = ""
    description: str = ""
    copyright: str = ""
    repository_url: str = ""
    source_url: str = ""
    ecosystem: str = ""
    package_url: str = ""
    module_name: str = ""

    @classmethod
    def sparse(cls, dependency: DependencyRecord) -> "MetadataRecord":
        """Record carrying only the echoed identity of a dependency."""
        package_url = ""
        if dependency.ecosystem == Ecosystem.GO:
            package_url = go_proxy_info_path(dependency.name, dependency.version_constraint)
        return cls(
            name=dependency.name,
            version=dependency.version_constraint,
            ecosystem=dependency.ecosystem.value,
            package_url=package_url,
            module_name=dependency.name,
        )

    def has_license(self) -> bool:
        return bool(self.license)

    def is_sparse(self) -> bool:
        """True when nothing beyond the echoed identity was resolved."""
        identity = {"name", "version", "ecosystem", "package_url", "module_name"}
        return not any(getattr(self, f.name) for f in fields(self) if f.name not in identity)
