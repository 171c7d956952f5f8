"""Normalized dependency and project models produced by manifest parsers."""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

from packageurl import PackageURL


class Ecosystem(str, Enum):
    """Package ecosystem of a dependency; selects the registry resolver."""

    GO = "go"
    NPM = "npm"
    PYPI = "pypi"


class ManifestType(str, Enum):
    """Manifest format; selects the parser and the report column layout."""

    GO_MOD = "go.mod"
    PACKAGE_JSON = "package.json"
    PYPROJECT = "pyproject.toml"

    @property
    def ecosystem(self) -> Ecosystem:
        return _MANIFEST_ECOSYSTEMS[self]

    @property
    def project_suffix(self) -> str:
        return _PROJECT_SUFFIXES[self]


_MANIFEST_ECOSYSTEMS = {
    ManifestType.GO_MOD: Ecosystem.GO,
    ManifestType.PACKAGE_JSON: Ecosystem.NPM,
    ManifestType.PYPROJECT: Ecosystem.PYPI,
}

_PROJECT_SUFFIXES = {
    ManifestType.GO_MOD: "-api",
    ManifestType.PACKAGE_JSON: "-ui",
    ManifestType.PYPROJECT: "-py",
}

# PURL types differ from our ecosystem tags for Go modules
_PURL_TYPES = {
    Ecosystem.GO: "golang",
    Ecosystem.NPM: "npm",
    Ecosystem.PYPI: "pypi",
}

# Only pinned versions go into a PURL; ranges are not versions
_PINNED_VERSION_RE = re.compile(r"^v?\d[\w.+-]*$")

SCOPE_RUNTIME = "runtime"
SCOPE_DEV = "dev"
SCOPE_INDIRECT = "indirect"


@dataclass(frozen=True)
class DependencyRecord:
    """
    A single dependency as declared in a manifest.

    Attributes:
        name: Package identifier as written (may carry a scope or module path)
        version_constraint: Raw version string as written (may be empty)
        ecosystem: Ecosystem whose registry describes this package
        scope: Where the entry was declared (runtime, dev or indirect)
    """

    name: str
    version_constraint: str
    ecosystem: Ecosystem
    scope: str = SCOPE_RUNTIME

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must not be empty")

    @property
    def purl(self) -> str:
        """Package URL string of this dependency (without version when unpinned)."""
        namespace = None
        name = self.name
        if "/" in name:
            namespace, name = name.rsplit("/", 1)
        version = self.version_constraint if _PINNED_VERSION_RE.match(self.version_constraint) else None
        return PackageURL(
            type=_PURL_TYPES[self.ecosystem],
            namespace=namespace,
            name=name,
            version=version,
        ).to_string()

    def __str__(self) -> str:
        if self.version_constraint:
            return f"{self.name} {self.version_constraint}"
        return self.name


@dataclass(frozen=True)
class ProjectDescriptor:
    """Name of the project declared by a manifest."""

    raw_name: str
    suffix: str = ""

    @property
    def derived_name(self) -> str:
        """Project name with the ecosystem suffix, used to name the report."""
        return f"{self.raw_name}{self.suffix}"

    def report_filename(self, extension: str) -> str:
        """Report file name; path separators in module paths become underscores."""
        stem = self.derived_name.replace("/", "_").replace("\\", "_")
        return f"{stem}_license.{extension}"


@dataclass
class ParsedManifest:
    """Result of parsing one manifest file."""

    path: Path
    manifest_type: ManifestType
    project: ProjectDescriptor
    dependencies: List[DependencyRecord] = field(default_factory=list)

    @property
    def ecosystem(self) -> Ecosystem:
        return self.manifest_type.ecosystem

    def is_empty(self) -> bool:
        return not self.dependencies
