"""Per-manifest column layouts of the license report."""

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from license_report._manifests.models import ManifestType
from license_report._resolvers.metadata import MetadataRecord


@dataclass(frozen=True)
class Column:
    """A report column: header text and the record field it shows."""

    header: str
    getter: Callable[[MetadataRecord], str]

    def value(self, record: MetadataRecord) -> str:
        return self.getter(record)


def _field(name: str) -> Callable[[MetadataRecord], str]:
    return lambda record: getattr(record, name)


def _npm_module_name(record: MetadataRecord) -> str:
    return f"{record.name}@{record.version}"


Layout = Tuple[Column, ...]

GO_MOD_LAYOUT: Layout = (
    Column("Name", _field("name")),
    Column("License", _field("license")),
    Column("PackageVersion", _field("version")),
    Column("LicenseURL", _field("license_url")),
    Column("Author", _field("author")),
    Column("Description", _field("description")),
    Column("Copyright", _field("copyright")),
    Column("PackageURL", _field("package_url")),
    Column("GitHubURL", _field("source_url")),
    Column("RepositoryType", _field("ecosystem")),
)

PYPROJECT_LAYOUT: Layout = (
    Column("Package Name", _field("name")),
    Column("License", _field("license")),
    Column("Version", _field("version")),
    Column("License URL", _field("license_url")),
    Column("Author", _field("author")),
    Column("Description", _field("description")),
    Column("Copyright", _field("copyright")),
    Column("Repository", _field("repository_url")),
    Column("GitHub URL", _field("source_url")),
    Column("Repository Type", _field("ecosystem")),
)

PACKAGE_JSON_LAYOUT: Layout = (
    Column("Module Name", _npm_module_name),
    Column("License", _field("license")),
    Column("Repository", _field("repository_url")),
    Column("License URL", _field("license_url")),
    Column("Author", _field("author")),
    Column("Description", _field("description")),
    Column("Copyright", _field("copyright")),
    Column("GitHub URL", _field("source_url")),
    Column("Module Name (No Version)", _field("module_name")),
    Column("Version", _field("version")),
)

LAYOUTS: Dict[ManifestType, Layout] = {
    ManifestType.GO_MOD: GO_MOD_LAYOUT,
    ManifestType.PYPROJECT: PYPROJECT_LAYOUT,
    ManifestType.PACKAGE_JSON: PACKAGE_JSON_LAYOUT,
}


def layout_for(manifest_type: ManifestType) -> Layout:
    return LAYOUTS[manifest_type]


def headers(layout: Layout) -> List[str]:
    return [column.header for column in layout]


def build_rows(layout: Layout, records: Sequence[MetadataRecord]) -> List[List[str]]:
    """
    Tabulate records under a layout.

    Args:
        layout: Column layout of the manifest type
        records: One MetadataRecord per dependency, in manifest order

    Returns:
        Header row followed by one row per record
    """
    rows = [headers(layout)]
    for record in records:
        rows.append([column.value(record) for column in layout])
    return rows
