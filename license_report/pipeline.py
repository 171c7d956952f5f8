"""End-to-end run: parse a manifest, resolve its dependencies, write the report."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ._manifests import ParsedManifest, parse_manifest
from ._report import ReportFormat, write_report
from ._resolvers import LicenseResolver, MetadataRecord
from ._resolvers.resolver import ProgressCallback
from .logging_config import logger


@dataclass
class PipelineResult:
    """Outcome of a run."""

    manifest: ParsedManifest
    records: List[MetadataRecord] = field(default_factory=list)
    report_path: Optional[Path] = None

    @property
    def total(self) -> int:
        return len(self.manifest.dependencies)

    @property
    def licenses_found(self) -> int:
        return sum(1 for r in self.records if r.has_license())

    @property
    def sparse_records(self) -> int:
        return sum(1 for r in self.records if r.is_sparse())


def load_manifest(manifest_path: Union[str, Path]) -> ParsedManifest:
    """
    Parse a manifest and log what it declares.

    Raises:
        ManifestReadError: Unreadable, malformed or unsupported manifest
    """
    manifest = parse_manifest(Path(manifest_path))
    logger.info(
        f"Parsed {manifest.manifest_type.value} for {manifest.project.derived_name}: "
        f"{len(manifest.dependencies)} dependencies"
    )
    return manifest


def resolve_manifest(
    manifest: ParsedManifest,
    resolver: Optional[LicenseResolver] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> List[MetadataRecord]:
    """
    Resolve every dependency of a manifest, in order.

    Args:
        manifest: Parsed manifest
        resolver: Optional LicenseResolver; one with a fresh session is used otherwise
        on_progress: Optional callback invoked before each dependency

    Returns:
        One MetadataRecord per dependency
    """
    if resolver is not None:
        return resolver.resolve_all(manifest.dependencies, on_progress=on_progress)
    with LicenseResolver() as owned:
        return owned.resolve_all(manifest.dependencies, on_progress=on_progress)


def generate_report(
    manifest_path: Union[str, Path],
    output_dir: Union[str, Path] = ".",
    report_format: Union[ReportFormat, str] = ReportFormat.CSV,
    resolver: Optional[LicenseResolver] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> PipelineResult:
    """
    Produce the license report of one manifest.

    A manifest without dependencies is not an error: nothing is resolved and
    no report is written (report_path stays None).

    Args:
        manifest_path: go.mod, package.json or pyproject.toml
        output_dir: Directory for the report
        report_format: csv or json
        resolver: Optional LicenseResolver
        on_progress: Optional callback invoked before each dependency

    Raises:
        ManifestReadError: Unreadable, malformed or unsupported manifest
        ReportWriteError: Report cannot be written
    """
    result = PipelineResult(manifest=load_manifest(manifest_path))
    if result.manifest.is_empty():
        logger.info("No dependencies declared, nothing to report")
        return result

    result.records = resolve_manifest(result.manifest, resolver, on_progress)
    result.report_path = write_report(result.manifest, result.records, output_dir, report_format)
    return result
