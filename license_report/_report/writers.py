"""Report writers (CSV and JSON)."""

import csv
import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from license_report._manifests.models import ParsedManifest
from license_report._resolvers.metadata import MetadataRecord
from license_report.exceptions import ReportWriteError
from license_report.logging_config import logger

from .columns import build_rows, layout_for


class ReportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"

    @property
    def extension(self) -> str:
        return self.value


def _get_current_utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class CSVReportWriter:
    """Writes the header row and one row per dependency as CSV."""

    format = ReportFormat.CSV

    def write(self, path: Path, manifest: ParsedManifest, records: Sequence[MetadataRecord]) -> None:
        rows = build_rows(layout_for(manifest.manifest_type), records)
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(rows)


class JSONReportWriter:
    """
    Writes the report as a JSON document.

    Each dependency entry carries the columns of the manifest's layout keyed
    by header, plus the dependency's package URL and declaration scope.
    """

    format = ReportFormat.JSON

    def build_document(self, manifest: ParsedManifest, records: Sequence[MetadataRecord]) -> Dict[str, Any]:
        layout = layout_for(manifest.manifest_type)
        entries: List[Dict[str, str]] = []
        for dependency, record in zip(manifest.dependencies, records):
            entry = {column.header: column.value(record) for column in layout}
            entry["purl"] = dependency.purl
            entry["scope"] = dependency.scope
            entries.append(entry)

        return {
            "project": manifest.project.derived_name,
            "manifest": manifest.manifest_type.value,
            "generated_at": _get_current_utc_timestamp(),
            "dependencies": entries,
        }

    def write(self, path: Path, manifest: ParsedManifest, records: Sequence[MetadataRecord]) -> None:
        document = self.build_document(manifest, records)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
            f.write("\n")


_WRITERS = {
    ReportFormat.CSV: CSVReportWriter,
    ReportFormat.JSON: JSONReportWriter,
}


def get_writer(report_format: Union[ReportFormat, str]) -> Union[CSVReportWriter, JSONReportWriter]:
    try:
        return _WRITERS[ReportFormat(report_format)]()
    except ValueError:
        raise ReportWriteError(f"Unsupported report format: {report_format}")


def write_report(
    manifest: ParsedManifest,
    records: Sequence[MetadataRecord],
    output_dir: Union[str, Path] = ".",
    report_format: Union[ReportFormat, str] = ReportFormat.CSV,
) -> Path:
    """
    Write the license report of a manifest.

    Args:
        manifest: Parsed manifest (decides layout and file name)
        records: One MetadataRecord per dependency, in manifest order
        output_dir: Directory to write into (created if missing)
        report_format: csv or json

    Returns:
        Path of the written report

    Raises:
        ReportWriteError: If the format is unknown, the record count does not
            match the dependency count, or the file cannot be written
    """
    if len(records) != len(manifest.dependencies):
        raise ReportWriteError(
            f"Got {len(records)} metadata records for {len(manifest.dependencies)} dependencies"
        )

    writer = get_writer(report_format)
    directory = Path(output_dir)
    path = directory / manifest.project.report_filename(writer.format.extension)

    try:
        directory.mkdir(parents=True, exist_ok=True)
        writer.write(path, manifest, records)
    except OSError as e:
        raise ReportWriteError(f"Failed to write report {path}: {e}") from e

    logger.info(f"Wrote {writer.format.value} report with {len(records)} rows to {path}")
    return path
