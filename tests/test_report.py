"""Tests for report column layouts and writers."""

import csv
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from license_report._manifests.models import DependencyRecord, Ecosystem, ManifestType, ParsedManifest, ProjectDescriptor
from license_report._report import LAYOUTS, ReportFormat, build_rows, layout_for, write_report
from license_report._report.columns import headers
from license_report._report.writers import JSONReportWriter, get_writer
from license_report._resolvers.metadata import MetadataRecord
from license_report.exceptions import ReportWriteError


def npm_manifest() -> ParsedManifest:
    return ParsedManifest(
        path=Path("package.json"),
        manifest_type=ManifestType.PACKAGE_JSON,
        project=ProjectDescriptor("dashboard", "-ui"),
        dependencies=[
            DependencyRecord("left-pad", "^1.3.0", Ecosystem.NPM),
            DependencyRecord("jest", "29.7.0", Ecosystem.NPM, scope="dev"),
        ],
    )


NPM_RECORDS = [
    MetadataRecord(
        name="left-pad",
        version="1.3.0",
        license="WTFPL",
        license_url="https://licenses.nuget.org/WTFPL",
        author="azer",
        description="String left pad",
        copyright="WTFPL Copyright",
        repository_url="git+https://github.com/stevemao/left-pad.git",
        source_url="git+https://github.com/stevemao/left-pad.git",
        ecosystem="npm",
        module_name="left-pad",
    ),
    MetadataRecord(name="jest", version="29.7.0", ecosystem="npm", module_name="jest"),
]


class TestLayouts:
    def test_every_manifest_type_has_ten_columns(self):
        """Test every layout has ten columns."""
        for manifest_type in ManifestType:
            assert len(layout_for(manifest_type)) == 10
        assert set(LAYOUTS) == set(ManifestType)

    def test_go_headers(self):
        """Test the go.mod report headers."""
        assert headers(layout_for(ManifestType.GO_MOD)) == [
            "Name",
            "License",
            "PackageVersion",
            "LicenseURL",
            "Author",
            "Description",
            "Copyright",
            "PackageURL",
            "GitHubURL",
            "RepositoryType",
        ]

    def test_pyproject_headers(self):
        """Test the pyproject.toml report headers."""
        assert headers(layout_for(ManifestType.PYPROJECT)) == [
            "Package Name",
            "License",
            "Version",
            "License URL",
            "Author",
            "Description",
            "Copyright",
            "Repository",
            "GitHub URL",
            "Repository Type",
        ]

    def test_npm_rows(self):
        """Test package.json rows put name@version first."""
        rows = build_rows(layout_for(ManifestType.PACKAGE_JSON), NPM_RECORDS)

        assert rows[0] == [
            "Module Name",
            "License",
            "Repository",
            "License URL",
            "Author",
            "Description",
            "Copyright",
            "GitHub URL",
            "Module Name (No Version)",
            "Version",
        ]
        assert rows[1][0] == "left-pad@1.3.0"
        assert rows[1][8] == "left-pad"
        assert rows[1][9] == "1.3.0"
        assert rows[2] == ["jest@29.7.0", "", "", "", "", "", "", "", "jest", "29.7.0"]

    def test_go_row_values(self):
        """Test the go.mod row values."""
        record = MetadataRecord(
            name="github.com/spf13/cobra",
            version="v1.8.0",
            license="Apache-2.0",
            source_url="https://github.com/spf13/cobra",
            ecosystem="go",
            package_url="github.com/spf13/cobra/@v/v1.8.0.info",
        )
        row = build_rows(layout_for(ManifestType.GO_MOD), [record])[1]

        assert row[0] == "github.com/spf13/cobra"
        assert row[2] == "v1.8.0"
        assert row[7] == "github.com/spf13/cobra/@v/v1.8.0.info"
        assert row[8] == "https://github.com/spf13/cobra"
        assert row[9] == "go"


class TestWriters:
    def test_csv_report(self, tmp_path):
        """Test the CSV report content."""
        path = write_report(npm_manifest(), NPM_RECORDS, tmp_path, ReportFormat.CSV)

        assert path == tmp_path / "dashboard-ui_license.csv"
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 3
        assert rows[0][0] == "Module Name"
        assert rows[1][0] == "left-pad@1.3.0"

    def test_json_report(self, tmp_path):
        """Test the JSON report document."""
        path = write_report(npm_manifest(), NPM_RECORDS, tmp_path, "json")

        assert path.name == "dashboard-ui_license.json"
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["project"] == "dashboard-ui"
        assert document["manifest"] == "package.json"
        assert document["generated_at"].endswith("Z")
        first, second = document["dependencies"]
        assert first["Module Name"] == "left-pad@1.3.0"
        assert first["License"] == "WTFPL"
        assert first["purl"] == "pkg:npm/left-pad"
        assert first["scope"] == "runtime"
        assert second["purl"] == "pkg:npm/jest@29.7.0"
        assert second["scope"] == "dev"

    def test_output_directory_is_created(self, tmp_path):
        """Test a missing output directory is created."""
        path = write_report(npm_manifest(), NPM_RECORDS, tmp_path / "reports" / "licenses")
        assert path.is_file()

    def test_record_count_must_match(self, tmp_path):
        """Test a record count mismatch raises ReportWriteError."""
        with pytest.raises(ReportWriteError, match="2 dependencies"):
            write_report(npm_manifest(), NPM_RECORDS[:1], tmp_path)

    def test_unknown_format(self):
        """Test an unknown format raises ReportWriteError."""
        with pytest.raises(ReportWriteError, match="Unsupported report format"):
            get_writer("xlsx")

    def test_unwritable_target(self, tmp_path):
        """Test an unwritable target raises ReportWriteError."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(ReportWriteError):
            write_report(npm_manifest(), NPM_RECORDS, blocker)

    def test_write_failure_is_wrapped(self, tmp_path):
        """Test OS errors while writing are wrapped."""
        with patch.object(JSONReportWriter, "write", side_effect=PermissionError("denied")):
            with pytest.raises(ReportWriteError, match="denied"):
                write_report(npm_manifest(), NPM_RECORDS, tmp_path, ReportFormat.JSON)
