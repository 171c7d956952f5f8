"""Tests for the end-to-end pipeline with a mocked registry session."""

import csv
import json
from unittest.mock import Mock

import pytest
import requests

from license_report._resolvers import LicenseResolver
from license_report.exceptions import ManifestReadError, UnsupportedManifestError
from license_report.pipeline import generate_report, load_manifest

PYPROJECT = """\
[project]
name = "ingest"
dependencies = ["requests>=2.0.0", "unknown-package"]
"""

REQUESTS_DOC = {
    "info": {
        "summary": "Python HTTP for Humans.",
        "author": "Kenneth Reitz",
        "classifiers": ["License :: OSI Approved :: Apache Software License"],
        "project_urls": {"Source": "https://github.com/psf/requests"},
    },
    "releases": {},
}


@pytest.fixture
def pypi_session(make_response):
    """Session answering requests from PyPI and 404 for anything else."""
    session = Mock(spec=requests.Session)

    def get(url, **kwargs):
        if url == "https://pypi.org/pypi/requests/json":
            return make_response(200, REQUESTS_DOC)
        return make_response(404)

    session.get.side_effect = get
    return session


class TestGenerateReport:
    def test_csv_report_for_pyproject(self, tmp_path, pypi_session):
        """Test a pyproject.toml run writes the CSV report."""
        manifest_path = tmp_path / "pyproject.toml"
        manifest_path.write_text(PYPROJECT)
        out_dir = tmp_path / "out"

        result = generate_report(manifest_path, out_dir, resolver=LicenseResolver(session=pypi_session))

        assert result.report_path == out_dir / "ingest-py_license.csv"
        assert result.total == 2
        assert result.licenses_found == 1
        assert result.sparse_records == 1
        assert pypi_session.get.call_count == 2

        with open(result.report_path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0][0] == "Package Name"
        assert rows[1][:3] == ["requests", "Apache-2.0", "2.0.0"]
        # Unresolved dependency keeps only its echoed identity
        assert rows[2] == ["unknown-package", "", "", "", "", "", "", "", "", "pypi"]

    def test_json_report(self, tmp_path, pypi_session):
        """Test the JSON report format."""
        manifest_path = tmp_path / "pyproject.toml"
        manifest_path.write_text(PYPROJECT)

        result = generate_report(manifest_path, tmp_path, "json", resolver=LicenseResolver(session=pypi_session))

        document = json.loads(result.report_path.read_text())
        assert [d["Package Name"] for d in document["dependencies"]] == ["requests", "unknown-package"]
        assert document["dependencies"][0]["purl"] == "pkg:pypi/requests"

    def test_empty_manifest_writes_nothing(self, tmp_path):
        """Test an empty manifest writes no report."""
        manifest_path = tmp_path / "package.json"
        manifest_path.write_text('{"name": "bare"}')
        session = Mock(spec=requests.Session)

        result = generate_report(manifest_path, tmp_path, resolver=LicenseResolver(session=session))

        assert result.report_path is None
        assert result.records == []
        session.get.assert_not_called()
        assert not (tmp_path / "bare-ui_license.csv").exists()

    def test_malformed_manifest_aborts_before_resolution(self, tmp_path):
        """Test a malformed manifest aborts before any request."""
        manifest_path = tmp_path / "package.json"
        manifest_path.write_text("{broken")
        session = Mock(spec=requests.Session)

        with pytest.raises(ManifestReadError):
            generate_report(manifest_path, tmp_path, resolver=LicenseResolver(session=session))

        session.get.assert_not_called()

    def test_unsupported_manifest(self, tmp_path):
        """Test an unsupported manifest raises UnsupportedManifestError."""
        path = tmp_path / "requirements.txt"
        path.write_text("requests\n")

        with pytest.raises(UnsupportedManifestError):
            load_manifest(path)
