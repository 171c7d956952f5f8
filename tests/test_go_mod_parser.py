"""Tests for the go.mod manifest parser."""

from pathlib import Path

import pytest

from license_report._manifests.models import Ecosystem, ManifestType
from license_report._manifests.parsers import GoModParser
from license_report.exceptions import ManifestReadError

GO_MOD = """\
module github.com/acme/widget

go 1.22

toolchain go1.22.3

require github.com/spf13/cobra v1.8.0

require (
\tgolang.org/x/mod v0.17.0
\tgithub.com/stretchr/testify v1.9.0 // test helpers
\tgithub.com/davecgh/go-spew v1.1.1 // indirect
)

replace github.com/spf13/cobra => ../cobra

exclude golang.org/x/net v0.1.0
"""


def write(tmp_path: Path, content: str, name: str = "go.mod") -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestGoModParserBasics:
    def test_parser_identity(self):
        """Test parser name and manifest type."""
        parser = GoModParser()
        assert parser.name == "go.mod"
        assert parser.manifest_type == ManifestType.GO_MOD

    def test_supports(self):
        """Test only go.mod files are supported."""
        parser = GoModParser()
        assert parser.supports(Path("go.mod"))
        assert parser.supports(Path("service.go.mod"))
        assert not parser.supports(Path("go.sum"))
        assert not parser.supports(Path("package.json"))


class TestGoModParsing:
    def test_requires_in_file_order(self, tmp_path):
        """Test requires are returned in file order."""
        manifest = GoModParser().parse(write(tmp_path, GO_MOD))

        assert [(d.name, d.version_constraint) for d in manifest.dependencies] == [
            ("github.com/spf13/cobra", "v1.8.0"),
            ("golang.org/x/mod", "v0.17.0"),
            ("github.com/stretchr/testify", "v1.9.0"),
            ("github.com/davecgh/go-spew", "v1.1.1"),
        ]
        assert all(d.ecosystem == Ecosystem.GO for d in manifest.dependencies)

    def test_indirect_requires_are_tagged(self, tmp_path):
        """Test // indirect requires get the indirect scope."""
        manifest = GoModParser().parse(write(tmp_path, GO_MOD))
        scopes = {d.name: d.scope for d in manifest.dependencies}

        assert scopes["github.com/davecgh/go-spew"] == "indirect"
        assert scopes["github.com/stretchr/testify"] == "runtime"

    def test_project_name_gets_api_suffix(self, tmp_path):
        """Test the module path gets the -api suffix."""
        manifest = GoModParser().parse(write(tmp_path, GO_MOD))

        assert manifest.project.raw_name == "github.com/acme/widget"
        assert manifest.project.derived_name == "github.com/acme/widget-api"
        assert manifest.project.report_filename("csv") == "github.com_acme_widget-api_license.csv"

    def test_quoted_module_path(self, tmp_path):
        """Test a quoted module path is unquoted."""
        content = 'module "example.com/quoted"\n\nrequire "example.com/dep" v1.0.0\n'
        manifest = GoModParser().parse(write(tmp_path, content))

        assert manifest.project.raw_name == "example.com/quoted"
        assert manifest.dependencies[0].name == "example.com/dep"

    def test_module_without_requires(self, tmp_path):
        """Test a module without requires has no dependencies."""
        manifest = GoModParser().parse(write(tmp_path, "module example.com/empty\n\ngo 1.21\n"))

        assert manifest.is_empty()
        assert manifest.project.derived_name == "example.com/empty-api"

    def test_comment_lines_are_ignored(self, tmp_path):
        """Test comment lines are skipped."""
        content = "// header comment\nmodule example.com/m // trailing\nrequire (\n\t// nothing here\n)\n"
        manifest = GoModParser().parse(write(tmp_path, content))

        assert manifest.is_empty()


class TestGoModErrors:
    def test_missing_module_directive(self, tmp_path):
        """Test a go.mod without module directive is rejected."""
        with pytest.raises(ManifestReadError, match="missing module directive"):
            GoModParser().parse(write(tmp_path, "require example.com/dep v1.0.0\n"))

    def test_unterminated_block(self, tmp_path):
        """Test an unterminated require block is rejected."""
        with pytest.raises(ManifestReadError, match="unterminated"):
            GoModParser().parse(write(tmp_path, "module example.com/m\nrequire (\n\texample.com/dep v1.0.0\n"))

    def test_require_without_version(self, tmp_path):
        """Test a require without version is rejected."""
        with pytest.raises(ManifestReadError, match="usage"):
            GoModParser().parse(write(tmp_path, "module example.com/m\nrequire example.com/dep\n"))

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ManifestReadError."""
        with pytest.raises(ManifestReadError, match="not found"):
            GoModParser().parse(tmp_path / "go.mod")
