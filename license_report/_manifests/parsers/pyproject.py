"""Parser for Python pyproject.toml files (Poetry and PEP 621)."""

import re
from pathlib import Path
from typing import Any, Dict, List, Tuple

import tomllib

from license_report.exceptions import ManifestReadError
from license_report.logging_config import logger

from ..models import SCOPE_DEV, SCOPE_RUNTIME, DependencyRecord, Ecosystem, ManifestType, ParsedManifest, ProjectDescriptor
from ._common import matches_manifest_name, read_manifest_text

DEFAULT_PROJECT_NAME = "python-project"

# Entries in Poetry tables that are not packages
INTERPRETER_NAME = "python"
BUILD_TOOL_NAME = "poetry"

# PEP 508 name, optional extras, then the version part
_REQUIREMENT_RE = re.compile(
    r"^([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)"  # package name
    r"\s*(?:\[[^\]]*\])?"  # optional extras [extra1,extra2]
    r"\s*(.*)$",  # version specifiers
    re.DOTALL,
)


def split_requirement(requirement: str) -> Tuple[str, str]:
    """
    Split a PEP 621 dependency string into name and constraint.

    Environment markers and extras are dropped. Strings that do not start
    with a PEP 508 name are split on the first whitespace run instead.

    Examples:
        "requests>=2.0.0"            -> ("requests", ">=2.0.0")
        "httpx[http2] >= 0.27"       -> ("httpx", ">= 0.27")
        "rich; python_version>'3.8'" -> ("rich", "")

    Args:
        requirement: Dependency string as written in pyproject.toml

    Returns:
        Tuple of (name, constraint); name is empty for blank input
    """
    line = requirement.strip()
    marker_pos = line.find(";")
    if marker_pos != -1:
        line = line[:marker_pos].strip()
    if not line:
        return "", ""

    match = _REQUIREMENT_RE.match(line)
    if match:
        return match.group(1), match.group(2).strip()

    parts = line.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _poetry_constraint(value: Any) -> str:
    """Extract the version from a Poetry dependency value (string, table or list of tables)."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        version = value.get("version", "")
        return version if isinstance(version, str) else ""
    if isinstance(value, list) and value:
        return _poetry_constraint(value[0])
    return ""


def _is_skipped_poetry_entry(name: str) -> bool:
    return name == INTERPRETER_NAME or BUILD_TOOL_NAME in name


def _poetry_table(document: Dict[str, Any]) -> Dict[str, Any]:
    tool = document.get("tool", {})
    poetry = tool.get("poetry", {}) if isinstance(tool, dict) else {}
    return poetry if isinstance(poetry, dict) else {}


def _records_from_poetry_map(entries: Any, table_name: str, scope: str) -> List[DependencyRecord]:
    if entries is None:
        return []
    if not isinstance(entries, dict):
        raise ManifestReadError(f"[{table_name}] must be a table")

    records = []
    for name, value in entries.items():
        if not name or _is_skipped_poetry_entry(name):
            continue
        records.append(
            DependencyRecord(
                name=name,
                version_constraint=_poetry_constraint(value),
                ecosystem=Ecosystem.PYPI,
                scope=scope,
            )
        )
    return records


def extract_poetry_dependencies(document: Dict[str, Any]) -> List[DependencyRecord]:
    """Dependencies from [tool.poetry.dependencies]."""
    poetry = _poetry_table(document)
    return _records_from_poetry_map(poetry.get("dependencies"), "tool.poetry.dependencies", SCOPE_RUNTIME)


def extract_poetry_dev_dependencies(document: Dict[str, Any]) -> List[DependencyRecord]:
    """Dependencies from [tool.poetry.dev-dependencies] and [tool.poetry.group.*.dependencies]."""
    poetry = _poetry_table(document)
    records = _records_from_poetry_map(poetry.get("dev-dependencies"), "tool.poetry.dev-dependencies", SCOPE_DEV)

    groups = poetry.get("group", {})
    if isinstance(groups, dict):
        for group_name, group in groups.items():
            if isinstance(group, dict):
                records.extend(
                    _records_from_poetry_map(
                        group.get("dependencies"), f"tool.poetry.group.{group_name}.dependencies", SCOPE_DEV
                    )
                )
    return records


def extract_project_dependencies(document: Dict[str, Any]) -> List[DependencyRecord]:
    """Dependencies from the PEP 621 [project].dependencies list."""
    project = document.get("project", {})
    entries = project.get("dependencies") if isinstance(project, dict) else None
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ManifestReadError("[project].dependencies must be an array")

    records = []
    for entry in entries:
        if not isinstance(entry, str):
            raise ManifestReadError(f"[project].dependencies entries must be strings, got {entry!r}")
        name, constraint = split_requirement(entry)
        if not name:
            continue
        records.append(DependencyRecord(name=name, version_constraint=constraint, ecosystem=Ecosystem.PYPI))
    return records


# Independent extraction passes, concatenated in this order
EXTRACTION_PASSES = (
    extract_poetry_dependencies,
    extract_poetry_dev_dependencies,
    extract_project_dependencies,
)


def resolve_project_name(document: Dict[str, Any]) -> str:
    """Project name from Poetry, then PEP 621, then the fallback literal."""
    poetry_name = _poetry_table(document).get("name")
    if isinstance(poetry_name, str) and poetry_name:
        return poetry_name

    project = document.get("project", {})
    project_name = project.get("name") if isinstance(project, dict) else None
    if isinstance(project_name, str) and project_name:
        return project_name

    return DEFAULT_PROJECT_NAME


class PyProjectParser:
    """
    Parser for pyproject.toml project files.

    Supports Poetry dependency tables and the PEP 621 dependency list in
    the same file and merges their entries.
    """

    name = "pyproject.toml"
    manifest_type = ManifestType.PYPROJECT

    def supports(self, path: Path) -> bool:
        return matches_manifest_name(path, "pyproject.toml")

    def parse(self, path: Path) -> ParsedManifest:
        content = read_manifest_text(path)
        try:
            document = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestReadError(f"Invalid TOML in {path}: {e}") from e

        dependencies: List[DependencyRecord] = []
        for extract in EXTRACTION_PASSES:
            try:
                found = extract(document)
            except ManifestReadError as e:
                raise ManifestReadError(f"Invalid pyproject.toml {path}: {e}") from e
            logger.debug(f"{extract.__name__}: {len(found)} entries")
            dependencies.extend(found)

        return ParsedManifest(
            path=path,
            manifest_type=self.manifest_type,
            project=ProjectDescriptor(
                raw_name=resolve_project_name(document),
                suffix=self.manifest_type.project_suffix,
            ),
            dependencies=dependencies,
        )
