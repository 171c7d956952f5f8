"""Parser for npm package.json files."""

import json
from pathlib import Path
from typing import Any, Dict, List

from license_report.exceptions import ManifestReadError
from license_report.logging_config import logger

from ..models import SCOPE_DEV, SCOPE_RUNTIME, DependencyRecord, ManifestType, ParsedManifest, ProjectDescriptor
from ._common import matches_manifest_name, read_manifest_text

# Dependency maps read from package.json, in report order
DEPENDENCY_SECTIONS = (
    ("dependencies", SCOPE_RUNTIME),
    ("devDependencies", SCOPE_DEV),
)


class PackageJSONParser:
    """
    Parser for npm package.json descriptors.

    Emits "dependencies" followed by "devDependencies". Each map keeps the
    key order of the JSON document, so repeated runs give the same order.
    """

    name = "package.json"
    manifest_type = ManifestType.PACKAGE_JSON

    def supports(self, path: Path) -> bool:
        return matches_manifest_name(path, "package.json")

    def parse(self, path: Path) -> ParsedManifest:
        content = read_manifest_text(path)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestReadError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestReadError(f"Invalid package.json {path}: top-level value must be an object")

        dependencies: List[DependencyRecord] = []
        for section, scope in DEPENDENCY_SECTIONS:
            dependencies.extend(self._parse_section(path, data, section, scope))

        raw_name = data.get("name") or ""
        if not isinstance(raw_name, str):
            raise ManifestReadError(f"Invalid package.json {path}: 'name' must be a string")

        logger.debug(f"Parsed {len(dependencies)} dependencies from {path}")
        return ParsedManifest(
            path=path,
            manifest_type=self.manifest_type,
            project=ProjectDescriptor(raw_name=raw_name, suffix=self.manifest_type.project_suffix),
            dependencies=dependencies,
        )

    def _parse_section(self, path: Path, data: Dict[str, Any], section: str, scope: str) -> List[DependencyRecord]:
        entries = data.get(section)
        if entries is None:
            return []
        if not isinstance(entries, dict):
            raise ManifestReadError(f"Invalid package.json {path}: '{section}' must be an object")

        records = []
        for name, version in entries.items():
            if not name:
                logger.debug(f"Skipping entry with empty name in {section}")
                continue
            records.append(
                DependencyRecord(
                    name=name,
                    version_constraint=version if isinstance(version, str) else "",
                    ecosystem=self.manifest_type.ecosystem,
                    scope=scope,
                )
            )
        return records
