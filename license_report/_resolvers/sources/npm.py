"""npm registry resolver for JavaScript package metadata."""

import json
from typing import Any, Dict

import requests

from license_report._manifests.models import DependencyRecord, Ecosystem
from license_report.http_client import fetch
from license_report.logging_config import logger

from ..license_utils import copyright_from_license, find_copyright_line, license_url
from ..metadata import MetadataRecord
from ..versioning import normalize_version

NPM_REGISTRY_BASE = "https://registry.npmjs.org"
# Dist-tag queried when the constraint does not name a version
LATEST_TAG = "latest"


def _person_name(person: Any) -> str:
    """Name (or email) of an npm person field, which is a string or an object."""
    if isinstance(person, str):
        return person.strip()
    if isinstance(person, dict):
        name = person.get("name")
        if isinstance(name, str) and name:
            return name
        email = person.get("email")
        if isinstance(email, str) and email:
            return email
    return ""


def extract_license(data: Dict[str, Any]) -> str:
    """
    License from an npm version document.

    Handles "license": "MIT", the legacy "license": {"type": "MIT"} and
    the legacy "licenses": [{"type": "MIT"}, ...] forms.
    """
    license_field = data.get("license")
    if isinstance(license_field, str) and license_field:
        return license_field
    if isinstance(license_field, dict) and isinstance(license_field.get("type"), str):
        return license_field["type"]

    licenses = data.get("licenses")
    if isinstance(licenses, list) and licenses:
        first = licenses[0]
        if isinstance(first, str):
            return first
        if isinstance(first, dict) and isinstance(first.get("type"), str):
            return first["type"]
    return ""


def extract_author(data: Dict[str, Any]) -> str:
    """Author of the package, falling back to the first maintainer."""
    author = _person_name(data.get("author"))
    if author:
        return author

    maintainers = data.get("maintainers")
    if isinstance(maintainers, list) and maintainers:
        return _person_name(maintainers[0])
    return ""


def extract_repository(data: Dict[str, Any]) -> str:
    """Repository URL from "repository" ({"url": ...} or a plain string)."""
    repository = data.get("repository")
    if isinstance(repository, str):
        return repository
    if isinstance(repository, dict) and isinstance(repository.get("url"), str):
        return repository["url"]
    return ""


class NpmResolver:
    """
    Resolver for npm packages, backed by the public npm registry.

    Supports: Ecosystem.NPM dependencies
    """

    @property
    def name(self) -> str:
        return "registry.npmjs.org"

    @property
    def ecosystem(self) -> Ecosystem:
        return Ecosystem.NPM

    def supports(self, dependency: DependencyRecord) -> bool:
        """Check if this resolver supports the given dependency."""
        return dependency.ecosystem == Ecosystem.NPM

    def resolve(self, dependency: DependencyRecord, session: requests.Session) -> MetadataRecord:
        """
        Fetch the version document of a package from the npm registry.

        Args:
            dependency: npm dependency
            session: requests.Session with configured headers

        Returns:
            MetadataRecord; sparse when the document cannot be fetched or decoded
        """
        record = MetadataRecord.sparse(dependency)
        version = normalize_version(dependency.version_constraint)
        url = f"{NPM_REGISTRY_BASE}/{dependency.name}/{version or LATEST_TAG}"

        try:
            result = fetch(session, url)
            if result.status_code == 404:
                logger.debug(f"Package not found on npm: {dependency.name}@{version or LATEST_TAG}")
                return record
            if not result.ok:
                logger.warning(f"Failed to fetch npm metadata for {dependency.name}: HTTP {result.status_code}")
                return record
            data = result.json()
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout fetching npm metadata for {dependency.name}")
            return record
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error fetching npm metadata for {dependency.name}: {e}")
            return record
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"JSON decode error for npm {dependency.name}: {e}")
            return record

        if not isinstance(data, dict):
            logger.warning(f"Unexpected npm response for {dependency.name}: {type(data).__name__}")
            return record

        return self._normalize_response(dependency, version, data)

    def _normalize_response(self, dependency: DependencyRecord, version: str, data: Dict[str, Any]) -> MetadataRecord:
        license_id = extract_license(data)

        repository_url = extract_repository(data)
        source_url = repository_url
        if not repository_url:
            homepage = data.get("homepage")
            repository_url = homepage if isinstance(homepage, str) else ""

        copyright_notice = copyright_from_license(license_id)
        if not license_id:
            readme = data.get("readme")
            copyright_notice = find_copyright_line(readme if isinstance(readme, str) else "")

        description = data.get("description")
        resolved_version = data.get("version")
        if not isinstance(resolved_version, str) or not resolved_version:
            resolved_version = version or dependency.version_constraint

        logger.debug(f"Resolved npm metadata for: {dependency.name}")

        return MetadataRecord(
            name=dependency.name,
            version=resolved_version,
            license=license_id,
            license_url=license_url(license_id),
            author=extract_author(data),
            description=description if isinstance(description, str) else "",
            copyright=copyright_notice,
            repository_url=repository_url,
            source_url=source_url,
            ecosystem=self.ecosystem.value,
            module_name=dependency.name,
        )
