"""PyPI resolver for Python package metadata."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import requests

from license_report._manifests.models import DependencyRecord, Ecosystem
from license_report.http_client import fetch
from license_report.logging_config import logger

from ..license_utils import copyright_from_license, license_url, standardize_license
from ..metadata import MetadataRecord
from ..versioning import normalize_version

PYPI_API_BASE = "https://pypi.org/pypi"

LICENSE_CLASSIFIER_PREFIX = "License :: "
CLASSIFIER_SEPARATOR = " :: "


def _str_field(info: Dict[str, Any], key: str) -> str:
    value = info.get(key)
    return value if isinstance(value, str) else ""


def license_from_classifiers(classifiers: Any) -> str:
    """
    License name from trove classifiers.

    Uses the first "License :: ... :: <Name>" classifier with at least
    three segments and returns its last segment, e.g.
    "License :: OSI Approved :: MIT License" -> "MIT License".
    """
    if not isinstance(classifiers, list):
        return ""
    for classifier in classifiers:
        if isinstance(classifier, str) and classifier.startswith(LICENSE_CLASSIFIER_PREFIX):
            parts = classifier.split(CLASSIFIER_SEPARATOR)
            if len(parts) >= 3:
                return parts[-1]
    return ""


def extract_license(info: Dict[str, Any]) -> str:
    """
    Standardized license of a PyPI project.

    Classifiers are a controlled vocabulary and win over the PEP 639
    license_expression, which wins over the free-text license field.
    """
    for raw in (
        license_from_classifiers(info.get("classifiers")),
        _str_field(info, "license_expression"),
        _str_field(info, "license"),
    ):
        if raw and raw.strip():
            return standardize_license(raw)
    return ""


def extract_links(info: Dict[str, Any]) -> Tuple[str, str]:
    """
    Repository and source links of a PyPI project.

    Two independent signals from project_urls: any URL containing "github"
    is a source link, any key containing "source" or "repository" is a
    repository link. The homepage fills whatever is left.

    Returns:
        Tuple of (repository_url, source_url)
    """
    homepage = _str_field(info, "home_page")
    project_urls = info.get("project_urls") or {}

    repository = ""
    github_url = ""
    if isinstance(project_urls, dict):
        for key, url in project_urls.items():
            if not isinstance(url, str) or not url:
                continue
            if not github_url and "github" in url.lower():
                github_url = url
            key_lower = str(key).lower()
            if not repository and ("source" in key_lower or "repository" in key_lower):
                repository = url

    if not repository:
        repository = homepage
    if not github_url and "github" in repository.lower():
        github_url = repository

    return repository, github_url or homepage


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def find_latest_release(releases: Any) -> str:
    """
    Version whose first uploaded file is the most recent.

    Upload timestamps are parsed, so mixed serializations ("...Z",
    "+00:00", naive UTC) compare chronologically. Releases without files
    or with unparseable timestamps are ignored.

    Args:
        releases: The "releases" map of the PyPI JSON API

    Returns:
        Latest version string, or "" when none qualifies
    """
    if not isinstance(releases, dict):
        return ""

    latest_version = ""
    latest_time: Optional[datetime] = None
    for version, files in releases.items():
        if not isinstance(files, list) or not files or not isinstance(files[0], dict):
            continue
        first = files[0]
        uploaded = _parse_timestamp(first.get("upload_time_iso_8601")) or _parse_timestamp(first.get("upload_time"))
        if uploaded is None:
            continue
        if latest_time is None or uploaded > latest_time:
            latest_version = version
            latest_time = uploaded
    return latest_version


class PyPIResolver:
    """
    Resolver for Python packages, backed by the PyPI JSON API.

    Supports: Ecosystem.PYPI dependencies
    """

    @property
    def name(self) -> str:
        return "pypi.org"

    @property
    def ecosystem(self) -> Ecosystem:
        return Ecosystem.PYPI

    def supports(self, dependency: DependencyRecord) -> bool:
        """Check if this resolver supports the given dependency."""
        return dependency.ecosystem == Ecosystem.PYPI

    def resolve(self, dependency: DependencyRecord, session: requests.Session) -> MetadataRecord:
        """
        Fetch project metadata from the PyPI JSON API.

        Args:
            dependency: Python dependency
            session: requests.Session with configured headers

        Returns:
            MetadataRecord; sparse when the document cannot be fetched or decoded
        """
        record = MetadataRecord.sparse(dependency)
        url = f"{PYPI_API_BASE}/{dependency.name}/json"

        try:
            result = fetch(session, url)
            if result.status_code == 404:
                logger.debug(f"Package not found on PyPI: {dependency.name}")
                return record
            if not result.ok:
                logger.warning(f"Failed to fetch PyPI metadata for {dependency.name}: HTTP {result.status_code}")
                return record
            data = result.json()
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout fetching PyPI metadata for {dependency.name}")
            return record
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error fetching PyPI metadata for {dependency.name}: {e}")
            return record
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"JSON decode error for PyPI {dependency.name}: {e}")
            return record

        if not isinstance(data, dict):
            logger.warning(f"Unexpected PyPI response for {dependency.name}: {type(data).__name__}")
            return record

        return self._normalize_response(dependency, data)

    def _normalize_response(self, dependency: DependencyRecord, data: Dict[str, Any]) -> MetadataRecord:
        info = data.get("info")
        if not isinstance(info, dict):
            info = {}

        license_id = extract_license(info)
        author = _str_field(info, "author") or _str_field(info, "author_email")
        description = _str_field(info, "summary") or _str_field(info, "description")
        repository_url, source_url = extract_links(info)

        version = normalize_version(dependency.version_constraint)
        if not version:
            version = find_latest_release(data.get("releases")) or dependency.version_constraint
            if version:
                logger.debug(f"Using latest release {version} for unpinned {dependency.name}")

        logger.debug(f"Resolved PyPI metadata for: {dependency.name}")

        return MetadataRecord(
            name=dependency.name,
            version=version,
            license=license_id,
            license_url=license_url(license_id),
            author=author,
            description=description,
            copyright=copyright_from_license(license_id),
            repository_url=repository_url,
            source_url=source_url,
            ecosystem=self.ecosystem.value,
            module_name=dependency.name,
        )

