"""pkg.go.dev resolver for Go module metadata.

pkg.go.dev has no JSON API, so metadata is scraped from the module's
documentation page. Every field has an ordered chain of XPath selectors;
the first plausible match wins.
"""

import requests

from license_report._manifests.models import DependencyRecord, Ecosystem
from license_report.http_client import fetch
from license_report.logging_config import logger

from ..extraction import ExtractionRule, first_match, parse_html
from ..license_utils import copyright_from_license, license_url
from ..metadata import MetadataRecord, go_proxy_info_path

PKG_GO_DEV_BASE = "https://pkg.go.dev"

# Strings longer than this are page fragments, not author names
MAX_AUTHOR_LENGTH = 100

# Hosts whose module paths are also repository paths
GITHUB_PATH_MARKER = "github.com/"

LICENSE_RULES = (
    ExtractionRule('//span[contains(@class, "License")]/a'),
    ExtractionRule('//a[contains(@href, "licenses")]'),
    ExtractionRule('//span[contains(@class, "license")]'),
)

DESCRIPTION_RULES = (
    ExtractionRule('//h2[contains(@class, "package-title")]/following-sibling::p'),
    ExtractionRule('//div[contains(@class, "package-details")]/p'),
    ExtractionRule('//div[contains(@class, "documentation")]//p'),
    ExtractionRule('//div[contains(@class, "pkg-subdoc")]//p'),
)

SOURCE_LINK_RULES = (
    ExtractionRule('//div[contains(@class, "UnitMeta-repo")]//a', attribute="href"),
    ExtractionRule("//html/body/aside/nav/ul/li[5]/div/div/ul/li[3]/a", attribute="href"),
    ExtractionRule('//aside//a[contains(@href, ".")]', attribute="href"),
    ExtractionRule('//div[contains(@class, "repository")]//a', attribute="href"),
)

AUTHOR_RULES = (
    ExtractionRule('//span[contains(@class, "Author")]'),
    ExtractionRule('//div[contains(@class, "author")]'),
    ExtractionRule('//span[contains(@class, "text-muted")]'),
    ExtractionRule('//div[contains(@class, "meta")]//span[not(contains(@class, "license"))]'),
    ExtractionRule('//div[contains(@class, "details")]//span[1]'),
    ExtractionRule('//div[contains(@class, "pkg-subdoc")]/p/span'),
)

COPYRIGHT_RULES = (
    ExtractionRule('//span[contains(text(), "Copyright")]'),
    ExtractionRule('//div[contains(text(), "©")]'),
    ExtractionRule('//span[contains(text(), "©")]'),
)


def is_plausible_license(value: str) -> bool:
    # The page footer disclaimer also links to /license-policy
    return "not legal advice" not in value


def is_plausible_source_link(value: str) -> bool:
    return "pkg.go.dev" not in value


def is_plausible_author(value: str) -> bool:
    lowered = value.lower()
    return len(value) < MAX_AUTHOR_LENGTH and "license" not in lowered and "copyright" not in lowered


def github_url_from_path(module_path: str) -> str:
    """Repository URL for module paths hosted on GitHub, else ""."""
    if GITHUB_PATH_MARKER in module_path:
        return f"https://{module_path}"
    return ""


def author_from_path(module_path: str) -> str:
    """
    Guess the owner of a module from its path.

    "github.com/spf13/cobra" -> "spf13"; "golang.org/x/mod" -> "golang.org"
    """
    if "/" not in module_path:
        return ""
    segments = module_path.split("/")
    if GITHUB_PATH_MARKER in module_path and segments[1]:
        return segments[1]
    return segments[0]


class GoModuleResolver:
    """
    Resolver for Go modules, backed by the pkg.go.dev documentation pages.

    Supports: Ecosystem.GO dependencies
    """

    @property
    def name(self) -> str:
        return "pkg.go.dev"

    @property
    def ecosystem(self) -> Ecosystem:
        return Ecosystem.GO

    def supports(self, dependency: DependencyRecord) -> bool:
        """Check if this resolver supports the given dependency."""
        return dependency.ecosystem == Ecosystem.GO

    def resolve(self, dependency: DependencyRecord, session: requests.Session) -> MetadataRecord:
        """
        Scrape module metadata from pkg.go.dev.

        Args:
            dependency: Go module requirement
            session: requests.Session with configured headers

        Returns:
            MetadataRecord; sparse when the page cannot be fetched or parsed
        """
        record = MetadataRecord.sparse(dependency)
        url = f"{PKG_GO_DEV_BASE}/{dependency.name}"

        try:
            result = fetch(session, url)
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout fetching pkg.go.dev page for {dependency.name}")
            return record
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error fetching pkg.go.dev page for {dependency.name}: {e}")
            return record

        if result.status_code == 404:
            logger.debug(f"Module not found on pkg.go.dev: {dependency.name}")
            return record
        if not result.ok:
            logger.warning(f"Failed to fetch pkg.go.dev page for {dependency.name}: HTTP {result.status_code}")
            return record

        document = parse_html(result.content)
        if document is None:
            logger.warning(f"Unparseable pkg.go.dev page for {dependency.name}")
            return record

        return self._extract(dependency, document)

    def _extract(self, dependency: DependencyRecord, document) -> MetadataRecord:
        license_id = first_match(document, LICENSE_RULES, is_plausible_license)
        description = first_match(document, DESCRIPTION_RULES)

        source_url = first_match(document, SOURCE_LINK_RULES, is_plausible_source_link)
        if not source_url:
            source_url = github_url_from_path(dependency.name)

        author = first_match(document, AUTHOR_RULES, is_plausible_author)
        if not author:
            author = author_from_path(dependency.name)
            if author:
                logger.debug(f"Derived author '{author}' from module path {dependency.name}")

        copyright_notice = copyright_from_license(license_id)
        if not license_id:
            copyright_notice = first_match(document, COPYRIGHT_RULES)

        logger.debug(f"Resolved pkg.go.dev metadata for: {dependency.name}")

        return MetadataRecord(
            name=dependency.name,
            version=dependency.version_constraint,
            license=license_id,
            license_url=license_url(license_id),
            author=author,
            description=description,
            copyright=copyright_notice,
            repository_url=source_url,
            source_url=source_url,
            ecosystem=self.ecosystem.value,
            package_url=go_proxy_info_path(dependency.name, dependency.version_constraint),
            module_name=dependency.name,
        )
