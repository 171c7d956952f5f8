"""Declarative fallback rules for extracting fields from HTML pages."""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from lxml import etree, html

from license_report.logging_config import logger

Accept = Callable[[str], bool]


@dataclass(frozen=True)
class ExtractionRule:
    """
    One XPath selector in a fallback chain.

    Attributes:
        xpath: XPath 1.0 expression; only the first matching node is used
        attribute: Attribute to read instead of the node's text content
    """

    xpath: str
    attribute: Optional[str] = None

    def extract(self, document: html.HtmlElement) -> str:
        """Value of the first matching node, or "" when nothing matches."""
        try:
            nodes = document.xpath(self.xpath)
        except etree.XPathError as e:
            logger.debug(f"Invalid XPath {self.xpath!r}: {e}")
            return ""
        if not nodes:
            return ""

        node = nodes[0]
        if isinstance(node, str):
            # Selectors ending in text() or @attr return strings
            return node.strip()
        if self.attribute:
            return (node.get(self.attribute) or "").strip()
        return node.text_content().strip()


def _accept_any(value: str) -> bool:
    return True


def first_match(
    document: html.HtmlElement,
    rules: Sequence[ExtractionRule],
    accept: Accept = _accept_any,
) -> str:
    """
    Evaluate rules in priority order and return the first plausible value.

    Args:
        document: Parsed HTML document
        rules: Ordered fallback chain
        accept: Plausibility filter applied to non-empty values

    Returns:
        First non-empty value accepted by the filter, or ""
    """
    for rule in rules:
        value = rule.extract(document)
        if value and accept(value):
            return value
    return ""


def parse_html(content: bytes) -> Optional[html.HtmlElement]:
    """Parse an HTML body; returns None for empty or unparseable documents."""
    if not content or not content.strip():
        return None
    try:
        return html.fromstring(content)
    except (etree.ParserError, ValueError) as e:
        logger.debug(f"Failed to parse HTML: {e}")
        return None
