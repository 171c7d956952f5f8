"""Parser registry for selecting a manifest parser by file name."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from license_report.exceptions import UnsupportedManifestError
from license_report.logging_config import logger

from .models import ManifestType, ParsedManifest
from .protocol import ManifestParser

# Extension sniffing used when the file name is not a canonical manifest name
_EXTENSION_TYPES: Dict[str, ManifestType] = {
    ".mod": ManifestType.GO_MOD,
    ".json": ManifestType.PACKAGE_JSON,
    ".toml": ManifestType.PYPROJECT,
}


class ManifestParserRegistry:
    """
    Registry for managing manifest parser plugins.

    Example:
        registry = ManifestParserRegistry()
        registry.register(GoModParser())
        registry.register(PackageJSONParser())

        manifest = registry.parse(Path("go.mod"))
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._parsers: List[ManifestParser] = []

    def register(self, parser: ManifestParser) -> None:
        """
        Register a manifest parser.

        Args:
            parser: ManifestParser implementation to register
        """
        self._parsers.append(parser)
        logger.debug(f"Registered manifest parser: {parser.name}")

    def get_parser_for(self, path: Path) -> Optional[ManifestParser]:
        """
        Find the parser for a manifest path.

        Parsers are asked first (exact name, then name suffix). When none
        claims the file, the extension decides.

        Args:
            path: Path to the manifest file

        Returns:
            Matching ManifestParser, or None if the file is not recognized
        """
        for parser in self._parsers:
            if parser.supports(path):
                return parser

        manifest_type = _EXTENSION_TYPES.get(path.suffix.lower())
        if manifest_type:
            for parser in self._parsers:
                if parser.manifest_type == manifest_type:
                    logger.debug(f"Selected {parser.name} parser for {path.name} by extension")
                    return parser

        return None

    def parse(self, path: Union[str, Path]) -> ParsedManifest:
        """
        Parse a manifest with the matching parser.

        Args:
            path: Path to the manifest file

        Returns:
            ParsedManifest

        Raises:
            UnsupportedManifestError: If no parser recognizes the file
            ManifestReadError: If the file is unreadable or malformed
        """
        path = Path(path)
        parser = self.get_parser_for(path)
        if parser is None:
            supported = ", ".join(self.list_parsers())
            raise UnsupportedManifestError(f"Unsupported manifest '{path.name}' (supported: {supported})")

        logger.debug(f"Parsing {path} as {parser.name}")
        return parser.parse(path)

    def list_parsers(self) -> List[str]:
        """List the names of all registered parsers."""
        return [p.name for p in self._parsers]


def create_default_registry() -> ManifestParserRegistry:
    """Create a ManifestParserRegistry with the go.mod, package.json and pyproject.toml parsers."""
    from .parsers import GoModParser, PackageJSONParser, PyProjectParser

    registry = ManifestParserRegistry()
    registry.register(GoModParser())
    registry.register(PackageJSONParser())
    registry.register(PyProjectParser())
    return registry


def parse_manifest(path: Union[str, Path]) -> ParsedManifest:
    """Parse a manifest with the default parser registry."""
    return create_default_registry().parse(path)
