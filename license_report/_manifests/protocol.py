"""ManifestParser protocol for manifest parser plugins."""

from pathlib import Path
from typing import Protocol

from .models import ManifestType, ParsedManifest


class ManifestParser(Protocol):
    """
    Protocol defining the interface for manifest parser plugins.

    Each parser turns one manifest format into an ordered list of
    DependencyRecord objects plus the project name.

    Example:
        class GoModParser:
            name = "go.mod"
            manifest_type = ManifestType.GO_MOD

            def supports(self, path: Path) -> bool:
                return path.name == "go.mod"

            def parse(self, path: Path) -> ParsedManifest:
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of the manifest format.

        Used for logging. Examples: "go.mod", "package.json", "pyproject.toml"
        """
        ...

    @property
    def manifest_type(self) -> ManifestType:
        """Manifest format handled by this parser."""
        ...

    def supports(self, path: Path) -> bool:
        """
        Check whether the file name identifies this parser's format.

        Args:
            path: Path to the manifest file

        Returns:
            True if this parser can parse the file
        """
        ...

    def parse(self, path: Path) -> ParsedManifest:
        """
        Parse the manifest file.

        Implementations should:
        1. Read the file (wrap OSError/UnicodeDecodeError in ManifestReadError)
        2. Decode the document (wrap format errors in ManifestReadError)
        3. Drop entries with an empty name
        4. Return an empty dependency list for manifests without dependencies

        Args:
            path: Path to the manifest file

        Returns:
            ParsedManifest with dependencies in manifest order

        Raises:
            ManifestReadError: If the file is unreadable or malformed
        """
        ...
