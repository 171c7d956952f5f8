"""Shared helpers for manifest parsers."""

from pathlib import Path

from license_report.exceptions import ManifestReadError

# Separators allowed before a canonical manifest name, e.g. "frontend.package.json"
_NAME_PREFIX_SEPARATORS = (".", "-", "_")


def matches_manifest_name(path: Path, canonical_name: str) -> bool:
    """Check whether a file is named after a canonical manifest name."""
    name = path.name
    if name == canonical_name:
        return True
    return any(name.endswith(f"{sep}{canonical_name}") for sep in _NAME_PREFIX_SEPARATORS)


def read_manifest_text(path: Path) -> str:
    """
    Read a manifest file as UTF-8 text.

    Raises:
        ManifestReadError: If the file cannot be read or decoded
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestReadError(f"Manifest not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"Failed to read {path}: {e}") from e
