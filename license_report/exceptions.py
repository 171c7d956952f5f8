"""Custom exceptions for license-report."""


class LicenseReportError(Exception):
    """Base exception for all license-report operations."""


class ConfigurationError(LicenseReportError):
    """Raised when configuration validation fails."""


class ManifestReadError(LicenseReportError):
    """Raised when a manifest cannot be read or is malformed for its format."""


class UnsupportedManifestError(ManifestReadError):
    """Raised when no parser recognizes the manifest file."""


class ReportWriteError(LicenseReportError):
    """Raised when the report file cannot be written."""
