"""License standardization and license-derived fields.

Registries report licenses as verbose names ("Apache Software License"),
classifier leaves ("MIT License") or SPDX identifiers ("BSD-3-Clause").
Reports use short SPDX-style identifiers, so known verbose names are mapped
through an exact table first, then through family substring checks.
Strings that are already SPDX license keys are left alone, which keeps
standardization idempotent.
"""

from typing import Optional

from license_expression import ExpressionError, get_spdx_licensing

# Lookup base for license links; the URL is a convention, not a verified page
LICENSE_URL_BASE = "https://licenses.nuget.org/"

# Get the SPDX licensing instance (contains all official SPDX license IDs)
_spdx_licensing = get_spdx_licensing()

# EXACT mappings from verbose names to short identifiers
LICENSE_EXACT_ALIASES = {
    "Apache Software License": "Apache-2.0",
    "BSD License": "BSD-3-Clause",
    "MIT License": "MIT",
    "Mozilla Public License 2.0 (MPL 2.0)": "MPL-2.0",
    "GNU General Public License v3 (GPLv3)": "GPL-3.0",
    "GNU General Public License v2 (GPLv2)": "GPL-2.0",
    "GNU Lesser General Public License v3 (LGPLv3)": "LGPL-3.0",
    "GNU Lesser General Public License v2 (LGPLv2)": "LGPL-2.0",
}


# Identifiers produced by the alias table are standard by definition
STANDARD_IDENTIFIERS = frozenset(LICENSE_EXACT_ALIASES.values())


def is_spdx_license_key(license_str: str) -> bool:
    """
    Check whether a string is a single SPDX license identifier.

    Deprecated identifiers such as "GPL-3.0" are accepted. Expressions with
    operators ("MIT OR Apache-2.0") and verbose names are not.
    """
    if not license_str or any(ch.isspace() for ch in license_str):
        return False
    if license_str in STANDARD_IDENTIFIERS:
        return True
    try:
        parsed = _spdx_licensing.parse(license_str, validate=False)
    except ExpressionError:
        return False
    return parsed is not None and not _spdx_licensing.unknown_license_keys(parsed)


def standardize_license(license_name: Optional[str]) -> str:
    """
    Convert a license name to a short SPDX-style identifier.

    Order of checks:
    1. Exact verbose-name table
    2. Already a known SPDX key: returned unchanged
    3. Substring families: Apache, MIT, BSD, then GPL with "3" or "2"
    4. Anything else is returned unchanged

    Args:
        license_name: Raw license string from a registry

    Returns:
        Standardized identifier, or the stripped input when unrecognized
    """
    if not license_name:
        return ""

    name = license_name.strip()

    if name in LICENSE_EXACT_ALIASES:
        return LICENSE_EXACT_ALIASES[name]

    if is_spdx_license_key(name):
        return name

    if "Apache" in name:
        return "Apache-2.0"
    if "MIT" in name:
        return "MIT"
    if "BSD" in name:
        return "BSD-3-Clause"
    if "GPL" in name and "3" in name:
        return "GPL-3.0"
    if "GPL" in name and "2" in name:
        return "GPL-2.0"

    return name


def license_url(license_id: str) -> str:
    """Lookup URL for a license, or "" when there is no license."""
    if not license_id:
        return ""
    return f"{LICENSE_URL_BASE}{license_id}"


def copyright_from_license(license_id: str) -> str:
    """Copyright notice derived from a license ("MIT" -> "MIT Copyright")."""
    if not license_id:
        return ""
    return f"{license_id} Copyright"


def find_copyright_line(text: Optional[str]) -> str:
    """
    Find the first line mentioning a copyright.

    A line matches when it contains "copyright" (any case) or the "©" sign.

    Args:
        text: Free text such as a README

    Returns:
        The stripped line, or "" when nothing matches
    """
    if not text:
        return ""
    for line in text.split("\n"):
        if "copyright" in line.lower() or "©" in line:
            return line.strip()
    return ""
