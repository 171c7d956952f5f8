"""Tests for license standardization and license-derived fields."""

import unittest

import pytest

from license_report._resolvers.license_utils import (
    LICENSE_EXACT_ALIASES,
    copyright_from_license,
    find_copyright_line,
    is_spdx_license_key,
    license_url,
    standardize_license,
)


class TestStandardizeLicense(unittest.TestCase):
    """Test mapping of verbose license names."""

    def test_exact_aliases(self):
        """Test common license names map to SPDX ids."""
        self.assertEqual(standardize_license("Apache Software License"), "Apache-2.0")
        self.assertEqual(standardize_license("BSD License"), "BSD-3-Clause")
        self.assertEqual(standardize_license("MIT License"), "MIT")
        self.assertEqual(standardize_license("Mozilla Public License 2.0 (MPL 2.0)"), "MPL-2.0")
        self.assertEqual(standardize_license("GNU Lesser General Public License v3 (LGPLv3)"), "LGPL-3.0")

    def test_substring_families(self):
        """Test license families are recognized by substring."""
        self.assertEqual(standardize_license("Apache License, Version 2.0"), "Apache-2.0")
        self.assertEqual(standardize_license("The MIT license"), "MIT")
        self.assertEqual(standardize_license("new BSD"), "BSD-3-Clause")
        self.assertEqual(standardize_license("GPL version 3"), "GPL-3.0")
        self.assertEqual(standardize_license("GPL v2 or later"), "GPL-2.0")

    def test_unrecognized_passes_through_stripped(self):
        """Test unknown licenses are returned stripped."""
        self.assertEqual(standardize_license("  Proprietary  "), "Proprietary")
        self.assertEqual(standardize_license("Public Domain"), "Public Domain")

    def test_empty(self):
        """Test an empty license stays empty."""
        self.assertEqual(standardize_license(""), "")
        self.assertEqual(standardize_license(None), "")

    def test_spdx_keys_are_kept(self):
        """Test valid SPDX keys pass through unchanged."""
        self.assertEqual(standardize_license("MIT-0"), "MIT-0")
        self.assertEqual(standardize_license("BSD-2-Clause"), "BSD-2-Clause")
        self.assertEqual(standardize_license("Apache-1.1"), "Apache-1.1")


@pytest.mark.parametrize(
    "raw",
    [
        "Apache Software License",
        "MIT License",
        "BSD License",
        "GNU General Public License v3 (GPLv3)",
        "GNU Lesser General Public License v3 (LGPLv3)",
        "GNU Lesser General Public License v2 (LGPLv2)",
        "Apache License 2.0",
        "GPL version 2",
        "Proprietary",
        "ISC",
    ],
)
def test_standardization_is_idempotent(raw):
    """Test standardizing twice gives the same result."""
    once = standardize_license(raw)
    assert standardize_license(once) == once


def test_alias_targets_are_spdx_keys():
    """Test every alias maps to a valid SPDX key."""
    for target in LICENSE_EXACT_ALIASES.values():
        assert is_spdx_license_key(target)


def test_is_spdx_license_key_rejects_names_and_expressions():
    """Test names and expressions are not SPDX keys."""
    assert not is_spdx_license_key("MIT License")
    assert not is_spdx_license_key("MIT OR Apache-2.0")
    assert not is_spdx_license_key("")


class TestLicenseDerivedFields:
    def test_license_url(self):
        """Test the license URL is built from the license."""
        assert license_url("MIT") == "https://licenses.nuget.org/MIT"
        assert license_url("") == ""

    def test_copyright_from_license(self):
        """Test the copyright notice is derived from the license."""
        assert copyright_from_license("Apache-2.0") == "Apache-2.0 Copyright"
        assert copyright_from_license("") == ""

    def test_find_copyright_line(self):
        """Test the first Copyright line is found in text."""
        readme = "# left-pad\n\nPads strings.\n\n  Copyright (c) 2014 Azer  \nMore text"
        assert find_copyright_line(readme) == "Copyright (c) 2014 Azer"

    def test_find_copyright_sign(self):
        """Test a line with the copyright sign is found."""
        assert find_copyright_line("intro\n© Acme Corp\n") == "© Acme Corp"

    def test_find_copyright_none(self):
        """Test text without a copyright line gives an empty string."""
        assert find_copyright_line("nothing here") == ""
        assert find_copyright_line(None) == ""
