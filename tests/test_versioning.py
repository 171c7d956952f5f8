"""Tests for version constraint normalization."""

import pytest

from license_report._resolvers.versioning import normalize_version


@pytest.mark.parametrize(
    "constraint,expected",
    [
        ("^1.3.0", "1.3.0"),
        ("~1.2.3", "1.2.3"),
        ("~=1.4", "1.4"),
        (">=2.0.0", "2.0.0"),
        ("==8.1.7", "8.1.7"),
        (">1.0", "1.0"),
        ("<=3.0", "3.0"),
        ("<3.0", "3.0"),
        (">=2.0.0,<3.0.0", "2.0.0"),
        ("1.2.3 || 2.0.0", "1.2.3"),
        ("v1.8.0", "v1.8.0"),
        ("  ^4.17.21  ", "4.17.21"),
        ("", ""),
    ],
)
def test_normalize_version(constraint, expected):
    """Test operator stripping and cutting."""
    assert normalize_version(constraint) == expected


def test_operator_followed_by_space_yields_empty():
    """Test an operator followed by a space yields an empty version."""
    # The space split runs after the operator strip
    assert normalize_version(">= 2.0") == ""


def test_none_is_empty():
    """Test None normalizes to an empty string."""
    assert normalize_version(None) == ""


def test_no_operator_prefix_survives():
    """Test no operator prefix survives normalization."""
    for constraint in ["^1.0.0", ">=1.0", "~=2.1", "~0.3", "==4.5.6"]:
        result = normalize_version(constraint)
        assert not result.startswith((">", "<", "=", "^", "~"))
