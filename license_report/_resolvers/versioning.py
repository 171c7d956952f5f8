"""Version constraint normalization shared by all resolvers."""

# Stripped in this order, each at most once; ">=" must be tried before ">"
CONSTRAINT_OPERATORS = (">=", "==", ">", "<=", "<", "~=", "^", "~")


def normalize_version(constraint: str) -> str:
    """
    Reduce a version constraint to a best-guess concrete version.

    Leading comparison operators are stripped, then the text before the
    first comma and before the first space is kept. Ranges collapse to one
    endpoint; this is only used to build registry URLs.

    Examples:
        "^1.3.0"          -> "1.3.0"
        ">=2.0.0,<3.0.0"  -> "2.0.0"
        "~=1.4 "          -> "1.4"
        ""                -> ""

    Args:
        constraint: Raw version constraint

    Returns:
        Normalized version string (may be empty)
    """
    version = (constraint or "").strip()
    for operator in CONSTRAINT_OPERATORS:
        if version.startswith(operator):
            version = version[len(operator) :]
    version = version.split(",")[0]
    version = version.split(" ")[0]
    return version
