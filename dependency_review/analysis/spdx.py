"""SPDX license expression validation and satisfaction checks.

Uses the license-expression library for SPDX parsing. Satisfaction is
decided by expanding both expressions into disjunctive normal form: each
expression becomes a list of license sets, one per way of complying with it.
An expression is satisfied by a range when one of its license sets is
covered by one of the range's license sets.

A license is covered by an identical license, or by an ``-or-later`` (``+``)
license of the same family at the same or an earlier version, so
``GPL-3.0-only`` is covered by ``GPL-2.0-or-later``.

The ``satisfies*`` helpers never raise; they return False for malformed
input. Call ``is_valid`` first to tell "unparseable" apart from
"parseable but not satisfying".
"""

from __future__ import annotations

import re
from typing import Any, Optional

from license_expression import (
    AND,
    OR,
    ExpressionError,
    LicenseWithExceptionSymbol,
    get_spdx_licensing,
)

# Initialize SPDX licensing for parsing
_licensing = get_spdx_licensing()

_OPERATORS = frozenset({"AND", "OR", "WITH"})

_REFERENCE_PREFIXES = ("LicenseRef-", "DocumentRef-")

# Exact spellings accepted for license and exception identifiers
_EXACT_KEYS: frozenset[str] = frozenset(
    name
    for symbol in _licensing.known_symbols.values()
    for name in (symbol.key, *symbol.aliases)
)

_TOKEN_REGEX = re.compile(r"[^\s()]+")

# ClearlyDefined emits a bare OTHER token that is not valid SPDX
_OTHER_REGEX = re.compile(r"(?<![\w-])OTHER(?![\w-])")
OTHER_REPLACEMENT = "LicenseRef-clearlydefined-OTHER"

# License families ordered from earliest to latest version
LICENSE_RANGES: tuple[tuple[str, ...], ...] = (
    ("AFL-1.1", "AFL-1.2", "AFL-2.0", "AFL-2.1", "AFL-3.0"),
    ("AGPL-1.0", "AGPL-3.0"),
    ("Apache-1.0", "Apache-1.1", "Apache-2.0"),
    ("APSL-1.0", "APSL-1.1", "APSL-1.2", "APSL-2.0"),
    ("Artistic-1.0", "Artistic-2.0"),
    ("CDDL-1.0", "CDDL-1.1"),
    ("CECILL-1.0", "CECILL-1.1", "CECILL-2.0", "CECILL-2.1"),
    ("ECL-1.0", "ECL-2.0"),
    ("EFL-1.0", "EFL-2.0"),
    ("EPL-1.0", "EPL-2.0"),
    ("EUPL-1.0", "EUPL-1.1", "EUPL-1.2"),
    ("GFDL-1.1", "GFDL-1.2", "GFDL-1.3"),
    ("GPL-1.0", "GPL-2.0", "GPL-3.0"),
    ("LGPL-2.0", "LGPL-2.1", "LGPL-3.0"),
    ("LPPL-1.0", "LPPL-1.1", "LPPL-1.2", "LPPL-1.3a", "LPPL-1.3c"),
    ("MPL-1.0", "MPL-1.1", "MPL-2.0"),
    ("OFL-1.0", "OFL-1.1"),
    ("OSL-1.0", "OSL-1.1", "OSL-2.0", "OSL-2.1", "OSL-3.0"),
    ("ZPL-1.1", "ZPL-2.0", "ZPL-2.1"),
)

_RANGE_POSITIONS: dict[str, tuple[int, int]] = {
    license_id: (family, position)
    for family, versions in enumerate(LICENSE_RANGES)
    for position, license_id in enumerate(versions)
}

_ONLY_SUFFIX = "-only"
_OR_LATER_SUFFIXES = ("-or-later", "+")


def clean_invalid_spdx(expression: str) -> str:
    """Replace the non-standard ``OTHER`` token with a license reference.

    Args:
        expression: SPDX license expression.

    Returns:
        The expression with every standalone ``OTHER`` rewritten.
    """
    return _OTHER_REGEX.sub(OTHER_REPLACEMENT, expression)


def _has_exact_tokens(expression: str) -> bool:
    """Check that operators and identifiers use their exact SPDX spelling."""
    for token in _TOKEN_REGEX.findall(expression):
        if token in _OPERATORS:
            continue
        if token.upper() in _OPERATORS:
            return False
        if token.startswith(_REFERENCE_PREFIXES):
            continue
        if token.endswith("+") and len(token) > 1:
            token = token[:-1]
        if token not in _EXACT_KEYS:
            return False
    return True


def _parse(expression: str) -> Any:
    return _licensing.parse(expression, validate=False)


def is_valid(expression: Optional[str]) -> bool:
    """Check if a string is a valid SPDX license expression.

    Syntax errors, unknown license identifiers and case mismatches all make
    an expression invalid. ``LicenseRef-`` references are accepted.

    Args:
        expression: Candidate SPDX license expression.

    Returns:
        True if the expression parses, False otherwise.
    """
    if not expression or not expression.strip():
        return False

    try:
        parsed = _parse(expression)
    except (ExpressionError, TypeError, ValueError):
        return False
    if parsed is None:
        return False

    unknown = [
        key
        for key in _licensing.unknown_license_keys(parsed, unique=True)
        if not key.startswith(_REFERENCE_PREFIXES)
    ]
    if unknown:
        return False

    return _has_exact_tokens(expression)


def _atom(symbol: object) -> str:
    if isinstance(symbol, LicenseWithExceptionSymbol):
        return f"{symbol.license_symbol.key} WITH {symbol.exception_symbol.key}"
    return str(getattr(symbol, "key", symbol))


def _split_version(license_id: str) -> tuple[str, bool]:
    """Strip the version qualifier, returning the base id and the or-later flag."""
    for suffix in _OR_LATER_SUFFIXES:
        if license_id.endswith(suffix):
            return license_id[: -len(suffix)], True
    if license_id.endswith(_ONLY_SUFFIX):
        return license_id[: -len(_ONLY_SUFFIX)], False
    return license_id, False


def _versions(license_id: str) -> Optional[tuple[int, set[int]]]:
    base, or_later = _split_version(license_id)
    if base not in _RANGE_POSITIONS:
        return None
    family, position = _RANGE_POSITIONS[base]
    if or_later:
        return family, set(range(position, len(LICENSE_RANGES[family])))
    return family, {position}


def _covers(allowed: str, candidate: str) -> bool:
    """Check if an allowed license atom grants a candidate license atom."""
    if allowed == candidate:
        return True

    allowed_id, _, allowed_exception = allowed.partition(" WITH ")
    candidate_id, _, candidate_exception = candidate.partition(" WITH ")
    if allowed_exception != candidate_exception:
        return False

    allowed_versions = _versions(allowed_id)
    candidate_versions = _versions(candidate_id)
    if allowed_versions is None or candidate_versions is None:
        return _split_version(allowed_id)[0] == _split_version(candidate_id)[0]
    if allowed_versions[0] != candidate_versions[0]:
        return False
    return bool(allowed_versions[1] & candidate_versions[1])


def _option_covered(option: frozenset[str], allowed: frozenset[str]) -> bool:
    return all(any(_covers(grant, atom) for grant in allowed) for atom in option)


def _expand(node: Any) -> list[frozenset[str]]:
    """Expand an expression into its alternative license sets."""
    if isinstance(node, AND):
        options: list[frozenset[str]] = [frozenset()]
        for arg in node.args:
            options = [left | right for left in options for right in _expand(arg)]
        return options
    if isinstance(node, OR):
        return [option for arg in node.args for option in _expand(arg)]
    return [frozenset([_atom(node)])]


def satisfies(expression: str, range_expression: str) -> bool:
    """Check if an expression can be complied with using a range of licenses.

    Args:
        expression: SPDX expression of the package license.
        range_expression: SPDX expression describing acceptable licenses,
            e.g. ``"MIT OR Apache-2.0"``.

    Returns:
        True if some way of complying with ``expression`` only needs
        licenses granted by one alternative of ``range_expression``.
    """
    try:
        candidate = _parse(clean_invalid_spdx(expression))
        accepted = _parse(clean_invalid_spdx(range_expression))
        if candidate is None or accepted is None:
            return False
        accepted_options = _expand(accepted)
        return any(
            _option_covered(option, allowed)
            for option in _expand(candidate)
            for allowed in accepted_options
        )
    except (ExpressionError, TypeError, ValueError):
        return False


def satisfies_any(expression: str, licenses: list[str]) -> bool:
    """Check if at least one listed license alone satisfies the expression.

    Args:
        expression: SPDX expression of the package license.
        licenses: License identifiers (not expressions).

    Returns:
        True if any license in the list satisfies the expression.
    """
    return any(satisfies(expression, license_id) for license_id in licenses)


def satisfies_all(expression: str, licenses: list[str]) -> bool:
    """Check if every listed license alone satisfies the expression.

    Args:
        expression: SPDX expression of the package license.
        licenses: Non-empty list of license identifiers (not expressions).

    Returns:
        True if the list is non-empty and each license satisfies the
        expression.
    """
    if not licenses:
        return False
    return all(satisfies(expression, license_id) for license_id in licenses)
