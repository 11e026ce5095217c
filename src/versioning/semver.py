"""Thin wrapper around semantic_version for npm range evaluation.

``semantic_version.NpmSpec`` understands the npm range grammar (``^``, ``~``,
comparator sets, ``||``, hyphen and x-ranges) but always applies npm's default
prerelease rule. ``NpmRange`` adds the ``include_prerelease`` mode by expanding
the range into comparator sets the way npm does when prereleases are included:
lower bounds of partial versions and every generated upper bound get the lowest
prerelease (``-0``), while comparators written out in full are kept as they are.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

import semantic_version
from semantic_version.base import Range

logger = logging.getLogger(__name__)

# npm tolerates whitespace after an operator and a "v" or "=" prefix before a
# version (">= 1.2.3", "^v1.2.3", "v1.0.0 - 2.0.0"), and reads "~>" as "~".
_TILDE_ARROW = re.compile(r"~>")
_OPERATOR_GAP = re.compile(r"(<=|>=|<|>|=|\^|~)\s*[v=]*\s*(?=[0-9xX*])")
_WHITESPACE = re.compile(r"\s+")
_BARE_V = re.compile(r"(^|[\s|])[v=]+(?=[0-9xX*])")

_NUMBER = r"x|X|\*|0|[1-9][0-9]*"
_BLOCK = re.compile(
    r"""
    ^(?P<op><=|>=|<|>|=|\^|~|)
    v?
    (?P<major>{nb})
    (?:\.(?P<minor>{nb})
        (?:\.(?P<patch>{nb})
            (?:-(?P<pre>[0-9A-Za-z.-]+))?
            (?:\+[0-9A-Za-z.-]+)?
        )?
    )?$
    """.format(nb=_NUMBER),
    re.VERBOSE,
)
_HYPHEN = " - "

_OPERATORS = {
    "<": Range.OP_LT,
    "<=": Range.OP_LTE,
    ">": Range.OP_GT,
    ">=": Range.OP_GTE,
    "=": Range.OP_EQ,
}
_LOWEST = ("0",)


def normalize_range(range_str: str) -> str:
    """Collapse whitespace so NpmSpec sees single-space separated blocks."""
    s = _WHITESPACE.sub(" ", range_str.strip())
    s = _TILDE_ARROW.sub("~", s)
    s = _BARE_V.sub(r"\1", s)
    return _OPERATOR_GAP.sub(r"\1", s)


def parse_version(version: str) -> Optional[semantic_version.Version]:
    """Parse a registry version string, returning None when it is not semver."""
    try:
        return semantic_version.Version(version)
    except ValueError:
        return None


def is_prerelease(version: semantic_version.Version) -> bool:
    return bool(version.prerelease)


def _is_x(part: Optional[str]) -> bool:
    return part is None or part in ("x", "X", "*")


def _cmp(op: str, major: int, minor: int, patch: int, prerelease=()) -> Range:
    target = semantic_version.Version(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=tuple(prerelease),
    )
    return Range(_OPERATORS[op], target, prerelease_policy=Range.PRERELEASE_ALWAYS)


def _match_block(block: str):
    match = _BLOCK.match(block)
    if match is None:
        raise ValueError(f"Invalid npm range block: {block!r}")
    pre = match.group("pre")
    return (
        match.group("op"),
        match.group("major"),
        match.group("minor"),
        match.group("patch"),
        tuple(pre.split(".")) if pre else (),
    )


def _caret(major, minor, patch, pre) -> List[Range]:
    if _is_x(major):
        return []
    M = int(major)
    if _is_x(minor):
        return [_cmp(">=", M, 0, 0, _LOWEST), _cmp("<", M + 1, 0, 0, _LOWEST)]
    m = int(minor)
    if _is_x(patch):
        if M == 0:
            return [_cmp(">=", M, m, 0, _LOWEST), _cmp("<", M, m + 1, 0, _LOWEST)]
        return [_cmp(">=", M, m, 0, _LOWEST), _cmp("<", M + 1, 0, 0, _LOWEST)]
    p = int(patch)
    if pre:
        low = _cmp(">=", M, m, p, pre)
    elif M == 0:
        low = _cmp(">=", M, m, p, _LOWEST)
    else:
        low = _cmp(">=", M, m, p)
    if M == 0 and m == 0:
        high = _cmp("<", M, m, p + 1, _LOWEST)
    elif M == 0:
        high = _cmp("<", M, m + 1, 0, _LOWEST)
    else:
        high = _cmp("<", M + 1, 0, 0, _LOWEST)
    return [low, high]


def _tilde(major, minor, patch, pre) -> List[Range]:
    if _is_x(major):
        return []
    M = int(major)
    if _is_x(minor):
        return [_cmp(">=", M, 0, 0), _cmp("<", M + 1, 0, 0, _LOWEST)]
    m = int(minor)
    p = 0 if _is_x(patch) else int(patch)
    return [_cmp(">=", M, m, p, pre), _cmp("<", M, m + 1, 0, _LOWEST)]


def _primitive(op, major, minor, patch, pre) -> List[Range]:
    xM, xm, xp = _is_x(major), _is_x(minor), _is_x(patch)
    any_x = xM or xm or xp
    if op == "=" and any_x:
        op = ""

    if xM:
        # "<x" and ">x" match nothing; every other form matches everything.
        if op in ("<", ">"):
            return [_cmp("<", 0, 0, 0, _LOWEST)]
        return []

    M = int(major)
    if op and any_x:
        m = 0 if xm else int(minor)
        p = 0
        if op == ">":
            op = ">="
            if xm:
                M, m = M + 1, 0
            else:
                m += 1
        elif op == "<=":
            op = "<"
            if xm:
                M += 1
            else:
                m += 1
        return [_cmp(op, M, m, p, _LOWEST)]
    if xm:
        return [_cmp(">=", M, 0, 0, _LOWEST), _cmp("<", M + 1, 0, 0, _LOWEST)]
    m = int(minor)
    if xp:
        return [_cmp(">=", M, m, 0, _LOWEST), _cmp("<", M, m + 1, 0, _LOWEST)]
    return [_cmp(op or "=", M, m, int(patch), pre)]


def _hyphen(low: str, high: str) -> List[Range]:
    comparators = []
    op, major, minor, patch, pre = _match_block(low)
    if op:
        raise ValueError(f"Invalid hyphen range bound: {low!r}")
    if _is_x(major):
        pass
    elif _is_x(minor):
        comparators.append(_cmp(">=", major, 0, 0, _LOWEST))
    elif _is_x(patch):
        comparators.append(_cmp(">=", major, minor, 0, _LOWEST))
    else:
        comparators.append(_cmp(">=", major, minor, patch, pre or _LOWEST))

    op, major, minor, patch, pre = _match_block(high)
    if op:
        raise ValueError(f"Invalid hyphen range bound: {high!r}")
    if _is_x(major):
        pass
    elif _is_x(minor):
        comparators.append(_cmp("<", int(major) + 1, 0, 0, _LOWEST))
    elif _is_x(patch):
        comparators.append(_cmp("<", major, int(minor) + 1, 0, _LOWEST))
    elif pre:
        comparators.append(_cmp("<=", major, minor, patch, pre))
    else:
        comparators.append(_cmp("<", major, minor, int(patch) + 1, _LOWEST))
    return comparators


def _expand_block(block: str) -> List[Range]:
    op, major, minor, patch, pre = _match_block(block)
    if op == "^":
        return _caret(major, minor, patch, pre)
    if op == "~":
        return _tilde(major, minor, patch, pre)
    return _primitive(op, major, minor, patch, pre)


def inclusive_comparator_sets(range_str: str) -> List[List[Range]]:
    """Expand a normalized range into comparator sets that admit prereleases.

    A version satisfies the range when it satisfies every comparator of at
    least one set. An empty set matches every version.
    """
    sets = []
    for group in range_str.split("||"):
        group = group.strip()
        if not group:
            sets.append([])
        elif _HYPHEN in group:
            low, high = group.split(_HYPHEN, 1)
            sets.append(_hyphen(low.strip(), high.strip()))
        else:
            comparators: List[Range] = []
            for block in group.split(" "):
                comparators.extend(_expand_block(block))
            sets.append(comparators)
    return sets


class NpmRange:
    """A validated npm range."""

    def __init__(self, range_str: str):
        """Parse ``range_str``.

        Raises:
            ValueError: If the range is not valid npm range syntax.
        """
        self.raw = range_str
        normalized = normalize_range(range_str)
        self._inclusive_sets = inclusive_comparator_sets(normalized)
        self._spec = semantic_version.NpmSpec(normalized)

    def match(self, version: semantic_version.Version, include_prerelease: bool = False) -> bool:
        """Test ``version`` against the range.

        With ``include_prerelease`` a prerelease version is compared by plain
        semver precedence instead of npm's same-tuple rule.
        """
        if not include_prerelease:
            return self._spec.match(version)
        return any(
            all(comparator.match(version) for comparator in comparators)
            for comparators in self._inclusive_sets
        )

    def __str__(self) -> str:
        return self.raw


def sort_versions(versions: Iterable[str]) -> List[str]:
    """Sort version strings ascending by semver precedence.

    The sort is stable, so equal-precedence versions (differing only in build
    metadata) keep their input order. Strings that are not semver are dropped.
    """
    parsed: Dict[str, semantic_version.Version] = {}
    for v in versions:
        ver = parse_version(v)
        if ver is None:
            logger.debug("Skipping non-semver version: %s", v)
            continue
        parsed[v] = ver
    return sorted(parsed, key=parsed.__getitem__)
