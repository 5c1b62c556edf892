"""Dotted version comparison."""

import math
import re

_NUMERIC_PART = re.compile(r"\d+", re.ASCII)
_LEXICOGRAPHIC_PART = re.compile(r"\d+[A-Za-z]*", re.ASCII)


def has_valid_parts(lexicographical: bool, parts: list[str]) -> bool:
    """Return True if there is at least one part and every part is well formed."""
    pattern = _LEXICOGRAPHIC_PART if lexicographical else _NUMERIC_PART
    return bool(parts) and all(pattern.fullmatch(part) for part in parts)


def _to_number(part: str) -> float:
    try:
        value = float(part)
    except ValueError:
        return math.nan
    return math.nan if math.isinf(value) else value


def version_compare(
    v1: str, v2: str, lexicographical: bool = False, zero_extend: bool = False
) -> float:
    """Compare two versions: 1 if v1 is newer, -1 if older, 0 if equal, NaN if invalid."""
    v1_parts = v1.split(".")
    v2_parts = v2.split(".")
    if not has_valid_parts(lexicographical, v1_parts) or not has_valid_parts(
        lexicographical, v2_parts
    ):
        return math.nan

    if zero_extend:
        width = max(len(v1_parts), len(v2_parts))
        v1_parts += ["0"] * (width - len(v1_parts))
        v2_parts += ["0"] * (width - len(v2_parts))

    if lexicographical:
        first: list[float] = []
        second: list[float] = []
    else:
        first = [_to_number(part) for part in v1_parts]
        second = [_to_number(part) for part in v2_parts]

    for index, left in enumerate(first):
        if index == len(second):
            return 1
        right = second[index]
        if left == right:
            continue
        return 1 if left > right else -1

    if len(first) != len(second):
        return -1
    return 0