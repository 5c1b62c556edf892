"""Comparison rules used by audience filters."""

import math
import operator as _op
import re
from collections.abc import Iterable, Sequence
from typing import Any

from .versioncompare import version_compare

# Characters other than digits, '.', '-', '(', '|' and ')' are dropped.
_NON_VERSION_CHARS = re.compile(r"[^(\d|.|\-)]", re.ASCII)
_FROM_HYPHEN = re.compile(r"-.*")

_NUMBER_COMPARATORS = {
    "=": _op.eq,
    "!=": _op.ne,
    ">": _op.gt,
    ">=": _op.ge,
    "<": _op.lt,
    "<=": _op.le,
}


def check_strings_filter(value: str, comparator: str, values: Sequence[str]) -> bool:
    """Test a string against the filter values with the given comparator."""
    match comparator:
        case "=":
            return value != "" and value in values
        case "!=":
            return value != "" and value not in values
        case "exist":
            return value != ""
        case "!exist":
            return value == ""
        case "contain":
            return value != "" and any(part in value for part in values)
        case "!contain":
            return value == "" or not any(part in value for part in values)
        case _:
            return False


def check_boolean_filter(value: bool, comparator: str, values: Sequence[bool]) -> bool:
    """Test a boolean against the filter values with the given comparator."""
    present = any(candidate is value for candidate in values)
    if comparator in ("contain", "="):
        return present
    if comparator in ("!contain", "!="):
        return not present
    return comparator == "exist"


def check_number_filter(num: float, filter_nums: Iterable[float], operator: str) -> bool:
    """True if ``num`` satisfies the comparator against any non-NaN filter number."""
    if operator == "exist":
        return not math.isnan(num)
    if operator == "!exist":
        return math.isnan(num)
    if math.isnan(num):
        return False
    compare = _NUMBER_COMPARATORS.get(operator)
    if compare is None:
        return False
    return any(compare(num, target) for target in filter_nums if not math.isnan(target))


def convert_to_semantic_version(version: str) -> str:
    """Pad a version to at least three parts and fill empty parts with zero."""
    parts = version.split(".")
    parts += ["0"] * (3 - len(parts))
    return ".".join(part or "0" for part in parts)


def check_version_value(filter_version: str, version: str, operator: str) -> bool:
    """Compare one version with one filter version under the operator."""
    if not version or not filter_version:
        return False
    result = version_compare(version, filter_version, lexicographical=False, zero_extend=True)
    if math.isnan(result):
        return False
    if result == 0:
        return "=" in operator
    if result == 1:
        return ">" in operator
    if result == -1:
        return "<" in operator
    return False


def _strip_version(version: str) -> str:
    return _FROM_HYPHEN.sub("", _NON_VERSION_CHARS.sub("", version))


def check_version_filter(version: str, filter_versions: Sequence[str], operator: str) -> bool:
    """True if the version satisfies the operator against any filter version."""
    if not version:
        return False

    negate = operator == "!="
    parsed_operator = "=" if negate else operator
    parsed_filters = list(filter_versions)
    if parsed_operator != "=":
        # e.g. "1.2.3a-b6" becomes "1.2.3"
        version = _strip_version(version)
        parsed_filters = [_strip_version(item) for item in parsed_filters]

    version = convert_to_semantic_version(version)
    passed = any(check_version_value(item, version, operator) for item in parsed_filters)
    return not passed if negate else passed


def check_value_exists(value: Any) -> bool:
    """True for non-empty strings, integers, booleans and non-NaN floats."""
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (bool, int)):
        return True
    if isinstance(value, float):
        return not math.isnan(value)
    return False