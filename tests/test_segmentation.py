import math

import pytest

from flagbucket.constants import (
    COMPARATOR_CONTAIN,
    COMPARATOR_EQUAL,
    COMPARATOR_EXIST,
    COMPARATOR_GREATER,
    COMPARATOR_NOT_CONTAIN,
    COMPARATOR_NOT_EQUAL,
    COMPARATOR_NOT_EXIST,
)
from flagbucket.segmentation import (
    check_boolean_filter,
    check_number_filter,
    check_strings_filter,
    check_value_exists,
    check_version_filter,
    check_version_value,
    convert_to_semantic_version,
)


@pytest.mark.parametrize(
    "comparator, values, subject, expected",
    [
        (COMPARATOR_EQUAL, [], "", False),
        (COMPARATOR_EQUAL, ["1", "2"], "", False),
        (COMPARATOR_EQUAL, ["foo"], "foo", True),
        (COMPARATOR_EQUAL, ["iPhone OS", "Android", "Blackberry"], "Android", True),
        (COMPARATOR_EQUAL, ["foo"], "fo", False),
        (COMPARATOR_NOT_EQUAL, [""], "", False),
        (COMPARATOR_NOT_EQUAL, ["foo"], "foo", False),
        (COMPARATOR_NOT_EQUAL, ["iPhone OS", "Android", "Blackberry"], "Android", False),
        (COMPARATOR_NOT_EQUAL, ["foo"], "bar", True),
        (COMPARATOR_EXIST, [], "", False),
        (COMPARATOR_EXIST, [], "string", True),
        (COMPARATOR_EXIST, ["hello", "world"], "string", True),
        (COMPARATOR_NOT_EXIST, [], "", True),
        (COMPARATOR_NOT_EXIST, [], "exists", False),
        (COMPARATOR_NOT_EXIST, ["hello", "world"], "exists", False),
        (COMPARATOR_CONTAIN, [""], "", False),
        (COMPARATOR_CONTAIN, ["Chrome"], "Chrome", True),
        (COMPARATOR_CONTAIN, ["Desktop"], "Desktop", True),
        (COMPARATOR_CONTAIN, ["hello"], "helloWorld", True),
        (COMPARATOR_CONTAIN, ["foo"], "bar", False),
        (COMPARATOR_NOT_CONTAIN, [""], "", True),
        (COMPARATOR_NOT_CONTAIN, ["Desktop"], "Desktop", False),
        (COMPARATOR_NOT_CONTAIN, ["oob"], "foobar", False),
        (COMPARATOR_NOT_CONTAIN, ["foo"], "bar", True),
    ],
)
def test_check_strings_filter(comparator, values, subject, expected):
    assert check_strings_filter(subject, comparator, values) is expected


@pytest.mark.parametrize(
    "comparator, values, value, expected",
    [
        (COMPARATOR_CONTAIN, [True], True, True),
        (COMPARATOR_CONTAIN, [True], False, False),
        (COMPARATOR_EQUAL, [True], True, True),
        (COMPARATOR_EQUAL, [True], False, False),
        (COMPARATOR_NOT_EQUAL, [False], True, True),
        (COMPARATOR_NOT_CONTAIN, [False], True, True),
        (COMPARATOR_EXIST, [], True, True),
        (COMPARATOR_NOT_EXIST, [], True, False),
        (COMPARATOR_GREATER, [], True, False),
        (COMPARATOR_GREATER, [True], True, False),
    ],
)
def test_check_boolean_filter(comparator, values, value, expected):
    assert check_boolean_filter(value, comparator, values) is expected


NAN = math.nan


@pytest.mark.parametrize(
    "num, filter_nums, operator, want",
    [
        (NAN, [], "", False),
        (NAN, [], "exist", False),
        (NAN, [], "!exist", True),
        (10, [10], "=", True),
        (10, [10, 20], "=", True),
        (10, [], "=", False),
        (10, [NAN], "=", False),
        (10, [5, 10, 15], ">", True),
        (10, [], ">", False),
        (10, [10], ">", False),
        (10, [15], ">", False),
        (10, [5, 10, 15], ">=", True),
        (10, [], ">=", False),
        (10, [10], ">=", True),
        (10, [15], ">=", False),
        (10, [5, 10, 15], "<", True),
        (10, [], "<", False),
        (10, [10], "<", False),
        (10, [15], "<", True),
        (10, [5, 10, 15], "<=", True),
        (10, [], "<=", False),
        (10, [10], "<=", True),
        (10, [15], "<=", True),
        (10, [5, 15], "!=", True),
        (10, [], "!=", False),
        (10, [NAN], "!=", False),
        (10, [], "fakeop", False),
        (10, [10], "fakeop", False),
    ],
)
def test_check_number_filter(num, filter_nums, operator, want):
    assert check_number_filter(num, filter_nums, operator) is want


@pytest.mark.parametrize(
    "value, want",
    [
        ("test", True),
        (123, True),
        (True, True),
        (1.23, True),
        (None, False),
        ("", False),
        (math.nan, False),
        (object(), False),
    ],
)
def test_check_value_exists(value, want):
    assert check_value_exists(value) is want


@pytest.mark.parametrize(
    "filter_version, version, operator, expected",
    [
        ("1.2.3", "1.2.3", "==", True),
        ("1.2.3", "2.3.4", "==", False),
        ("1.2.3", "2.3.4", ">", True),
        ("2.3.4", "1.2.3", ">", False),
        ("2.3.4", "1.2.3", "<", True),
        ("1.2.3", "2.3.4", "<", False),
    ],
)
def test_check_version_value(filter_version, version, operator, expected):
    assert check_version_value(filter_version, version, operator) is expected


@pytest.mark.parametrize(
    "given, expected",
    [
        ("1.2.3", "1.2.3"),
        ("1.2", "1.2.0"),
        ("1", "1.0.0"),
        ("1..3", "1.0.3"),
        ("1.2.3.4", "1.2.3.4"),
    ],
)
def test_convert_to_semantic_version(given, expected):
    assert convert_to_semantic_version(given) == expected


VERSION_CASES = [
    # string versions equal
    (True, "1", ["1"], "="),
    (True, "1.1", ["1.1"], "="),
    (True, "1.1.1", ["1.1.1"], "="),
    (True, "1.1.", ["1.1"], "="),
    # string versions not equal
    (False, "", ["2"], "="),
    (False, "1", ["2"], "="),
    (False, "1.1", ["1.2"], "="),
    (False, "1.1", ["1.1.1"], "="),
    (False, "1.1.", ["1.1.1"], "="),
    (False, "1.1.1", ["1.1"], "="),
    (False, "1.1.1", ["1.1."], "="),
    (False, "1.1.1", ["1.2.3"], "="),
    # != with equal versions
    (False, "1", ["1"], "!="),
    (False, "1.1", ["1.1"], "!="),
    (False, "1.1.1", ["1.1.1"], "!="),
    (False, "1.1.", ["1.1"], "!="),
    # != with different versions
    (True, "1", ["2"], "!="),
    (True, "1.1", ["1.2"], "!="),
    (True, "1.1", ["1.1.1"], "!="),
    (True, "1.1.", ["1.1.1"], "!="),
    (True, "1.1.1", ["1.1"], "!="),
    (True, "1.1.1", ["1.1."], "!="),
    (True, "1.1.1", ["1.2.3"], "!="),
    # not greater than
    (False, "", ["1"], ">"),
    (False, "1", ["1"], ">"),
    (False, "1.1", ["1.1"], ">"),
    (False, "1.1.1", ["1.1.1"], ">"),
    (False, "1.1.", ["1.1"], ">"),
    (False, "1", ["2"], ">"),
    (False, "1.1", ["1.2"], ">"),
    (False, "1.1", ["1.1.1"], ">"),
    (False, "1.1.", ["1.1.1"], ">"),
    (False, "1.1.1", ["1.2.3"], ">"),
    # greater than
    (True, "2", ["1"], ">"),
    (True, "1.2", ["1.1"], ">"),
    (True, "2.1", ["1.1"], ">"),
    (True, "1.2.1", ["1.2"], ">"),
    (True, "1.2.", ["1.1"], ">"),
    (True, "1.2.1", ["1.1.1"], ">"),
    (True, "1.2.2", ["1.2"], ">"),
    (True, "1.2.2", ["1.2.1"], ">"),
    (True, "4.8.241", ["4.8"], ">"),
    (True, "4.8.241.2", ["4"], ">"),
    (True, "4.8.241.2", ["4.8"], ">"),
    (True, "4.8.241.2", ["4.8.2"], ">"),
    (True, "4.8.241.2", ["4.8.241.0"], ">"),
    # not greater than or equal
    (False, "", ["2"], ">="),
    (False, "1", ["2"], ">="),
    (False, "1.1", ["1.2"], ">="),
    (False, "1.1", ["1.1.1"], ">="),
    (False, "1.1.", ["1.1.1"], ">="),
    (False, "1.1.1", ["1.2.3"], ">="),
    (False, "4.8.241", ["4.9"], ">="),
    (False, "4.8.241.2", ["5"], ">="),
    (False, "4.8.241.2", ["4.9"], ">="),
    (False, "4.8.241.2", ["4.8.242"], ">="),
    (False, "4.8.241.2", ["4.8.241.5"], ">="),
    # greater than or equal
    (True, "1", ["1"], ">="),
    (True, "1.1", ["1.1"], ">="),
    (True, "1.1.1", ["1.1.1"], ">="),
    (True, "1.1.", ["1.1"], ">="),
    (True, "2", ["1"], ">="),
    (True, "1.2", ["1.1"], ">="),
    (True, "2.1", ["1.1"], ">="),
    (True, "1.2.1", ["1.2"], ">="),
    (True, "1.2.", ["1.1"], ">="),
    (True, "1.2.1", ["1.1.1"], ">="),
    (True, "1.2.2", ["1.2"], ">="),
    (True, "1.2.2", ["1.2.1"], ">="),
    (True, "4.8.241.2", ["4"], ">="),
    (True, "4.8.241.2", ["4.8"], ">="),
    (True, "4.8.241.2", ["4.8.2"], ">="),
    (True, "4.8.241.2", ["4.8.241.0"], ">="),
    (True, "4.8.241.2", ["4.8.241.2"], ">="),
    # versions with other characters
    (True, "1.2.2", ["v1.2.1-2v3asda"], ">="),
    (True, "1.2.2", ["v1.2.1-va1sda"], ">"),
    (True, "1.2.1", ["v1.2.1-vasd32a"], ">="),
    (False, "1.2.1", ["v1.2.1-vasda"], "="),
    (False, "v1.2.1-va21sda", ["v1.2.1-va13sda"], "="),
    (False, "1.2.0", ["v1.2.1-vas1da"], ">="),
    (True, "1.2.1", ["v1.2.1- va34sda"], "<="),
    (True, "1.2.0", ["v1.2.1-vas3da"], "<="),
    # less than
    (True, "1", ["2"], "<"),
    (True, "1.1", ["1.2"], "<"),
    (True, "1.1", ["1.1.1"], "<"),
    (True, "1.1.", ["1.1.1"], "<"),
    (True, "1.1.1", ["1.2.3"], "<"),
    (True, "4.8.241.2", ["5"], "<"),
    (True, "4.8.241.2", ["4.9"], "<"),
    (True, "4.8.241.2", ["4.8.242"], "<"),
    (True, "4.8.241.2", ["4.8.241.5"], "<"),
    # not less than
    (False, "", ["1"], "<"),
    (False, "1", ["1"], "<"),
    (False, "1.1", ["1.1"], "<"),
    (False, "1.1.1", ["1.1.1"], "<"),
    (False, "1.1.", ["1.1"], "<"),
    (False, "2", ["1"], "<"),
    (False, "1.2", ["1.1"], "<"),
    (False, "2.1", ["1.1"], "<"),
    (False, "1.2.1", ["1.2"], "<"),
    (False, "1.2.", ["1.1"], "<"),
    (False, "1.2.1", ["1.1.1"], "<"),
    (False, "1.2.2", ["1.2"], "<"),
    (False, "1.2.2", ["1.2."], "<"),
    (False, "1.2.2", ["1.2.1"], "<"),
    (False, "4.8.241.2", ["4"], "<"),
    (False, "4.8.241.2", ["4.8"], "<"),
    (False, "4.8.241.2", ["4.8.241"], "<"),
    (False, "4.8.241.2", ["4.8.241.0"], "<"),
    # less than or equal
    (True, "1", ["1"], "<="),
    (True, "1.1", ["1.1"], "<="),
    (True, "1.1.1", ["1.1.1"], "<="),
    (True, "1.1.", ["1.1"], "<="),
    (True, "1", ["2"], "<="),
    (True, "1.1", ["1.2"], "<="),
    (True, "1.1", ["1.1.1"], "<="),
    (True, "1.1.", ["1.1.1"], "<="),
    (True, "1.1.1", ["1.2.3"], "<="),
    (True, "4.8.241.2", ["4.8.241.2"], "<="),
    # not less than or equal
    (False, "", ["1"], "<="),
    (False, "2", ["1"], "<="),
    (False, "1.2", ["1.1"], "<="),
    (False, "2.1", ["1.1"], "<="),
    (False, "1.2.1", ["1.2"], "<="),
    (False, "1.2.", ["1.1"], "<="),
    (False, "1.2.1", ["1.1.1"], "<="),
    (False, "1.2.2", ["1.2"], "<="),
    (False, "1.2.2", ["1.2."], "<="),
    (False, "1.2.2", ["1.2.1"], "<="),
    (False, "4.8.241.2", ["4.8.241"], "<="),
    # any equal in array
    (True, "1", ["1", "1.1"], "="),
    (True, "1.1", ["1", "1.1"], "="),
    (True, "1.1", ["1.1", ""], "="),
    # none equal in array
    (False, "1", ["2", "1.1"], "="),
    (False, "1.1", ["1.2", "1"], "="),
    # any string version equal in array
    (True, "1", ["1", "1.1"], "="),
    (True, "1.1", ["1.1", "1"], "="),
    (True, "1.1.1", ["1.1.1", "1.1"], "="),
    (True, "1.1.", ["1.1", "1.1"], "="),
    # all string versions not equal in array
    (False, "", ["2", "3"], "="),
    (False, "1", ["2", "3"], "="),
    (False, "1.1", ["1.2", "1.2"], "="),
    (False, "1.1", ["1.1.1", "1.2"], "="),
    (False, "1.1.", ["1.1.1", "1.2"], "="),
    (False, "1.1.1", ["1.1", "1.1"], "="),
    (False, "1.1.1", ["1", "1.1."], "="),
    (False, "1.1.1", ["1.2.3", "1."], "="),
    # != with an equal entry in array
    (False, "1", ["2", "1"], "!="),
    (False, "1.1", ["1.2", "1.1"], "!="),
    # != with no equal entry in array
    (True, "1.1", ["1.1.1", "1.2"], "!="),
    (True, "1.1.", ["1.1.1", "1"], "!="),
    # none greater in array
    (False, "1", ["1", "1"], ">"),
    (False, "1.1", ["1.1", "1.1.", "1.1"], ">"),
    (False, "1", ["2"], ">"),
    (False, "1.1", ["1.1.0"], ">"),
    # any greater in array
    (True, "2", ["1", "2.0"], ">"),
    (True, "1.2.1", ["1.2", "1.2"], ">"),
    (True, "1.2.", ["1.1", "1.9."], ">"),
    # none greater or equal in array
    (False, "1", ["2", "1.2"], ">="),
    (False, "1.1", ["1.2"], ">="),
    (False, "1.1", ["1.1.1", "1.2"], ">="),
    # any greater or equal in array
    (True, "1", ["1", "1.1"], ">="),
    (True, "1.1", ["1.1", "1"], ">="),
    (True, "1.1.1", ["1.2", "1.1.1"], ">="),
    (True, "1.1.", ["1.1"], ">="),
    (True, "2", ["1", "3"], ">="),
    # any less in array
    (True, "1", ["2", "1"], "<"),
    (True, "1.1", ["1.2", "1.5"], "<"),
    (True, "1.1.", ["1.1.1"], "<"),
    # none less in array
    (False, "1", ["1", "1.0"], "<"),
    (False, "1.1.", ["1.1", "1.1.0"], "<"),
    # any less or equal in array
    (True, "1", ["1", "5"], "<="),
    (True, "1.1", ["1.1", "1.1."], "<="),
    (True, "1.1.", ["1.1.1", "1.1."], "<="),
    # none less or equal in array
    (False, "2", ["1", "1.9"], "<="),
    (False, "1.2.1", ["1.2", "1.2"], "<="),
    (False, "1.2.", ["1.1", "1.1.9"], "<="),
]


@pytest.mark.parametrize("expected, version, values, comparator", VERSION_CASES)
def test_check_version_filter(expected, version, values, comparator):
    assert check_version_filter(version, values, comparator) is expected