"""Audience filters and the logical operators that combine them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from .constants import (
    DATA_KEY_TYPE_BOOLEAN,
    DATA_KEY_TYPE_NUMBER,
    DATA_KEY_TYPE_STRING,
    OPERATOR_AND,
    OPERATOR_OR,
    SUB_TYPE_APP_VERSION,
    SUB_TYPE_COUNTRY,
    SUB_TYPE_CUSTOM_DATA,
    SUB_TYPE_DEVICE_MODEL,
    SUB_TYPE_EMAIL,
    SUB_TYPE_PLATFORM,
    SUB_TYPE_PLATFORM_VERSION,
    SUB_TYPE_USER_ID,
    TYPE_ALL,
    TYPE_AUDIENCE_MATCH,
    TYPE_OPT_IN,
    TYPE_USER,
)
from .segmentation import (
    check_boolean_filter,
    check_number_filter,
    check_strings_filter,
    check_value_exists,
    check_version_filter,
)
from .user import PopulatedUser

log = logging.getLogger(__name__)

Audiences = dict[str, "NoIdAudience"]

# Sub-type -> (user attribute, compared as version)
_USER_FIELDS: dict[str, tuple[str, bool]] = {
    SUB_TYPE_COUNTRY: ("country", False),
    SUB_TYPE_EMAIL: ("email", False),
    SUB_TYPE_USER_ID: ("user_id", False),
    SUB_TYPE_APP_VERSION: ("app_version", True),
    SUB_TYPE_PLATFORM_VERSION: ("platform_version", True),
    SUB_TYPE_DEVICE_MODEL: ("device_model", False),
    SUB_TYPE_PLATFORM: ("platform", False),
}


class FilterOrOperator(Protocol):
    def evaluate(
        self,
        audiences: Audiences | None,
        user: PopulatedUser,
        client_custom_data: dict[str, Any] | None,
    ) -> bool: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class AllFilter:
    """Matches every user."""

    def evaluate(self, audiences, user, client_custom_data) -> bool:
        return True


@dataclass
class OptInFilter:
    """Never matches: opt-in is only supported by cloud bucketing."""

    def evaluate(self, audiences, user, client_custom_data) -> bool:
        return False


@dataclass
class UserFilter:
    """Compares one user attribute with a list of values."""

    type: str = TYPE_USER
    sub_type: str = ""
    comparator: str = ""
    operator: str = ""
    values: list[Any] = field(default_factory=list)
    compiled_string_vals: list[str] = field(default_factory=list)
    compiled_bool_vals: list[bool] = field(default_factory=list)
    compiled_num_vals: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.compile_values()

    def compile_values(self) -> None:
        """Split the raw values into typed lists; all values must share one type."""
        self.compiled_string_vals = []
        self.compiled_bool_vals = []
        self.compiled_num_vals = []
        if not self.values:
            return
        first = self.values[0]
        if isinstance(first, bool):
            checker, name, target = (lambda v: isinstance(v, bool)), "bool", self.compiled_bool_vals
        elif isinstance(first, str):
            checker, name, target = (lambda v: isinstance(v, str)), "string", self.compiled_string_vals
        elif _is_number(first):
            checker, name, target = _is_number, "number", self.compiled_num_vals
        else:
            raise ValueError(
                f"Filter values must be of type bool, string, or number. Got: {first!r}"
            )
        for value in self.values:
            if not checker(value):
                raise ValueError(
                    f"Filter values must be all of the same type. Expected: {name}, got: {value!r}"
                )
            target.append(float(value) if name == "number" else value)

    def evaluate(self, audiences, user, client_custom_data) -> bool:
        entry = _USER_FIELDS.get(self.sub_type)
        if entry is None:
            return False
        attribute, is_version = entry
        value = getattr(user, attribute) or ""
        if is_version:
            return check_version_filter(value, self.compiled_string_vals, self.comparator)
        return check_strings_filter(value, self.comparator, self.compiled_string_vals)


@dataclass
class CustomDataFilter(UserFilter):
    """Compares one key of the user's (or the client's) custom data."""

    sub_type: str = SUB_TYPE_CUSTOM_DATA
    data_key: str = ""
    data_key_type: str = ""

    def evaluate(self, audiences, user, client_custom_data) -> bool:
        return self._check(user.combined_custom_data(), client_custom_data)

    def _check(self, data: dict[str, Any] | None, client: dict[str, Any] | None) -> bool:
        data = data or {}
        client = client or {}
        if self.data_key in data:
            value = data[self.data_key]
        else:
            value = client.get(self.data_key)

        comparator = self.comparator
        if comparator == "exist":
            return check_value_exists(value)
        if comparator == "!exist":
            return not check_value_exists(value)
        if isinstance(value, str) and self.data_key_type == DATA_KEY_TYPE_STRING:
            return check_strings_filter(value, comparator, self.compiled_string_vals)
        if _is_number(value) and self.data_key_type == DATA_KEY_TYPE_NUMBER:
            return check_number_filter(float(value), self.compiled_num_vals, comparator)
        if isinstance(value, bool) and self.data_key_type == DATA_KEY_TYPE_BOOLEAN:
            return check_boolean_filter(value, comparator, self.compiled_bool_vals)
        return value is None and comparator == "!="


@dataclass
class AudienceMatchFilter:
    """Matches users inside (``=``) or outside (``!=``) named audiences."""

    type: str = TYPE_AUDIENCE_MATCH
    comparator: str = ""
    operator: str = ""
    audiences: list[str] = field(default_factory=list)

    def evaluate(self, audiences, user, client_custom_data) -> bool:
        known = audiences or {}
        for audience_id in self.audiences:
            audience = known.get(audience_id)
            if audience is None or audience.filters is None:
                return False
            if audience.filters.evaluate(known, user, client_custom_data):
                return self.comparator == "="
        return self.comparator == "!="


@dataclass
class AudienceOperator:
    """Combines filters with ``and`` or ``or``."""

    operator: str = ""
    filters: list[Any] = field(default_factory=list)

    def evaluate(self, audiences, user, client_custom_data) -> bool:
        if not self.filters:
            return False
        if self.operator == OPERATOR_OR:
            return any(f.evaluate(audiences, user, client_custom_data) for f in self.filters)
        if self.operator == OPERATOR_AND:
            return all(f.evaluate(audiences, user, client_custom_data) for f in self.filters)
        return False


@dataclass
class NoIdAudience:
    filters: AudienceOperator | None = None


@dataclass
class Audience(NoIdAudience):
    id: str = ""


def parse_filter(item: dict[str, Any]) -> Any:
    """Build a filter or operator from its JSON form; None for unknown types."""
    if item.get("operator"):
        return parse_operator(item)
    filter_type = item.get("type", "")
    try:
        if filter_type == TYPE_ALL:
            return AllFilter()
        if filter_type == TYPE_OPT_IN:
            return OptInFilter()
        if filter_type == TYPE_USER:
            common = dict(
                type=filter_type,
                sub_type=item.get("subType", ""),
                comparator=item.get("comparator", ""),
                operator=item.get("operator", ""),
                values=list(item.get("values") or []),
            )
            if common["sub_type"] == SUB_TYPE_CUSTOM_DATA:
                return CustomDataFilter(
                    **common,
                    data_key=item.get("dataKey", ""),
                    data_key_type=item.get("dataKeyType", ""),
                )
            return UserFilter(**common)
        if filter_type == TYPE_AUDIENCE_MATCH:
            return AudienceMatchFilter(
                type=filter_type,
                comparator=item.get("comparator", ""),
                operator=item.get("operator", ""),
                audiences=list(item.get("_audiences") or []),
            )
    except ValueError as exc:
        raise ValueError(f"Error initializing filter: {exc}") from exc
    log.warning(
        "Invalid filter type %s. To leverage this new filter definition, "
        "please update to the latest version of the SDK.",
        filter_type,
    )
    return None


def parse_filters(items: list[dict[str, Any]]) -> list[Any]:
    """Parse a list of filters, dropping those of unknown type."""
    parsed = (parse_filter(item) for item in items)
    return [f for f in parsed if f is not None]


def parse_operator(data: dict[str, Any]) -> AudienceOperator:
    return AudienceOperator(
        operator=data.get("operator", ""), filters=parse_filters(data.get("filters") or [])
    )


def parse_audience(data: dict[str, Any]) -> Audience:
    filters = data.get("filters")
    return Audience(
        filters=parse_operator(filters) if filters is not None else None,
        id=data.get("_id", ""),
    )