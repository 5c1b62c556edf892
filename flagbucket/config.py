"""Project configuration: features, variations, targets and variables."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .constants import VARIABLE_TYPES
from .errors import ConfigValidationError, FailedToDecideVariationError
from .filters import Audience, NoIdAudience, parse_audience, parse_operator

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _parse_time(value: Any) -> datetime:
    if not value:
        return ZERO_TIME
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass
class Variable:
    id: str
    type: str
    key: str


@dataclass
class VariationVariable:
    var: str
    value: Any = None


@dataclass
class Variation:
    id: str = ""
    name: str = ""
    key: str = ""
    variables: list[VariationVariable] = field(default_factory=list)

    def get_variable_by_id(self, variable_id: str) -> VariationVariable | None:
        return next((v for v in self.variables if v.var == variable_id), None)


@dataclass
class TargetDistribution:
    variation: str
    percentage: float


@dataclass
class RolloutStage:
    type: str = ""
    date: datetime = ZERO_TIME
    percentage: float = 0.0


@dataclass
class Rollout:
    type: str = ""
    start_percentage: float = 0.0
    start_date: datetime = ZERO_TIME
    stages: list[RolloutStage] = field(default_factory=list)


@dataclass
class Target:
    id: str = ""
    audience: Audience | None = None
    rollout: Rollout | None = None
    distribution: list[TargetDistribution] = field(default_factory=list)

    def decide_target_variation(self, bounded_hash: float) -> str:
        """Return the variation whose cumulative share covers the hash."""
        upper = 0.0
        for item in self.distribution:
            upper += item.percentage
            if 0 <= bounded_hash < upper:
                return item.variation
        raise FailedToDecideVariationError()


@dataclass
class FeatureConfiguration:
    id: str = ""
    prerequisites: list[dict[str, Any]] = field(default_factory=list)
    winning_variation: dict[str, Any] = field(default_factory=dict)
    forced_users: dict[str, str] = field(default_factory=dict)
    targets: list[Target] = field(default_factory=list)


@dataclass
class ConfigFeature:
    id: str = ""
    type: str = ""
    key: str = ""
    variations: list[Variation] = field(default_factory=list)
    configuration: FeatureConfiguration = field(default_factory=FeatureConfiguration)
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass
class ConfigBody:
    project: dict[str, Any]
    environment: dict[str, Any]
    features: list[ConfigFeature] = field(default_factory=list)
    variables: list[Variable] = field(default_factory=list)
    audiences: dict[str, NoIdAudience] = field(default_factory=dict)
    etag: str = ""
    variable_id_map: dict[str, Variable] = field(default_factory=dict, repr=False)
    variable_key_map: dict[str, Variable] = field(default_factory=dict, repr=False)
    variable_id_to_feature_map: dict[str, ConfigFeature] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._compile()

    def _compile(self) -> None:
        self.variable_id_to_feature_map = {}
        for feature in self.features:
            for variation in feature.variations:
                for vv in variation.variables:
                    self.variable_id_to_feature_map.setdefault(vv.var, feature)
        self.variable_key_map = {v.key: v for v in self.variables}
        self.variable_id_map = {v.id: v for v in self.variables}
        for feature in self.features:
            for target in feature.configuration.targets:
                target.distribution.sort(key=lambda d: d.variation, reverse=True)

    def get_variable_for_key(self, key: str) -> Variable | None:
        return self.variable_key_map.get(key)

    def get_variable_for_id(self, variable_id: str) -> Variable | None:
        return self.variable_id_map.get(variable_id)

    def get_feature_for_variable_id(self, variable_id: str) -> ConfigFeature | None:
        return self.variable_id_to_feature_map.get(variable_id)


def _parse_rollout(data: dict[str, Any] | None) -> Rollout | None:
    if data is None:
        return None
    return Rollout(
        type=data.get("type", ""),
        start_percentage=float(data.get("startPercentage") or 0),
        start_date=_parse_time(data.get("startDate")),
        stages=[
            RolloutStage(
                type=s.get("type", ""),
                date=_parse_time(s.get("date")),
                percentage=float(s.get("percentage") or 0),
            )
            for s in data.get("stages") or []
        ],
    )


def _parse_target(data: dict[str, Any]) -> Target:
    audience = data.get("_audience")
    return Target(
        id=data.get("_id", ""),
        audience=parse_audience(audience) if audience is not None else None,
        rollout=_parse_rollout(data.get("rollout")),
        distribution=[
            TargetDistribution(d.get("_variation", ""), float(d.get("percentage") or 0))
            for d in data.get("distribution") or []
        ],
    )


def _parse_feature(data: dict[str, Any]) -> ConfigFeature:
    conf = data.get("configuration") or {}
    return ConfigFeature(
        id=data.get("_id", ""),
        type=data.get("type", ""),
        key=data.get("key", ""),
        variations=[
            Variation(
                id=v.get("_id", ""),
                name=v.get("name", ""),
                key=v.get("key", ""),
                variables=[
                    VariationVariable(vv.get("_var", ""), vv.get("value"))
                    for vv in v.get("variables") or []
                ],
            )
            for v in data.get("variations") or []
        ],
        configuration=FeatureConfiguration(
            id=conf.get("_id", ""),
            prerequisites=list(conf.get("prerequisites") or []),
            winning_variation=dict(conf.get("winningVariation") or {}),
            forced_users=dict(conf.get("forcedUsers") or {}),
            targets=[_parse_target(t) for t in conf.get("targets") or []],
        ),
        settings=dict(data.get("settings") or {}),
    )


def _parse_variable(data: dict[str, Any]) -> Variable:
    variable = Variable(id=data.get("_id", ""), type=data.get("type", ""), key=data.get("key", ""))
    if not variable.id or not variable.key:
        raise ValueError("variable requires _id and key")
    if variable.type not in VARIABLE_TYPES:
        raise ValueError(f"invalid variable type {variable.type!r}")
    return variable


def parse_config(raw_json: str | bytes, etag: str = "") -> ConfigBody:
    """Parse and validate a config document; raise ConfigValidationError if invalid."""
    try:
        data = json.loads(raw_json)
        if not isinstance(data, dict):
            raise ValueError("config must be a JSON object")
        for key in ("project", "environment"):
            if not isinstance(data.get(key), dict) or not data[key]:
                raise ValueError(f"{key} is required")
        for key in ("features", "variables"):
            if not isinstance(data.get(key), list):
                raise ValueError(f"{key} is required")
        return ConfigBody(
            project=data["project"],
            environment=data["environment"],
            features=[_parse_feature(f) for f in data["features"]],
            variables=[_parse_variable(v) for v in data["variables"]],
            audiences={
                key: NoIdAudience(
                    filters=parse_operator(a["filters"]) if a.get("filters") is not None else None
                )
                for key, a in (data.get("audiences") or {}).items()
            },
            etag=etag,
        )
    except (ValueError, TypeError, AttributeError, KeyError) as exc:
        raise ConfigValidationError(f"Config validation failed: {exc}") from exc