"""Bucket users into features, variations and variables of a project config."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from .config import (
    ConfigBody,
    ConfigFeature,
    Rollout,
    RolloutStage,
    Target,
    Variation,
    parse_config,
)
from .constants import VARIABLE_TYPES
from .errors import (
    ConfigNotInitializedError,
    MissingFeatureError,
    MissingVariableError,
    MissingVariableForVariationError,
    MissingVariationError,
    UserDoesNotQualifyForTargetsError,
    UserRolloutError,
)
from .murmurhash import murmurhash_v3
from .user import PopulatedUser

# Largest unsigned 32-bit value, the upper bound of a murmurhash result.
MAX_HASH_VALUE = 4294967295
BASE_SEED = 1


@dataclass(frozen=True)
class BoundedHash:
    """Hashes of a user for a target, each scaled into [0, 1]."""

    rollout_hash: float
    bucketing_hash: float


@dataclass
class TargetAndHashes:
    target: Target
    hashes: BoundedHash


@dataclass
class FeatureResult:
    """A feature as it appears in a bucketed user config."""

    id: str
    type: str
    key: str
    variation: str
    variation_key: str
    variation_name: str


@dataclass(frozen=True)
class FeatureVariation:
    variation: str
    feature: str


@dataclass
class ReadOnlyVariable:
    id: str
    key: str
    type: str
    value: Any


@dataclass
class BucketedUserConfig:
    project: dict[str, Any]
    environment: dict[str, Any]
    features: dict[str, FeatureResult] = field(default_factory=dict)
    feature_variation_map: dict[str, str] = field(default_factory=dict)
    variable_variation_map: dict[str, FeatureVariation] = field(default_factory=dict)
    variables: dict[str, ReadOnlyVariable] = field(default_factory=dict)


@dataclass(frozen=True)
class BucketedVariable:
    """The value of one variable for one user, with where it came from."""

    type: str
    value: Any
    feature_id: str
    variation_id: str


@dataclass
class NativeBucketingConfiguration:
    flush_events_interval: timedelta = timedelta(0)
    disable_automatic_event_logging: bool = False
    disable_custom_event_logging: bool = False


configuration = NativeBucketingConfiguration()

_configs: dict[str, ConfigBody] = {}
_configs_lock = threading.RLock()
_client_custom_data: dict[str, dict[str, Any]] = {}


def generate_bounded_hash(value: str, hash_seed: int) -> float:
    """Hash ``value`` with the seed and scale the result into [0, 1]."""
    return murmurhash_v3(value, hash_seed) / MAX_HASH_VALUE


def generate_bounded_hashes(user_id: str, target_id: str) -> BoundedHash:
    """Compute the rollout and bucketing hashes of a user for a target."""
    target_hash = murmurhash_v3(target_id, BASE_SEED)
    return BoundedHash(
        rollout_hash=generate_bounded_hash(user_id + "_rollout", target_hash),
        bucketing_hash=generate_bounded_hash(user_id, target_hash),
    )


def _as_aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _milliseconds(delta: timedelta) -> int:
    micro = delta // timedelta(microseconds=1)
    ms = abs(micro) // 1000
    return ms if micro >= 0 else -ms


def get_current_rollout_percentage(rollout: Rollout, current_date: datetime) -> float:
    """Return the share of users a rollout admits at ``current_date``."""
    now = _as_aware(current_date)
    start_date = _as_aware(rollout.start_date)
    if rollout.type == "schedule":
        return 1.0 if now > start_date else 0.0

    current_stages = [s for s in rollout.stages if _as_aware(s.date) < now]
    next_stages = [s for s in rollout.stages if not _as_aware(s.date) < now]

    current_stage = current_stages[-1] if current_stages else None
    next_stage = next_stages[0] if next_stages else None
    if current_stage is None and start_date < now:
        current_stage = RolloutStage(
            type="discrete", date=start_date, percentage=rollout.start_percentage
        )
    if current_stage is None:
        return 0.0
    if next_stage is None or next_stage.type == "discrete":
        return current_stage.percentage

    stage_date = _as_aware(current_stage.date)
    elapsed = _milliseconds(now - stage_date)
    span = _milliseconds(_as_aware(next_stage.date) - stage_date)
    if span == 0:
        fraction = math.nan if elapsed == 0 else math.copysign(math.inf, elapsed)
    else:
        fraction = elapsed / span
    if fraction == 0:
        return 0.0
    return (
        current_stage.percentage + (next_stage.percentage - current_stage.percentage)
    ) * fraction


def does_user_pass_rollout(rollout: Rollout, bounded_hash: float) -> bool:
    """True if a user with this rollout hash is inside the rollout right now."""
    percentage = get_current_rollout_percentage(rollout, datetime.now(timezone.utc))
    return percentage != 0 and bounded_hash <= percentage


def evaluate_segmentation_for_feature(
    config: ConfigBody,
    feature: ConfigFeature,
    user: PopulatedUser,
    client_custom_data: dict[str, Any] | None,
) -> Target | None:
    """Return the first target of the feature whose audience the user matches."""
    for target in feature.configuration.targets:
        audience = target.audience
        if audience is None or audience.filters is None:
            continue
        if audience.filters.evaluate(config.audiences, user, client_custom_data):
            return target
    return None


def does_user_qualify_for_feature(
    config: ConfigBody,
    feature: ConfigFeature,
    user: PopulatedUser,
    client_custom_data: dict[str, Any] | None,
) -> TargetAndHashes:
    """Find the user's target for a feature; raise if none applies."""
    target = evaluate_segmentation_for_feature(config, feature, user, client_custom_data)
    if target is None:
        raise UserDoesNotQualifyForTargetsError()
    hashes = generate_bounded_hashes(user.user_id, target.id)
    if target.rollout is not None and not does_user_pass_rollout(
        target.rollout, hashes.rollout_hash
    ):
        raise UserRolloutError()
    return TargetAndHashes(target=target, hashes=hashes)


def bucket_user_for_variation(
    feature: ConfigFeature, target_and_hashes: TargetAndHashes
) -> Variation:
    """Pick the feature variation the user's bucketing hash falls into."""
    variation_id = target_and_hashes.target.decide_target_variation(
        target_and_hashes.hashes.bucketing_hash
    )
    for variation in feature.variations:
        if variation.id == variation_id:
            return variation
    raise MissingVariationError()


def is_variable_type_valid(variable_type: str, expected_variable_type: str) -> bool:
    return variable_type in VARIABLE_TYPES and variable_type == expected_variable_type


def set_config(raw_json: str | bytes, sdk_key: str, etag: str = "") -> None:
    """Parse a config document and store it under the SDK key."""
    with _configs_lock:
        _configs[sdk_key] = parse_config(raw_json, etag)


def get_config(sdk_key: str) -> ConfigBody:
    """Return the config stored under the SDK key."""
    with _configs_lock:
        config = _configs.get(sdk_key)
    if config is None:
        raise ConfigNotInitializedError()
    return config


def clear_configs() -> None:
    with _configs_lock:
        _configs.clear()


def get_client_custom_data(sdk_key: str) -> dict[str, Any] | None:
    return _client_custom_data.get(sdk_key)


def set_client_custom_data(sdk_key: str, data: dict[str, Any]) -> None:
    _client_custom_data[sdk_key] = data


def generate_bucketed_config(
    sdk_key: str,
    user: PopulatedUser,
    client_custom_data: dict[str, Any] | None = None,
) -> BucketedUserConfig:
    """Bucket a user into every feature of the stored config they qualify for."""
    config = get_config(sdk_key)
    result = BucketedUserConfig(project=config.project, environment=config.environment)

    for feature in config.features:
        try:
            target_and_hashes = does_user_qualify_for_feature(
                config, feature, user, client_custom_data
            )
        except (UserDoesNotQualifyForTargetsError, UserRolloutError):
            continue

        variation = bucket_user_for_variation(feature, target_and_hashes)
        result.features[feature.key] = FeatureResult(
            id=feature.id,
            type=feature.type,
            key=feature.key,
            variation=variation.id,
            variation_key=variation.key,
            variation_name=variation.name,
        )
        result.feature_variation_map[feature.id] = variation.id

        for variation_variable in variation.variables:
            variable = config.get_variable_for_id(variation_variable.var)
            if variable is None:
                raise MissingVariableError()
            result.variable_variation_map[variable.key] = FeatureVariation(
                variation=variation.id, feature=feature.id
            )
            result.variables[variable.key] = ReadOnlyVariable(
                id=variable.id,
                key=variable.key,
                type=variable.type,
                value=variation_variable.value,
            )

    return result


def generate_bucketed_variable_for_user(
    sdk_key: str,
    user: PopulatedUser,
    key: str,
    client_custom_data: dict[str, Any] | None = None,
) -> BucketedVariable:
    """Return the value of one variable for a user, or raise why there is none."""
    config = get_config(sdk_key)
    variable = config.get_variable_for_key(key)
    if variable is None:
        raise MissingVariableError()
    feature = config.get_feature_for_variable_id(variable.id)
    if feature is None:
        raise MissingFeatureError()

    target_and_hashes = does_user_qualify_for_feature(config, feature, user, client_custom_data)
    variation = bucket_user_for_variation(feature, target_and_hashes)
    variation_variable = variation.get_variable_by_id(variable.id)
    if variation_variable is None:
        raise MissingVariableForVariationError()
    return BucketedVariable(
        type=variable.type,
        value=variation_variable.value,
        feature_id=feature.id,
        variation_id=variation.id,
    )