# flagbucket

`flagbucket` works out which feature-flag variation a user gets, entirely
in-process. You give it a project configuration as JSON and it:

- evaluates audience filters on user fields (user id, e-mail, country,
  platform, device model), on app and platform versions, on custom data
  (string, number and boolean keys), and on nested audiences;
- applies `schedule`, gradual (linear) and stepped (discrete) rollouts;
- places each user in a variation with a deterministic MurmurHash3 bucketing
  hash, so the same user always ends up in the same variation of a target.

It has no runtime dependencies.

## Installation

```
pip install flagbucket
```

## Usage

```python
from flagbucket.bucketing import (
    set_config,
    generate_bucketed_config,
    generate_bucketed_variable_for_user,
)
from flagbucket.user import User, PlatformData

with open("config.json", "rb") as fh:
    set_config(fh.read(), "my-sdk-key", "")

user = User(user_id="user-1", email="someone@example.com", country="Canada")
populated = user.populate(PlatformData(platform_version="1.1.2"))

bucketed = generate_bucketed_config("my-sdk-key", populated, None)
print(bucketed.feature_variation_map)   # feature id -> variation id
print(bucketed.variables)               # variable key -> ReadOnlyVariable

variable = generate_bucketed_variable_for_user("my-sdk-key", populated, "num-var", None)
print(variable.type, variable.value, variable.feature_id, variable.variation_id)
```

Configurations are kept in memory per SDK key: `set_config` parses and stores
one, `get_config` returns it, and `clear_configs` drops them all.

The last argument of `generate_bucketed_config` and
`generate_bucketed_variable_for_user` is client-wide custom data. A custom-data
filter looks in the user's own custom data first (public over private) and
falls back to this mapping. `set_client_custom_data` and
`get_client_custom_data` keep such a mapping per SDK key for you to pass in;
`PopulatedUser.merge_client_custom_data` copies it into the user for keys the
user does not set.

## Errors

Every error is a subclass of `flagbucket.errors.BucketingError`:

- `ConfigNotInitializedError`: no config is stored under the SDK key.
- `ConfigValidationError`: the JSON is malformed, lacks `project`,
  `environment`, `features` or `variables`, or has a variable without an id or
  key or with a type other than `String`, `Number`, `JSON` or `Boolean`.
- `UserDoesNotQualifyForTargetsError` and `UserRolloutError`: raised by
  `generate_bucketed_variable_for_user`; `generate_bucketed_config` simply
  leaves such features out.
- `FailedToDecideVariationError`, `MissingVariationError`,
  `MissingVariableError`, `MissingFeatureError`,
  `MissingVariableForVariationError`: the configuration is inconsistent.

`InvalidVariableTypeError` is defined for callers that check a variable's type
with `is_variable_type_valid`.

## Lower-level helpers

- `flagbucket.config.parse_config(raw_json, etag)` validates a configuration and
  builds its lookup tables (`get_variable_for_key`, `get_variable_for_id`,
  `get_feature_for_variable_id`).
- `flagbucket.filters.parse_audience(data)` builds an evaluable audience from a
  mapping; `parse_filter`, `parse_filters` and `parse_operator` do the same for
  parts of one. Filters of unknown type are logged and skipped.
- `flagbucket.bucketing.generate_bounded_hashes(user_id, target_id)` and
  `get_current_rollout_percentage(rollout, current_date)` expose the hashing and
  rollout arithmetic.
- `flagbucket.segmentation` holds the individual comparators, such as
  `check_strings_filter`, `check_number_filter` and `check_version_filter`.
- `flagbucket.versioncompare.version_compare(v1, v2, lexicographical, zero_extend)`
  compares dotted versions.
- `flagbucket.murmurhash.murmurhash_v3(data, seed)` returns the 32-bit hash that
  bucketing uses.

## What it does not do

`flagbucket` only evaluates a configuration you supply. It does not download or
refresh configurations, it does not record or send evaluation events, and it
has no command-line tool or server.

## Running the tests

```
pip install -e ".[test]"
pytest
```