"""Exceptions raised while bucketing users into features and variables."""


class BucketingError(Exception):
    """Base class for every error the bucketing engine raises."""

    default_message = "Bucketing failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ConfigNotInitializedError(BucketingError):
    default_message = "config not initialized"


class ConfigValidationError(BucketingError):
    default_message = "Config validation failed"


class MissingVariableForVariationError(BucketingError):
    default_message = "Config missing variable for variation"


class MissingFeatureError(BucketingError):
    default_message = "Config missing feature for variable"


class MissingVariableError(BucketingError):
    default_message = "Config missing variable"


class MissingVariationError(BucketingError):
    default_message = "Config missing variation"


class FailedToDecideVariationError(BucketingError):
    default_message = "Failed to decide target variation"


class UserRolloutError(BucketingError):
    default_message = "User does not qualify for feature rollout"


class UserDoesNotQualifyForTargetsError(BucketingError):
    default_message = "User does not qualify for any targets for feature"


class InvalidVariableTypeError(BucketingError):
    default_message = "Invalid variable type"