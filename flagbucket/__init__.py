"""Local feature-flag bucketing: config parsing, audience segmentation, rollouts and hashing."""

__version__ = "0.1.0"