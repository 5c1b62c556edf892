[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flagbucket"
version = "0.1.0"
description = "Local feature-flag bucketing: audience segmentation, rollouts and deterministic variation assignment"
requires-python = ">=3.11"
dependencies = []
keywords = ["feature-flags", "bucketing", "segmentation", "rollout", "murmurhash"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flagbucket"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
