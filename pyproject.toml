[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "curator"
version = "0.1.0"
description = "Build and release tooling: repository configuration, S3 and artifact flag sets, command log capture, option validators and cache pruning."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "build",
    "release",
    "repository",
    "packaging",
    "cache",
    "logging",
    "ci",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["curator"]

[tool.hatch.build.targets.sdist]
include = [
    "curator",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
