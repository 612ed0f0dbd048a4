[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvps"
version = "0.1.0"
description = "Reference Value Provider Service library: verify provenance, store reference values and serve trusted digests"
requires-python = ">=3.11"
dependencies = [
    "python-dateutil",
]
keywords = [
    "attestation",
    "reference-values",
    "provenance",
    "confidential-computing",
    "trusted-execution",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rvps"]

[tool.hatch.build.targets.sdist]
include = ["rvps", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
