[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adgraph"
version = "0.1.0"
description = "Validation, identifiers, replication waits and lookups for directory objects (groups, users, service principals, domains) read through a Graph-style directory client"
requires-python = ">=3.10"
dependencies = []
keywords = ["directory", "graph", "active-directory", "validation", "groups", "users", "service-principals"]
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
    "Topic :: System :: Systems Administration :: Authentication/Directory",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["adgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
