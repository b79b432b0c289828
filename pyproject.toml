[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "statreg"
version = "0.1.0"
description = "In-process registries for service counters: callback-valued counters, regex key lookup with caching, an LRU map and stat value holders."
requires-python = ">=3.10"
dependencies = []
keywords = ["counters", "metrics", "monitoring", "statistics", "lru", "registry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["statreg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
