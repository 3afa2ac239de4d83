[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linkagg"
version = "0.1.0"
description = "Wire protocol, framing and identifiers for aggregating multiple network links into one connection"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "link aggregation", "multipath", "protocol", "framing", "crc32"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["linkagg"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
