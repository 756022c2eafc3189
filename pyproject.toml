[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tradelink"
version = "0.1.0"
description = "Link-cable trade buffers, flash save access, random numbers and a tile text console for handheld monster-collecting games"
requires-python = ">=3.10"
dependencies = []
keywords = ["save", "flash", "link cable", "trade", "patch set", "rng", "tile map", "console"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tradelink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
