[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chesseval"
version = "0.1.0"
description = "Chess types, bitboards, a KPK bitbase, specialised endgame functions and material imbalance"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "chess",
    "bitboard",
    "endgame",
    "evaluation",
    "bitbase",
    "material",
]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chesseval"]

[tool.hatch.build.targets.sdist]
include = ["chesseval", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
