[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sardip"
version = "0.1.0"
description = "Game-logic core for a virtual pet simulation: fact databases, rule matching, text lookup and a fixed-step clock"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "virtual-pet", "rules", "dialogue", "localisation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sardip"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
