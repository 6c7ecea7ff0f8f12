[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scicalc"
version = "0.1.0"
description = "Scientific calculator engine: expression parsing, evaluation, plot data, history and currency conversion"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "calculator",
    "expression",
    "parser",
    "shunting-yard",
    "plotting",
    "currency",
    "history",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scicalc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
