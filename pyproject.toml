[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zainofetch"
version = "0.1.0"
description = "Parsers for Zcash full blocks and transactions, with conversion to compact blocks for light clients."
requires-python = ">=3.10"
dependencies = []
keywords = ["zcash", "blockchain", "compact-block", "light-client", "parser"]
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
    "Topic :: Office/Business :: Financial",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zainofetch"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
