[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tomlcli"
version = "0.1.8"
description = "Build command-line parsers from a TOML file that declares options, types, defaults and environment variables."
requires-python = ">=3.11"
dependencies = []
keywords = ["config", "args", "env", "settings", "cli", "toml", "argparse"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tomlcli = "tomlcli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tomlcli"]

[tool.hatch.build.targets.sdist]
include = ["tomlcli", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
