[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "messenger-cli"
version = "0.1.0"
description = "Interactive terminal client for a messenger API gateway: users, dialogs and messages"
requires-python = ">=3.10"
dependencies = [
    "requests>=2.28",
]
keywords = ["messenger", "chat", "cli", "api-gateway", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[project.scripts]
messenger-cli = "messenger_cli.menu:main"

[tool.hatch.build.targets.wheel]
packages = ["messenger_cli"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
