[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stevie"
version = "3.91.0"
description = "A small vi-like screen text editor with a flat in-memory buffer"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "vi", "text", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stevie = "stevie.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["stevie"]

[tool.pytest.ini_options]
addopts = "-ra"
