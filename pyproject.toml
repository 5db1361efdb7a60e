[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linepatch"
version = "0.4.2"
description = "Find, format and apply line-based differences between texts"
requires-python = ">=3.10"
dependencies = []
keywords = ["diff", "patch", "unified-diff", "myers", "fuzzy"]
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
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["linepatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
