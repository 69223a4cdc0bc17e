[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "errinfo"
version = "0.1.0"
description = "Attach typed, tagged diagnostic data to exceptions and carry exceptions between threads."
requires-python = ">=3.10"
dependencies = []
keywords = ["exceptions", "error-info", "diagnostics", "error-handling"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["errinfo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
