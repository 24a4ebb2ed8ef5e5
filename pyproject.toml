[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsonweave"
version = "1.0.0"
description = "JSON Pointer, JSON Patch and JSON Merge Patch for plain Python data"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "json-pointer", "json-patch", "merge-patch", "rfc6901", "rfc6902", "rfc7396"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsonweave"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
