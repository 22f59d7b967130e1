[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lotar"
version = "0.1.0"
description = "Local, file-based task repository library: layered YAML configuration, project templates, a tag index and a small request router."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["tasks", "issue-tracking", "todo", "yaml", "configuration"]
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
    "Topic :: Software Development :: Bug Tracking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lotar"]

[tool.hatch.build.targets.sdist]
include = ["lotar", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
