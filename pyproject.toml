[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "horizon_engine"
version = "0.1.0"
description = "A small layered application framework with events, cameras, buffer layouts and an in-memory renderer front end"
requires-python = ">=3.10"
keywords = ["engine", "game", "renderer", "events", "layers", "camera"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["horizon_engine"]

[tool.pytest.ini_options]
addopts = "-ra"
