[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proctrack"
version = "0.1.0"
description = "Track how long programs run and control the tracker over a local TCP connection"
requires-python = ">=3.10"
keywords = ["process", "monitoring", "time-tracking", "sessions", "psutil"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
proctrack = "proctrack.server:main"

[tool.hatch.build.targets.wheel]
packages = ["proctrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
