[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ostent"
version = "0.2.0"
description = "System monitoring helpers: network interface counters, human-readable formatting, flag values and a command-line front end"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["monitoring", "metrics", "system", "network", "formatting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ostent = "ostent.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ostent"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
