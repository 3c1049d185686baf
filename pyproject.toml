[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filesweep"
version = "0.1.0"
description = "Watch an input directory and process new files concurrently into an output directory"
requires-python = ">=3.11"
keywords = ["file-watcher", "file-processing", "asyncio", "sha256", "directory-monitor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Utilities",
]
dependencies = [
    "tomli-w>=1.0",
    "watchdog>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[project.scripts]
filesweep = "filesweep.app:main"

[tool.hatch.build.targets.wheel]
packages = ["filesweep"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
