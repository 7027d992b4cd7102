[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minifs"
version = "0.1.0"
description = "A small in-memory hierarchical file system with an interactive shell, binary snapshots and JSON tree export."
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "in-memory", "shell", "tree", "virtual filesystem"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minifs = "minifs.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["minifs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
