[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitalchemist"
version = "0.1.0"
description = "Build example git repositories step by step from YAML formulas."
requires-python = ">=3.10"
keywords = ["git", "training", "repository", "yaml", "teaching"]
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
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gitalchemist = "gitalchemist.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gitalchemist"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
