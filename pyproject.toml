[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "authselect"
version = "1.0.0"
description = "Feature-driven templates, expression evaluation and safe file helpers for generating authentication configuration"
requires-python = ">=3.10"
dependencies = []
keywords = ["authentication", "pam", "nsswitch", "dconf", "templates", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration :: Authentication/Directory",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["authselect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
