[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "guntasy"
version = "0.1.0"
description = "Final Guntasy: a small tile-based role-playing game with turn-based combat"
requires-python = ">=3.10"
keywords = ["game", "rpg", "role-playing", "pygame", "tile-map", "turn-based"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
guntasy = "guntasy.app:main"

[tool.hatch.build.targets.wheel]
packages = ["guntasy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
