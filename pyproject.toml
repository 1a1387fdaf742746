[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fbpanel"
version = "7.0"
description = "Configuration tree, plugin registry and applet logic for a lightweight desktop panel"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "panel",
    "applet",
    "desktop",
    "configuration",
    "battery",
    "cpu",
    "memory",
    "network",
    "menu",
    "launcher",
    "clock",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fbpanel-power-supply = "fbpanel.power_supply:main"

[tool.hatch.build.targets.wheel]
packages = ["fbpanel"]

[tool.hatch.build.targets.sdist]
include = ["fbpanel", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
