[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "launchmon"
version = "0.1.0"
description = "Golf launch monitor: Doppler radar ball-speed measurement triggered by an IR sensor"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["golf", "launch monitor", "doppler", "radar", "fft", "raspberry pi", "mcp3008", "gpio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
launchmon = "launchmon.app:main"

[tool.hatch.build.targets.wheel]
packages = ["launchmon"]

[tool.pytest.ini_options]
addopts = "-ra"
