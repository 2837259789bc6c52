[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "statusblocks"
version = "0.1.0"
description = "Status-bar blocks that report CPU, memory, load, disk, backlight, mail, Docker and keyboard layout information"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "status bar",
    "i3bar",
    "swaybar",
    "system monitor",
    "cpu",
    "memory",
    "disk",
    "backlight",
]
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
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["statusblocks"]

[tool.hatch.build.targets.sdist]
include = ["statusblocks", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
