[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goldfish"
version = "0.1.0"
description = "Engine-side pieces of a small game engine: config commands, resource files, BDF fonts, a retained GUI, a WAV mixer and frame pacing"
requires-python = ">=3.10"
keywords = ["game engine", "gui", "bdf", "audio mixer", "wav"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = ["pillow"]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["goldfish"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
