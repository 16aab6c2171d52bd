[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "beacnutil"
version = "0.1.0"
description = "Equaliser maths, dynamics mappings and saved controller settings for Beacn audio devices"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "equaliser", "biquad", "compressor", "expander", "beacn"]
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
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["beacnutil"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
