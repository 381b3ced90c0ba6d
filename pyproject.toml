[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reverbkit"
version = "0.1.0"
description = "Building blocks for digital reverberators: delay lines, allpass filters, biquad and first-order filter designs, envelopes and shared reverb settings."
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "dsp", "reverb", "filter", "allpass", "biquad", "delay"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["reverbkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
