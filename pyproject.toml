[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hub75map"
version = "0.1.0"
description = "Virtual-to-physical pixel mapping and LED driver initialisation sequences for chained HUB75 LED matrix panels"
requires-python = ">=3.10"
dependencies = []
keywords = ["hub75", "led-matrix", "rgb-panel", "pixel-mapping", "four-scan", "fm6124", "dp3246"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hub75map"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
