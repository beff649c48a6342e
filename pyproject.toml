[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "roughcam"
version = "0.1.0"
description = "Geometry kernels for core roughing toolpaths: ball-ray slicing, triangle surfaces, tool shapes and link moves"
requires-python = ">=3.10"
dependencies = []
keywords = ["cam", "toolpath", "machining", "roughing", "stl", "geometry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Manufacturing",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["roughcam"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
