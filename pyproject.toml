[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ddsview"
version = "0.1.0"
description = "Parse DDS texture files, lay out their mip chains, and drive a simple left-handed 3D camera."
requires-python = ">=3.10"
dependencies = []
keywords = ["dds", "directdraw surface", "texture", "dxgi", "mipmap", "camera", "graphics"]
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
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ddsview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
