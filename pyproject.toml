[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "openui"
version = "0.1.0"
description = "Software rendering on 16-bit RGB565/ARGB4444 bitmaps: clipped primitives, masks, blitting and BMP loading"
requires-python = ">=3.10"
dependencies = []
keywords = ["rgb565", "argb4444", "bitmap", "rasterization", "embedded-ui", "drawing", "bmp"]
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
packages = ["openui"]

[tool.pytest.ini_options]
addopts = "-ra"
