[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "mazecast"
version = "0.1.0"
description = "Software raycasting for tile mazes: 320x200 indexed-colour frame buffers, PCX images, light-sourcing tables and maze renderers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "raycasting",
    "raycaster",
    "maze",
    "pcx",
    "software-rendering",
    "palette",
    "texture-mapping",
    "wireframe",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mazecast-makelite = "mazecast.makelite:main"

[tool.setuptools.packages.find]
include = ["mazecast", "mazecast.*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
