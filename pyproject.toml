[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "cubraycast"
version = "0.1.0"
description = "Grid ray caster for .cub scene files: scene lexing, map closure checks, wall intersection, textured wall slices and a minimap."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["raycasting", "raycaster", "cub3d", "game", "minimap", "lexer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["cubraycast*"]

[tool.pytest.ini_options]
addopts = "-ra"
