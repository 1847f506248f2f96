[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zgen"
version = "0.1.0"
description = "Generate companion code, docs and type maps from Go struct definitions"
requires-python = ">=3.10"
dependencies = []
keywords = ["code generation", "go", "struct", "struct tags", "validation", "options"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
z_gen = "zgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
