[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minic"
version = "1.0.1"
description = "Front end for an expression-level subset of C, with ARM32 assembly building blocks"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "c", "arm32", "ast", "parser", "assembly", "graphviz"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minic = "minic.frontend:main"

[tool.hatch.build.targets.wheel]
packages = ["minic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
