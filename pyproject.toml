[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plfront"
version = "0.1.0"
description = "Syntax tree and source-level analysis passes for a small statically typed language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "ast", "static-analysis", "front-end", "validation"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[tool.hatch.build.targets.wheel]
packages = ["plfront"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
