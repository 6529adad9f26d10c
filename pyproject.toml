[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mokit"
version = "0.1.0"
description = "Syntax tree, traversal and pretty-printing for the Motoko language"
requires-python = ">=3.10"
dependencies = []
keywords = ["motoko", "ast", "pretty-printer", "syntax-tree", "formatter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mokit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
