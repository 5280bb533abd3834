[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splcomp"
version = "0.1.0"
description = "Support modules for an SPL compiler targeting a simplified stack machine: machine types, instruction encoding and disassembly, literal tables, scopes and symbol tables."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "stack machine", "instruction set", "symbol table", "disassembler"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["splcomp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
