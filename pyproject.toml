[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hypertextgen"
version = "1.0.0"
description = "Compile HTML templates with embedded C++ code into C++ rendering classes"
requires-python = ">=3.10"
dependencies = []
keywords = ["template", "html", "code-generation", "transpiler", "c++"]
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
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hypertextgen = "hypertextgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hypertextgen"]

[tool.pytest.ini_options]
addopts = "-ra"
