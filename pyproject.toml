[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "onyxtree"
version = "1.0.0"
description = "Build, query and serialize XML and HTML node trees, with static fragments and placeholder templates."
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "html", "dom", "serialization", "templates", "tree"]
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
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["onyxtree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
