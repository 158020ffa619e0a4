[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pubrender"
version = "0.1.0"
description = "Render published workspace object snapshots into static HTML blocks"
requires-python = ">=3.10"
dependencies = []
keywords = ["html", "renderer", "snapshot", "publishing", "blocks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: HTML",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pubrender"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
