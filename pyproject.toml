[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinydesk"
version = "0.1.0"
description = "Small HTTP/1.1 toolkit with buffered socket streams, connection slots, an in-memory file tree and disk file helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "http",
    "socket",
    "stream",
    "cookies",
    "in-memory filesystem",
]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tinydesk"]

[tool.pytest.ini_options]
addopts = "-ra"
