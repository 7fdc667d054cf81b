[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jwhttp"
version = "0.1.0"
description = "A small threaded HTTP/1.1 server with keep-alive support and a simple request parser"
requires-python = ">=3.10"
keywords = ["http", "server", "threadpool", "keep-alive"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jwhttp = "jwhttp.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jwhttp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
