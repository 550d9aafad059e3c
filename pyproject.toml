[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ginkit"
version = "0.1.0"
description = "Building blocks for HTTP handlers: path cleaning, response writing, request log formatting, trusted proxies, routing helpers and response renderers."
requires-python = ">=3.10"
keywords = ["http", "web", "render", "json", "logging", "proxies", "templates"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "jinja2",
    "msgpack",
    "pyyaml",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ginkit"]

[tool.pytest.ini_options]
addopts = "-ra"
