[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mockpager"
version = "0.1.0"
description = "A configurable mock HTTP server that serves paginated JSON responses"
requires-python = ">=3.10"
keywords = ["mock", "server", "pagination", "http", "testing", "api", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Testing :: Mocking",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mockpager = "mockpager.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mockpager"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
