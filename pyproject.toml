[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "miniwebd"
version = "0.1.0"
description = "A small thread-pool HTTP/1.0 server with static files and CGI, plus a minimal client"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "cgi", "thread-pool", "teaching"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
miniwebd = "miniwebd.server:main"
miniwebd-client = "miniwebd.client:main"
miniwebd-spin = "miniwebd.spin:main"

[tool.hatch.build.targets.wheel]
packages = ["miniwebd"]

[tool.pytest.ini_options]
addopts = "-ra"
